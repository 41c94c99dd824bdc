"""Session-scoped registry of user-dropped map pins.

Accepted pins keep insertion order. The most recently accepted pin carries a
transient highlight that clears itself after HIGHLIGHT_SECONDS unless a newer
highlight replaced it first; every highlight bumps a version counter and the
delayed clear only fires if the version it captured is still current.
"""
from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from . import config
from .categories import Category
from .dedup import is_duplicate, strategy_for
from .models import Coordinate, Place

logger = logging.getLogger(__name__)

DEFAULT_PIN_NAME = "Selected Place"

Scheduler = Callable[[float, Callable[[], None]], None]


class PinSource(Enum):
    OWN_ITEM = "own_item"
    SYSTEM_FEATURE = "system_feature"


class InsertResult(Enum):
    ACCEPTED = "accepted"
    REJECTED_DUPLICATE = "rejected_duplicate"


@dataclass(frozen=True, eq=False)
class Pin:
    coordinate: Coordinate
    name: str
    source: PinSource
    identity: Optional[str] = None
    category: Optional[Category] = None
    short_address: Optional[str] = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pin):
            return NotImplemented
        if self.identity is not None and other.identity is not None:
            return self.identity == other.identity
        return self.id == other.id

    def __hash__(self) -> int:
        if self.identity is not None:
            return hash(("identity", self.identity))
        return hash(("id", self.id))


def make_pin(place: Place, source: PinSource, short_address: Optional[str] = None) -> Pin:
    name = (place.name or "").strip() or DEFAULT_PIN_NAME
    short = short_address.strip() if short_address else None
    if short is None and place.city:
        short = place.city.strip() or None
    return Pin(
        coordinate=place.coordinate,
        name=name,
        source=source,
        identity=place.identity,
        category=place.category,
        short_address=short,
    )


def _timer_scheduler(delay: float, callback: Callable[[], None]) -> None:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()


class PinRegistry:
    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        highlight_seconds: Optional[float] = None,
    ) -> None:
        self._scheduler = scheduler or _timer_scheduler
        self.highlight_seconds = (
            config.PIN_HIGHLIGHT_SECONDS if highlight_seconds is None else highlight_seconds
        )
        self._lock = threading.Lock()
        self._pins: List[Pin] = []
        self._highlighted_id: Optional[uuid.UUID] = None
        self._last_selected_id: Optional[uuid.UUID] = None
        self._highlight_version = 0

    @property
    def pins(self) -> Tuple[Pin, ...]:
        with self._lock:
            return tuple(self._pins)

    @property
    def highlighted_id(self) -> Optional[uuid.UUID]:
        with self._lock:
            return self._highlighted_id

    @property
    def last_selected_id(self) -> Optional[uuid.UUID]:
        with self._lock:
            return self._last_selected_id

    @property
    def last_system_feature_pin(self) -> Optional[Pin]:
        with self._lock:
            for pin in reversed(self._pins):
                if pin.source is PinSource.SYSTEM_FEATURE:
                    return pin
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._pins)

    def insert(self, candidate: Pin) -> InsertResult:
        with self._lock:
            if is_duplicate(candidate, self._pins, strategy_for(candidate)):
                logger.debug("Rejected duplicate pin %r", candidate.name)
                return InsertResult.REJECTED_DUPLICATE
            self._pins.append(candidate)
            self._last_selected_id = candidate.id
            self._highlighted_id = candidate.id
            self._highlight_version += 1
            version = self._highlight_version

        self._scheduler(self.highlight_seconds, lambda: self._expire_highlight(version))
        return InsertResult.ACCEPTED

    def _expire_highlight(self, version: int) -> None:
        with self._lock:
            if version != self._highlight_version:
                return
            self._highlighted_id = None

    def clear(self) -> None:
        with self._lock:
            self._pins = []
            self._highlighted_id = None
            self._last_selected_id = None
            # Pending clears from earlier highlights must not match anymore.
            self._highlight_version += 1
