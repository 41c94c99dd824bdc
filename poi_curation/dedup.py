"""Duplicate detection for places and pins.

Two strategies, chosen by the caller and never mixed within one call:
identity equality, and proximity within a fixed distance threshold.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence, TypeVar, Union

from .geo import distance_meters
from .models import Coordinate

logger = logging.getLogger(__name__)

NAMED_RESULT_DEDUP_METERS = 75.0
PIN_DROP_DEDUP_METERS = 20.0


class Locatable(Protocol):
    name: str
    coordinate: Coordinate
    identity: Optional[str]


T = TypeVar("T", bound=Locatable)


@dataclass(frozen=True)
class Identity:
    pass


@dataclass(frozen=True)
class Proximity:
    threshold_m: float
    match_names: bool = False
    inclusive: bool = True

    @classmethod
    def named_results(cls) -> "Proximity":
        # Same trimmed name (ignoring case) strictly closer than 75 m.
        return cls(NAMED_RESULT_DEDUP_METERS, match_names=True, inclusive=False)

    @classmethod
    def pin_drop(cls) -> "Proximity":
        # Any two pins at most 20 m apart, names ignored.
        return cls(PIN_DROP_DEDUP_METERS, match_names=False, inclusive=True)

    def within(self, distance_m: float) -> bool:
        if self.inclusive:
            return distance_m <= self.threshold_m
        return distance_m < self.threshold_m


DedupStrategy = Union[Identity, Proximity]


def name_key(name: Optional[str]) -> str:
    return (name or "").strip().casefold()


def _same_entity(candidate: Locatable, other: Locatable, strategy: DedupStrategy) -> bool:
    if isinstance(strategy, Identity):
        return candidate.identity is not None and candidate.identity == other.identity
    if strategy.match_names and name_key(candidate.name) != name_key(other.name):
        return False
    return strategy.within(distance_meters(candidate.coordinate, other.coordinate))


def is_duplicate(candidate: Locatable, existing: Iterable[Locatable], strategy: DedupStrategy) -> bool:
    if isinstance(strategy, Identity) and candidate.identity is None:
        return False
    return any(_same_entity(candidate, other, strategy) for other in existing)


def strategy_for(candidate: Locatable) -> DedupStrategy:
    """Identity when the source verified one, else pin-drop proximity."""
    if candidate.identity is not None:
        return Identity()
    return Proximity.pin_drop()


def dedup_places(items: Sequence[T], strategy: DedupStrategy) -> List[T]:
    """Keep the first occurrence of every entity, in input order.

    Input is expected in rank order so the retained entry is the best-ranked
    one. With a name-matching strategy, entries without a usable name are
    dropped.
    """
    kept: List[T] = []
    dropped = 0
    for item in items:
        if isinstance(strategy, Proximity) and strategy.match_names and not name_key(item.name):
            dropped += 1
            continue
        if is_duplicate(item, kept, strategy):
            dropped += 1
            continue
        kept.append(item)
    if dropped:
        logger.debug("Dedup dropped %s of %s items", dropped, len(items))
    return kept
