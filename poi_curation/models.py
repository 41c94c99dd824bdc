"""Core data types shared by ranking, dedup, facets and pins."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .categories import Category


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Place:
    name: str
    coordinate: Coordinate
    category: Optional["Category"] = None
    identity: Optional[str] = None  # provider place id, absent for unverified features
    city: Optional[str] = None
    region_code: Optional[str] = None  # ISO 3166 alpha-2, may carry a subdivision ("US-CA")


@dataclass(frozen=True)
class RankedPlace:
    place: Place
    rank: int
    distance_m: Optional[float] = None

    @property
    def name(self) -> str:
        return self.place.name

    @property
    def category(self) -> Optional["Category"]:
        return self.place.category
