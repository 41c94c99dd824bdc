"""Static metadata for point-of-interest categories.

Priorities rank categories by tourist relevance (lower is more relevant).
Categories without an explicit priority share UNCATEGORIZED_PRIORITY, which is
also used for places that carry no category at all.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

UNCATEGORIZED_PRIORITY = 50
DEFAULT_SPAN_DEGREES = 0.08
DEFAULT_ICON_KEY = "mappin"


class Category(Enum):
    LANDMARK = "landmark"
    MUSEUM = "museum"
    NATIONAL_PARK = "national_park"
    PARK = "park"
    BEACH = "beach"
    AQUARIUM = "aquarium"
    AMUSEMENT_PARK = "amusement_park"
    STADIUM = "stadium"
    THEATER = "theater"
    MOVIE_THEATER = "movie_theater"
    MARINA = "marina"
    WINERY = "winery"
    BREWERY = "brewery"
    LIBRARY = "library"
    UNIVERSITY = "university"
    CAMPGROUND = "campground"
    NIGHTLIFE = "nightlife"
    ZOO = "zoo"
    HOTEL = "hotel"
    RESTAURANT = "restaurant"
    CAFE = "cafe"
    BAKERY = "bakery"
    FOOD_MARKET = "food_market"
    STORE = "store"
    AIRPORT = "airport"
    PUBLIC_TRANSPORT = "public_transport"
    PARKING = "parking"
    HOSPITAL = "hospital"
    PHARMACY = "pharmacy"


@dataclass(frozen=True)
class CategoryInfo:
    priority: int
    span_degrees: float
    display_name: str
    icon_key: str


def _humanize(raw: str) -> str:
    """'MKPOICategoryFoodMarket' / 'food_market' -> 'Food Market'."""
    prefix = "MKPOICategory"
    name = raw[len(prefix):] if raw.startswith(prefix) else raw
    name = re.sub(r"([a-z])([A-Z])", r"\1 \2", name)
    name = name.replace("_", " ").strip()
    return " ".join(part[:1].upper() + part[1:] for part in name.split())


# category: (priority, span_degrees, display_name, icon_key)
_EXPLICIT: Dict[Category, tuple] = {
    Category.LANDMARK: (0, 0.03, "Landmark", "star.circle.fill"),
    Category.MUSEUM: (1, 0.03, "Museum", "building.columns"),
    Category.NATIONAL_PARK: (2, 0.50, "National Park", "mountain.2.fill"),
    Category.PARK: (3, 0.10, "Park", "tree.fill"),
    Category.BEACH: (4, 0.15, "Beach", "beach.umbrella.fill"),
    Category.AQUARIUM: (5, 0.04, "Aquarium", "fish"),
    Category.AMUSEMENT_PARK: (6, 0.12, "Amusement Park", "sparkles"),
    Category.STADIUM: (7, 0.05, "Stadium", "sportscourt.fill"),
    Category.THEATER: (8, 0.03, "Theater", "theatermasks.fill"),
    Category.MOVIE_THEATER: (9, 0.03, "Movie Theater", "film.fill"),
    Category.MARINA: (10, 0.06, "Marina", "sailboat.fill"),
    Category.WINERY: (11, 0.06, "Winery", "wineglass"),
    Category.BREWERY: (12, 0.04, "Brewery", "wineglass"),
    Category.LIBRARY: (13, 0.03, "Library", "books.vertical"),
    Category.UNIVERSITY: (14, 0.12, "University", "graduationcap.fill"),
    Category.CAMPGROUND: (15, 0.12, "Campground", "tent.fill"),
    Category.NIGHTLIFE: (16, 0.05, "Nightlife", "moon.stars.fill"),
}


def _build_table() -> Dict[Category, CategoryInfo]:
    table: Dict[Category, CategoryInfo] = {}
    for category in Category:
        explicit = _EXPLICIT.get(category)
        if explicit is not None:
            table[category] = CategoryInfo(*explicit)
        else:
            table[category] = CategoryInfo(
                priority=UNCATEGORIZED_PRIORITY,
                span_degrees=DEFAULT_SPAN_DEGREES,
                display_name=_humanize(category.value),
                icon_key=DEFAULT_ICON_KEY,
            )
    return table


CATEGORY_INFO: Dict[Category, CategoryInfo] = _build_table()


def info_for(category: Optional[Category]) -> Optional[CategoryInfo]:
    if category is None:
        return None
    return CATEGORY_INFO.get(category)


def priority_of(category: Optional[Category]) -> int:
    info = info_for(category)
    return info.priority if info is not None else UNCATEGORIZED_PRIORITY


def span_of(category: Optional[Category], default: float = DEFAULT_SPAN_DEGREES) -> float:
    info = info_for(category)
    return info.span_degrees if info is not None else default


def display_name_of(category: Optional[Category]) -> Optional[str]:
    info = info_for(category)
    return info.display_name if info is not None else None


# Provider type strings that do not match an enum value directly.
RAW_CATEGORY_ALIASES: Dict[str, Category] = {
    "tourist_attraction": Category.LANDMARK,
    "historical_landmark": Category.LANDMARK,
    "monument": Category.LANDMARK,
    "art_gallery": Category.MUSEUM,
    "lodging": Category.HOTEL,
    "night_club": Category.NIGHTLIFE,
    "bar": Category.NIGHTLIFE,
    "movie_theatre": Category.MOVIE_THEATER,
    "performing_arts_theater": Category.THEATER,
    "theatre": Category.THEATER,
    "supermarket": Category.FOOD_MARKET,
    "grocery_store": Category.FOOD_MARKET,
    "coffee_shop": Category.CAFE,
    "campground_site": Category.CAMPGROUND,
    "amusement_center": Category.AMUSEMENT_PARK,
    "train_station": Category.PUBLIC_TRANSPORT,
    "subway_station": Category.PUBLIC_TRANSPORT,
    "bus_station": Category.PUBLIC_TRANSPORT,
    "transit_station": Category.PUBLIC_TRANSPORT,
}


def _snake(raw: str) -> str:
    prefix = "MKPOICategory"
    name = raw[len(prefix):] if raw.startswith(prefix) else raw
    name = re.sub(r"([a-z])([A-Z])", r"\1_\2", name)
    return re.sub(r"[\s\-]+", "_", name.strip()).lower()


_BY_VALUE: Dict[str, Category] = {c.value: c for c in Category}


def category_from_raw(raw: Optional[str]) -> Optional[Category]:
    """Map a provider category/type string to a Category, or None if unknown."""
    if not raw:
        return None
    key = _snake(str(raw))
    if key in _BY_VALUE:
        return _BY_VALUE[key]
    return RAW_CATEGORY_ALIASES.get(key)
