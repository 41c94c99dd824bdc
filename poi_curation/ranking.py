"""Relevance ordering for raw search hits."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from .categories import priority_of
from .geo import distance_meters
from .models import Coordinate, Place, RankedPlace

logger = logging.getLogger(__name__)

MODE_FREE_TEXT = "free_text"
MODE_NEARBY = "nearby"


def name_match_score(name: str, query: str) -> int:
    n = name.lower()
    q = query.lower()
    if n == q:
        return 0
    if n.startswith(q):
        return 1
    if q in n:
        return 2
    return 3


def _identity_tail(place: Place) -> Tuple[str, float, float, str]:
    return (
        place.name,
        place.coordinate.latitude,
        place.coordinate.longitude,
        place.identity or "",
    )


def free_text_sort_key(place: Place, query: str) -> Tuple:
    return (
        priority_of(place.category),
        name_match_score(place.name, query),
        _identity_tail(place),
    )


def nearby_sort_key(place: Place, center: Coordinate) -> Tuple:
    return (
        distance_meters(place.coordinate, center),
        place.name.lower(),
        _identity_tail(place),
    )


def ranking_mode(query: str, center: Optional[Coordinate]) -> str:
    if center is not None and not (query or "").strip():
        return MODE_NEARBY
    return MODE_FREE_TEXT


def rank(
    places: Iterable[Place],
    query: str = "",
    center: Optional[Coordinate] = None,
) -> List[RankedPlace]:
    """Order places by relevance.

    Nearby mode (no query, a center): distance ascending, then name ignoring
    case. Free-text mode: category priority, then name match quality, then
    name by ordinal comparison. Both modes end with a coordinate/identity
    tiebreak so the result is a total order.
    """
    items = list(places)
    mode = ranking_mode(query, center)
    q = (query or "").strip()

    if center is not None and not q:
        ordered = sorted(items, key=lambda p: nearby_sort_key(p, center))
        ranked = [
            RankedPlace(place=p, rank=i, distance_m=distance_meters(p.coordinate, center))
            for i, p in enumerate(ordered)
        ]
    else:
        ordered = sorted(items, key=lambda p: free_text_sort_key(p, q))
        ranked = [RankedPlace(place=p, rank=i) for i, p in enumerate(ordered)]

    logger.debug("Ranked %s places (%s)", len(ranked), mode)
    return ranked
