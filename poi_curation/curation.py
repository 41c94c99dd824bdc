"""Curation workflows: free-text search results, nearby suggestions, itinerary tool."""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from . import config
from .categories import Category
from .dedup import Proximity, dedup_places
from .facets import Facet, FacetSelection
from .models import Coordinate, Place, RankedPlace
from .ranking import rank
from .transliterate import display_safe

logger = logging.getLogger(__name__)

# Curated include-list used for free-text landmark search.
TOURIST_CATEGORIES: List[Category] = [
    Category.MUSEUM,
    Category.LANDMARK,
    Category.PARK,
    Category.NATIONAL_PARK,
    Category.BEACH,
    Category.MARINA,
    Category.AQUARIUM,
    Category.AMUSEMENT_PARK,
    Category.STADIUM,
    Category.THEATER,
    Category.MOVIE_THEATER,
    Category.NIGHTLIFE,
    Category.WINERY,
    Category.BREWERY,
    Category.LIBRARY,
    Category.UNIVERSITY,
    Category.CAMPGROUND,
]

# Categories the itinerary tool can be asked about.
TOOL_CATEGORIES = {
    "hotel": Category.HOTEL,
    "restaurant": Category.RESTAURANT,
}


def filter_tourist(places: Sequence[Place]) -> List[Place]:
    """Keep tourist-relevant categories; uncategorized physical features pass."""
    allowed = set(TOURIST_CATEGORIES)
    return [p for p in places if p.category is None or p.category in allowed]


def curate_search_results(
    places: Sequence[Place],
    query: str,
    limit: Optional[int] = None,
) -> List[RankedPlace]:
    """Rank free-text hits that carry a verified identity and keep the top ``limit``."""
    cap = config.MAX_SEARCH_RESULTS if limit is None else limit
    verified = [p for p in places if p.identity]
    if len(verified) != len(places):
        logger.debug("Dropped %s hits without identity", len(places) - len(verified))
    ranked = rank(verified, query=query)
    return [RankedPlace(place=r.place, rank=r.rank) for r in ranked[: max(0, cap)]]


def nearby_suggestions(
    places: Sequence[Place],
    center: Coordinate,
    limit: Optional[int] = None,
) -> List[str]:
    """Closest distinct places around ``center`` as ASCII-safe display names."""
    cap = config.SUGGESTION_LIMIT if limit is None else limit
    ranked = rank(places, center=center)
    distinct = dedup_places([r.place for r in ranked], Proximity.named_results())
    names: List[str] = []
    for place in distinct:
        raw = place.name.strip()
        if not raw:
            continue
        names.append(display_safe(raw))
    return names[: max(0, cap)]


def format_tool_answer(category_label: str, landmark_name: str, names: Sequence[str]) -> str:
    return f"There are these {category_label} in {landmark_name}: \n{', '.join(names)}"


def find_points_of_interest(
    client,
    landmark_name: str,
    center: Coordinate,
    category_label: str,
    limit: Optional[int] = None,
) -> str:
    """Itinerary tool: suggest up to ``limit`` places of a category near a landmark."""
    category = TOOL_CATEGORIES.get((category_label or "").strip().lower())
    if category is None:
        raise ValueError(f"Unsupported point-of-interest category: {category_label}")
    places = client.search_nearby(center, category, radius_m=config.PLACES_SEARCH_RADIUS_M)
    names = nearby_suggestions(places, center, limit=limit)
    logger.info("Tool found %s %s suggestions near %s", len(names), category.value, landmark_name)
    return format_tool_answer(category.value, display_safe(landmark_name), names)


class SearchSession:
    """Latest free-text results plus their facet selection."""

    def __init__(self) -> None:
        self.results: List[RankedPlace] = []
        self.facets = FacetSelection()
        self.message: Optional[str] = None

    def update(self, places: Sequence[Place], query: str) -> List[RankedPlace]:
        q = (query or "").strip()
        if not q:
            self.results = []
            self.facets.rebuild([])
            self.message = "Please enter a place name to search."
            return self.results
        self.results = curate_search_results(places, q)
        self.facets.rebuild([r.place for r in self.results])
        self.facets.reset()
        self.message = None
        if not self.results:
            self.message = "No results with a verified place ID. Try a more specific query."
        return self.results

    def select(self, facet: Facet) -> bool:
        return self.facets.select(facet)

    def visible(self) -> List[RankedPlace]:
        return self.facets.filtered(self.results)
