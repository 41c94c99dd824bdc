"""Filter facets derived from the categories present in a result set."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .categories import Category, info_for, priority_of

KIND_ALL = "all"
KIND_CATEGORY = "category"
KIND_UNCATEGORIZED = "uncategorized"


@dataclass(frozen=True)
class Facet:
    kind: str
    category: Optional[Category] = None

    @classmethod
    def all(cls) -> "Facet":
        return cls(KIND_ALL)

    @classmethod
    def of(cls, category: Category) -> "Facet":
        return cls(KIND_CATEGORY, category)

    @classmethod
    def uncategorized(cls) -> "Facet":
        return cls(KIND_UNCATEGORIZED)

    @property
    def id(self) -> str:
        if self.kind == KIND_CATEGORY and self.category is not None:
            return self.category.value
        return self.kind

    @property
    def title(self) -> str:
        if self.kind == KIND_ALL:
            return "All"
        if self.kind == KIND_UNCATEGORIZED:
            return "Uncategorized"
        info = info_for(self.category)
        return info.display_name if info else "Uncategorized"

    @property
    def icon_key(self) -> str:
        if self.kind == KIND_ALL:
            return "square.grid.2x2"
        info = info_for(self.category)
        return info.icon_key if info else "mappin"

    def matches(self, category: Optional[Category]) -> bool:
        if self.kind == KIND_ALL:
            return True
        if self.kind == KIND_UNCATEGORIZED:
            return category is None
        return category is not None and category == self.category


def _category_sort_key(category: Category) -> tuple:
    info = info_for(category)
    return (priority_of(category), info.display_name if info else category.value)


def available_facets(places: Iterable) -> List[Facet]:
    categories: List[Category] = []
    seen = set()
    has_uncategorized = False
    for place in places:
        category = place.category
        if category is None:
            has_uncategorized = True
            continue
        if category not in seen:
            seen.add(category)
            categories.append(category)

    categories.sort(key=_category_sort_key)
    facets = [Facet.all()]
    facets.extend(Facet.of(c) for c in categories)
    if has_uncategorized:
        facets.append(Facet.uncategorized())
    return facets


def apply_facet(facet: Facet, places: Sequence) -> list:
    if facet.kind == KIND_ALL:
        return list(places)
    return [p for p in places if facet.matches(p.category)]


def facet_from_id(facet_id: str) -> Optional[Facet]:
    key = (facet_id or "").strip().lower()
    if key == KIND_ALL:
        return Facet.all()
    if key == KIND_UNCATEGORIZED:
        return Facet.uncategorized()
    for category in Category:
        if category.value == key:
            return Facet.of(category)
    return None


@dataclass
class FacetSelection:
    """Currently offered facets plus the user's selection."""

    facets: List[Facet] = field(default_factory=lambda: [Facet.all()])
    selected: Facet = field(default_factory=Facet.all)

    def rebuild(self, places: Iterable) -> List[Facet]:
        self.facets = available_facets(places)
        if self.selected not in self.facets:
            self.selected = Facet.all()
        return self.facets

    def select(self, facet: Facet) -> bool:
        if facet not in self.facets:
            return False
        self.selected = facet
        return True

    def reset(self) -> None:
        self.selected = Facet.all()

    def filtered(self, places: Sequence) -> list:
        return apply_facet(self.selected, places)
