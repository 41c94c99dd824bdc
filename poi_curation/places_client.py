"""Places API client that reduces raw search hits to Place records.

Provider failures never propagate: they are logged and surface as an empty
batch, which the curation core treats as a valid input.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Optional

import requests

from . import config
from .categories import Category, category_from_raw
from .http import HttpClient
from .models import Coordinate, Place

logger = logging.getLogger(__name__)

# Categories whose provider type name differs from the enum value.
PROVIDER_TYPE_OVERRIDES: Dict[Category, str] = {
    Category.LANDMARK: "tourist_attraction",
    Category.NIGHTLIFE: "night_club",
    Category.THEATER: "performing_arts_theater",
    Category.FOOD_MARKET: "grocery_store",
    Category.PUBLIC_TRANSPORT: "transit_station",
}


def provider_type_for(category: Category) -> str:
    return PROVIDER_TYPE_OVERRIDES.get(category, category.value)


class PlacesClient:
    def __init__(
        self,
        http_client: HttpClient,
        field_mask: str = config.PLACES_FIELD_MASK,
    ) -> None:
        self.http = http_client
        self.field_mask = field_mask

    def _headers(self) -> Dict[str, str]:
        return {
            "X-Goog-Api-Key": self.http.api_key,
            "X-Goog-FieldMask": self.field_mask,
        }

    def _post_places(self, url: str, body: Dict[str, Any]) -> List[Place]:
        try:
            response = self.http.post_json(url, body, headers=self._headers())
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Places request to %s failed: %s", url, exc)
            return []
        if not isinstance(response, dict):
            logger.warning("Unexpected Places payload type: %s", type(response).__name__)
            return []
        return parse_places_response(response)

    def search_text(
        self,
        query: str,
        center: Optional[Coordinate] = None,
        included_types: Optional[Iterable[Category]] = None,
    ) -> List[Place]:
        body = build_text_search_body(query, center, included_types)
        return self._post_places(config.PLACES_TEXT_SEARCH_URL, body)

    def search_nearby(
        self,
        center: Coordinate,
        category: Category,
        radius_m: Optional[float] = None,
    ) -> List[Place]:
        body = build_nearby_search_body(center, [category], radius_m)
        return self._post_places(config.PLACES_NEARBY_SEARCH_URL, body)


def _circle(center: Coordinate, radius_m: float) -> Dict[str, Any]:
    return {
        "circle": {
            "center": {"latitude": center.latitude, "longitude": center.longitude},
            "radius": float(radius_m),
        }
    }


def build_text_search_body(
    query: str,
    center: Optional[Coordinate],
    included_types: Optional[Iterable[Category]] = None,
    radius_m: Optional[float] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "textQuery": query,
        "pageSize": config.PLACES_MAX_RESULT_COUNT,
    }
    if center is not None:
        radius = radius_m if radius_m is not None else config.PLACES_SEARCH_RADIUS_M
        body["locationBias"] = _circle(center, radius)
    types = list(included_types or [])
    # Text search accepts a single included type; broader filters are applied locally.
    if len(types) == 1:
        body["includedType"] = provider_type_for(types[0])
    if config.PLACES_LANGUAGE_CODE:
        body["languageCode"] = config.PLACES_LANGUAGE_CODE
    if config.PLACES_TEXT_SEARCH_BODY_EXTRA:
        body.update(config.PLACES_TEXT_SEARCH_BODY_EXTRA)
    return body


def build_nearby_search_body(
    center: Coordinate,
    categories: Iterable[Category],
    radius_m: Optional[float] = None,
) -> Dict[str, Any]:
    radius = radius_m if radius_m is not None else config.PLACES_SEARCH_RADIUS_M
    body: Dict[str, Any] = {
        "locationRestriction": _circle(center, radius),
        "includedTypes": [provider_type_for(c) for c in categories],
        "maxResultCount": config.PLACES_MAX_RESULT_COUNT,
    }
    if config.PLACES_LANGUAGE_CODE:
        body["languageCode"] = config.PLACES_LANGUAGE_CODE
    if config.PLACES_NEARBY_BODY_EXTRA:
        body.update(config.PLACES_NEARBY_BODY_EXTRA)
    return body


# Adapter/mapper for Places response fields

def _first_category(raw: Dict[str, Any]) -> Optional[Category]:
    types = raw.get("types")
    candidates = [raw.get("primaryType")] + (list(types) if isinstance(types, list) else [])
    for value in candidates:
        if not isinstance(value, str):
            continue
        category = category_from_raw(value)
        if category is not None:
            return category
    return None


def _address_parts(raw: Dict[str, Any]) -> tuple:
    city: Optional[str] = None
    region: Optional[str] = None
    components = raw.get("addressComponents")
    if not isinstance(components, list):
        return city, region
    for component in components:
        if not isinstance(component, dict):
            continue
        types = component.get("types")
        if not isinstance(types, list):
            continue
        if city is None and "locality" in types:
            value = component.get("longText") or component.get("shortText")
            city = value if isinstance(value, str) else None
        if region is None and "country" in types:
            value = component.get("shortText")
            region = value if isinstance(value, str) else None
    return city, region


def _coordinate(raw: Dict[str, Any]) -> Optional[Coordinate]:
    location = raw.get("location") or raw.get("latLng") or {}
    if not isinstance(location, dict):
        return None
    lat = location.get("latitude", location.get("lat"))
    lon = location.get("longitude", location.get("lng", location.get("lon")))
    if lat is None or lon is None:
        return None
    try:
        lat_f = float(lat)
        lon_f = float(lon)
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(lat_f) and math.isfinite(lon_f)):
        return None
    return Coordinate(lat_f, lon_f)


def _display_name(raw: Dict[str, Any]) -> str:
    display = raw.get("displayName")
    if isinstance(display, dict):
        display = display.get("text") or display.get("value")
    return display.strip() if isinstance(display, str) else ""


def parse_places_response(response: Dict[str, Any]) -> List[Place]:
    """Map a Places payload to Place records, skipping malformed entries."""
    places = response.get("places") or []
    if not isinstance(places, list):
        logger.warning("Unexpected 'places' type: %s", type(places).__name__)
        return []
    parsed: List[Place] = []
    skipped = 0
    for p in places:
        if not isinstance(p, dict):
            skipped += 1
            continue
        coordinate = _coordinate(p)
        if coordinate is None:
            skipped += 1
            continue
        place_id = p.get("id") or p.get("placeId")
        city, region = _address_parts(p)
        parsed.append(
            Place(
                name=_display_name(p),
                coordinate=coordinate,
                category=_first_category(p),
                identity=str(place_id) if place_id else None,
                city=city,
                region_code=region,
            )
        )
    if skipped:
        logger.debug("Skipped %s malformed Places entries", skipped)
    return parsed
