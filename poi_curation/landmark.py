"""Landmark payload fed to the itinerary generator, plus display helpers."""
from __future__ import annotations

from typing import Any, Dict, Optional

from . import config
from .categories import display_name_of, span_of
from .models import Place
from .transliterate import display_safe

AFRICA = "Africa"
ANTARCTICA = "Antarctica"
ASIA = "Asia"
EUROPE = "Europe"
AMERICA = "America"  # North, Central, South and the Caribbean share one bucket
OCEANIA = "Oceania"

_CONTINENT_CODES = {
    AMERICA: (
        "US CA MX BZ GT SV HN NI CR PA AG AI AW BB BL BQ BS CU CW DM DO GD GP HT JM KN KY LC "
        "MF MQ MS SX TC TT VC VG VI PR BM GL PM AR BO BR CL CO EC FK GF GY PE PY SR UY VE"
    ),
    ANTARCTICA: "AQ BV GS HM TF",
    EUROPE: (
        "AD AL AT AX BA BE BG BY CH CY CZ DE DK EE ES FI FO FR GB GG GI GR HR HU IE IM IS IT JE "
        "LI LT LU LV MC MD ME MK MT NL NO PL PT RO RS RU SE SI SJ SK SM UA VA"
    ),
    ASIA: (
        "AE AF AM AZ BD BH BN BT CN GE HK ID IL IN IQ IR JO JP KG KH KP KR KW KZ LA LB LK MM MN "
        "MO MV MY NP OM PH PK PS QA SA SG SY TH TJ TL TM TR TW UZ VN YE"
    ),
    AFRICA: (
        "AO BF BI BJ BW CD CF CG CI CM CV DJ DZ EG EH ER ET GA GH GM GN GQ GW KE KM LR LS LY MA "
        "MG ML MR MU MW MZ NA NE NG RE RW SC SD SH SL SN SO SS ST SZ TD TG TN TZ UG YT ZA ZM ZW"
    ),
    OCEANIA: "AS AU CK FJ FM GU KI MH MP NC NF NR NU NZ PF PG PN PW SB TK TO TV UM VU WF WS",
}

CONTINENT_BY_CODE: Dict[str, str] = {
    code: continent for continent, codes in _CONTINENT_CODES.items() for code in codes.split()
}


def country_code(region_code: Optional[str]) -> Optional[str]:
    """'US-CA' -> 'US'; blank -> None."""
    if not region_code:
        return None
    code = region_code.strip().split("-", 1)[0].upper()
    return code or None


def continent_for(region_code: Optional[str]) -> Optional[str]:
    code = country_code(region_code)
    if code is None:
        return None
    return CONTINENT_BY_CODE.get(code)


def standardized_name(base_name: str, region_code: Optional[str]) -> str:
    trimmed = (base_name or "").strip()
    if not trimmed:
        return ""
    code = country_code(region_code)
    return f"{trimmed}, {code}" if code else trimmed


def subtitle(place: Place) -> str:
    parts = [display_name_of(place.category), (place.city or "").strip()]
    parts = [p for p in parts if p]
    if not parts:
        c = place.coordinate
        return f"{c.latitude:.4f}, {c.longitude:.4f}"
    return " ".join(parts)


def landmark_payload(
    place: Place,
    description: str = "",
    short_description: str = "",
    landmark_id: int = 9999,
) -> Dict[str, Any]:
    return {
        "name": display_safe(standardized_name(place.name, place.region_code)),
        "continent": continent_for(place.region_code) or "",
        "id": landmark_id,
        "placeID": place.identity or "",
        "longitude": round(place.coordinate.longitude, 5),
        "latitude": round(place.coordinate.latitude, 5),
        "span": round(span_of(place.category, default=config.DEFAULT_LANDMARK_SPAN), 3),
        "description": description,
        "shortDescription": short_description,
    }
