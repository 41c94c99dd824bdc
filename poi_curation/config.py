"""Project configuration.

Loads optional overrides from curation_config.json when available, falling
back to the defaults below. Keep API request shapes centralized here.
Dedup thresholds (dedup.py) and the pin highlight delay are not loadable.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

_REPO_ROOT = Path(__file__).resolve().parent.parent

# --- API endpoints ---

PLACES_TEXT_SEARCH_URL = "https://places.googleapis.com/v1/places:searchText"
PLACES_NEARBY_SEARCH_URL = "https://places.googleapis.com/v1/places:searchNearby"
GEMINI_API_URL_TEMPLATE = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

# --- Field masks ---

PLACES_FIELD_MASK = (
    "places.id,places.displayName,places.location,places.types,"
    "places.primaryType,places.addressComponents"
)

# --- Search request shape ---

PLACES_SEARCH_RADIUS_M = 10_000.0
PLACES_MAX_RESULT_COUNT = 20
PLACES_LANGUAGE_CODE: Optional[str] = None
PLACES_TEXT_SEARCH_BODY_EXTRA: Dict[str, Any] = {}
PLACES_NEARBY_BODY_EXTRA: Dict[str, Any] = {}

# --- Curation ---

MAX_SEARCH_RESULTS = 20
SUGGESTION_LIMIT = 3
PIN_HIGHLIGHT_SECONDS = 1.2
DEFAULT_LANDMARK_SPAN = 0.10

# --- HTTP ---

HTTP_TIMEOUT_SECONDS = 20
HTTP_RETRY_MAX = 3
HTTP_BACKOFF_BASE = 0.5
HTTP_BACKOFF_MAX = 8.0

# --- Text model ---

DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
TEXT_MODEL_TIMEOUT_SECONDS = 60
DESCRIPTION_INSTRUCTIONS = "Your job is to create a description for a landmark."
DESCRIPTION_PROMPT_TEMPLATE = "Generate a brief and exciting description for {name}."

# --- Outputs ---

OUTPUT_DIR = "out"

_LOADABLE_FLOATS: List[str] = ["PLACES_SEARCH_RADIUS_M", "DEFAULT_LANDMARK_SPAN"]
_LOADABLE_INTS: List[str] = ["PLACES_MAX_RESULT_COUNT", "MAX_SEARCH_RESULTS", "SUGGESTION_LIMIT", "HTTP_RETRY_MAX"]


def load_curation_config(path: Optional[str] = None) -> bool:
    """Load overrides from a JSON file.

    Updates module-level globals with values from the config file.
    Returns True if config was loaded, False if file not found.
    """
    if path is None:
        path = str(_REPO_ROOT / "curation_config.json")

    config_path = Path(path)
    if not config_path.exists():
        return False

    with open(config_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    globals_ref = globals()

    search = data.get("search", {})
    if "radius_m" in search:
        globals_ref["PLACES_SEARCH_RADIUS_M"] = float(search["radius_m"])
    if "max_result_count" in search:
        globals_ref["PLACES_MAX_RESULT_COUNT"] = int(search["max_result_count"])
    if search.get("language_code"):
        globals_ref["PLACES_LANGUAGE_CODE"] = str(search["language_code"])

    curation = data.get("curation", {})
    if "max_search_results" in curation:
        globals_ref["MAX_SEARCH_RESULTS"] = int(curation["max_search_results"])
    if "suggestion_limit" in curation:
        globals_ref["SUGGESTION_LIMIT"] = int(curation["suggestion_limit"])

    model = data.get("model", {})
    if model.get("name"):
        globals_ref["DEFAULT_TEXT_MODEL"] = str(model["name"])

    # Flat keys win over sections, e.g. {"SUGGESTION_LIMIT": 5}.
    for key in _LOADABLE_FLOATS:
        if key in data:
            globals_ref[key] = float(data[key])
    for key in _LOADABLE_INTS:
        if key in data:
            globals_ref[key] = int(data[key])

    return True
