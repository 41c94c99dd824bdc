"""CLI entrypoint."""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from poi_curation import config
from poi_curation.categories import category_from_raw
from poi_curation.curation import (
    SearchSession,
    filter_tourist,
    format_tool_answer,
    nearby_suggestions,
)
from poi_curation.description import DescriptionGenerator, GeminiTextModel
from poi_curation.facets import facet_from_id
from poi_curation.http import HttpClient
from poi_curation.models import Coordinate
from poi_curation.places_client import PlacesClient
from poi_curation.ranking import rank
from poi_curation.reporting import ranked_row, render_summary, write_json_object
from poi_curation.transliterate import display_safe, to_ascii_safe

logger = logging.getLogger("run")


def _repo_root() -> Path:
    return Path(__file__).resolve().parent


def load_env(path: str = ".env", root_dir: Optional[Path] = None) -> None:
    """Optionally load a repo-root .env file without overriding real env vars."""
    root = Path(root_dir) if root_dir else _repo_root()
    env_path = (root / path).resolve()
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Curate points of interest around a landmark")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--search", type=str, help="Free-text landmark search")
    group.add_argument("--nearby", type=str, help="Category to suggest near --lat/--lon (hotel, restaurant)")
    group.add_argument("--describe", type=str, help="Generate a description for a landmark name")
    group.add_argument("--transliterate", type=str, help="Print the ASCII-safe form of a string")
    parser.add_argument("--lat", type=float, default=None)
    parser.add_argument("--lon", type=float, default=None)
    parser.add_argument("--landmark", type=str, default="", help="Landmark name used in tool answers")
    parser.add_argument("--facet", type=str, default="all", help="Facet id to filter search results")
    parser.add_argument("--limit", type=int, default=None)
    parser.add_argument("--config", type=str, default=None, help="Path to curation_config.json")
    parser.add_argument("--out", type=str, default=None, help="Write the JSON summary to this path")
    return parser.parse_args(argv)


def _center(args: argparse.Namespace) -> Optional[Coordinate]:
    if args.lat is None or args.lon is None:
        return None
    return Coordinate(args.lat, args.lon)


def _places_client() -> Optional[PlacesClient]:
    api_key = (os.environ.get("GOOGLE_MAPS_API_KEY") or "").strip()
    if not api_key:
        return None
    http_client = HttpClient(
        api_key,
        timeout=config.HTTP_TIMEOUT_SECONDS,
        retry_max=config.HTTP_RETRY_MAX,
        backoff_base=config.HTTP_BACKOFF_BASE,
        backoff_max=config.HTTP_BACKOFF_MAX,
    )
    return PlacesClient(http_client)


def run_search(args: argparse.Namespace, client: PlacesClient) -> Dict[str, Any]:
    facet = facet_from_id(args.facet)
    if facet is None:
        raise ValueError(f"Unknown facet: {args.facet}")
    logger.info("Stage 1: search")
    places = filter_tourist(client.search_text(args.search, center=_center(args)))
    logger.info("Stage 2: rank and facets (%s hits)", len(places))
    session = SearchSession()
    session.update(places, args.search)
    if not session.select(facet):
        logger.info("Facet %s not present; showing all", facet.id)
    results = session.visible()
    if args.limit is not None:
        results = results[: max(0, args.limit)]
    return {
        "mode": "search",
        "query": args.search,
        "facets": [f.id for f in session.facets.facets],
        "selected_facet": session.facets.selected.id,
        "message": session.message,
        "results": [ranked_row(r) for r in results],
    }


def run_nearby(args: argparse.Namespace, client: PlacesClient) -> Dict[str, Any]:
    center = _center(args)
    if center is None:
        raise ValueError("--nearby requires --lat and --lon")
    category = category_from_raw(args.nearby)
    if category is None:
        raise ValueError(f"Unknown category: {args.nearby}")
    places = client.search_nearby(center, category)
    ranked = rank(places, center=center)
    summary: Dict[str, Any] = {
        "mode": "nearby",
        "query": args.nearby,
        "suggestions": nearby_suggestions(places, center, limit=args.limit),
        "results": [ranked_row(r) for r in ranked],
    }
    if args.landmark:
        summary["tool_answer"] = format_tool_answer(
            category.value, display_safe(args.landmark), summary["suggestions"]
        )
    return summary


def run_describe(args: argparse.Namespace) -> Dict[str, Any]:
    generator = DescriptionGenerator(args.describe, GeminiTextModel.from_env())
    generator.generate()
    return {
        "mode": "describe",
        "name": args.describe,
        "status": generator.status,
        "error": generator.error,
        "description": generator.description or "",
        "shortDescription": generator.short_description or "",
    }


def main(argv: Optional[List[str]] = None) -> int:
    load_env()
    args = parse_args(argv)
    config.load_curation_config(args.config)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.transliterate is not None:
        print(to_ascii_safe(args.transliterate))
        return 0

    try:
        if args.describe is not None:
            summary = run_describe(args)
        else:
            client = _places_client()
            if client is None:
                print("Missing GOOGLE_MAPS_API_KEY in environment", file=sys.stderr)
                return 1
            if args.search is not None:
                summary = run_search(args, client)
            else:
                summary = run_nearby(args, client)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.out:
        write_json_object(args.out, summary)
    if summary.get("results") is not None:
        for line in render_summary(summary):
            logger.info(line)
    print(json.dumps(summary, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
