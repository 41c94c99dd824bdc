"""Output helpers for CLI runs."""
from __future__ import annotations

import json
import os
import tempfile
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, TextIO

from .models import RankedPlace
from .landmark import subtitle


def ensure_dir(path: str) -> None:
    if path:
        os.makedirs(path, exist_ok=True)


@contextmanager
def atomic_writer(
    path: str,
    mode: str = "w",
    encoding: str = "utf-8",
    newline: Optional[str] = None,
) -> Iterator[TextIO]:
    dir_path = os.path.dirname(path) or "."
    base = os.path.basename(path)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{base}.", suffix=".tmp", dir=dir_path)
    try:
        with os.fdopen(fd, mode, encoding=encoding, newline=newline) as f:
            yield f
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def write_json_object(path: str, payload: Any) -> None:
    ensure_dir(os.path.dirname(path))
    with atomic_writer(path, mode="w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)


def ranked_row(item: RankedPlace) -> Dict[str, Any]:
    place = item.place
    return {
        "rank": item.rank,
        "name": place.name,
        "category": place.category.value if place.category else None,
        "subtitle": subtitle(place),
        "place_id": place.identity,
        "lat": place.coordinate.latitude,
        "lon": place.coordinate.longitude,
        "distance_m": round(item.distance_m, 1) if item.distance_m is not None else None,
    }


def render_summary(summary: Dict[str, Any]) -> List[str]:
    lines = [f"Mode: {summary.get('mode', '')}"]
    if summary.get("query"):
        lines.append(f"Query: {summary['query']}")
    facets = summary.get("facets") or []
    if facets:
        lines.append("Facets: " + ", ".join(facets))
    rows = summary.get("results") or []
    lines.append(f"Results: {len(rows)}")
    for row in rows:
        lines.append(f"  {row['rank'] + 1}. {row['name']} ({row['subtitle']})")
    return lines
