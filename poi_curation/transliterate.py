"""Lossy ASCII-safe text normalization for script-sensitive consumers."""
from __future__ import annotations

import re
import unicodedata

from unidecode import unidecode

_SPACE_RUN_RE = re.compile(r"[ \t]{2,}")


def _strip_combining(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _ascii_only(text: str) -> str:
    return "".join(ch for ch in text if ord(ch) < 128)


def _is_diacritic(ch: str) -> bool:
    return bool(unicodedata.combining(ch)) or unicodedata.category(ch) in ("Mn", "Sk")


def _transliterated(text: str) -> str:
    latin = unidecode(text)
    result = _ascii_only(_strip_combining(latin))
    # Table entries for ideographs carry trailing spaces ("Bei Jing ").
    return _SPACE_RUN_RE.sub(" ", result).strip()


def _decomposed(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    result = _ascii_only("".join(ch for ch in decomposed if not _is_diacritic(ch)))
    return _SPACE_RUN_RE.sub(" ", result).strip()


def to_ascii_safe(text: str) -> str:
    """Best-effort ASCII rendition of ``text``.

    Returns "" when neither transliteration nor decomposition yields anything
    (emoji-only input, unmapped scripts). Callers must then fall back to the
    original text for display but must not forward it to a model prompt.
    """
    if not text:
        return ""
    result = _transliterated(text)
    if result:
        return result
    return _decomposed(text)


def display_safe(text: str) -> str:
    """ASCII-safe text for on-screen use, falling back to the original."""
    safe = to_ascii_safe(text)
    return safe if safe else text
