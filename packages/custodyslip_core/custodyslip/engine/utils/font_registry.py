from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from reportlab.pdfbase import pdfmetrics  # type: ignore
from reportlab.pdfbase.ttfonts import TTFont  # type: ignore

logger = logging.getLogger(__name__)

SEARCH_DIRECTORIES: List[Path] = [
    Path("/usr/share/fonts"),
    Path("/usr/share/fonts/truetype"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
    Path.home() / ".local/share/fonts",
    Path("C:/Windows/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/Library/Fonts"),
]

FONT_VARIANTS: Dict[str, Dict[str, Iterable[str]]] = {
    "DejaVuSans": {
        "": ("DejaVuSans.ttf",),
        "-Bold": ("DejaVuSans-Bold.ttf",),
        "-Oblique": ("DejaVuSans-Oblique.ttf",),
        "-BoldOblique": ("DejaVuSans-BoldOblique.ttf",),
    },
    "LiberationSans": {
        "": ("LiberationSans-Regular.ttf", "LiberationSans.ttf"),
        "-Bold": ("LiberationSans-Bold.ttf",),
        "-Italic": ("LiberationSans-Italic.ttf",),
        "-BoldItalic": ("LiberationSans-BoldItalic.ttf",),
    },
}


@lru_cache()
def _build_font_index() -> Dict[str, Path]:
    index: Dict[str, Path] = {}
    for root in SEARCH_DIRECTORIES:
        if not root.exists():
            continue
        try:
            for candidate in root.rglob("*.ttf"):
                index.setdefault(candidate.name.lower(), candidate)
        except OSError as exc:
            logger.debug("Could not scan font directory %s: %s", root, exc)
    return index


def _locate_font_file(candidates: Iterable[str]) -> Optional[Path]:
    index = _build_font_index()
    for name in candidates:
        path = index.get(name.lower())
        if path:
            return path
    return None


_REGISTERED: Set[str] = set()


def register_default_fonts() -> None:
    """Register the TrueType families that can render non-Latin-1 glyphs.

    Families are only registered when the corresponding ``*.ttf`` files exist
    on the system. A missing family is not an error here; requesting it later
    raises ``FontResolutionError`` from the metrics engine.
    """
    for family, variants in FONT_VARIANTS.items():
        for suffix, candidate_names in variants.items():
            font_id = f"{family}{suffix}"
            if font_id in _REGISTERED:
                continue
            font_path = _locate_font_file(candidate_names)
            if not font_path:
                logger.debug("Font file for %s not found (looked for %s)", font_id, candidate_names)
                continue
            try:
                pdfmetrics.registerFont(TTFont(font_id, str(font_path)))
            except Exception as exc:  # reportlab raises TTFError and plain Exceptions
                logger.warning("Failed to register font %s: %s", font_id, exc)
                continue
            _REGISTERED.add(font_id)
            logger.debug("Registered font %s (%s)", font_id, font_path)


def registered_families() -> Set[str]:
    """Return the TrueType faces registered so far."""
    return set(_REGISTERED)
