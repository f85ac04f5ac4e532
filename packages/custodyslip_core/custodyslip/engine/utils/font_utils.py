from __future__ import annotations

from typing import Optional

# Faces whose bold/italic variants follow the base-14 naming scheme.
_BASE14_VARIANTS = {
    "Helvetica": {
        (False, False): "Helvetica",
        (True, False): "Helvetica-Bold",
        (False, True): "Helvetica-Oblique",
        (True, True): "Helvetica-BoldOblique",
    },
    "Times-Roman": {
        (False, False): "Times-Roman",
        (True, False): "Times-Bold",
        (False, True): "Times-Italic",
        (True, True): "Times-BoldItalic",
    },
    "Courier": {
        (False, False): "Courier",
        (True, False): "Courier-Bold",
        (False, True): "Courier-Oblique",
        (True, True): "Courier-BoldOblique",
    },
}

FONT_ALIASES = {
    "helvetica": "Helvetica",
    "arial": "Helvetica",
    "sans-serif": "Helvetica",
    "times": "Times-Roman",
    "times new roman": "Times-Roman",
    "serif": "Times-Roman",
    "courier": "Courier",
    "courier new": "Courier",
    "monospace": "Courier",
    "dejavu sans": "DejaVuSans",
    "dejavusans": "DejaVuSans",
    "liberation sans": "LiberationSans",
    "liberationsans": "LiberationSans",
}

# TrueType families registered by font_registry use "-Bold"/"-Italic" suffixes.
_TTF_ITALIC_SUFFIX = {
    "DejaVuSans": "Oblique",
    "LiberationSans": "Italic",
}

_STYLE_SUFFIXES = ("-Bold", "-Italic", "-Oblique", "-BoldItalic", "-BoldOblique")


def _normalize_base_font(font_name: Optional[str]) -> str:
    if not font_name:
        return "Helvetica"
    cleaned = font_name.strip()
    if not cleaned:
        return "Helvetica"
    return FONT_ALIASES.get(cleaned.lower(), cleaned)


def resolve_font_variant(font_name: Optional[str], bold: bool, italic: bool) -> str:
    """Map a family name plus weight/style flags to a backend face name.

    Names that already carry a style suffix (``Helvetica-Bold``) are kept as-is.
    Unknown families get the conventional suffix appended, so a missing font
    still surfaces as a resolution failure in the metrics backend.
    """
    base = _normalize_base_font(font_name)
    if base.endswith(_STYLE_SUFFIXES):
        return base

    variants = _BASE14_VARIANTS.get(base)
    if variants is not None:
        return variants[(bool(bold), bool(italic))]

    italic_suffix = _TTF_ITALIC_SUFFIX.get(base, "Italic")
    if bold and italic:
        return f"{base}-Bold{italic_suffix}"
    if bold:
        return f"{base}-Bold"
    if italic:
        return f"{base}-{italic_suffix}"
    return base
