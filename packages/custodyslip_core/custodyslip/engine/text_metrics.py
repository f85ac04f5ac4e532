"""

TextMetricsEngine - measuring rendered text in page units.

Uses ReportLab font metrics to calculate:
- text width for a given font and size
- font ascent (baseline placement)
- line height (font size times leading)

Every position computed downstream depends on these numbers, so a font the
backend cannot resolve is reported as ``FontResolutionError`` instead of being
replaced with an estimate.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict

from reportlab.pdfbase import pdfmetrics

from ..exceptions import FontResolutionError
from .utils.font_registry import register_default_fonts
from .utils.font_utils import resolve_font_variant

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class FontSpec:
    """Font family, size and weight used for one piece of text."""

    name: str = "Helvetica"
    size: float = 9.0
    bold: bool = False
    italic: bool = False

    @property
    def face(self) -> str:
        """Concrete backend face name (e.g. ``Helvetica-Bold``)."""
        return resolve_font_variant(self.name, self.bold, self.italic)

    def with_bold(self, bold: bool = True) -> "FontSpec":
        return FontSpec(self.name, self.size, bold, self.italic)

    def with_size(self, size: float) -> "FontSpec":
        return FontSpec(self.name, size, self.bold, self.italic)


class TextMetricsEngine:
    """

    Engine for measuring text.

    Pure and deterministic for a given (text, font) pair; the only state is a
    cache of faces already confirmed to be available in the backend.

    """

    def __init__(self, leading: float = 1.15):
        """Initialize the metrics engine.

        Args:
            leading: Line height as a multiple of the font size
        """
        self.leading = float(leading)
        self._font_cache: Dict[str, bool] = {}
        register_default_fonts()

    def _resolve(self, font: FontSpec) -> str:
        face = font.face
        if face in self._font_cache:
            return face
        try:
            pdfmetrics.getFont(face)
        except Exception as exc:  # reportlab raises KeyError or plain Exception
            raise FontResolutionError(face, str(exc)) from exc
        self._font_cache[face] = True
        logger.debug("Resolved font %s", face)
        return face

    def measure(self, text: str, font: FontSpec) -> float:
        """

        Measures rendered width of text.

        Args:
        text: Text to measure
        font: Font used to render the text

        Returns:
        Width in points

        Raises:
        FontResolutionError: If the font is not available in the backend

        """
        face = self._resolve(font)
        if not text:
            return 0.0
        return float(pdfmetrics.stringWidth(text, face, font.size))

    def covers(self, text: str, font: FontSpec) -> bool:
        """True when every character of ``text`` has a glyph in the font.

        TrueType faces are checked against their character map; the base-14
        faces draw with WinAnsi (cp1252) encoding.
        """
        face = self._resolve(font)
        char_map = getattr(getattr(pdfmetrics.getFont(face), "face", None), "charToGlyph", None)
        if char_map is not None:
            return all(ord(char) in char_map for char in text)
        try:
            text.encode("cp1252")
        except UnicodeEncodeError:
            return False
        return True

    def ascent(self, font: FontSpec) -> float:
        """Distance from the top of a line box to its baseline."""
        face = self._resolve(font)
        ascent, _descent = pdfmetrics.getAscentDescent(face, font.size)
        return float(ascent)

    def line_height(self, font: FontSpec) -> float:
        return font.size * self.leading
