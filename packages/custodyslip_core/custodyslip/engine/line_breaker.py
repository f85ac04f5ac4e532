"""Greedy line breaking for table cells."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from .text_metrics import FontSpec, TextMetricsEngine

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LineBreakResult:
    text: str
    width: float
    overflow: bool = False


class LineBreaker:
    """Simple greedy line breaker.

    Explicit newlines start a new paragraph; an empty paragraph produces an
    empty line. A word wider than ``max_width`` is placed alone on its line and
    flagged as overflowing, it is never truncated.
    """

    def __init__(self, metrics_engine: TextMetricsEngine) -> None:
        self.metrics_engine = metrics_engine

    def break_text(self, text: str, max_width: float, font: FontSpec) -> List[LineBreakResult]:
        lines: List[LineBreakResult] = []
        for paragraph in (text or "").split("\n"):
            lines.extend(self._break_paragraph(paragraph, max_width, font))
        return lines

    def _break_paragraph(self, paragraph: str, max_width: float, font: FontSpec) -> List[LineBreakResult]:
        words = paragraph.split()
        if not words:
            return [LineBreakResult(text="", width=0.0)]

        measure = self.metrics_engine.measure
        lines: List[LineBreakResult] = []
        current_line = ""
        current_width = 0.0

        for word in words:
            candidate = f"{current_line} {word}" if current_line else word
            candidate_width = measure(candidate, font)

            if candidate_width <= max_width:
                current_line = candidate
                current_width = candidate_width
                continue

            if current_line:
                lines.append(LineBreakResult(text=current_line, width=current_width))

            word_width = measure(word, font)
            if word_width > max_width:
                # Hard break right after the oversized word
                logger.debug("Word %r (%.2f) wider than column (%.2f)", word, word_width, max_width)
                lines.append(LineBreakResult(text=word, width=word_width, overflow=True))
                current_line = ""
                current_width = 0.0
            else:
                current_line = word
                current_width = word_width

        if current_line:
            lines.append(LineBreakResult(text=current_line, width=current_width))

        return lines
