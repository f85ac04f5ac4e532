"""Table layout engine - column widths, wrapped rows and page breaks.

The engine walks a small state machine while drawing one table::

    IDLE -> HEADER_DRAWN -> BODY_ROW(i) -> FINISHED

Column widths are ``available_width * weight``; weights are expected to be
pre-normalized by the caller and are only validated, never rescaled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..exceptions import LayoutError
from .line_breaker import LineBreaker, LineBreakResult
from .page_canvas import BLACK, RGB, PageCanvas
from .text_metrics import FontSpec, TextMetricsEngine

logger = logging.getLogger(__name__)

WEIGHT_TOLERANCE = 1e-9


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VAlign(str, Enum):
    TOP = "top"
    MIDDLE = "middle"


class TableState(str, Enum):
    IDLE = "idle"
    HEADER_DRAWN = "header_drawn"
    BODY_ROW = "body_row"
    FINISHED = "finished"


@dataclass(slots=True, frozen=True)
class ColumnSpec:
    """Fractional share of the available width plus text alignment."""
    weight: float
    align: Align = Align.LEFT

    def __post_init__(self):
        object.__setattr__(self, "weight", float(self.weight))
        object.__setattr__(self, "align", Align(self.align))


@dataclass(slots=True, frozen=True)
class TableStyle:
    """Presentation parameters for one table."""
    body_font: FontSpec = FontSpec("Helvetica", 9.0)
    header_font: FontSpec = FontSpec("Helvetica", 9.0, bold=True)
    padding: Tuple[float, float, float, float] = (5.0, 5.0, 5.0, 5.0)  # top, right, bottom, left
    header_fill: Optional[RGB] = (1.0, 1.0, 0.0)
    text_color: RGB = BLACK
    line_color: RGB = BLACK
    line_width: float = 1.0
    header_valign: VAlign = VAlign.MIDDLE
    body_valign: VAlign = VAlign.TOP
    repeat_header: bool = True


@dataclass(slots=True)
class _LaidOutRow:
    cells: List[List[LineBreakResult]]
    height: float
    fonts: List[FontSpec] = field(default_factory=list)


def compute_column_widths(columns: Sequence[ColumnSpec], available_width: float) -> List[float]:
    """Concrete column widths for ``available_width``.

    Raises:
        LayoutError: If a weight is outside (0, 1] or the weights sum above 1.0
    """
    total = 0.0
    for index, column in enumerate(columns):
        if not 0.0 < column.weight <= 1.0:
            raise LayoutError("Column weight out of range", f"column {index}: {column.weight}")
        total += column.weight
    if total > 1.0 + WEIGHT_TOLERANCE:
        raise LayoutError("Column weights exceed available width", f"sum={total:.6f}")
    return [available_width * column.weight for column in columns]


class TableLayoutEngine:
    """Draws one table onto a page canvas, paginating between rows."""

    def __init__(
        self,
        canvas: PageCanvas,
        metrics: TextMetricsEngine,
        style: Optional[TableStyle] = None,
        line_breaker: Optional[LineBreaker] = None,
    ) -> None:
        self.canvas = canvas
        self.metrics = metrics
        self.style = style or TableStyle()
        self.line_breaker = line_breaker or LineBreaker(metrics)
        self.state = TableState.IDLE
        self.row_index: Optional[int] = None
        self.column_widths: List[float] = []

    def render(
        self,
        columns: Sequence[ColumnSpec],
        header: Optional[Sequence[str]],
        body_rows: Sequence[Sequence[str]],
        *,
        x: Optional[float] = None,
        available_width: Optional[float] = None,
    ) -> float:
        """Draw header and body rows starting at the canvas cursor.

        Args:
            columns: Column weights and alignment
            header: Header cell texts, or None for a body-only table
            body_rows: Body cell texts, one sequence per row
            x: Left edge of the table (defaults to the left margin)
            available_width: Width the weights refer to (defaults to content width)

        Returns:
            Cursor position below the last row
        """
        if self.state is not TableState.IDLE:
            raise LayoutError("Table engine already used", f"state={self.state.value}")
        if header is not None and len(header) != len(columns):
            raise LayoutError("Header does not match columns", f"{len(header)} != {len(columns)}")

        state = self.canvas.state
        left = state.margins.left if x is None else x
        width = state.content_width if available_width is None else available_width
        self.column_widths = compute_column_widths(columns, width)
        logger.debug("Column widths: %s", ", ".join(f"{w:.2f}" for w in self.column_widths))

        for index, cells in enumerate(body_rows):
            if len(cells) != len(columns):
                raise LayoutError("Row does not match columns", f"row {index}: {len(cells)} != {len(columns)}")
        rows = [self._lay_out(cells, self.style.body_font) for cells in body_rows]

        header_row = self._lay_out(header, self.style.header_font) if header is not None else None
        if header_row is not None:
            # The header stays on the page of the first body row
            needed = header_row.height + (rows[0].height if rows else 0.0)
            if not state.fits(needed) and not state.at_page_top():
                self.canvas.new_page()
            self._draw_row(header_row, columns, left, header=True)
            self.state = TableState.HEADER_DRAWN

        rows_on_page = 0
        for index, row in enumerate(rows):
            page_is_fresh = state.at_page_top() or (header_row is not None and rows_on_page == 0)
            if not state.fits(row.height) and not page_is_fresh:
                self.canvas.new_page()
                logger.debug("Row %d moved to page %d", index, state.page_number)
                if header_row is not None and self.style.repeat_header:
                    self._draw_row(header_row, columns, left, header=True)
                rows_on_page = 0

            if not state.fits(row.height):
                logger.warning(
                    "Row %d (%.1fpt) taller than the page content area, drawing with overflow",
                    index,
                    row.height,
                )

            self._draw_row(row, columns, left, header=False)
            self.state = TableState.BODY_ROW
            self.row_index = index
            rows_on_page += 1

        self.state = TableState.FINISHED
        return state.cursor_y

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _lay_out(self, cells: Sequence[str], font: FontSpec) -> _LaidOutRow:
        pad_top, pad_right, pad_bottom, pad_left = self.style.padding
        line_height = self.metrics.line_height(font)
        wrapped: List[List[LineBreakResult]] = []
        for text, column_width in zip(cells, self.column_widths):
            inner_width = max(0.0, column_width - pad_left - pad_right)
            wrapped.append(self.line_breaker.break_text(str(text), inner_width, font))
        tallest = max((len(lines) for lines in wrapped), default=1)
        height = tallest * line_height + pad_top + pad_bottom
        return _LaidOutRow(cells=wrapped, height=height, fonts=[font] * len(wrapped))

    def _draw_row(self, row: _LaidOutRow, columns: Sequence[ColumnSpec], left: float, *, header: bool) -> None:
        style = self.style
        state = self.canvas.state
        pad_top, pad_right, pad_bottom, pad_left = style.padding
        top = state.cursor_y
        valign = style.header_valign if header else style.body_valign

        cell_x = left
        for lines, font, column, width in zip(row.cells, row.fonts, columns, self.column_widths):
            self.canvas.draw_rect(
                cell_x,
                top,
                width,
                row.height,
                fill=style.header_fill if header else None,
                stroke=style.line_color,
                weight=style.line_width,
            )

            line_height = self.metrics.line_height(font)
            ascent = self.metrics.ascent(font)
            text_top = top + pad_top
            if valign is VAlign.MIDDLE:
                inner_height = row.height - pad_top - pad_bottom
                text_top += (inner_height - len(lines) * line_height) / 2.0
            align = Align.CENTER if header else column.align

            for line_no, line in enumerate(lines):
                if not line.text:
                    continue
                if align is Align.CENTER:
                    text_x = cell_x + (width - line.width) / 2.0
                elif align is Align.RIGHT:
                    text_x = cell_x + width - pad_right - line.width
                else:
                    text_x = cell_x + pad_left
                baseline = text_top + line_no * line_height + ascent
                self.canvas.draw_text(line.text, text_x, baseline, font, style.text_color)

            cell_x += width

        state.cursor_y = top + row.height
