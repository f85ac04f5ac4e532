"""Page canvas - fixed-size pages holding recorded draw operations.

Coordinates are in points with the origin at the top-left corner of the page
and ``y`` growing downward. Drawing inside ``[margins.left, width - margins.right]``
is the caller's responsibility; the canvas does not clip or check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .geometry import Margins, Size
from .text_metrics import FontSpec

logger = logging.getLogger(__name__)

RGB = Tuple[float, float, float]
BLACK: RGB = (0.0, 0.0, 0.0)


@dataclass(slots=True, frozen=True)
class TextOp:
    text: str
    x: float
    y: float
    font: FontSpec
    color: RGB = BLACK


@dataclass(slots=True, frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    weight: float
    color: RGB = BLACK


@dataclass(slots=True, frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    fill: Optional[RGB] = None
    stroke: Optional[RGB] = None
    weight: float = 0.0


@dataclass(slots=True, frozen=True)
class ImageOp:
    source: Union[str, bytes]
    x: float
    y: float
    width: float
    height: float


DrawOp = Union[TextOp, LineOp, RectOp, ImageOp]


@dataclass(slots=True)
class CanvasPage:
    """Single page with its display list."""
    number: int
    ops: List[DrawOp] = field(default_factory=list)


@dataclass(slots=True)
class PageState:
    """Mutable per-render page geometry and vertical cursor."""
    cursor_y: float
    page_width: float
    page_height: float
    margins: Margins
    page_number: int = 1

    @property
    def content_width(self) -> float:
        return self.page_width - self.margins.left - self.margins.right

    @property
    def content_height(self) -> float:
        return self.page_height - self.margins.top - self.margins.bottom

    @property
    def content_bottom(self) -> float:
        return self.page_height - self.margins.bottom

    def fits(self, block_height: float) -> bool:
        return self.cursor_y + block_height <= self.content_bottom

    def at_page_top(self) -> bool:
        return self.cursor_y <= self.margins.top + 1e-6


class PageCanvas:
    """Drawable surface made of one or more pages of the same size.

    Each render builds its own canvas; the ``state`` is never shared between
    renders.
    """

    def __init__(self, page_size: Size, margins: Margins):
        self.page_size = page_size
        self.margins = margins
        self.pages: List[CanvasPage] = [CanvasPage(number=1)]
        self.state = PageState(
            cursor_y=margins.top,
            page_width=page_size.width,
            page_height=page_size.height,
            margins=margins,
        )

    def page_width(self) -> float:
        return self.page_size.width

    def page_height(self) -> float:
        return self.page_size.height

    @property
    def current_page(self) -> CanvasPage:
        return self.pages[-1]

    def draw_text(self, text: str, x: float, y: float, font: FontSpec, color: RGB = BLACK) -> None:
        """Place text with its baseline at ``y``."""
        self.current_page.ops.append(TextOp(text, x, y, font, color))

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, weight: float, color: RGB = BLACK) -> None:
        self.current_page.ops.append(LineOp(x1, y1, x2, y2, weight, color))

    def draw_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        fill: Optional[RGB] = None,
        stroke: Optional[RGB] = None,
        weight: float = 0.0,
    ) -> None:
        """Rectangle whose top-left corner is at (x, y)."""
        self.current_page.ops.append(RectOp(x, y, width, height, fill, stroke, weight))

    def draw_image(self, source: Union[str, bytes], x: float, y: float, width: float, height: float) -> None:
        self.current_page.ops.append(ImageOp(source, x, y, width, height))

    def new_page(self) -> CanvasPage:
        """Append a fresh page and move the cursor to the top margin."""
        page = CanvasPage(number=len(self.pages) + 1)
        self.pages.append(page)
        self.state.page_number = page.number
        self.state.cursor_y = self.margins.top
        logger.debug("Started page %d", page.number)
        return page

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def text_ops(self) -> List[TextOp]:
        """All text operations across pages, in drawing order."""
        return [op for page in self.pages for op in page.ops if isinstance(op, TextOp)]
