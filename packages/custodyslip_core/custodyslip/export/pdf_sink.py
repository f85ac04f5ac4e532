"""PDF output sink - replays a page canvas on a ReportLab canvas."""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from typing import Optional

from reportlab.lib.colors import Color
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as rl_canvas

from ..engine.page_canvas import CanvasPage, ImageOp, LineOp, PageCanvas, RectOp, TextOp
from ..exceptions import RenderingError

logger = logging.getLogger(__name__)

FALLBACK_NAME = "INVENTORY"
_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\s]+')


@dataclass(slots=True, frozen=True)
class PdfMetadata:
    title: str = ""
    subject: str = ""
    author: str = ""


def suggest_filename(document_number: Optional[str], item_code: Optional[str], prefix: str = "ICS") -> str:
    """File name for a slip, e.g. ``ICS-SPL-ICS-LV-2025-03-042.pdf``.

    Falls back to the item code and then to ``INVENTORY`` when both are empty.
    """
    stem = (document_number or "").strip() or (item_code or "").strip() or FALLBACK_NAME
    stem = _UNSAFE_FILENAME_CHARS.sub("_", stem).strip("_") or FALLBACK_NAME
    return f"{prefix}-{stem}.pdf" if prefix else f"{stem}.pdf"


class PdfSink:
    """Serializes a finished ``PageCanvas`` to PDF bytes.

    The ReportLab canvas is created with ``invariant=1`` so identical display
    lists produce identical bytes.
    """

    def serialize(self, canvas: PageCanvas, metadata: Optional[PdfMetadata] = None) -> bytes:
        buffer = io.BytesIO()
        page_size = (canvas.page_width(), canvas.page_height())
        pdf = rl_canvas.Canvas(buffer, pagesize=page_size, invariant=1)
        if metadata is not None:
            pdf.setTitle(metadata.title)
            pdf.setSubject(metadata.subject)
            pdf.setAuthor(metadata.author)

        for page in canvas.pages:
            self._render_page(pdf, page, canvas.page_height())
            pdf.showPage()

        pdf.save()
        data = buffer.getvalue()
        logger.debug("Serialized %d page(s), %d bytes", canvas.page_count, len(data))
        return data

    def _render_page(self, pdf: rl_canvas.Canvas, page: CanvasPage, page_height: float) -> None:
        for op in page.ops:
            if isinstance(op, TextOp):
                pdf.setFillColor(Color(*op.color))
                pdf.setFont(op.font.face, op.font.size)
                pdf.drawString(op.x, page_height - op.y, op.text)
            elif isinstance(op, LineOp):
                pdf.setStrokeColor(Color(*op.color))
                pdf.setLineWidth(op.weight)
                pdf.line(op.x1, page_height - op.y1, op.x2, page_height - op.y2)
            elif isinstance(op, RectOp):
                self._draw_rect(pdf, op, page_height)
            elif isinstance(op, ImageOp):
                self._draw_image(pdf, op, page_height)

    @staticmethod
    def _draw_rect(pdf: rl_canvas.Canvas, op: RectOp, page_height: float) -> None:
        pdf.saveState()
        if op.fill is not None:
            pdf.setFillColor(Color(*op.fill))
        if op.stroke is not None:
            pdf.setStrokeColor(Color(*op.stroke))
            pdf.setLineWidth(op.weight)
        pdf.rect(
            op.x,
            page_height - op.y - op.height,
            op.width,
            op.height,
            stroke=1 if op.stroke is not None else 0,
            fill=1 if op.fill is not None else 0,
        )
        pdf.restoreState()

    @staticmethod
    def _draw_image(pdf: rl_canvas.Canvas, op: ImageOp, page_height: float) -> None:
        source = io.BytesIO(op.source) if isinstance(op.source, bytes) else op.source
        try:
            image = ImageReader(source)
        except Exception as exc:  # ImageReader wraps PIL errors in plain exceptions
            raise RenderingError("Cannot read image", str(exc)) from exc
        pdf.drawImage(image, op.x, page_height - op.y - op.height, op.width, op.height, mask="auto")
