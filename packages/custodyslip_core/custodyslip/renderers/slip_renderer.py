"""Inventory Custodian Slip renderer.

Sequence for one document: logo and title block, identification block, item
table, signature table, serialization. The vertical cursor lives in the
canvas ``PageState`` created for that render and is handed from block to
block; nothing survives between renders.
"""

from __future__ import annotations

import datetime as dt
import io
import logging
import random
from dataclasses import replace
from typing import Callable, Optional, Union

from reportlab.lib.utils import ImageReader

from ..config import ITEM_TABLE_COLUMNS, ITEM_TABLE_HEADER, SIGNATURE_COLUMNS, SlipSettings
from ..engine.document_builder import DocumentModelBuilder
from ..engine.page_canvas import PageCanvas
from ..engine.table_layout import TableLayoutEngine
from ..engine.text_metrics import FontSpec, TextMetricsEngine
from ..engine.utils.font_registry import FONT_VARIANTS, registered_families
from ..exceptions import CustodySlipError, FontResolutionError, RenderingError
from ..export.pdf_sink import PdfMetadata, PdfSink, suggest_filename
from ..export.targets import CallbackSink, RenderTarget
from ..models.bundle import DocumentBundle, RenderedDocument
from ..models.request import DocumentRequest

logger = logging.getLogger(__name__)

ENTITY_LABEL = "Entity Name: "
FUND_CLUSTER_LABEL = "Fund Cluster: "
DOCUMENT_NUMBER_LABEL = "ICS NO.: "

CURRENCY_CODES = {
    "₱": "PHP ",
}


def resolve_currency_font(settings: SlipSettings, metrics: TextMetricsEngine) -> SlipSettings:
    """Settings whose body font can draw the currency symbol.

    When the configured family lacks the glyph, the first registered TrueType
    family that has it (regular and bold faces) replaces it. Without one, the
    symbol is replaced by its currency code and a warning is logged.
    """
    symbol = settings.currency_symbol
    style = settings.style
    try:
        if metrics.covers(symbol, style.body_font):
            return settings
    except FontResolutionError:
        # Reported by the render itself
        return settings

    registered = registered_families()
    for family in FONT_VARIANTS:
        if family not in registered or f"{family}-Bold" not in registered:
            continue
        candidate = replace(style, font_family=family)
        if metrics.covers(symbol, candidate.body_font):
            logger.info("Font %s cannot draw %r, using %s", style.font_family, symbol, family)
            return replace(settings, style=candidate)

    fallback = CURRENCY_CODES.get(symbol, "")
    logger.warning(
        "No installed font can draw %r, printing %r instead (install DejaVuSans or LiberationSans)",
        symbol,
        fallback,
    )
    return replace(settings, currency_symbol=fallback)


class SlipRenderer:
    """Builds and draws Inventory Custodian Slips.

    Args:
        settings: Page, identifier and style configuration
        metrics: Measurement backend (shared safely, it holds no per-render state)
        builder: Document model builder; created from ``settings`` when omitted
        sink: Output sink used to serialize the canvas
        random_source: Seeded random source for generated document numbers
        clock: Render timestamp provider
    """

    def __init__(
        self,
        settings: Optional[SlipSettings] = None,
        metrics: Optional[TextMetricsEngine] = None,
        builder: Optional[DocumentModelBuilder] = None,
        sink: Optional[PdfSink] = None,
        random_source: Optional[random.Random] = None,
        clock: Optional[Callable[[], dt.datetime]] = None,
    ) -> None:
        settings = settings or SlipSettings()
        self.metrics = metrics or TextMetricsEngine(leading=settings.style.leading)
        self.settings = resolve_currency_font(settings, self.metrics)
        self.style = self.settings.style
        self.builder = builder or DocumentModelBuilder(self.settings, random_source=random_source, clock=clock)
        self.sink = sink or PdfSink()

    def render(
        self,
        request: DocumentRequest,
        target: Optional[RenderTarget] = None,
    ) -> Union[RenderedDocument, DocumentBundle]:
        """Render one request.

        With a ``CallbackSink`` target only the normalized bundle is produced
        and passed to the callback; otherwise the PDF is rendered, emitted to
        the target (if any) and returned.
        """
        bundle = self.builder.build(request)
        if isinstance(target, CallbackSink):
            target.emit(bundle)
            return bundle

        document = self.render_bundle(bundle)
        if target is not None:
            target.emit(document)
        return document

    def render_bundle(self, bundle: DocumentBundle) -> RenderedDocument:
        try:
            canvas = self.layout(bundle)
            data = self.sink.serialize(canvas, self._metadata(bundle))
        except CustodySlipError:
            raise
        except Exception as exc:
            raise RenderingError("Failed to render custody slip", str(exc)) from exc

        filename = suggest_filename(bundle.document_number, bundle.item_code, self.settings.filename_prefix)
        logger.info("Rendered %s (%d page(s), %d bytes)", filename, canvas.page_count, len(data))
        return RenderedDocument(data=data, filename=filename, page_count=canvas.page_count)

    def layout(self, bundle: DocumentBundle) -> PageCanvas:
        """Draw every block of the slip onto a fresh canvas."""
        settings = self.settings
        canvas = PageCanvas(settings.page_size, settings.margins)
        self._draw_logo(canvas)
        self._draw_title(canvas)
        self._draw_identification(canvas, bundle)
        self._draw_item_table(canvas, bundle)
        self._draw_signatures(canvas, bundle)
        return canvas

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------
    def _draw_logo(self, canvas: PageCanvas) -> None:
        logo = self.settings.logo
        if not logo:
            return
        try:
            ImageReader(io.BytesIO(logo) if isinstance(logo, bytes) else logo)
        except Exception as exc:  # ImageReader raises plain exceptions for unreadable input
            logger.warning("Could not load logo, continuing without it: %s", exc)
            return
        state = canvas.state
        size = self.style.logo_size
        canvas.draw_image(logo, state.margins.left, state.cursor_y, size, size)
        state.cursor_y += size + self.style.logo_gap

    def _draw_title(self, canvas: PageCanvas) -> None:
        style = self.style
        state = canvas.state
        font = style.title_font
        title = self.settings.title
        width = self.metrics.measure(title, font)
        x = (canvas.page_width() - width) / 2.0
        baseline = state.cursor_y + self.metrics.ascent(font)

        canvas.draw_text(title, x, baseline, font, style.text_color)
        underline_y = baseline + style.title_underline_offset
        canvas.draw_line(x, underline_y, x + width, underline_y, style.title_underline_weight, style.line_color)
        state.cursor_y = baseline + style.title_gap

    def _draw_identification(self, canvas: PageCanvas, bundle: DocumentBundle) -> None:
        style = self.style
        state = canvas.state
        fields = (
            (ENTITY_LABEL, bundle.entity_name),
            (FUND_CLUSTER_LABEL, bundle.fund_cluster),
            (DOCUMENT_NUMBER_LABEL, bundle.document_number),
        )
        baseline = state.cursor_y
        for index, (label, value) in enumerate(fields):
            if index:
                baseline += style.field_spacing
            self._draw_labeled_value(canvas, label, value, state.margins.left, baseline, style.body_font)
        state.cursor_y = baseline + style.identification_gap

    def _draw_labeled_value(
        self,
        canvas: PageCanvas,
        label: str,
        value: str,
        x: float,
        baseline: float,
        font: FontSpec,
    ) -> None:
        """Label followed by an underlined value; the underline starts where the label ends."""
        style = self.style
        canvas.draw_text(label, x, baseline, font, style.text_color)
        value_x = x + self.metrics.measure(label, font)
        canvas.draw_text(value, value_x, baseline, font, style.text_color)
        value_width = self.metrics.measure(value, font)
        underline_y = baseline + style.field_underline_offset
        canvas.draw_line(value_x, underline_y, value_x + value_width, underline_y,
                         style.field_underline_weight, style.line_color)

    def _draw_item_table(self, canvas: PageCanvas, bundle: DocumentBundle) -> None:
        engine = TableLayoutEngine(canvas, self.metrics, self.style.item_table_style())
        engine.render(ITEM_TABLE_COLUMNS, ITEM_TABLE_HEADER, [bundle.item_row()])

    def _draw_signatures(self, canvas: PageCanvas, bundle: DocumentBundle) -> None:
        canvas.state.cursor_y += self.style.signature_gap
        engine = TableLayoutEngine(canvas, self.metrics, self.style.signature_table_style())
        engine.render(SIGNATURE_COLUMNS, None, [[bundle.recipient_block, bundle.issuer_block]])

    def _metadata(self, bundle: DocumentBundle) -> PdfMetadata:
        return PdfMetadata(
            title=f"Inventory Custodian Slip {bundle.document_number}",
            subject=bundle.entity_name,
            author=self.settings.author,
        )
