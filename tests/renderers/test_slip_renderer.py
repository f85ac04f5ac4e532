"""Tests for SlipRenderer."""

import logging
import random
import re
from dataclasses import replace
from unittest.mock import Mock

import pytest

from custodyslip.config import SlipSettings
from custodyslip.engine.page_canvas import ImageOp, LineOp, PageCanvas, TextOp
from custodyslip.engine.utils.font_registry import FONT_VARIANTS, registered_families
from custodyslip.exceptions import FontResolutionError, RenderingError
from custodyslip.export.pdf_sink import PdfSink
from custodyslip.export.targets import CallbackSink, FileSink
from custodyslip.models import DocumentBundle, RenderedDocument
from custodyslip.renderers import SlipRenderer
from custodyslip.renderers import slip_renderer
from custodyslip.renderers.slip_renderer import DOCUMENT_NUMBER_LABEL, ENTITY_LABEL, FUND_CLUSTER_LABEL


@pytest.fixture
def renderer(settings, clock):
    return SlipRenderer(settings, random_source=random.Random(99), clock=clock)


def _line_after(ops, text_op):
    index = ops.index(text_op)
    return next(op for op in ops[index + 1:] if isinstance(op, LineOp))


class TestSlipRenderer:
    """Test suite for the slip renderer."""

    @pytest.mark.integration
    def test_render_returns_pdf(self, renderer, sample_request):
        document = renderer.render(sample_request)

        assert isinstance(document, RenderedDocument)
        assert document.data.startswith(b"%PDF")
        assert document.page_count == 1
        assert re.match(r"^ICS-SPL-ICS-LV-2025-03-\d{3}\.pdf$", document.filename)

    @pytest.mark.integration
    def test_supplied_number_in_filename(self, renderer, sample_request):
        document = renderer.render(replace(sample_request, document_number="ICS 2025/001"))
        assert document.filename == "ICS-ICS_2025_001.pdf"

    def test_title_underline_spans_title(self, renderer, builder, sample_request, settings):
        canvas = renderer.layout(builder.build(sample_request))
        ops = canvas.pages[0].ops

        title = next(op for op in ops if isinstance(op, TextOp) and op.text == settings.title)
        underline = _line_after(ops, title)
        width = renderer.metrics.measure(settings.title, renderer.style.title_font)

        assert underline.x1 == pytest.approx(title.x)
        assert underline.x2 - underline.x1 == pytest.approx(width)
        assert title.x == pytest.approx((settings.page_size.width - width) / 2)
        assert underline.y1 > title.y

    @pytest.mark.parametrize(
        "label, attribute",
        [
            (ENTITY_LABEL, "entity_name"),
            (FUND_CLUSTER_LABEL, "fund_cluster"),
            (DOCUMENT_NUMBER_LABEL, "document_number"),
        ],
    )
    def test_identification_underlines(self, renderer, builder, sample_request, settings, label, attribute):
        bundle = builder.build(sample_request)
        ops = renderer.layout(bundle).pages[0].ops
        font = renderer.style.body_font
        measure = renderer.metrics.measure

        label_op = next(op for op in ops if isinstance(op, TextOp) and op.text == label)
        value_op = ops[ops.index(label_op) + 1]
        underline = _line_after(ops, value_op)

        assert value_op.text == getattr(bundle, attribute)
        assert label_op.x == pytest.approx(settings.margins.left)
        assert underline.x1 == pytest.approx(settings.margins.left + measure(label, font))
        assert underline.x2 - underline.x1 == pytest.approx(measure(value_op.text, font))

    @pytest.mark.parametrize("label", [ENTITY_LABEL, FUND_CLUSTER_LABEL, DOCUMENT_NUMBER_LABEL, ""])
    @pytest.mark.parametrize("value", ["", "7", "Division of San Pedro City, Laguna - MOOE 2025"])
    def test_labeled_value_underline_span(self, renderer, settings, label, value):
        canvas = PageCanvas(settings.page_size, settings.margins)
        font = renderer.style.body_font
        x = settings.margins.left

        renderer._draw_labeled_value(canvas, label, value, x, 100.0, font)

        underline = next(op for op in canvas.current_page.ops if isinstance(op, LineOp))
        start = x + renderer.metrics.measure(label, font)
        assert underline.x1 == pytest.approx(start)
        assert underline.x2 == pytest.approx(start + renderer.metrics.measure(value, font))

    def test_identification_order(self, renderer, builder, sample_request):
        bundle = builder.build(sample_request)
        texts = [op.text for op in renderer.layout(bundle).text_ops()]

        assert texts.index(ENTITY_LABEL) < texts.index(DOCUMENT_NUMBER_LABEL) < texts.index("Quantity")
        assert bundle.document_number in texts
        assert bundle.total_cost_display in texts

    def test_drawn_text_has_glyphs(self, renderer, sample_request):
        bundle = renderer.builder.build(sample_request)
        canvas = renderer.layout(bundle)

        assert bundle.unit_cost_display.endswith("150.00")
        for op in canvas.text_ops():
            assert renderer.metrics.covers(op.text, op.font), op.text

    def test_currency_code_without_truetype_font(self, settings, clock, sample_request, monkeypatch, caplog):
        monkeypatch.setattr(slip_renderer, "registered_families", lambda: set())

        with caplog.at_level(logging.WARNING):
            renderer = SlipRenderer(settings, random_source=random.Random(1), clock=clock)

        assert renderer.settings.currency_symbol == "PHP "
        assert renderer.style.font_family == "Helvetica"
        assert renderer.builder.build(sample_request).total_cost_display == "PHP 450.00"
        assert "PHP" in caplog.text

    def test_truetype_family_preferred(self, settings, clock, sample_request):
        registered = registered_families()
        if not any(f in registered and f"{f}-Bold" in registered for f in FONT_VARIANTS):
            pytest.skip("no TrueType family installed")

        renderer = SlipRenderer(settings, random_source=random.Random(1), clock=clock)

        assert renderer.settings.currency_symbol == "₱"
        assert renderer.style.font_family in FONT_VARIANTS
        texts = [op.text for op in renderer.layout(renderer.builder.build(sample_request)).text_ops()]
        assert "₱450.00" in texts

    def test_drawable_symbol_kept(self, clock):
        settings = SlipSettings(currency_symbol="$")
        renderer = SlipRenderer(settings, random_source=random.Random(1), clock=clock)
        assert renderer.settings is settings

    def test_signature_table_below_item_table(self, renderer, builder, sample_request):
        canvas = renderer.layout(builder.build(sample_request))
        ops = canvas.text_ops()
        item_cell = next(op for op in ops if op.text == "ICT-2025-0042")
        received_by = next(op for op in ops if op.text == "Received by:")
        received_from = next(op for op in ops if op.text == "Received from:")

        assert received_by.y > item_cell.y
        assert received_from.y == pytest.approx(received_by.y)
        assert received_from.x > received_by.x

    def test_long_description_is_wrapped_not_truncated(self, renderer, builder, sample_request):
        words = [f"part{i}" for i in range(60)]
        request = replace(sample_request, line_item=replace(sample_request.line_item, description=" ".join(words)))
        texts = [op.text for op in renderer.layout(builder.build(request)).text_ops()]

        rendered = " ".join(text for text in texts if text.startswith("part")).split()
        assert rendered == words

    @pytest.mark.integration
    def test_long_description_paginates(self, renderer, sample_request):
        description = " ".join(f"component{i}" for i in range(1500))
        request = replace(sample_request, line_item=replace(sample_request.line_item, description=description))

        document = renderer.render(request)

        assert document.page_count >= 2
        assert document.data.startswith(b"%PDF")

    @pytest.mark.integration
    def test_deterministic_output(self, settings, clock, sample_request):
        first = SlipRenderer(settings, random_source=random.Random(5), clock=clock).render(sample_request)
        second = SlipRenderer(settings, random_source=random.Random(5), clock=clock).render(sample_request)

        assert first.filename == second.filename
        assert first.data == second.data

    def test_callback_target_skips_canvas(self, settings, clock, sample_request):
        sink = Mock(spec=PdfSink)
        callback = Mock()
        renderer = SlipRenderer(settings, sink=sink, random_source=random.Random(1), clock=clock)

        result = renderer.render(sample_request, CallbackSink(callback))

        assert isinstance(result, DocumentBundle)
        callback.assert_called_once_with(result)
        sink.serialize.assert_not_called()

    @pytest.mark.integration
    def test_file_target(self, renderer, sample_request, tmp_path):
        document = renderer.render(sample_request, FileSink(directory=tmp_path))
        assert (tmp_path / document.filename).read_bytes() == document.data

    def test_font_resolution_error_propagates(self, clock, sample_request):
        settings = replace(SlipSettings(), style=replace(SlipSettings().style, font_family="NoSuchFamily"))
        renderer = SlipRenderer(settings, random_source=random.Random(1), clock=clock)

        with pytest.raises(FontResolutionError):
            renderer.render(sample_request)

    def test_sink_failure_wrapped(self, settings, clock, sample_request):
        sink = Mock(spec=PdfSink)
        sink.serialize.side_effect = ValueError("disk on fire")
        renderer = SlipRenderer(settings, sink=sink, random_source=random.Random(1), clock=clock)

        with pytest.raises(RenderingError) as exc_info:
            renderer.render(sample_request)

        assert "disk on fire" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.integration
    def test_logo_drawn(self, clock, sample_request, png_logo, builder):
        settings = SlipSettings(logo=png_logo)
        renderer = SlipRenderer(settings, random_source=random.Random(1), clock=clock)

        canvas = renderer.layout(builder.build(sample_request))
        images = [op for op in canvas.pages[0].ops if isinstance(op, ImageOp)]

        assert len(images) == 1
        assert images[0].x == pytest.approx(settings.margins.left)
        assert images[0].y == pytest.approx(settings.margins.top)
        assert renderer.render(sample_request).data.startswith(b"%PDF")

    def test_unreadable_logo_skipped(self, clock, sample_request, builder, caplog):
        settings = SlipSettings(logo=b"definitely not an image")
        renderer = SlipRenderer(settings, random_source=random.Random(1), clock=clock)

        with caplog.at_level(logging.WARNING):
            canvas = renderer.layout(builder.build(sample_request))

        assert not [op for op in canvas.pages[0].ops if isinstance(op, ImageOp)]
        assert "logo" in caplog.text

    @pytest.mark.integration
    def test_renders_do_not_share_state(self, renderer, sample_request):
        first = renderer.render(sample_request)
        second = renderer.render(sample_request)
        assert first.page_count == second.page_count == 1
