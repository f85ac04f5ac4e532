"""Tests for the PDF output sink."""

import pytest

from custodyslip.engine.geometry import Margins, Size
from custodyslip.engine.page_canvas import PageCanvas
from custodyslip.engine.text_metrics import FontSpec
from custodyslip.exceptions import RenderingError
from custodyslip.export.pdf_sink import PdfMetadata, PdfSink, suggest_filename


@pytest.fixture
def canvas():
    canvas = PageCanvas(Size(300, 400), Margins.uniform(20))
    canvas.draw_text("Hello", 20, 40, FontSpec("Helvetica", 12))
    canvas.draw_line(20, 42, 60, 42, 1.0)
    canvas.draw_rect(20, 60, 100, 30, fill=(1, 1, 0), stroke=(0, 0, 0), weight=0.5)
    return canvas


class TestSuggestFilename:
    """Test suite for suggest_filename."""

    def test_document_number(self):
        assert suggest_filename("SPL-ICS-LV-2025-03-042", "ICT-1") == "ICS-SPL-ICS-LV-2025-03-042.pdf"

    def test_falls_back_to_item_code(self):
        assert suggest_filename("", "ICT-2025-0042") == "ICS-ICT-2025-0042.pdf"

    def test_falls_back_to_inventory(self):
        assert suggest_filename(None, "  ") == "ICS-INVENTORY.pdf"

    @pytest.mark.parametrize(
        "number, expected",
        [
            ("ICS/2025/01", "ICS-ICS_2025_01.pdf"),
            ('a:b*c?"d', "ICS-a_b_c_d.pdf"),
            ("two  words", "ICS-two_words.pdf"),
            ("///", "ICS-INVENTORY.pdf"),
        ],
    )
    def test_unsafe_characters(self, number, expected):
        assert suggest_filename(number, None) == expected

    def test_custom_prefix(self):
        assert suggest_filename("001", None, prefix="SLIP") == "SLIP-001.pdf"


class TestPdfSink:
    """Test suite for PdfSink."""

    def test_serialize(self, canvas):
        data = PdfSink().serialize(canvas)
        assert data.startswith(b"%PDF")
        assert data.rstrip().endswith(b"%%EOF")

    def test_metadata(self, canvas):
        data = PdfSink().serialize(canvas, PdfMetadata(title="Slip 42", author="Supply Office"))
        assert b"Slip 42" in data
        assert b"Supply Office" in data

    def test_identical_canvases_identical_bytes(self, canvas):
        assert PdfSink().serialize(canvas) == PdfSink().serialize(canvas)

    def test_one_pdf_page_per_canvas_page(self, canvas):
        canvas.new_page()
        canvas.draw_text("Second", 20, 40, FontSpec())
        data = PdfSink().serialize(canvas)
        assert b"/Count 2" in data

    def test_image(self, canvas, png_logo):
        canvas.draw_image(png_logo, 20, 100, 40, 40)
        assert PdfSink().serialize(canvas).startswith(b"%PDF")

    def test_unreadable_image(self, canvas):
        canvas.draw_image(b"broken", 20, 100, 40, 40)
        with pytest.raises(RenderingError):
            PdfSink().serialize(canvas)
