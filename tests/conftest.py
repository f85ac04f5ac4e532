"""
Pytest configuration for custodyslip
"""

import datetime as dt
import io
import logging
import random
import sys

import pytest

from custodyslip.config import SlipSettings
from custodyslip.engine.document_builder import DocumentModelBuilder
from custodyslip.engine.text_metrics import FontSpec, TextMetricsEngine
from custodyslip.models import DocumentRequest, LineItem, Signatory


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def fixed_now():
    return dt.datetime(2025, 3, 15, 9, 30, 0)


@pytest.fixture
def clock(fixed_now):
    return lambda: fixed_now


@pytest.fixture
def settings():
    return SlipSettings()


@pytest.fixture
def metrics():
    return TextMetricsEngine()


@pytest.fixture
def body_font():
    return FontSpec("Helvetica", 9.0)


@pytest.fixture
def builder(settings, clock):
    return DocumentModelBuilder(settings, random_source=random.Random(1234), clock=clock)


@pytest.fixture
def sample_request():
    """A complete, realistic request."""
    return DocumentRequest(
        entity_name="San Pedro Elementary School",
        fund_cluster="MOOE 2025",
        document_number="",
        line_item=LineItem(
            quantity=3,
            unit="unit",
            unit_cost="150.00",
            description="Wireless optical mouse, USB receiver, black",
            name="Mouse",
            code="ICT-2025-0042",
            useful_life="3 YEARS",
            item_id=42,
        ),
        recipient=Signatory(name="Maria Santos", position="Teacher III"),
        issuer=Signatory(name="Jose Reyes", position="Property Custodian"),
        transfer_date=dt.date(2025, 3, 14),
    )


@pytest.fixture
def png_logo():
    """Small PNG image as bytes."""
    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), (14, 37, 75)).save(buffer, format="PNG")
    return buffer.getvalue()
