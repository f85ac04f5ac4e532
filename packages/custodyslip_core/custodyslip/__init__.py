"""
custodyslip - print-ready Inventory Custodian Slip generation.

Assembles an inventory item, its custodian, the issuing school and the
custody metadata into a fixed-format, paginated PDF using ReportLab.

Quick Start:
    from custodyslip import DocumentRequest, LineItem, SlipRenderer

    request = DocumentRequest(
        entity_name="San Pedro Elementary School",
        fund_cluster="MOOE",
        line_item=LineItem(quantity=3, unit_cost="150.00", code="ICT-0042",
                           description="Wireless mouse", useful_life="3 YEARS"),
    )
    document = SlipRenderer().render(request)
    document.save("out")
"""

from .version import __version__, __version_info__

from .exceptions import (
    CustodySlipError,
    DataCoercionError,
    FontResolutionError,
    InvalidLineItemError,
    LayoutError,
    RenderingError,
    ValidationError,
)
from .config import RenderStyle, SlipSettings, load_settings
from .models import DocumentBundle, DocumentRequest, LineItem, RenderedDocument, Signatory
from .engine.document_builder import DocumentModelBuilder
from .engine import ColumnSpec, FontSpec, PageCanvas, TableLayoutEngine, TextMetricsEngine
from .export import CallbackSink, FileSink, PdfSink, suggest_filename
from .renderers import SlipRenderer
from .api import build_request, generate_custody_slip, validate_request

__all__ = [
    "__version__",
    "__version_info__",
    # API
    "build_request",
    "validate_request",
    "generate_custody_slip",
    "SlipRenderer",
    "DocumentModelBuilder",
    # Models
    "DocumentRequest",
    "LineItem",
    "Signatory",
    "DocumentBundle",
    "RenderedDocument",
    # Configuration
    "SlipSettings",
    "RenderStyle",
    "load_settings",
    # Engine
    "ColumnSpec",
    "FontSpec",
    "PageCanvas",
    "TableLayoutEngine",
    "TextMetricsEngine",
    # Output
    "CallbackSink",
    "FileSink",
    "PdfSink",
    "suggest_filename",
    # Exceptions
    "CustodySlipError",
    "DataCoercionError",
    "FontResolutionError",
    "InvalidLineItemError",
    "LayoutError",
    "RenderingError",
    "ValidationError",
]
