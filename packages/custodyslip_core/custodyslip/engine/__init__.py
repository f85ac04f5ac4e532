"""
Layout engine: text measurement, page canvas and table layout.

The document model builder lives in ``engine.document_builder`` and is not
re-exported here because it depends on ``custodyslip.config``, which in turn
imports the primitives below.
"""

from .geometry import Margins, Size, mm_to_points
from .text_metrics import FontSpec, TextMetricsEngine
from .line_breaker import LineBreaker, LineBreakResult
from .page_canvas import PageCanvas, PageState
from .table_layout import (
    Align,
    ColumnSpec,
    TableLayoutEngine,
    TableState,
    TableStyle,
    VAlign,
    compute_column_widths,
)

__all__ = [
    "Margins",
    "Size",
    "mm_to_points",
    "FontSpec",
    "TextMetricsEngine",
    "LineBreaker",
    "LineBreakResult",
    "PageCanvas",
    "PageState",
    "Align",
    "ColumnSpec",
    "TableLayoutEngine",
    "TableState",
    "TableStyle",
    "VAlign",
    "compute_column_widths",
]
