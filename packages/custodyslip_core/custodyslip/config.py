"""
Configuration for slip generation.

``SlipSettings`` holds document-level choices (page, margins, identifiers,
locale) and ``RenderStyle`` every presentational parameter used by the
renderer, so draw calls never carry inline style literals.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.units import mm

from .engine.geometry import Margins, Size, mm_to_points
from .engine.table_layout import Align, ColumnSpec, TableStyle, VAlign
from .engine.text_metrics import FontSpec
from .utils.formatting import get_locale_format

PAGE_SIZES = {
    "A4": A4,
    "LETTER": LETTER,
}

RGB = Tuple[float, float, float]


@dataclass(slots=True, frozen=True)
class RenderStyle:
    """Fonts, weights, fills and spacing used by the slip renderer.

    Lengths are in points.
    """
    font_family: str = "Helvetica"
    title_size: float = 14.0
    body_size: float = 9.0
    leading: float = 1.15
    title_underline_offset: float = 1 * mm
    title_underline_weight: float = 0.5 * mm
    title_gap: float = 8 * mm
    field_underline_offset: float = 1 * mm
    field_underline_weight: float = 0.3 * mm
    field_spacing: float = 5 * mm
    identification_gap: float = 8 * mm
    table_line_width: float = 0.5 * mm
    table_padding: Tuple[float, float, float, float] = (1.76 * mm, 1.76 * mm, 1.76 * mm, 1.76 * mm)
    header_fill: RGB = (1.0, 1.0, 0.0)
    text_color: RGB = (0.0, 0.0, 0.0)
    line_color: RGB = (0.0, 0.0, 0.0)
    signature_gap: float = 5 * mm
    signature_padding: Tuple[float, float, float, float] = (8 * mm, 8 * mm, 8 * mm, 8 * mm)
    logo_size: float = 20 * mm
    logo_gap: float = 5 * mm
    repeat_header: bool = True

    @property
    def title_font(self) -> FontSpec:
        return FontSpec(self.font_family, self.title_size, bold=True)

    @property
    def body_font(self) -> FontSpec:
        return FontSpec(self.font_family, self.body_size)

    @property
    def header_font(self) -> FontSpec:
        return FontSpec(self.font_family, self.body_size, bold=True)

    def item_table_style(self) -> TableStyle:
        return TableStyle(
            body_font=self.body_font,
            header_font=self.header_font,
            padding=self.table_padding,
            header_fill=self.header_fill,
            text_color=self.text_color,
            line_color=self.line_color,
            line_width=self.table_line_width,
            header_valign=VAlign.MIDDLE,
            body_valign=VAlign.TOP,
            repeat_header=self.repeat_header,
        )

    def signature_table_style(self) -> TableStyle:
        return TableStyle(
            body_font=self.body_font,
            header_font=self.header_font,
            padding=self.signature_padding,
            header_fill=None,
            text_color=self.text_color,
            line_color=self.line_color,
            line_width=self.table_line_width,
            body_valign=VAlign.TOP,
            repeat_header=False,
        )


ITEM_TABLE_HEADER = (
    "Quantity",
    "Unit",
    "Unit Cost",
    "Total Cost",
    "DESCRIPTION",
    "Inventory Item No.",
    "Estimated Useful Life",
)

ITEM_TABLE_COLUMNS = (
    ColumnSpec(0.08, Align.CENTER),
    ColumnSpec(0.08, Align.CENTER),
    ColumnSpec(0.12, Align.CENTER),
    ColumnSpec(0.12, Align.CENTER),
    ColumnSpec(0.30, Align.LEFT),
    ColumnSpec(0.15, Align.CENTER),
    ColumnSpec(0.15, Align.CENTER),
)

SIGNATURE_COLUMNS = (
    ColumnSpec(0.5, Align.LEFT),
    ColumnSpec(0.5, Align.LEFT),
)


@dataclass(slots=True, frozen=True)
class SlipSettings:
    """Document-level settings for an Inventory Custodian Slip."""
    page_size: Size = Size(A4[0], A4[1])
    margins: Margins = Margins.from_mm(top=10, bottom=15, left=20, right=20)
    title: str = "INVENTORY AND CUSTODIAN SLIP"
    document_number_prefix: str = "SPL-ICS-LV"
    filename_prefix: str = "ICS"
    currency_symbol: str = "₱"
    locale: str = "en_PH"
    author: str = ""
    logo: Optional[Union[str, bytes]] = None
    style: RenderStyle = field(default_factory=RenderStyle)

    def __post_init__(self):
        get_locale_format(self.locale)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SlipSettings":
        """Overlay ``data`` on the defaults.

        ``page_size`` accepts a preset name (``"A4"``, ``"LETTER"``) or a
        ``[width, height]`` pair in points; ``margins_mm`` a mapping with
        ``top``/``bottom``/``left``/``right`` in millimetres; ``style`` a
        mapping of ``RenderStyle`` fields.

        Raises:
            ValueError: On unknown keys, page size presets or locales
        """
        values: Dict[str, Any] = dict(data)
        known = {f.name for f in fields(cls)} | {"margins_mm"}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")

        if "page_size" in values:
            values["page_size"] = _coerce_page_size(values["page_size"])
        if "margins_mm" in values:
            m = dict(values.pop("margins_mm"))
            base = cls().margins
            values["margins"] = Margins(
                top=mm_to_points(m.get("top", base.top / mm)),
                bottom=mm_to_points(m.get("bottom", base.bottom / mm)),
                left=mm_to_points(m.get("left", base.left / mm)),
                right=mm_to_points(m.get("right", base.right / mm)),
            )
        if isinstance(values.get("margins"), Mapping):
            values["margins"] = Margins(**values["margins"])
        if isinstance(values.get("style"), Mapping):
            style_values = dict(values["style"])
            style_known = {f.name for f in fields(RenderStyle)}
            bad = set(style_values) - style_known
            if bad:
                raise ValueError(f"Unknown style settings: {', '.join(sorted(bad))}")
            for key in ("table_padding", "signature_padding", "header_fill", "text_color", "line_color"):
                if key in style_values:
                    style_values[key] = tuple(float(v) for v in style_values[key])
            values["style"] = replace(RenderStyle(), **style_values)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if isinstance(self.logo, bytes):
            data["logo"] = f"<{len(self.logo)} bytes>"
        return data


def _coerce_page_size(value: Any) -> Size:
    if isinstance(value, Size):
        return value
    if isinstance(value, str):
        preset = PAGE_SIZES.get(value.upper())
        if preset is None:
            raise ValueError(f"Unsupported page size preset: {value}")
        return Size(float(preset[0]), float(preset[1]))
    values = list(value)
    if len(values) != 2:
        raise ValueError("Page size must contain exactly two values")
    return Size.from_tuple(values)


def load_settings(path: Union[str, Path]) -> SlipSettings:
    """Read settings from a JSON file (keys as accepted by ``from_mapping``)."""
    with open(path, "r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a JSON object: {path}")
    return SlipSettings.from_mapping(data)
