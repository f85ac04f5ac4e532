"""Input model for one slip render."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass(slots=True, frozen=True)
class LineItem:
    """The inventory item changing custody.

    Numeric fields may arrive as strings or numbers from the calling layer;
    the document builder coerces and validates them.
    """
    quantity: Any = None
    unit: str = ""
    unit_cost: Any = None
    total_cost: Any = None
    description: str = ""
    name: str = ""
    code: str = ""
    useful_life: str = ""
    item_id: Optional[Union[int, str]] = None


@dataclass(slots=True, frozen=True)
class Signatory:
    name: str = ""
    position: str = ""


@dataclass(slots=True, frozen=True)
class DocumentRequest:
    """Everything needed to render one Inventory Custodian Slip."""
    entity_name: str = ""
    fund_cluster: str = ""
    document_number: str = ""
    line_item: LineItem = field(default_factory=LineItem)
    recipient: Signatory = field(default_factory=Signatory)
    issuer: Signatory = field(default_factory=Signatory)
    transfer_date: Optional[Union[dt.date, str]] = None
