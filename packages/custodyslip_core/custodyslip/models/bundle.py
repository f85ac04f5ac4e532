"""Normalized document record and the rendered artifact."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .request import Signatory


@dataclass(slots=True, frozen=True)
class DocumentBundle:
    """Flat, fully formatted record consumed by the renderer.

    Display strings (``*_display``, signature blocks) are produced once by
    the builder and reused verbatim wherever the value is printed.
    """
    entity_name: str
    fund_cluster: str
    document_number: str
    document_number_generated: bool
    quantity: int
    unit: str
    unit_cost: Decimal
    total_cost: Decimal
    unit_cost_display: str
    total_cost_display: str
    description: str
    item_code: str
    useful_life: str
    recipient: Signatory
    issuer: Signatory
    transfer_date: dt.date
    transfer_date_display: str
    recipient_block: str
    issuer_block: str
    generated_at: dt.datetime
    item_id: Optional[Union[int, str]] = None

    def item_row(self) -> tuple:
        """Cells of the item table body row, in column order."""
        return (
            str(self.quantity),
            self.unit,
            self.unit_cost_display,
            self.total_cost_display,
            self.description,
            self.item_code,
            self.useful_life,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation (decimals as strings, dates ISO)."""
        return {
            "entity_name": self.entity_name,
            "fund_cluster": self.fund_cluster,
            "document_number": self.document_number,
            "document_number_generated": self.document_number_generated,
            "item": {
                "id": self.item_id,
                "code": self.item_code,
                "description": self.description,
                "quantity": self.quantity,
                "unit": self.unit,
                "unit_cost": str(self.unit_cost),
                "total_cost": str(self.total_cost),
                "useful_life": self.useful_life,
            },
            "recipient": {"name": self.recipient.name, "position": self.recipient.position},
            "issuer": {"name": self.issuer.name, "position": self.issuer.position},
            "transfer_date": self.transfer_date.isoformat(),
            "generated_at": self.generated_at.isoformat(),
        }


@dataclass(slots=True, frozen=True)
class RenderedDocument:
    """Serialized slip plus the suggested file name."""
    data: bytes
    filename: str
    page_count: int = 1

    def save(self, directory: Union[str, Path]) -> Path:
        target = Path(directory)
        target.mkdir(parents=True, exist_ok=True)
        path = target / self.filename
        path.write_bytes(self.data)
        return path
