"""
High-level API for generating Inventory Custodian Slips.

Example:
    from custodyslip import build_request, generate_custody_slip, FileSink

    request = build_request(
        item={"item_code": "ICT-0042", "name": "Laptop", "quantity": 1, "unit_price": 45000},
        personnel={"full_name": "Maria Santos", "position": "Teacher III"},
        school={"name": "San Pedro Elementary School"},
        form={"fund_cluster": "MOOE", "estimated_useful_life": "5 YEARS"},
    )
    validate_request(request)
    generate_custody_slip(request, target=FileSink(directory="out"))
"""

from __future__ import annotations

import datetime as dt
import random
from dataclasses import replace
from typing import Any, Callable, List, Mapping, Optional, Union

from .config import RenderStyle, SlipSettings
from .exceptions import ValidationError
from .export.targets import RenderTarget
from .models.bundle import DocumentBundle, RenderedDocument
from .models.request import DocumentRequest, LineItem, Signatory
from .renderers.slip_renderer import SlipRenderer

DEFAULT_ISSUER_POSITION = "Property Custodian"


def _first(record: Optional[Mapping[str, Any]], *keys: str) -> Any:
    if not record:
        return None
    for key in keys:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return None


def _person_name(record: Optional[Mapping[str, Any]]) -> str:
    if not record:
        return ""
    full_name = _first(record, "full_name", "fullName", "name")
    if full_name:
        return str(full_name)
    parts = [_first(record, "first_name", "firstName"), _first(record, "last_name", "lastName")]
    return " ".join(str(part) for part in parts if part)


def build_request(
    item: Mapping[str, Any],
    personnel: Optional[Mapping[str, Any]] = None,
    school: Optional[Mapping[str, Any]] = None,
    form: Optional[Mapping[str, Any]] = None,
    issuer: Optional[Mapping[str, Any]] = None,
) -> DocumentRequest:
    """Assemble a ``DocumentRequest`` from the records held by the calling layer.

    Args:
        item: Inventory record (``id``, ``item_code``, ``name``, ``description``,
            ``quantity``, ``unit_of_measure``, ``unit_price``)
        personnel: Assigned person (``full_name`` or first/last name, ``position``)
        school: Organization record (``name``)
        form: User-entered custody metadata (``fund_cluster``, ``ics_number``,
            ``estimated_useful_life``, ``received_by_*``, ``received_from_*``, ``date``)
        issuer: Logged-in user issuing the item, used when the form leaves the
            "received from" fields empty

    Returns:
        DocumentRequest ready for the renderer
    """
    form = form or {}

    line_item = LineItem(
        quantity=_first(item, "quantity"),
        unit=_first(item, "unit_of_measure", "unitOfMeasure", "unit") or "",
        unit_cost=_first(item, "unit_price", "unitPrice", "unit_cost"),
        total_cost=_first(item, "total_cost", "totalCost"),
        description=_first(item, "description") or "",
        name=_first(item, "name") or "",
        code=_first(item, "item_code", "itemCode", "code") or "",
        useful_life=_first(form, "estimated_useful_life", "useful_life", "usefulLife") or "",
        item_id=_first(item, "id"),
    )

    recipient = Signatory(
        name=_first(form, "received_by_name") or _person_name(personnel),
        position=_first(form, "received_by_position") or _first(personnel, "position") or "",
    )
    issuer_signatory = Signatory(
        name=_first(form, "received_from_name") or _person_name(issuer),
        position=(
            _first(form, "received_from_position")
            or _first(issuer, "position")
            or DEFAULT_ISSUER_POSITION
        ),
    )

    return DocumentRequest(
        entity_name=_first(school, "name") or "",
        fund_cluster=_first(form, "fund_cluster", "fundCluster") or "",
        document_number=_first(form, "ics_number", "document_number", "documentNumber") or "",
        line_item=line_item,
        recipient=recipient,
        issuer=issuer_signatory,
        transfer_date=_first(form, "date", "transfer_date"),
    )


def validate_request(request: DocumentRequest) -> None:
    """Business-rule check performed by the caller before rendering.

    Raises:
        ValidationError: If fund cluster or estimated useful life is missing
    """
    missing: List[str] = []
    if not (request.fund_cluster or "").strip():
        missing.append("fund_cluster")
    if not (request.line_item.useful_life or "").strip():
        missing.append("estimated_useful_life")
    if missing:
        raise ValidationError(missing)


def generate_custody_slip(
    request: DocumentRequest,
    target: Optional[RenderTarget] = None,
    settings: Optional[SlipSettings] = None,
    style: Optional[RenderStyle] = None,
    random_source: Optional[random.Random] = None,
    clock: Optional[Callable[[], dt.datetime]] = None,
) -> Union[RenderedDocument, DocumentBundle]:
    """Render a single slip with a throwaway renderer.

    ``style`` replaces the style carried by ``settings``.

    Returns:
        RenderedDocument, or the DocumentBundle when ``target`` is a CallbackSink
    """
    if style is not None:
        settings = replace(settings or SlipSettings(), style=style)
    renderer = SlipRenderer(settings, random_source=random_source, clock=clock)
    return renderer.render(request, target)
