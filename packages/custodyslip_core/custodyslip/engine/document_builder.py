"""Document model builder - normalizes a request into a ``DocumentBundle``.

The builder is the single place where money, dates and the document number
are turned into printable strings.
"""

from __future__ import annotations

import datetime as dt
import logging
import random
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

from ..config import SlipSettings
from ..exceptions import DataCoercionError, InvalidLineItemError
from ..models.bundle import DocumentBundle
from ..models.request import DocumentRequest, Signatory
from ..utils.formatting import format_currency, format_long_date, quantize_money

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
DEFAULT_UNIT = "pcs"
SIGNATURE_CAPTION = "Signature over Printed Name"
SIGNATURE_RULE = "_" * 17


def _text(value: Any, default: str = NOT_AVAILABLE) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class DocumentModelBuilder:
    """Builds the normalized record for one render.

    Args:
        settings: Slip settings (prefix, currency symbol, locale)
        random_source: Source for the random part of generated document
            numbers; pass a seeded ``random.Random`` for reproducible output
        clock: Returns the render timestamp
    """

    def __init__(
        self,
        settings: Optional[SlipSettings] = None,
        random_source: Optional[random.Random] = None,
        clock: Optional[Callable[[], dt.datetime]] = None,
    ) -> None:
        self.settings = settings or SlipSettings()
        self.random_source = random_source or random.Random()
        self.clock = clock or dt.datetime.now

    def build(self, request: DocumentRequest) -> DocumentBundle:
        """

        Normalizes the request.

        Args:
        request: Raw request assembled by the calling layer

        Returns:
        DocumentBundle with derived and formatted fields

        Raises:
        InvalidLineItemError: If quantity, unit cost or total cost is not a non-negative number
        DataCoercionError: If the transfer date cannot be parsed

        """
        now = self.clock()
        item = request.line_item

        quantity = self._coerce_quantity(item.quantity)
        unit_cost = self._coerce_money("unit_cost", item.unit_cost, default=Decimal("0"))
        if _is_blank(item.total_cost):
            try:
                total_cost = quantize_money(unit_cost * quantity)
            except InvalidOperation:
                raise InvalidLineItemError(
                    "total_cost", f"{quantity} x {unit_cost}", "amount too large"
                ) from None
        else:
            total_cost = self._coerce_money("total_cost", item.total_cost)

        transfer_date = self._coerce_date(request.transfer_date, now.date())
        date_display = format_long_date(transfer_date, self.settings.locale)

        document_number = _text(request.document_number, "")
        generated = not document_number
        if generated:
            document_number = self.generate_document_number(now)
            logger.debug("Generated document number %s", document_number)

        recipient = Signatory(_text(request.recipient.name), _text(request.recipient.position))
        issuer = Signatory(_text(request.issuer.name), _text(request.issuer.position))

        description = _text(item.description, "") or _text(item.name)

        return DocumentBundle(
            entity_name=_text(request.entity_name),
            fund_cluster=_text(request.fund_cluster),
            document_number=document_number,
            document_number_generated=generated,
            quantity=quantity,
            unit=_text(item.unit, DEFAULT_UNIT),
            unit_cost=unit_cost,
            total_cost=total_cost,
            unit_cost_display=self.format_money(unit_cost),
            total_cost_display=self.format_money(total_cost),
            description=description,
            item_code=_text(item.code),
            useful_life=_text(item.useful_life),
            recipient=recipient,
            issuer=issuer,
            transfer_date=transfer_date,
            transfer_date_display=date_display,
            recipient_block=signature_block("Received by:", recipient, SIGNATURE_RULE),
            issuer_block=signature_block("Received from:", issuer, f"Date: {date_display}"),
            generated_at=now,
            item_id=item.item_id,
        )

    def generate_document_number(self, timestamp: dt.datetime) -> str:
        """``PREFIX-YYYY-MM-RRR`` with a random 3-digit suffix.

        The suffix is not checked against previously issued numbers.
        """
        suffix = self.random_source.randint(0, 999)
        return f"{self.settings.document_number_prefix}-{timestamp.year:04d}-{timestamp.month:02d}-{suffix:03d}"

    def format_money(self, value: Decimal) -> str:
        return format_currency(value, self.settings.currency_symbol, self.settings.locale)

    # ------------------------------------------------------------------
    # Coercion
    # ------------------------------------------------------------------
    @staticmethod
    def _coerce_quantity(value: Any) -> int:
        if _is_blank(value):
            return 1
        if isinstance(value, bool):
            raise InvalidLineItemError("quantity", value, "expected a whole number")
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidLineItemError("quantity", value, "not a number") from None
        if not number.is_finite() or number < 0:
            raise InvalidLineItemError("quantity", value, "must be a non-negative number")
        if number != number.to_integral_value():
            raise InvalidLineItemError("quantity", value, "expected a whole number")
        return int(number) or 1

    @staticmethod
    def _coerce_money(field: str, value: Any, default: Optional[Decimal] = None) -> Decimal:
        if _is_blank(value) and default is not None:
            return default
        if isinstance(value, bool):
            raise InvalidLineItemError(field, value, "not a number")
        try:
            number = Decimal(str(value).strip().replace(",", ""))
        except InvalidOperation:
            raise InvalidLineItemError(field, value, "not a number") from None
        if not number.is_finite() or number < 0:
            raise InvalidLineItemError(field, value, "must be a non-negative number")
        try:
            return quantize_money(number)
        except InvalidOperation:
            raise InvalidLineItemError(field, value, "amount too large") from None

    @staticmethod
    def _coerce_date(value: Any, default: dt.date) -> dt.date:
        if _is_blank(value):
            return default
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, dt.date):
            return value
        try:
            return dt.date.fromisoformat(str(value).strip()[:10])
        except ValueError as exc:
            raise DataCoercionError("transfer_date", value, str(exc)) from exc


def signature_block(role_label: str, signatory: Signatory, closing: str) -> str:
    """Multi-line text for one signature cell."""
    return "\n".join(
        [
            role_label,
            "",
            signatory.name,
            "",
            SIGNATURE_CAPTION,
            "",
            f"({signatory.position})",
            "",
            closing,
        ]
    )
