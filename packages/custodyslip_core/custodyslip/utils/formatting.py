"""
Money and date presentation.

All monetary values printed on a slip go through ``format_currency`` and all
dates through ``format_long_date`` so the header, table and signature block
never disagree.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

CENTS = Decimal("0.01")

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(slots=True, frozen=True)
class LocaleFormat:
    group_separator: str
    decimal_separator: str
    day_first: bool = False


LOCALES: Dict[str, LocaleFormat] = {
    "en_PH": LocaleFormat(",", "."),
    "en_US": LocaleFormat(",", "."),
    "en_GB": LocaleFormat(",", ".", day_first=True),
}


def get_locale_format(locale: str) -> LocaleFormat:
    key = (locale or "").replace("-", "_")
    try:
        return LOCALES[key]
    except KeyError:
        raise ValueError(f"Unsupported locale: {locale!r} (known: {', '.join(sorted(LOCALES))})") from None


def quantize_money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(value: Decimal | float | int | str, symbol: str = "₱", locale: str = "en_PH") -> str:
    """Format ``value`` with exactly two fraction digits and a currency prefix.

    >>> format_currency(Decimal("1234.5"))
    '₱1,234.50'
    """
    fmt = get_locale_format(locale)
    amount = quantize_money(Decimal(str(value)))
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):,.2f}"
    if fmt.group_separator != "," or fmt.decimal_separator != ".":
        text = text.replace(",", "\0").replace(".", fmt.decimal_separator).replace("\0", fmt.group_separator)
    return f"{sign}{symbol}{text}"


def format_long_date(value: dt.date, locale: str = "en_PH") -> str:
    fmt = get_locale_format(locale)
    month = MONTH_NAMES[value.month - 1]
    if fmt.day_first:
        return f"{value.day} {month} {value.year}"
    return f"{month} {value.day}, {value.year}"
