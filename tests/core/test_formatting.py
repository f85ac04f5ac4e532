"""Tests for money and date formatting."""

import datetime as dt
from decimal import Decimal

import pytest

from custodyslip.utils.formatting import (
    format_currency,
    format_long_date,
    get_locale_format,
    quantize_money,
)


class TestFormatCurrency:
    """Test suite for format_currency."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1234.5, "₱1,234.50"),
            (1234, "₱1,234.00"),
            (Decimal("1234.567"), "₱1,234.57"),
            ("0", "₱0.00"),
            (Decimal("0.005"), "₱0.01"),
            (Decimal("1000000"), "₱1,000,000.00"),
        ],
    )
    def test_two_fraction_digits(self, value, expected):
        assert format_currency(value) == expected

    def test_custom_symbol(self):
        assert format_currency(Decimal("12.3"), symbol="PHP ") == "PHP 12.30"

    def test_negative(self):
        assert format_currency(Decimal("-5")) == "-₱5.00"

    def test_unknown_locale(self):
        with pytest.raises(ValueError):
            format_currency(1, locale="xx_XX")


class TestFormatLongDate:
    """Test suite for format_long_date."""

    def test_month_first(self):
        assert format_long_date(dt.date(2025, 3, 5)) == "March 5, 2025"

    def test_day_first(self):
        assert format_long_date(dt.date(2025, 12, 25), "en_GB") == "25 December 2025"

    def test_hyphenated_locale(self):
        assert get_locale_format("en-US") is get_locale_format("en_US")


def test_quantize_money_half_up():
    assert quantize_money(Decimal("2.675")) == Decimal("2.68")
    assert quantize_money(Decimal("2.665")) == Decimal("2.67")
