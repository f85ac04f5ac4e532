"""Formatting and logging helpers."""

from .formatting import format_currency, format_long_date, get_locale_format
from .logger import get_logger, setup_logging

__all__ = [
    "format_currency",
    "format_long_date",
    "get_locale_format",
    "get_logger",
    "setup_logging",
]
