"""Custom exceptions for the custody slip engine."""

from typing import Optional, Sequence


class CustodySlipError(Exception):
    """Base exception for every failure raised by the engine."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class FontResolutionError(CustodySlipError):
    """Raised when the metrics backend cannot resolve a font."""

    def __init__(self, font_name: str, details: Optional[str] = None):
        super().__init__(f"Cannot resolve font '{font_name}'", details)
        self.font_name = font_name


class DataCoercionError(CustodySlipError):
    """Raised when an input value cannot be coerced to the expected type."""

    def __init__(self, field: str, value: object, details: Optional[str] = None):
        super().__init__(f"Invalid value for '{field}': {value!r}", details)
        self.field = field
        self.value = value


class InvalidLineItemError(DataCoercionError):
    """Raised when quantity or cost of the line item is not a non-negative number."""

    pass


class ValidationError(CustodySlipError):
    """Raised by caller-side validation when business-required fields are missing."""

    def __init__(self, fields: Sequence[str]):
        self.fields = tuple(fields)
        super().__init__("Missing required fields", ", ".join(self.fields))


class LayoutError(CustodySlipError):
    """Exception raised during layout calculation."""

    pass


class RenderingError(CustodySlipError):
    """Exception raised when drawing or serializing the document fails."""

    pass
