"""Data models exchanged between the calling layer and the engine."""

from .request import DocumentRequest, LineItem, Signatory
from .bundle import DocumentBundle, RenderedDocument

__all__ = [
    "DocumentRequest",
    "LineItem",
    "Signatory",
    "DocumentBundle",
    "RenderedDocument",
]
