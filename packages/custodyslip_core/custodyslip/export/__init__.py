"""Output sink and render targets."""

from .pdf_sink import PdfMetadata, PdfSink, suggest_filename
from .targets import CallbackSink, FileSink, RenderTarget

__all__ = [
    "PdfMetadata",
    "PdfSink",
    "suggest_filename",
    "CallbackSink",
    "FileSink",
    "RenderTarget",
]
