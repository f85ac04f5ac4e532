"""Render targets: emit a file or hand the normalized bundle to a callback."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from ..models.bundle import DocumentBundle, RenderedDocument

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class FileSink:
    """Emit the rendered PDF.

    ``directory`` writes ``<directory>/<filename>``; ``deliver`` hands the
    document to a platform save/download primitive. Both are optional and
    fire-and-forget: the renderer neither awaits nor retries them.
    """
    directory: Optional[Union[str, Path]] = None
    deliver: Optional[Callable[[RenderedDocument], object]] = None

    def emit(self, document: RenderedDocument) -> Optional[Path]:
        path = None
        if self.directory is not None:
            path = document.save(self.directory)
            logger.info("Wrote %s", path)
        if self.deliver is not None:
            self.deliver(document)
        return path


@dataclass(slots=True, frozen=True)
class CallbackSink:
    """Skip the canvas entirely and pass the normalized bundle to ``callback``."""
    callback: Callable[[DocumentBundle], object]

    def emit(self, bundle: DocumentBundle) -> None:
        self.callback(bundle)


RenderTarget = Union[FileSink, CallbackSink]
