"""Font helpers used by the metrics backend."""

from .font_registry import register_default_fonts, registered_families
from .font_utils import resolve_font_variant

__all__ = ["register_default_fonts", "registered_families", "resolve_font_variant"]
