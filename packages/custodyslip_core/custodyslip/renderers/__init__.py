"""Document renderers."""

from .slip_renderer import SlipRenderer

__all__ = ["SlipRenderer"]
