"""Geometry primitives and helpers for layout calculations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from reportlab.lib.units import mm


@dataclass(slots=True, frozen=True)
class Size:
    width: float
    height: float

    @classmethod
    def from_tuple(cls, value: Iterable[float]) -> "Size":
        width, height = value
        return cls(float(width), float(height))


@dataclass(slots=True, frozen=True)
class Margins:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)

    @classmethod
    def from_mm(cls, top: float, bottom: float, left: float, right: float) -> "Margins":
        return cls(top=top * mm, bottom=bottom * mm, left=left * mm, right=right * mm)


def mm_to_points(value: float | None) -> float:
    if value is None:
        return 0.0
    return float(value) * mm
