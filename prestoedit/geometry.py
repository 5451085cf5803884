"""Integer vectors, rectangles and relative measurements used for layout."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Vector:
    """A two-dimensional integer vector."""

    x: int
    y: int

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its origin and size."""

    x: int
    y: int
    w: int
    h: int


class MeasureKind(Enum):
    """How the value of a measurement is interpreted."""

    PERCENT = "percent"
    CHARS = "chars"
    NEG_CHARS = "neg_chars"
    PIXELS = "pixels"
    NEG_PIXELS = "neg_pixels"


@dataclass(frozen=True)
class Measurement:
    """A length expressed relative to an available maximum."""

    kind: MeasureKind
    value: float

    def get_value(self, maximum: int, char_size: int) -> int:
        """Resolve the measurement against ``maximum`` units of space."""
        if self.kind is MeasureKind.PERCENT:
            return max(0, int(maximum * self.value))
        if self.kind is MeasureKind.CHARS:
            return min(int(self.value) * char_size, maximum)
        if self.kind is MeasureKind.NEG_CHARS:
            return maximum - min(int(self.value) * char_size, maximum)
        if self.kind is MeasureKind.PIXELS:
            return min(int(self.value), maximum)
        return maximum - min(int(self.value), maximum)