"""Geometry primitives — points, sizes, rectangles and small vector helpers.

All values live in one continuous 2-D coordinate space (floats). The
presentation layer maps this unit onto device pixels.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A 2D point."""

    x: float
    y: float


@dataclass(frozen=True)
class Size:
    """A width/height pair."""

    width: float
    height: float


@dataclass(frozen=True)
class Rectangle:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2

    @property
    def center(self) -> Point:
        return Point(self.mid_x, self.mid_y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    def contains(self, point: Point) -> bool:
        """Return whether `point` lies inside or on the border."""
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom

    def intersects(self, other: Rectangle) -> bool:
        """Return whether the interiors overlap. Shared edges do not count."""
        return self.x < other.right and other.x < self.right and self.y < other.bottom and other.y < self.bottom


# ─── Vector Helpers ───────────────────────────────────────────────────────────


def vector_length(dx: float, dy: float) -> float:
    return math.hypot(dx, dy)


def unit_vector(dx: float, dy: float) -> tuple[float, float] | None:
    """Normalise (dx, dy). Returns None for the zero vector."""
    length = vector_length(dx, dy)
    if length == 0:
        return None
    return dx / length, dy / length


def perpendicular(ux: float, uy: float) -> tuple[float, float]:
    """Rotate a vector by 90 degrees: (x, y) → (-y, x)."""
    return -uy, ux
