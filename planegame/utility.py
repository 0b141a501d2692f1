"""Geometry helpers, key names and small numeric utilities."""

from __future__ import annotations

import math
import random
import time
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

from .identifiers import Key

_PI = 3.141592653589793

_RANDOM = random.Random(int(time.time()))


@dataclass(frozen=True)
class Vector:
    """A two-dimensional vector of floats."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Vector":
        return Vector(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Vector":
        return Vector(self.x / divisor, self.y / divisor)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


PointLike = Union[Vector, Tuple[float, float]]


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def _extent(self) -> Tuple[float, float, float, float]:
        right = self.left + self.width
        bottom = self.top + self.height
        return (
            min(self.left, right),
            min(self.top, bottom),
            max(self.left, right),
            max(self.top, bottom),
        )

    def contains(self, point: PointLike) -> bool:
        """Return True if the point lies inside; the far edges are excluded."""
        x, y = point
        min_x, min_y, max_x, max_y = self._extent()
        return min_x <= x < max_x and min_y <= y < max_y

    def intersects(self, other: "Rect") -> bool:
        """Return True if the two rectangles overlap with a non-empty area."""
        a_left, a_top, a_right, a_bottom = self._extent()
        b_left, b_top, b_right, b_bottom = other._extent()
        inter_left = max(a_left, b_left)
        inter_top = max(a_top, b_top)
        inter_right = min(a_right, b_right)
        inter_bottom = min(a_bottom, b_bottom)
        return inter_left < inter_right and inter_top < inter_bottom


@dataclass(frozen=True)
class Transform:
    """A 2D affine transform: the matrix [[a, b, c], [d, e, f], [0, 0, 1]]."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0
    e: float = 1.0
    f: float = 0.0

    def combine(self, other: "Transform") -> "Transform":
        """Return self * other: other is applied first, then self."""
        return Transform(
            self.a * other.a + self.b * other.d,
            self.a * other.b + self.b * other.e,
            self.a * other.c + self.b * other.f + self.c,
            self.d * other.a + self.e * other.d,
            self.d * other.b + self.e * other.e,
            self.d * other.c + self.e * other.f + self.f,
        )

    def translated(self, offset: PointLike) -> "Transform":
        ox, oy = offset
        return self.combine(Transform(1.0, 0.0, ox, 0.0, 1.0, oy))

    def rotated(self, degrees: float) -> "Transform":
        radians = to_radian(degrees)
        cos, sin = math.cos(radians), math.sin(radians)
        return self.combine(Transform(cos, -sin, 0.0, sin, cos, 0.0))

    def apply(self, point: PointLike) -> Vector:
        x, y = point
        return Vector(self.a * x + self.b * y + self.c, self.d * x + self.e * y + self.f)

    def transform_rect(self, rect: Rect) -> Rect:
        """Return the axis-aligned bounding box of the transformed rectangle."""
        corners = [
            self.apply((rect.left, rect.top)),
            self.apply((rect.left, rect.top + rect.height)),
            self.apply((rect.left + rect.width, rect.top)),
            self.apply((rect.left + rect.width, rect.top + rect.height)),
        ]
        xs = [corner.x for corner in corners]
        ys = [corner.y for corner in corners]
        left, top = min(xs), min(ys)
        return Rect(left, top, max(xs) - left, max(ys) - top)


def key_name(key: object) -> str:
    """Return the display name of a key, or an empty string for unknown values."""
    return key.name if isinstance(key, Key) else ""


def center_origin(bounds: Rect) -> Vector:
    """Return the origin that centres an object with the given local bounds."""
    return Vector(
        math.floor(bounds.left + bounds.width / 2.0),
        math.floor(bounds.top + bounds.height / 2.0),
    )


def to_degree(radian: float) -> float:
    return 180.0 / _PI * radian


def to_radian(degree: float) -> float:
    return _PI / 180.0 * degree


def random_int(exclusive_max: int) -> int:
    """Return a random integer in [0, exclusive_max)."""
    if exclusive_max < 1:
        raise ValueError("exclusive_max must be at least 1")
    return _RANDOM.randrange(exclusive_max)


def length(vector: PointLike) -> float:
    x, y = vector
    return math.sqrt(x * x + y * y)


def unit_vector(vector: PointLike) -> Vector:
    """Return the vector scaled to length one."""
    x, y = vector
    vector_length = length(vector)
    if vector_length == 0.0:
        raise ValueError("Zero-length vector cannot be normalized")
    return Vector(x / vector_length, y / vector_length)