"""Small vector types and the ray, hit and light records used by the ray tracer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterator, Union

Number = Union[int, float]


@dataclass(frozen=True, slots=True)
class Vec2:
    """A two-component vector, used for texture coordinates and screen positions."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __mul__(self, other: Vec2 | Number) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x * other.x, self.y * other.y)
        return Vec2(self.x * other, self.y * other)

    def __rmul__(self, other: Number) -> Vec2:
        return Vec2(self.x * other, self.y * other)

    def __truediv__(self, other: Number) -> Vec2:
        return Vec2(self.x / other, self.y / other)


@dataclass(frozen=True, slots=True)
class Vec3:
    """A three-component vector for positions, directions and RGB colours."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Vec3 | Number) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: Number) -> Vec3:
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __truediv__(self, other: Number) -> Vec3:
        return Vec3(self.x / other, self.y / other, self.z / other)

    def dot(self, other: Vec3) -> float:
        """Return the dot product with ``other``."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Return the cross product ``self x other``."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        """Return the Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vec3:
        """Return the unit vector in the same direction."""
        size = self.length()
        if size == 0.0:
            raise ValueError("cannot normalize a zero-length vector")
        return self / size


@dataclass(frozen=True, slots=True)
class Ray:
    """A half-line starting at ``start`` and heading along ``direction``."""

    start: Vec3
    direction: Vec3


@dataclass(slots=True)
class Hit:
    """Where a ray met a surface; a negative ``d`` means nothing was hit."""

    d: float = -1.0
    point: Vec3 = field(default_factory=Vec3)
    normal: Vec3 = field(default_factory=Vec3)
    uv: Vec2 = field(default_factory=Vec2)
    obj: Any = None

    @property
    def is_hit(self) -> bool:
        return self.d >= 0.0


@dataclass(frozen=True, slots=True)
class Light:
    """A point light that only has a position."""

    pos: Vec3