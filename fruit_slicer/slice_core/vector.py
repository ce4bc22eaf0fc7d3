"""
Vector Physics
==============

2D vector and the point-mass body shared by every moving entity.
Integration is explicit Euler in frame units: velocity first, then position.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple
import math


@dataclass(frozen=True)
class Vec2:
    """Immutable 2D vector."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Vec2":
        return Vec2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Vec2":
        """Unit vector in the same direction, or zero for a zero vector."""
        n = self.length()
        if n == 0.0:
            return Vec2()
        return Vec2(self.x / n, self.y / n)

    def perpendicular(self) -> "Vec2":
        """Vector rotated by +90 degrees (screen coordinates, y down)."""
        return Vec2(-self.y, self.x)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass
class Body:
    """
    Point mass with rotation.

    One call to step() advances one frame:
    vy += gravity, position += velocity, rotation += rotation_speed.
    """
    position: Vec2
    velocity: Vec2 = field(default_factory=Vec2)
    gravity: float = 0.0
    rotation: float = 0.0
    rotation_speed: float = 0.0

    def step(self) -> None:
        self.velocity = Vec2(self.velocity.x, self.velocity.y + self.gravity)
        self.position = self.position + self.velocity
        self.rotation += self.rotation_speed

    def damp(self, factor: float) -> None:
        """Scale velocity by factor (air resistance, ground friction)."""
        self.velocity = self.velocity * factor

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y
