"""Particles, 2D vectors and distance constraints for the cloth simulation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator

_MIN_INV_MASS = 0.0001


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        """Squared Euclidean length of the vector."""
        return self.x * self.x + self.y * self.y


@dataclass
class Particle:
    """A point mass integrated with position-based dynamics.

    An ``inv_mass`` of zero pins the particle in place.
    """

    position: Vec2
    inv_mass: float
    prev_position: Vec2 = field(init=False)
    velocity: Vec2 = field(init=False)

    def __post_init__(self) -> None:
        self.prev_position = self.position
        self.velocity = Vec2()

    @property
    def is_pinned(self) -> bool:
        return self.inv_mass < _MIN_INV_MASS

    def apply_gravity(self, gravity: Vec2, dt: float) -> None:
        """Accelerate the particle by ``gravity`` over ``dt`` unless pinned."""
        if self.is_pinned:
            return
        self.velocity = self.velocity + gravity * dt

    def apply_velocity(self, dt: float) -> None:
        """Move the particle along its velocity over ``dt`` unless pinned."""
        if self.is_pinned:
            return
        self.position = self.position + self.velocity * dt

    def set_velocity(self, dt: float) -> None:
        """Derive the velocity from the displacement since the last call."""
        self.velocity = (self.position - self.prev_position) / dt
        self.prev_position = self.position


@dataclass(frozen=True)
class Edge:
    """A distance constraint between the particles at indices ``p0`` and ``p1``."""

    p0: int
    p1: int
    distance: float