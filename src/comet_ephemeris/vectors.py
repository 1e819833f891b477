"""Immutable 2-D and 3-D vectors for orbit-plane and heliocentric coordinates."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """Point or velocity in the orbital plane (x toward perihelion)."""

    x: float
    y: float

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def scaled(self, s: float) -> Vector2:
        """Return s * self."""
        return Vector2(s * self.x, s * self.y)

    def norm(self) -> float:
        """Euclidean length."""
        return math.hypot(self.x, self.y)


@dataclass(frozen=True)
class Vector3:
    """Cartesian 3-vector (AU for positions, AU/day for velocities)."""

    x: float
    y: float
    z: float

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scaled(self, s: float) -> Vector3:
        """Return s * self."""
        return Vector3(s * self.x, s * self.y, s * self.z)

    def dot(self, other: Vector3) -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


def linear_combination(a: float, v1: Vector3, b: float, v2: Vector3) -> Vector3:
    """Return a*v1 + b*v2."""
    return Vector3(
        a * v1.x + b * v2.x,
        a * v1.y + b * v2.y,
        a * v1.z + b * v2.z,
    )


def separation_distance(a: Vector3, b: Vector3) -> float:
    """Euclidean distance between two heliocentric positions (e.g. comet and observer)."""
    return (a - b).norm()
