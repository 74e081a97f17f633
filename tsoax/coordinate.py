"""Immutable three-component vector used for spatial binning."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Union


@dataclass(frozen=True)
class Coordinate:
    """A point or vector in three-dimensional space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def magnitude(self) -> float:
        """Return the Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def unit(self) -> Coordinate:
        """Return the vector scaled to unit length.

        Raises ZeroDivisionError for the zero vector.
        """
        inv = 1.0 / self.magnitude()
        return Coordinate(self.x * inv, self.y * inv, self.z * inv)

    def cross(self, other: Coordinate) -> Coordinate:
        """Return the cross product ``self x other``."""
        return Coordinate(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def dot(self, other: Coordinate) -> float:
        """Return the scalar product with ``other``."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def __add__(self, other: Coordinate) -> Coordinate:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return Coordinate(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Coordinate) -> Coordinate:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return Coordinate(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Coordinate:
        return Coordinate(-self.x, -self.y, -self.z)

    def __mul__(self, other: Union[Coordinate, float]) -> Union[Coordinate, float]:
        """Dot product with a Coordinate, or scaling by a number."""
        if isinstance(other, Coordinate):
            return self.dot(other)
        if isinstance(other, Real):
            return Coordinate(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: float) -> Coordinate:
        if isinstance(other, Real):
            return Coordinate(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __truediv__(self, other: float) -> Coordinate:
        if isinstance(other, Real):
            return Coordinate(self.x / other, self.y / other, self.z / other)
        return NotImplemented