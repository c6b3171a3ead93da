"""Centralized math utilities for the simulation.

This module provides a small pure Python Vector2 used for particle
positions and velocities.
"""

from __future__ import annotations


class Vector2:
    """A 2D vector class for mathematical operations."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)

    def distance_squared_to(self, other: "Vector2") -> float:
        """Squared distance to another point (avoids the sqrt in range gates)."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def __eq__(self, other: object) -> bool:
        """Check if two vectors are equal."""
        if other.__class__ is not Vector2:
            return False
        return abs(self.x - other.x) < 1e-9 and abs(self.y - other.y) < 1e-9

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"

    def add_inplace(self, other: "Vector2") -> "Vector2":
        """Add another vector to this one in-place."""
        self.x += other.x
        self.y += other.y
        return self


def centroid(*points: Vector2) -> Vector2:
    """Average position of the given points."""
    n = len(points)
    return Vector2(sum(p.x for p in points) / n, sum(p.y for p in points) / n)
