"""Planar geometry helpers: obstacles, circle intersection and angle utilities."""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import pairwise
from typing import Iterable, Sequence

_INTERSECTION_EPS = 1e-8


@dataclass(frozen=True)
class CircleObstacle:
    """A circular obstacle in the arm's workspace."""

    x: float
    y: float
    r: float

    def contains(self, px: float, py: float) -> bool:
        """Return True if the point lies strictly inside the circle."""
        return (px - self.x) ** 2 + (py - self.y) ** 2 < self.r * self.r


@dataclass(frozen=True)
class Point:
    """A point in the plane."""

    x: float
    y: float


@dataclass(frozen=True)
class Circle:
    """A circle given by its centre and radius."""

    x: float
    y: float
    r: float


def normalize_angle(angle: float) -> float:
    """Wrap an angle into the range [-pi, pi]."""
    while angle > math.pi:
        angle -= 2 * math.pi
    while angle < -math.pi:
        angle += 2 * math.pi
    return angle


def compute_circle_intersection(c1: Circle, c2: Circle) -> tuple[Point, Point]:
    """Return the two intersection points of two circles.

    Tangent circles yield the same point twice. Raises ValueError when the
    circles are concentric or do not intersect.
    """
    dx = c2.x - c1.x
    dy = c2.y - c1.y
    d = math.hypot(dx, dy)
    if d < _INTERSECTION_EPS:
        raise ValueError("Circles are concentric, infinite solutions")

    r1_sq = c1.r * c1.r
    r2_sq = c2.r * c2.r
    h = (r1_sq + d * d - r2_sq) / (2 * d)
    k_sq = r1_sq - h * h
    if k_sq < -_INTERSECTION_EPS:
        raise ValueError("Circles do not intersect")
    k = math.sqrt(max(k_sq, 0.0))

    base_x = c1.x + h * dx / d
    base_y = c1.y + h * dy / d
    offset_x = k * -dy / d
    offset_y = k * dx / d
    return (
        Point(base_x + offset_x, base_y + offset_y),
        Point(base_x - offset_x, base_y - offset_y),
    )


def total_q_distance(trajectory: Iterable[Sequence[float]]) -> float:
    """Length of a joint-space trajectory as the sum of Euclidean steps."""
    return sum(
        (math.dist(a[:3], b[:3]) for a, b in pairwise(trajectory)),
        0.0,
    )