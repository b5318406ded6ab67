"""Kinematics, collision checking and Newton tracking for a planar 3-link arm."""

from __future__ import annotations

import math
from typing import Iterable, Iterator, Sequence

import numpy as np

from armplanner.geometry import CircleObstacle

TOLERANCE = 1e-2
MAX_ITER = 1000
COLLISION_EPSILON = 10.0
COLLISION_K = 1.0

# Positions of the collision circles along each link, as fractions of its length.
LINK_CIRCLE_FRACTIONS = (1.0 / 6.0, 1.0 / 2.0, 5.0 / 6.0)


class Planner:
    """A planar three-link arm asked to trace a circle in its workspace."""

    def __init__(
        self,
        l1: float,
        l2: float,
        l3: float,
        circle_x: float,
        circle_y: float,
        circle_r: float,
        obstacles: Iterable[CircleObstacle] = (),
        q1: float = 0.0,
        q2: float = 0.0,
        q3: float = 0.0,
        avoid_obstacles: bool = False,
    ) -> None:
        self.l1 = float(l1)
        self.l2 = float(l2)
        self.l3 = float(l3)
        self.circle_x = float(circle_x)
        self.circle_y = float(circle_y)
        self.circle_r = float(circle_r)
        self.obstacles = list(obstacles)
        self.q = np.array([q1, q2, q3], dtype=float)
        self.avoid_obstacles = avoid_obstacles

    @property
    def reach(self) -> float:
        """Total length of the fully stretched arm."""
        return self.l1 + self.l2 + self.l3

    def points_sampler(self, step: float) -> list[tuple[float, float]]:
        """Sample the reachable part of the target circle every `step` radians."""
        if step <= 0:
            raise ValueError("step must be positive")
        reach = self.reach
        r = math.hypot(self.circle_x, self.circle_y)
        if self.l1 - self.l2 - self.l3 < 0 and r > self.circle_r + reach:
            return []

        alpha = math.atan2(self.circle_y, self.circle_x)
        points: list[tuple[float, float]] = []
        if r + self.circle_r > reach:
            if r == 0:
                return []
            cos_beta = -(r * r + self.circle_r ** 2 - reach * reach) / (
                2 * r * self.circle_r
            )
            if not -1.0 <= cos_beta <= 1.0:
                return []
            beta = math.acos(cos_beta)
            theta = alpha + beta
            end = alpha + beta + (2 * math.pi - 2 * beta)
            while theta <= end:
                points.append(self._circle_point(theta))
                theta += step
        else:
            theta = alpha
            end = alpha + 2 * math.pi
            while theta < end:
                points.append(self._circle_point(theta))
                theta += step
        return points

    def _circle_point(self, theta: float) -> tuple[float, float]:
        return (
            self.circle_x + self.circle_r * math.cos(theta),
            self.circle_y + self.circle_r * math.sin(theta),
        )

    def kinematics(self, q: Sequence[float]) -> np.ndarray:
        """End-effector position for joint angles q."""
        q0, q1, q2 = (float(v) for v in q[:3])
        a1, a12, a123 = q0, q0 + q1, q0 + q1 + q2
        return np.array(
            [
                self.l1 * math.cos(a1) + self.l2 * math.cos(a12) + self.l3 * math.cos(a123),
                self.l1 * math.sin(a1) + self.l2 * math.sin(a12) + self.l3 * math.sin(a123),
            ]
        )

    def jacobian(self, q: Sequence[float]) -> np.ndarray:
        """The 2x3 Jacobian of the end-effector position."""
        q0, q1, q2 = (float(v) for v in q[:3])
        a1, a12, a123 = q0, q0 + q1, q0 + q1 + q2
        s3 = self.l3 * math.sin(a123)
        c3 = self.l3 * math.cos(a123)
        s2 = self.l2 * math.sin(a12) + s3
        c2 = self.l2 * math.cos(a12) + c3
        return np.array(
            [
                [-self.l1 * math.sin(a1) - s2, -s2, -s3],
                [self.l1 * math.cos(a1) + c2, c2, c3],
            ]
        )

    def inverse_kinematics(
        self, target: Sequence[float], q_initial: Sequence[float] | None = None
    ) -> np.ndarray:
        """Newton-Raphson solve for joint angles reaching `target`."""
        target = np.asarray(target, dtype=float)
        q_out = (
            np.zeros(3) if q_initial is None else np.array(q_initial[:3], dtype=float)
        )
        p = self.kinematics(q_out)
        p_error = target - p
        distance_error = math.sqrt(float(p_error @ p_error))
        if distance_error < 1e-10:
            return q_out
        iteration = 0
        while distance_error > TOLERANCE and iteration < MAX_ITER:
            jac = self.jacobian(q_out)
            p_error = target - p
            delta_q = np.linalg.lstsq(jac, p_error, rcond=None)[0]
            q_out = q_out + delta_q
            p = self.kinematics(q_out)
            distance_error = float(p_error @ p_error)
            iteration += 1
        return q_out

    def collision_circles(self, q: Sequence[float]) -> Iterator[tuple[float, float, float]]:
        """Yield (x, y, radius) of the nine circles covering the links."""
        x = y = angle = 0.0
        for length, dq in zip((self.l1, self.l2, self.l3), q[:3]):
            angle += float(dq)
            c, s = math.cos(angle), math.sin(angle)
            for fraction in LINK_CIRCLE_FRACTIONS:
                yield x + fraction * length * c, y + fraction * length * s, length / 6
            x += length * c
            y += length * s

    def check_collision(self, q: Sequence[float]) -> bool:
        """True if any link circle comes within the safety margin of an obstacle."""
        for cx, cy, radius in self.collision_circles(q):
            for obs in self.obstacles:
                min_dist = radius + obs.r + COLLISION_EPSILON
                if (cx - obs.x) ** 2 + (cy - obs.y) ** 2 < min_dist * min_dist:
                    return True
        return False

    def plan_newton(
        self, points: Iterable[Sequence[float]]
    ) -> list[tuple[float, float, float]]:
        """Track the points one by one, seeding each solve with the last pose."""
        trajectory = []
        for point in points:
            self.q = self.inverse_kinematics(point[:2], self.q)
            trajectory.append(tuple(float(v) for v in self.q))
        return trajectory