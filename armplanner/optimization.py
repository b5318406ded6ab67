"""Trajectory planning as a sequential equality-constrained quadratic program.

The joint poses q2..qN are the unknowns; q1 is fixed by solving the first
target with Newton's method.  Each iteration minimises the linearised
smoothness cost 1/2 dQ^T H dQ + g^T dQ subject to J dQ = -C, where C holds
the end-effector errors, by solving the KKT system

    [H  J^T] [  dQ  ]   [-g]
    [J   0 ] [lambda] = [-C]

and then taking a backtracking step along dQ.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np
from scipy import sparse
from scipy.sparse.linalg import splu

from armplanner.planner import (
    COLLISION_EPSILON,
    COLLISION_K,
    LINK_CIRCLE_FRACTIONS,
    MAX_ITER,
    TOLERANCE,
    Planner,
)

logger = logging.getLogger(__name__)

_ARMIJO_SHRINK = 0.5
_ARMIJO_SLOPE = 0.5


def _newton_track(planner: Planner, targets: list[np.ndarray]) -> list[np.ndarray]:
    """Solve each target in turn, seeding every solve with the previous pose."""
    q_current = np.array(planner.q, dtype=float)
    poses = []
    for target in targets:
        for _ in range(MAX_ITER):
            error = target - planner.kinematics(q_current)
            if np.linalg.norm(error) < TOLERANCE:
                break
            jac = planner.jacobian(q_current)
            q_current = q_current + np.linalg.lstsq(jac, error, rcond=None)[0]
        poses.append(q_current.copy())
    return poses


def _smoothness_hessian(m: int) -> sparse.csc_matrix:
    """Block tridiagonal Hessian of the sum of squared joint steps."""
    size = 3 * m
    main = np.full(size, 4.0)
    main[-3:] = 2.0
    if m == 1:
        return sparse.diags([main], [0], shape=(size, size), format="csc")
    off = np.full(size - 3, -2.0)
    return sparse.diags([off, main, off], [-3, 0, 3], shape=(size, size), format="csc")


def _smoothness_gradient(q_first: np.ndarray, poses: np.ndarray) -> np.ndarray:
    """Gradient of the smoothness cost with respect to the free poses."""
    prev = np.vstack([q_first, poses[:-1]])
    nxt = np.vstack([poses[1:], np.zeros(3)])
    grad = 2.0 * (2.0 * poses - prev - nxt)
    grad[-1] = 2.0 * (poses[-1] - prev[-1])
    return grad.ravel()


def _collision_gradient(planner: Planner, poses: np.ndarray) -> np.ndarray:
    """Penalty gradient pushing the first link's circles away from obstacles."""
    grad = np.zeros_like(poses)
    radius = planner.l1 / 6.0
    for row, q_i in zip(grad, poses):
        angle = float(q_i[0])
        c, s = math.cos(angle), math.sin(angle)
        for fraction in LINK_CIRCLE_FRACTIONS:
            d = fraction * planner.l1
            cx, cy = d * c, d * s
            for obstacle in planner.obstacles:
                dx = cx - obstacle.x
                dy = cy - obstacle.y
                dist = math.hypot(dx, dy)
                if dist == 0.0:
                    continue
                min_dist = max(dist - (radius + obstacle.r), -COLLISION_EPSILON)
                if min_dist < COLLISION_EPSILON:
                    # Only the first joint moves a circle on the first link.
                    row[0] += COLLISION_K * min_dist * (-d * s * dx / dist + d * c * dy / dist)
    return grad.ravel()


def _constraints(
    planner: Planner, poses: np.ndarray, targets: list[np.ndarray]
) -> tuple[sparse.csr_matrix, np.ndarray]:
    """Block diagonal constraint Jacobian and the stacked end-effector errors."""
    jac = sparse.block_diag([planner.jacobian(q_i) for q_i in poses], format="csr")
    residual = np.concatenate(
        [planner.kinematics(q_i) - target for q_i, target in zip(poses, targets)]
    )
    return jac, residual


def _armijo_step(direction: np.ndarray, hessian: sparse.spmatrix, grad: np.ndarray) -> float:
    """Backtrack until the model decrease lies under the Armijo line."""
    quad = float(direction @ (hessian @ direction))
    lin = float(grad @ direction)
    alpha = 1.0
    while 0.5 * alpha * alpha * quad + alpha * lin > _ARMIJO_SLOPE * alpha:
        alpha *= _ARMIJO_SHRINK
    return alpha


def plan_optimization(
    planner: Planner, points: Sequence[Sequence[float]]
) -> list[tuple[float, float, float]]:
    """Plan a smooth joint trajectory through the given end-effector points.

    The planner's current pose seeds the solve and is replaced by the pose
    reaching the first point.  With one point or none the current pose is
    returned unchanged.
    """
    logger.info("Use planner: optimization")
    targets = [np.asarray(point[:2], dtype=float) for point in points]
    if len(targets) <= 1:
        return [tuple(float(v) for v in planner.q)]

    initial = _newton_track(planner, targets)
    planner.q = initial[0]
    poses = np.array(initial[1:])
    m = len(poses)
    hessian = _smoothness_hessian(m)

    for iteration in range(MAX_ITER):
        grad = _smoothness_gradient(planner.q, poses)
        if planner.avoid_obstacles:
            grad = grad + _collision_gradient(planner, poses)
        jac, residual = _constraints(planner, poses, targets[1:])

        kkt = sparse.bmat([[hessian, jac.T], [jac, None]], format="csc")
        rhs = np.concatenate([-grad, -residual])
        try:
            delta = splu(kkt).solve(rhs)
        except RuntimeError:
            logger.warning("KKT matrix decomposition failed")
            break

        step = delta[: 3 * m]
        alpha = _armijo_step(step, hessian, grad)
        poses = poses + alpha * step.reshape(m, 3)

        step_norm = float(np.linalg.norm(step))
        logger.debug("Iteration %d: delta Q norm %.6f", iteration, step_norm)
        if step_norm < TOLERANCE:
            break

    trajectory = [tuple(float(v) for v in planner.q)]
    trajectory.extend(tuple(float(v) for v in pose) for pose in poses)
    return trajectory