"""Joint-space trajectory planning by graph search over a discretised first joint.

For every target point the first joint is sampled on a regular grid. Each
sample whose elbow circle meets the target circle gives two candidate poses,
elbow up and elbow down. Candidate poses of consecutive points are linked
when the first joint moves by at most one grid cell and no joint moves by
more than a fixed step. Dijkstra's algorithm then finds the path of least
joint-space length.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Sequence

from armplanner.geometry import Circle, compute_circle_intersection, normalize_angle
from armplanner.planner import Planner

logger = logging.getLogger(__name__)

THETA1_SAMPLES = 360
MAX_THETA1_INDEX_STEP = 1
MAX_JOINT_STEP = math.radians(10.0)


@dataclass
class Node:
    """A candidate pose for one trajectory point."""

    i: int
    j: int
    q: tuple[float, float, float]
    cost: float = math.inf
    prev: int | None = None


def _candidate_poses(
    planner: Planner, x_d: float, y_d: float, theta1: float
) -> list[tuple[float, float, float]]:
    """Both poses with first joint `theta1` that reach (x_d, y_d)."""
    x1 = planner.l1 * math.cos(theta1)
    y1 = planner.l1 * math.sin(theta1)
    d = math.hypot(x_d - x1, y_d - y1)
    if d > planner.l2 + planner.l3 or d < abs(planner.l2 - planner.l3):
        return []
    try:
        elbows = compute_circle_intersection(
            Circle(x1, y1, planner.l2), Circle(x_d, y_d, planner.l3)
        )
    except ValueError as exc:
        logger.warning("Error: %s", exc)
        return []
    poses = []
    for elbow in elbows:
        link2 = math.atan2(elbow.y - y1, elbow.x - x1)
        link3 = math.atan2(y_d - elbow.y, x_d - elbow.x)
        poses.append((theta1, link2 - theta1, link3 - link2))
    return poses


def _build_layers(
    planner: Planner, points: Sequence[Sequence[float]]
) -> tuple[list[Node], list[dict[int, list[int]]]] | None:
    """Collision-free candidate nodes, grouped per point by theta1 index."""
    nodes: list[Node] = []
    layers: list[dict[int, list[int]]] = []
    grid_step = 2 * math.pi / THETA1_SAMPLES
    for i, point in enumerate(points):
        x_d, y_d = float(point[0]), float(point[1])
        layer: dict[int, list[int]] = defaultdict(list)
        for j in range(THETA1_SAMPLES):
            theta1 = -math.pi + j * grid_step
            for pose in _candidate_poses(planner, x_d, y_d, theta1):
                if not planner.check_collision(pose):
                    layer[j].append(len(nodes))
                    nodes.append(Node(i, j, pose))
        if not layer:
            return None
        layers.append(layer)
    return nodes, layers


def _neighbour_indices(j: int) -> set[int]:
    """Theta1 grid indices within the allowed step, wrapping around the circle."""
    return {
        (j + dj) % THETA1_SAMPLES
        for dj in range(-MAX_THETA1_INDEX_STEP, MAX_THETA1_INDEX_STEP + 1)
    }


def _step_length(a: Sequence[float], b: Sequence[float]) -> float | None:
    """Joint-space distance between two poses, or None if a joint moves too far."""
    deltas = [normalize_angle(u - v) for u, v in zip(a, b)]
    if any(abs(delta) > MAX_JOINT_STEP for delta in deltas):
        return None
    return math.sqrt(sum(delta * delta for delta in deltas))


def plan_brute_force(
    planner: Planner, points: Sequence[Sequence[float]]
) -> list[tuple[float, float, float]]:
    """Shortest joint-space trajectory through the points over a discretised grid.

    Returns one pose per point, or an empty list when no points are given or
    no collision-free, sufficiently smooth trajectory exists.
    """
    count = len(points)
    if count == 0:
        return []
    built = _build_layers(planner, points)
    if built is None:
        return []
    nodes, layers = built

    counter = itertools.count()
    heap: list[tuple[float, int, int]] = []
    for members in layers[0].values():
        for idx in members:
            nodes[idx].cost = 0.0
            heapq.heappush(heap, (0.0, next(counter), idx))

    end_index: int | None = None
    min_end_cost = math.inf
    while heap:
        cost, _, idx = heapq.heappop(heap)
        u = nodes[idx]
        if cost > u.cost:
            continue
        if u.i == count - 1:
            if u.cost < min_end_cost:
                min_end_cost = u.cost
                end_index = idx
            continue
        next_layer = layers[u.i + 1]
        for j in _neighbour_indices(u.j):
            for v_idx in next_layer.get(j, ()):
                v = nodes[v_idx]
                step = _step_length(u.q, v.q)
                if step is None:
                    continue
                new_cost = u.cost + step
                if new_cost < v.cost:
                    v.cost = new_cost
                    v.prev = idx
                    heapq.heappush(heap, (new_cost, next(counter), v_idx))

    if end_index is None:
        return []

    path: list[tuple[float, float, float]] = []
    current: int | None = end_index
    while current is not None:
        node = nodes[current]
        path.append(node.q)
        current = node.prev
    path.reverse()
    return path