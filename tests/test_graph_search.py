import math

import pytest

from armplanner.geometry import CircleObstacle, normalize_angle
from armplanner.graph_search import (
    MAX_JOINT_STEP,
    THETA1_SAMPLES,
    Node,
    plan_brute_force,
)
from armplanner.planner import Planner


def _planner(obstacles=()):
    return Planner(110, 145, 180, 300, 0, 80, obstacles)


def _arc_points(n, step=0.01):
    return [(300 + 80 * math.cos(k * step), 80 * math.sin(k * step)) for k in range(n)]


def test_empty_points_give_empty_path():
    assert plan_brute_force(_planner(), []) == []


def test_unreachable_point_gives_empty_path():
    assert plan_brute_force(_planner(), [(1000.0, 0.0)]) == []


def test_single_point_pose_reaches_target():
    planner = _planner()
    path = plan_brute_force(planner, [(300.0, 80.0)])
    assert len(path) == 1
    x, y = planner.kinematics(path[0])
    assert x == pytest.approx(300.0, abs=1e-6)
    assert y == pytest.approx(80.0, abs=1e-6)


def test_first_joint_lies_on_grid():
    path = plan_brute_force(_planner(), [(380.0, 0.0)])
    grid_step = 2 * math.pi / THETA1_SAMPLES
    index = (path[0][0] + math.pi) / grid_step
    assert index == pytest.approx(round(index), abs=1e-9)


def test_path_follows_every_point():
    planner = _planner()
    points = _arc_points(5)
    path = plan_brute_force(planner, points)
    assert len(path) == len(points)
    for pose, (px, py) in zip(path, points):
        x, y = planner.kinematics(pose)
        assert math.hypot(x - px, y - py) < 1e-6


def test_consecutive_steps_respect_limits():
    path = plan_brute_force(_planner(), _arc_points(5))
    grid_step = 2 * math.pi / THETA1_SAMPLES
    for a, b in zip(path, path[1:]):
        assert abs(normalize_angle(a[0] - b[0])) <= grid_step + 1e-9
        for u, v in zip(a, b):
            assert abs(normalize_angle(u - v)) <= MAX_JOINT_STEP


def test_repeated_point_costs_nothing():
    path = plan_brute_force(_planner(), [(300.0, 80.0), (300.0, 80.0)])
    assert len(path) == 2
    assert path[0] == pytest.approx(path[1])


def test_obstacle_over_base_blocks_everything():
    planner = _planner([CircleObstacle(0.0, 0.0, 50.0)])
    assert plan_brute_force(planner, [(300.0, 80.0)]) == []


def test_paths_avoid_obstacles():
    obstacle = CircleObstacle(60.0, 120.0, 60.0)
    planner = _planner([obstacle])
    path = plan_brute_force(planner, _arc_points(3))
    assert len(path) == 3
    assert not any(planner.check_collision(pose) for pose in path)


def test_node_defaults():
    node = Node(0, 5, (0.0, 0.0, 0.0))
    assert node.cost == math.inf
    assert node.prev is None