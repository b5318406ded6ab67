import math

import numpy as np
import pytest

from armplanner.geometry import CircleObstacle
from armplanner.optimization import plan_optimization
from armplanner.planner import TOLERANCE, Planner


def make_planner(**kwargs):
    return Planner(110, 145, 180, 300, 0, 80, q1=1, **kwargs)


@pytest.fixture
def planner():
    return make_planner()


@pytest.fixture
def points(planner):
    return planner.points_sampler(0.5)


def test_empty_points_returns_current_pose(planner):
    assert plan_optimization(planner, []) == [(1.0, 0.0, 0.0)]


def test_single_point_returns_current_pose_unsolved(planner):
    result = plan_optimization(planner, [(300.0, 80.0)])
    assert result == [(1.0, 0.0, 0.0)]
    assert tuple(planner.q) == (1.0, 0.0, 0.0)


def test_trajectory_has_one_pose_per_point(planner, points):
    result = plan_optimization(planner, points)
    assert len(result) == len(points)
    assert all(len(pose) == 3 for pose in result)


def test_first_pose_reaches_first_point_and_updates_planner(planner, points):
    result = plan_optimization(planner, points)
    reached = planner.kinematics(result[0])
    assert np.linalg.norm(reached - np.array(points[0])) < TOLERANCE
    assert np.allclose(planner.q, result[0])


def test_all_poses_stay_near_targets(planner, points):
    result = plan_optimization(planner, points)
    for pose, point in zip(result, points):
        assert np.linalg.norm(planner.kinematics(pose) - np.array(point)) < 1.0


def test_consecutive_poses_are_close(planner, points):
    result = plan_optimization(planner, points)
    for a, b in zip(result, result[1:]):
        assert math.dist(a, b) < 1.0


def test_two_points(planner):
    pts = [(380.0, 0.0), (300.0, 80.0)]
    result = plan_optimization(planner, pts)
    assert len(result) == 2
    assert np.linalg.norm(planner.kinematics(result[1]) - np.array(pts[1])) < 1.0


def test_far_obstacle_does_not_change_result():
    plain = make_planner()
    pts = plain.points_sampler(0.5)
    guarded = make_planner(
        obstacles=[CircleObstacle(-1000, -1000, 10)], avoid_obstacles=True
    )
    expected = plan_optimization(plain, pts)
    result = plan_optimization(guarded, pts)
    assert np.allclose(np.array(result), np.array(expected))


def test_near_obstacle_gives_finite_trajectory():
    planner = make_planner(
        obstacles=[CircleObstacle(40, 80, 20)], avoid_obstacles=True
    )
    pts = planner.points_sampler(0.5)
    result = plan_optimization(planner, pts)
    assert len(result) == len(pts)
    assert np.all(np.isfinite(np.array(result)))