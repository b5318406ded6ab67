import math

import pytest

from armplanner.geometry import (
    Circle,
    CircleObstacle,
    Point,
    compute_circle_intersection,
    normalize_angle,
    total_q_distance,
)


def test_contains_inside_and_outside():
    obs = CircleObstacle(400, -100, 40)
    assert obs.contains(400, -100) is True
    assert obs.contains(400, -50) is False


def test_contains_boundary_is_excluded():
    obs = CircleObstacle(0, 0, 1)
    assert obs.contains(1, 0) is False


@pytest.mark.parametrize("angle", [-20.0, -7.5, -3.5, 0.0, 2.0, 4.0, 9.9, 31.0])
def test_normalize_angle_range_and_equivalence(angle):
    result = normalize_angle(angle)
    assert -math.pi <= result <= math.pi
    assert math.cos(result) == pytest.approx(math.cos(angle))
    assert math.sin(result) == pytest.approx(math.sin(angle))


def test_normalize_angle_keeps_values_in_range():
    assert normalize_angle(1.25) == 1.25
    assert normalize_angle(-math.pi) == -math.pi


def test_normalize_angle_odd_multiples_of_pi():
    assert normalize_angle(3 * math.pi) == pytest.approx(math.pi)
    assert normalize_angle(-3 * math.pi) == pytest.approx(-math.pi)


def test_intersection_points_lie_on_both_circles():
    c1 = Circle(10.0, 5.0, 145.0)
    c2 = Circle(200.0, 60.0, 180.0)
    p1, p2 = compute_circle_intersection(c1, c2)
    for p in (p1, p2):
        assert math.hypot(p.x - c1.x, p.y - c1.y) == pytest.approx(c1.r)
        assert math.hypot(p.x - c2.x, p.y - c2.y) == pytest.approx(c2.r)
    assert (p1.x, p1.y) != pytest.approx((p2.x, p2.y))


def test_intersection_tangent_circles_give_same_point():
    p1, p2 = compute_circle_intersection(Circle(0, 0, 1), Circle(2, 0, 1))
    assert p1 == p2
    assert (p1.x, p1.y) == pytest.approx((1.0, 0.0))
    assert isinstance(p1, Point) and p1.y == pytest.approx(0.0)


def test_intersection_concentric_raises():
    with pytest.raises(ValueError):
        compute_circle_intersection(Circle(1, 1, 2), Circle(1, 1, 3))


def test_intersection_far_apart_raises():
    with pytest.raises(ValueError):
        compute_circle_intersection(Circle(0, 0, 1), Circle(10, 0, 1))


def test_total_distance_simple():
    assert total_q_distance([(0, 0, 0), (3, 4, 0)]) == pytest.approx(5.0)


def test_total_distance_short_trajectories():
    assert total_q_distance([]) == 0.0
    assert total_q_distance([(1.0, 2.0, 3.0)]) == 0.0


def test_total_distance_is_additive():
    first = [(0.0, 0.0, 0.0), (0.1, 0.2, -0.3), (0.5, 0.1, 0.0)]
    second = [(0.5, 0.1, 0.0), (1.0, -1.0, 2.0)]
    whole = first + second[1:]
    assert total_q_distance(whole) == pytest.approx(
        total_q_distance(first) + total_q_distance(second)
    )