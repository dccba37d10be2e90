"""Tests for the geometry primitives."""

from __future__ import annotations

import math

import pytest

from topdown_racer.track.geometry import (
    distance,
    distance_to_quadratic_curve,
    distance_to_segment,
    normalize_angle,
    point_in_polygon,
    point_on_quadratic_curve,
)
from topdown_racer.track.models import Point

SQUARE = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]

# L-shaped (concave) polygon: the notch is the top-right quadrant.
L_SHAPE = [
    Point(0, 0), Point(10, 0), Point(10, 5), Point(5, 5), Point(5, 10), Point(0, 10),
]


# ---------------------------------------------------------------------------
# distance_to_segment
# ---------------------------------------------------------------------------

class TestDistanceToSegment:
    def test_perpendicular_projection(self):
        assert distance_to_segment(Point(5, 5), Point(0, 0), Point(10, 0)) == pytest.approx(5.0)

    def test_beyond_end_measures_to_end(self):
        assert distance_to_segment(Point(13, 4), Point(0, 0), Point(10, 0)) == pytest.approx(5.0)

    def test_before_start_measures_to_start(self):
        assert distance_to_segment(Point(-3, 4), Point(0, 0), Point(10, 0)) == pytest.approx(5.0)

    def test_point_on_segment_is_zero(self):
        assert distance_to_segment(Point(4, 0), Point(0, 0), Point(10, 0)) == pytest.approx(0.0)

    def test_zero_length_segment_returns_point_distance(self):
        """start == end must not divide by zero."""
        assert distance_to_segment(Point(3, 4), Point(0, 0), Point(0, 0)) == pytest.approx(5.0)


# ---------------------------------------------------------------------------
# Quadratic curves
# ---------------------------------------------------------------------------

class TestQuadraticCurve:
    def test_curve_endpoints(self):
        start, control, end = Point(0, 0), Point(50, 100), Point(100, 0)
        assert point_on_quadratic_curve(start, control, end, 0.0) == start
        assert point_on_quadratic_curve(start, control, end, 1.0) == end

    def test_curve_midpoint(self):
        mid = point_on_quadratic_curve(Point(0, 0), Point(50, 100), Point(100, 0), 0.5)
        assert mid.x == pytest.approx(50.0)
        assert mid.y == pytest.approx(50.0)

    def test_distance_to_apex_is_zero(self):
        d = distance_to_quadratic_curve(Point(50, 50), Point(0, 0), Point(50, 100), Point(100, 0))
        assert d == pytest.approx(0.0, abs=1e-9)

    def test_collinear_control_behaves_like_a_line(self):
        d = distance_to_quadratic_curve(Point(5, 3), Point(0, 0), Point(5, 0), Point(10, 0))
        assert d == pytest.approx(3.0)

    def test_deterministic_for_fixed_resolution(self):
        args = (Point(20, 70), Point(0, 0), Point(50, 100), Point(100, 0))
        assert distance_to_quadratic_curve(*args, segments=7) == distance_to_quadratic_curve(
            *args, segments=7
        )

    def test_invalid_resolution_raises(self):
        with pytest.raises(ValueError):
            distance_to_quadratic_curve(Point(0, 0), Point(0, 0), Point(1, 1), Point(2, 0), segments=0)


# ---------------------------------------------------------------------------
# point_in_polygon
# ---------------------------------------------------------------------------

class TestPointInPolygon:
    def test_inside_square(self):
        assert point_in_polygon(Point(5, 5), SQUARE) is True

    def test_outside_square(self):
        assert point_in_polygon(Point(15, 5), SQUARE) is False
        assert point_in_polygon(Point(5, -1), SQUARE) is False

    def test_concave_notch_is_outside(self):
        assert point_in_polygon(Point(7, 7), L_SHAPE) is False
        assert point_in_polygon(Point(2, 7), L_SHAPE) is True
        assert point_in_polygon(Point(7, 2), L_SHAPE) is True

    def test_empty_polygon_contains_nothing(self):
        assert point_in_polygon(Point(0, 0), []) is False


# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------

def test_distance():
    assert distance(Point(0, 0), Point(3, 4)) == pytest.approx(5.0)


@pytest.mark.parametrize(
    "angle, expected",
    [
        (0.0, 0.0),
        (math.pi, math.pi),
        (-math.pi, math.pi),
        (3 * math.pi / 2, -math.pi / 2),
        (-3 * math.pi / 2, math.pi / 2),
    ],
)
def test_normalize_angle(angle, expected):
    assert normalize_angle(angle) == pytest.approx(expected)
