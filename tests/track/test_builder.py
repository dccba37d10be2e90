"""Tests for the track-editing helpers."""

from __future__ import annotations

import pytest

from topdown_racer.track.builder import (
    auto_place_checkpoints,
    curve_between,
    freehand_to_segments,
    generate_checkpoints,
    polygon_outline,
    segment_length,
)
from topdown_racer.track.models import CurveSegment, LineSegment, Point


def _chain(n: int) -> list[LineSegment]:
    """*n* unit-spaced segments along the x axis, 10 px each."""
    return [LineSegment(Point(i * 10, 0), Point((i + 1) * 10, 0)) for i in range(n)]


# ---------------------------------------------------------------------------
# Freehand strokes
# ---------------------------------------------------------------------------

def test_freehand_drops_short_pieces():
    stroke = [Point(0, 0), Point(1, 0), Point(10, 0), Point(10, 1), Point(20, 1)]
    segments = freehand_to_segments(stroke)
    assert segments == [
        LineSegment(Point(1, 0), Point(10, 0)),
        LineSegment(Point(10, 1), Point(20, 1)),
    ]


def test_freehand_single_point_is_empty():
    assert freehand_to_segments([Point(5, 5)]) == []


def test_curve_between_uses_midpoint_control():
    curve = curve_between(Point(0, 0), Point(10, 20))
    assert curve.control == Point(5, 10)


# ---------------------------------------------------------------------------
# Lengths and checkpoint placement
# ---------------------------------------------------------------------------

def test_segment_length_line_and_curve():
    assert segment_length(LineSegment(Point(0, 0), Point(3, 4))) == pytest.approx(5.0)
    curve = CurveSegment(Point(0, 0), Point(5, 40), Point(10, 0))
    assert segment_length(curve) == pytest.approx(12.0)


def test_auto_place_equal_spacing_on_a_straight():
    checkpoints = auto_place_checkpoints([LineSegment(Point(0, 0), Point(600, 0))])
    assert [cp.x for cp in checkpoints] == pytest.approx([100, 200, 300, 400, 500, 600])
    assert all(cp.y == pytest.approx(0.0) for cp in checkpoints)
    assert all(cp.radius == 30 for cp in checkpoints)


def test_auto_place_spans_segments():
    segments = [
        LineSegment(Point(0, 0), Point(100, 0)),
        LineSegment(Point(100, 0), Point(100, 100)),
    ]
    checkpoints = auto_place_checkpoints(segments, count=4, radius=20)
    assert [(cp.x, cp.y) for cp in checkpoints] == [
        pytest.approx((50, 0)),
        pytest.approx((100, 0)),
        pytest.approx((100, 50)),
        pytest.approx((100, 100)),
    ]
    assert all(cp.radius == 20 for cp in checkpoints)


def test_auto_place_empty_path():
    assert auto_place_checkpoints([]) == []


def test_generate_checkpoints_evenly_spaced_indices():
    checkpoints = generate_checkpoints(_chain(11))
    assert [cp.x for cp in checkpoints] == [0, 20, 40, 60, 80, 100]


def test_generate_checkpoints_first_is_path_start():
    checkpoints = generate_checkpoints(_chain(3), count=1)
    assert len(checkpoints) == 1
    assert checkpoints[0].center == Point(0, 0)


def test_generate_checkpoints_no_segments():
    assert generate_checkpoints([]) == []


def test_polygon_outline_includes_curve_controls():
    line = LineSegment(Point(0, 0), Point(10, 0))
    curve = CurveSegment(Point(10, 0), Point(20, 5), Point(10, 10))
    assert polygon_outline([line, curve]) == [
        Point(0, 0), Point(10, 0), Point(10, 0), Point(20, 5), Point(10, 10),
    ]
