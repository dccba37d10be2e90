"""Tests for the Track model: containment, loading and fallbacks."""

from __future__ import annotations

import pytest

from topdown_racer.track.defaults import DEFAULT_CHECKPOINTS, DEFAULT_START
from topdown_racer.track.layout import Track
from topdown_racer.track.models import Checkpoint, CurveSegment, LineSegment, Point

# ---------------------------------------------------------------------------
# Test-data helpers
# ---------------------------------------------------------------------------

EDITOR_DOC = {
    "name": "Hairpin",
    "description": "one straight, one curve",
    "trackPoints": [
        {"type": "line", "start": {"x": 100, "y": 100}, "end": {"x": 500, "y": 100}},
        {
            "type": "curve",
            "start": {"x": 500, "y": 100},
            "control": {"x": 700, "y": 250},
            "end": {"x": 500, "y": 400},
        },
        {"type": "line", "start": {"x": 500, "y": 400}, "end": {"x": 100, "y": 400}},
    ],
    "checkpoints": [
        {"x": 100, "y": 100, "radius": 30},
        {"x": 300, "y": 100, "radius": 30},
        {"x": 500, "y": 400, "radius": 30},
    ],
    "trackWidth": 60,
    "trackColor": "#ff8800",
}

PROBES = [
    Point(100, 100), Point(300, 125), Point(300, 131), Point(600, 250),
    Point(650, 250), Point(300, 400), Point(300, 250), Point(0, 0),
    Point(69, 100), Point(71, 100),
]


def make_line_track(width: float = 40.0) -> Track:
    return Track.from_segments([LineSegment(Point(0, 0), Point(200, 0))], width=width)


# ---------------------------------------------------------------------------
# Default polygon track
# ---------------------------------------------------------------------------

class TestDefaultTrack:
    def test_is_polygon_with_six_checkpoints(self):
        track = Track.default()
        assert track.is_polygon
        assert len(track.get_checkpoints()) == 6
        assert track.get_start_position() == DEFAULT_START

    def test_every_checkpoint_center_is_on_track(self):
        track = Track.default()
        for cp in track.get_checkpoints():
            assert track.is_point_on_track(cp.center), cp

    def test_infield_and_outside_are_off_track(self):
        track = Track.default()
        assert track.is_point_on_track(Point(425, 325)) is False  # infield island
        assert track.is_point_on_track(Point(50, 50)) is False
        assert track.is_point_on_track(Point(800, 325)) is False

    def test_start_position_is_on_track(self):
        track = Track.default()
        assert track.is_point_on_track(track.get_start_position())


# ---------------------------------------------------------------------------
# Path tracks (union of capsules)
# ---------------------------------------------------------------------------

class TestPathTrack:
    def test_within_half_width_of_line(self):
        track = make_line_track(width=40)
        assert track.is_point_on_track(Point(100, 19))
        assert track.is_point_on_track(Point(100, 20))
        assert not track.is_point_on_track(Point(100, 21))

    def test_capsule_extends_past_segment_end(self):
        track = make_line_track(width=40)
        assert track.is_point_on_track(Point(215, 0))
        assert not track.is_point_on_track(Point(221, 0))

    def test_curve_segment_containment(self):
        track = Track.from_segments(
            [CurveSegment(Point(0, 0), Point(50, 100), Point(100, 0))], width=20
        )
        assert track.is_point_on_track(Point(50, 55))
        assert not track.is_point_on_track(Point(50, 100))

    def test_segments_need_not_connect(self):
        track = Track.from_segments(
            [
                LineSegment(Point(0, 0), Point(100, 0)),
                LineSegment(Point(0, 500), Point(100, 500)),
            ],
            width=40,
        )
        assert track.is_point_on_track(Point(50, 5))
        assert track.is_point_on_track(Point(50, 495))
        assert not track.is_point_on_track(Point(50, 250))

    def test_start_position_defaults_to_first_segment_start(self):
        track = make_line_track()
        assert track.get_start_position() == Point(0, 0)

    def test_missing_checkpoints_are_generated_on_track(self):
        track = Track.from_dict({k: v for k, v in EDITOR_DOC.items() if k != "checkpoints"})
        checkpoints = track.get_checkpoints()
        assert len(checkpoints) == 6
        assert all(cp.radius == 30 for cp in checkpoints)
        for cp in checkpoints:
            assert track.is_point_on_track(cp.center)


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------

class TestInvariants:
    def test_needs_a_representation(self):
        with pytest.raises(ValueError):
            Track()

    def test_rejects_both_representations(self):
        with pytest.raises(ValueError):
            Track(
                polygon=(Point(0, 0), Point(1, 0), Point(1, 1)),
                segments=(LineSegment(Point(0, 0), Point(1, 0)),),
            )

    def test_rejects_non_positive_width(self):
        with pytest.raises(ValueError):
            make_line_track(width=0)

    def test_rejects_non_positive_checkpoint_radius(self):
        with pytest.raises(ValueError):
            Checkpoint(0, 0, radius=0)

    def test_is_immutable(self):
        track = make_line_track()
        with pytest.raises(AttributeError):
            track.width = 100


# ---------------------------------------------------------------------------
# Editor JSON
# ---------------------------------------------------------------------------

class TestEditorJson:
    def test_from_dict_reads_editor_fields(self):
        track = Track.from_dict(EDITOR_DOC)
        assert not track.is_polygon
        assert len(track.segments) == 3
        assert isinstance(track.segments[1], CurveSegment)
        assert track.width == 60
        assert track.color == "#ff8800"
        assert track.name == "Hairpin"
        assert track.get_start_position() == Point(100, 100)
        assert track.get_checkpoints()[1] == Checkpoint(300, 100, 30)

    def test_empty_track_points_fall_back_to_default(self):
        track = Track.from_dict({"trackPoints": [], "checkpoints": []})
        assert track == Track.default()

    def test_absent_track_points_fall_back_to_default(self):
        assert Track.from_dict({}) == Track.default()

    def test_defaults_for_width_and_color(self):
        doc = {"trackPoints": EDITOR_DOC["trackPoints"]}
        track = Track.from_dict(doc)
        assert track.width == 40
        assert track.color == "#0066cc"

    def test_explicit_start_position_wins(self):
        doc = dict(EDITOR_DOC, startPosition={"x": 300, "y": 100})
        assert Track.from_dict(doc).get_start_position() == Point(300, 100)

    def test_unknown_segment_type_raises(self):
        doc = {"trackPoints": [{"type": "spline", "start": {"x": 0, "y": 0}}]}
        with pytest.raises(ValueError, match="spline"):
            Track.from_dict(doc)

    def test_round_trip_preserves_on_track_predicate(self):
        track = Track.from_dict(EDITOR_DOC)
        reloaded = Track.from_dict(track.to_dict())
        assert reloaded == track
        assert [track.is_point_on_track(p) for p in PROBES] == [
            reloaded.is_point_on_track(p) for p in PROBES
        ]

    def test_polygon_track_round_trip(self):
        track = Track.default()
        reloaded = Track.from_dict(track.to_dict())
        assert reloaded.is_polygon
        assert reloaded.get_checkpoints() == DEFAULT_CHECKPOINTS
        assert [track.is_point_on_track(p) for p in PROBES] == [
            reloaded.is_point_on_track(p) for p in PROBES
        ]

    def test_polygon_without_checkpoints_round_trip(self):
        square = [Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)]
        track = Track.from_polygon(square, [], name="Bare")
        reloaded = Track.from_dict(track.to_dict())
        assert reloaded == track
        assert reloaded.polygon == tuple(square)
        assert reloaded.get_checkpoints() == ()
        assert reloaded.get_start_position() == Point(0, 0)
