"""Helpers for turning drawn editor input into segments and checkpoints."""

from __future__ import annotations

from collections.abc import Sequence

from topdown_racer.track.geometry import distance, point_on_quadratic_curve
from topdown_racer.track.models import Checkpoint, CurveSegment, LineSegment, Point, Segment

DEFAULT_CHECKPOINT_COUNT = 6
DEFAULT_CHECKPOINT_RADIUS = 30.0
CURVE_LENGTH_FACTOR = 1.2  # curve length ≈ chord × 1.2


def freehand_to_segments(
    points: Sequence[Point], min_distance: float = 2.0
) -> list[LineSegment]:
    """Convert a freehand stroke into line segments.

    Consecutive points become one segment each; pieces no longer than
    *min_distance* are dropped.  Strokes with fewer than two points yield
    an empty list.
    """
    segments: list[LineSegment] = []
    for start, end in zip(points, points[1:]):
        if distance(start, end) > min_distance:
            segments.append(LineSegment(start=start, end=end))
    return segments


def curve_between(start: Point, end: Point) -> CurveSegment:
    """Return a curve from *start* to *end* with its control point at the midpoint."""
    control = Point((start.x + end.x) / 2, (start.y + end.y) / 2)
    return CurveSegment(start=start, control=control, end=end)


def segment_length(segment: Segment) -> float:
    """Approximate length of *segment* (curves use the chord × 1.2 estimate)."""
    chord = distance(segment.start, segment.end)
    if isinstance(segment, CurveSegment):
        return chord * CURVE_LENGTH_FACTOR
    return chord


def _point_along(segment: Segment, ratio: float) -> Point:
    if isinstance(segment, CurveSegment):
        return point_on_quadratic_curve(segment.start, segment.control, segment.end, ratio)
    return Point(
        segment.start.x + (segment.end.x - segment.start.x) * ratio,
        segment.start.y + (segment.end.y - segment.start.y) * ratio,
    )


def auto_place_checkpoints(
    segments: Sequence[Segment],
    count: int = DEFAULT_CHECKPOINT_COUNT,
    radius: float = DEFAULT_CHECKPOINT_RADIUS,
) -> list[Checkpoint]:
    """Place *count* checkpoints at equal arc-length spacing along *segments*.

    Checkpoint *k* sits at ``(k + 1) / count`` of the total length, so the
    last one lands on the end of the final segment.  Returns an empty list
    for an empty or zero-length path.
    """
    lengths = [segment_length(s) for s in segments]
    total = sum(lengths)
    if count < 1 or total <= 0:
        return []

    spacing = total / count
    checkpoints: list[Checkpoint] = []
    travelled = 0.0
    for segment, length in zip(segments, lengths):
        while (
            len(checkpoints) < count
            and length > 0
            and travelled + length >= spacing * (len(checkpoints) + 1) - 1e-9
        ):
            target = spacing * (len(checkpoints) + 1) - travelled
            pos = _point_along(segment, min(1.0, target / length))
            checkpoints.append(Checkpoint(x=pos.x, y=pos.y, radius=radius))
        travelled += length
    return checkpoints


def generate_checkpoints(
    segments: Sequence[Segment],
    count: int = DEFAULT_CHECKPOINT_COUNT,
    radius: float = DEFAULT_CHECKPOINT_RADIUS,
) -> list[Checkpoint]:
    """Pick *count* evenly spaced segment start points as checkpoints.

    Used when a track definition arrives without checkpoints.  The first
    checkpoint is always the start of the first segment.
    """
    n = len(segments)
    if n == 0 or count < 1:
        return []
    if count == 1:
        indices = [0]
    else:
        indices = [i * (n - 1) // (count - 1) for i in range(count)]
    return [
        Checkpoint(x=segments[i].start.x, y=segments[i].start.y, radius=radius)
        for i in indices
    ]


def polygon_outline(segments: Sequence[Segment]) -> list[Point]:
    """Flatten *segments* into the editor's simplified boundary polygon."""
    points: list[Point] = []
    for segment in segments:
        points.append(segment.start)
        if isinstance(segment, CurveSegment):
            points.append(segment.control)
        points.append(segment.end)
    return points
