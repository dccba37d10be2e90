"""Built-in fallback track: a rounded rectangular ring with six checkpoints."""

from __future__ import annotations

from topdown_racer.track.models import Checkpoint, Point

DEFAULT_TRACK_WIDTH = 40.0
DEFAULT_TRACK_COLOR = "#0066cc"
DEFAULT_START = Point(175.0, 325.0)

_OUTER = [
    Point(100, 200), Point(200, 120), Point(650, 120), Point(750, 200),
    Point(750, 450), Point(650, 530), Point(200, 530), Point(100, 450),
]
_INNER = [Point(250, 260), Point(600, 260), Point(600, 390), Point(250, 390)]

# Outer ring, bridge to the inner ring, inner ring reversed, bridge back.
# The two bridge edges coincide and cancel out under the even-odd rule, which
# leaves the inner island as a hole.
DEFAULT_POLYGON: tuple[Point, ...] = (
    *_OUTER,
    _OUTER[0],
    _INNER[0],
    *reversed(_INNER[1:]),
    _INNER[0],
)

DEFAULT_CHECKPOINTS: tuple[Checkpoint, ...] = (
    Checkpoint(175, 325, 30),  # start/finish
    Checkpoint(300, 190, 30),
    Checkpoint(550, 190, 30),
    Checkpoint(675, 325, 30),
    Checkpoint(550, 460, 30),
    Checkpoint(300, 460, 30),
)
