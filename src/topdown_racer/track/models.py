"""Track data structures.

Coordinates are canvas pixels: ``x`` grows to the right, ``y`` grows
downwards.  The editor JSON layout uses camelCase keys; the ``from_dict`` /
``to_dict`` helpers convert between that layout and these dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Point:
    """A 2D point."""

    x: float
    y: float

    @classmethod
    def from_dict(cls, d: dict) -> Point:
        return cls(x=float(d["x"]), y=float(d["y"]))

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class LineSegment:
    """A straight piece of track centerline."""

    start: Point
    end: Point

    type = "line"

    def to_dict(self) -> dict:
        return {"type": self.type, "start": self.start.to_dict(), "end": self.end.to_dict()}


@dataclass(frozen=True)
class CurveSegment:
    """A quadratic Bézier piece of track centerline."""

    start: Point
    control: Point
    end: Point

    type = "curve"

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "start": self.start.to_dict(),
            "control": self.control.to_dict(),
            "end": self.end.to_dict(),
        }


Segment = Union[LineSegment, CurveSegment]


def segment_from_dict(d: dict) -> Segment:
    """Build a :data:`Segment` from an editor ``trackPoints`` entry.

    Raises:
        ValueError: If ``type`` is neither ``'line'`` nor ``'curve'``.
    """
    kind = d.get("type")
    if kind == "line":
        return LineSegment(start=Point.from_dict(d["start"]), end=Point.from_dict(d["end"]))
    if kind == "curve":
        return CurveSegment(
            start=Point.from_dict(d["start"]),
            control=Point.from_dict(d["control"]),
            end=Point.from_dict(d["end"]),
        )
    raise ValueError(f"Unknown track segment type: {kind!r}")


@dataclass(frozen=True)
class Checkpoint:
    """A circular capture zone.  Index 0 in a track's list is start/finish."""

    x: float
    y: float
    radius: float = 30.0

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise ValueError("checkpoint radius must be > 0")

    @property
    def center(self) -> Point:
        return Point(self.x, self.y)

    @classmethod
    def from_dict(cls, d: dict) -> Checkpoint:
        return cls(x=float(d["x"]), y=float(d["y"]), radius=float(d.get("radius", 30.0)))

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "radius": self.radius}
