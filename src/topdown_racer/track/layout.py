"""Track — the drivable area, checkpoints and start position of one circuit."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from topdown_racer.track.builder import generate_checkpoints
from topdown_racer.track.defaults import (
    DEFAULT_CHECKPOINTS,
    DEFAULT_POLYGON,
    DEFAULT_START,
    DEFAULT_TRACK_COLOR,
    DEFAULT_TRACK_WIDTH,
)
from topdown_racer.track.geometry import (
    distance_to_quadratic_curve,
    distance_to_segment,
    point_in_polygon,
)
from topdown_racer.track.models import (
    Checkpoint,
    CurveSegment,
    Point,
    Segment,
    segment_from_dict,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Track:
    """An immutable track definition.

    Exactly one boundary representation is active:

    * **polygon** — ``polygon`` holds an implicitly closed vertex list and
      containment uses the even-odd rule.
    * **path** — ``segments`` holds line/curve centerline pieces; a point is
      on-track when it lies within ``width / 2`` of *any* segment.  Segments
      do not need to form a closed loop.

    Use :meth:`from_polygon`, :meth:`from_segments`, :meth:`default` or
    :meth:`from_dict` rather than the raw constructor.
    """

    polygon: tuple[Point, ...] = ()
    segments: tuple[Segment, ...] = ()
    width: float = DEFAULT_TRACK_WIDTH
    checkpoints: tuple[Checkpoint, ...] = ()
    start_position: Point = DEFAULT_START
    color: str = DEFAULT_TRACK_COLOR
    name: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if bool(self.polygon) == bool(self.segments):
            raise ValueError("A track needs exactly one of polygon or segments")
        if self.width <= 0:
            raise ValueError("track width must be > 0")

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_polygon(
        cls,
        polygon: Sequence[Point],
        checkpoints: Sequence[Checkpoint],
        start_position: Point | None = None,
        **kwargs,
    ) -> Track:
        start = start_position or (checkpoints[0].center if checkpoints else polygon[0])
        return cls(
            polygon=tuple(polygon),
            checkpoints=tuple(checkpoints),
            start_position=start,
            **kwargs,
        )

    @classmethod
    def from_segments(
        cls,
        segments: Sequence[Segment],
        width: float = DEFAULT_TRACK_WIDTH,
        checkpoints: Sequence[Checkpoint] | None = None,
        start_position: Point | None = None,
        **kwargs,
    ) -> Track:
        """Build a path-based track.

        Missing checkpoints are generated from evenly spaced segment starts;
        a missing start position defaults to the first segment's start.
        """
        if not segments:
            raise ValueError("A path track needs at least one segment")
        if not checkpoints:
            checkpoints = generate_checkpoints(segments)
        return cls(
            segments=tuple(segments),
            width=width,
            checkpoints=tuple(checkpoints),
            start_position=start_position or segments[0].start,
            **kwargs,
        )

    @classmethod
    def default(cls) -> Track:
        """The built-in polygon track with its fixed six-checkpoint layout."""
        return cls.from_polygon(DEFAULT_POLYGON, DEFAULT_CHECKPOINTS, DEFAULT_START)

    @classmethod
    def from_dict(cls, d: dict) -> Track:
        """Build a track from the editor JSON layout.

        A document written by :meth:`to_dict` for a polygon track is restored
        as that polygon, with or without checkpoints.  Otherwise an empty or
        absent ``trackPoints`` list falls back to :meth:`default`.

        Raises:
            ValueError: On unknown segment types or invalid numbers.
            KeyError: On segments or checkpoints missing coordinates.
        """
        raw_segments = d.get("trackPoints") or []
        checkpoints = [Checkpoint.from_dict(c) for c in d.get("checkpoints") or []]
        start = d.get("startPosition")
        start_position = Point.from_dict(start) if start else None
        extra = {
            "color": d.get("trackColor") or DEFAULT_TRACK_COLOR,
            "name": d.get("name") or "",
            "description": d.get("description") or "",
        }

        if not raw_segments:
            raw_polygon = d.get("polygon") or []
            if raw_polygon:
                return cls.from_polygon(
                    [Point.from_dict(p) for p in raw_polygon],
                    checkpoints,
                    start_position,
                    width=float(d.get("trackWidth") or DEFAULT_TRACK_WIDTH),
                    **extra,
                )
            _logger.warning("Track definition has no trackPoints; using the default track")
            return cls.default()

        return cls.from_segments(
            [segment_from_dict(s) for s in raw_segments],
            width=float(d.get("trackWidth") or DEFAULT_TRACK_WIDTH),
            checkpoints=checkpoints,
            start_position=start_position,
            **extra,
        )

    def to_dict(self) -> dict:
        """Return the editor JSON layout.

        Polygon tracks are not editor documents; they serialize with an empty
        ``trackPoints`` list plus a ``polygon`` vertex list.
        """
        d = {
            "name": self.name,
            "description": self.description,
            "trackPoints": [s.to_dict() for s in self.segments],
            "checkpoints": [c.to_dict() for c in self.checkpoints],
            "trackWidth": self.width,
            "trackColor": self.color,
            "startPosition": self.start_position.to_dict(),
        }
        if self.polygon:
            d["polygon"] = [p.to_dict() for p in self.polygon]
        return d

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_polygon(self) -> bool:
        return bool(self.polygon)

    def is_point_on_track(self, p: Point) -> bool:
        """Return True if *p* lies in the drivable area."""
        if self.polygon:
            return point_in_polygon(p, self.polygon)

        half_width = self.width / 2
        for segment in self.segments:
            if isinstance(segment, CurveSegment):
                d = distance_to_quadratic_curve(p, segment.start, segment.control, segment.end)
            else:
                d = distance_to_segment(p, segment.start, segment.end)
            if d <= half_width:
                return True
        return False

    def get_start_position(self) -> Point:
        return self.start_position

    def get_checkpoints(self) -> tuple[Checkpoint, ...]:
        return self.checkpoints
