"""Track modeling, geometry and storage."""

from topdown_racer.track.layout import Track
from topdown_racer.track.models import Checkpoint, CurveSegment, LineSegment, Point
from topdown_racer.track.storage import TrackStorage

__all__ = ["Checkpoint", "CurveSegment", "LineSegment", "Point", "Track", "TrackStorage"]
