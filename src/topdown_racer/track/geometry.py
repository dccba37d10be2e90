"""Geometry primitives for track containment and checkpoint distances.

All functions take plain :class:`~topdown_racer.track.models.Point` values and
never raise on degenerate input (coincident points, empty polygons).
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from topdown_racer.track.models import Point

CURVE_SEGMENTS = 10
"""Number of chords used to approximate a quadratic curve."""


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between *a* and *b*."""
    return math.hypot(a.x - b.x, a.y - b.y)


def distance_to_segment(p: Point, a: Point, b: Point) -> float:
    """Shortest distance from *p* to the segment *a*–*b*.

    The projection parameter is clamped to [0, 1], so points beyond either
    end measure to the nearest endpoint.  A zero-length segment returns the
    direct distance to *a*.
    """
    ax, ay = p.x - a.x, p.y - a.y
    cx, cy = b.x - a.x, b.y - a.y

    len_sq = cx * cx + cy * cy
    if len_sq == 0:
        return math.hypot(ax, ay)

    t = (ax * cx + ay * cy) / len_sq
    if t < 0:
        nx, ny = a.x, a.y
    elif t > 1:
        nx, ny = b.x, b.y
    else:
        nx, ny = a.x + t * cx, a.y + t * cy

    return math.hypot(p.x - nx, p.y - ny)


def point_on_quadratic_curve(start: Point, control: Point, end: Point, t: float) -> Point:
    """Evaluate the quadratic Bézier curve at parameter *t* ∈ [0, 1]."""
    u = 1.0 - t
    x = u * u * start.x + 2 * u * t * control.x + t * t * end.x
    y = u * u * start.y + 2 * u * t * control.y + t * t * end.y
    return Point(x, y)


def distance_to_quadratic_curve(
    p: Point,
    start: Point,
    control: Point,
    end: Point,
    segments: int = CURVE_SEGMENTS,
) -> float:
    """Approximate distance from *p* to a quadratic Bézier curve.

    The curve is split into *segments* straight chords; the result is the
    minimum :func:`distance_to_segment` over those chords.
    """
    if segments < 1:
        raise ValueError("segments must be >= 1")

    best = math.inf
    prev = start
    for i in range(1, segments + 1):
        cur = point_on_quadratic_curve(start, control, end, i / segments)
        best = min(best, distance_to_segment(p, prev, cur))
        prev = cur
    return best


def point_in_polygon(p: Point, polygon: Sequence[Point]) -> bool:
    """Even-odd ray-casting test; the vertex list is treated as closed."""
    inside = False
    n = len(polygon)
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        # Horizontal edges never satisfy the straddle test, so no zero division.
        if (yi > p.y) != (yj > p.y):
            x_cross = (xj - xi) * (p.y - yi) / (yj - yi) + xi
            if p.x < x_cross:
                inside = not inside
        j = i
    return inside


def normalize_angle(angle: float) -> float:
    """Wrap *angle* (radians) into the half-open interval (-π, π]."""
    wrapped = math.fmod(angle, 2 * math.pi)
    if wrapped > math.pi:
        wrapped -= 2 * math.pi
    elif wrapped <= -math.pi:
        wrapped += 2 * math.pi
    return wrapped
