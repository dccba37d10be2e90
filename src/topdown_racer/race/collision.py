"""Collision and on-track resolution."""

from __future__ import annotations

import logging

from topdown_racer.race.models import Car
from topdown_racer.track.layout import Track

_logger = logging.getLogger(__name__)

PUSH_DISTANCE = 2.0
COLLISION_SPEED_FACTOR = 0.8

# Trial order matters: the first offset that restores the car wins.
PUSH_OFFSETS: tuple[tuple[float, float], ...] = (
    (-PUSH_DISTANCE, 0.0),
    (PUSH_DISTANCE, 0.0),
    (0.0, -PUSH_DISTANCE),
    (0.0, PUSH_DISTANCE),
    (-PUSH_DISTANCE, -PUSH_DISTANCE),
    (PUSH_DISTANCE, -PUSH_DISTANCE),
    (-PUSH_DISTANCE, PUSH_DISTANCE),
    (PUSH_DISTANCE, PUSH_DISTANCE),
)

_TIME_EPS = 1e-9


def is_car_on_track(car: Car, track: Track) -> bool:
    """True only if all four bounding-box corners are on-track."""
    return all(track.is_point_on_track(corner) for corner in car.corners())


def keep_car_on_track(car: Car, track: Track) -> bool:
    """Nudge an off-track car back onto the track.

    Tries each of :data:`PUSH_OFFSETS` from the current position and keeps the
    first that puts the car fully on-track; if none does, the car stays where
    it was.  Either way an off-track car loses 20 % of its speed.

    Returns True if the car is on-track afterwards.
    """
    if is_car_on_track(car, track):
        return True

    origin_x, origin_y = car.x, car.y
    recovered = False
    for dx, dy in PUSH_OFFSETS:
        car.x = origin_x + dx
        car.y = origin_y + dy
        if is_car_on_track(car, track):
            recovered = True
            break

    if not recovered:
        car.x, car.y = origin_x, origin_y

    car.speed *= COLLISION_SPEED_FACTOR
    return recovered


def apply_off_track_timeout(car: Car, track: Track, dt: float, timeout_s: float = 0.5) -> bool:
    """Accumulate off-track time and return the car to its previous checkpoint.

    After *timeout_s* seconds off-track the car is teleported to checkpoint
    ``max(0, checkpoint_index - 1)`` (the start position if the track has no
    checkpoints) with zero speed.  Any tick spent on-track clears the timer.

    Returns True if the car was teleported.
    """
    if is_car_on_track(car, track):
        car.off_track_time = 0.0
        return False

    car.off_track_time += dt
    if car.off_track_time + _TIME_EPS < timeout_s:
        return False

    checkpoints = track.checkpoints
    if checkpoints:
        index = min(max(0, car.checkpoint_index - 1), len(checkpoints) - 1)
        car.move_to(checkpoints[index].center)
    else:
        index = -1
        car.move_to(track.start_position)
    car.speed = 0.0
    car.off_track_time = 0.0
    _logger.debug("%s returned to checkpoint %d after %.2fs off track", car.name, index, timeout_s)
    return True
