"""AI controller — checkpoint pursuit, speed modulation and stuck recovery.

Each AI car runs a two-state machine (:class:`~topdown_racer.race.models.AIMode`):

* **Seeking** — steer towards the target checkpoint and pick a target speed.
* **Stuck-Recovering** — entered when the car has barely moved for longer
  than its stuck threshold.  The first two recoveries drop the car near its
  target checkpoint; the third gives up on that checkpoint and teleports the
  car onto the next one.
"""

from __future__ import annotations

import logging
import math
import random

from topdown_racer.race.models import AIMode, Behavior, Car, ControlState, DifficultyProfile, RaceState
from topdown_racer.race.progress import (
    AI_CAPTURE_FACTOR,
    advance_checkpoint,
    repair_checkpoint_index,
    within_capture,
)
from topdown_racer.track.geometry import distance, normalize_angle
from topdown_racer.track.models import Checkpoint, Point

_logger = logging.getLogger(__name__)

STUCK_MOVEMENT = 2.0
"""Displacement (px) below which a car counts as not moving."""

RELOCATE_ATTEMPTS = 2
RELOCATE_MIN_DISTANCE = 30.0
RELOCATE_MAX_DISTANCE = 80.0

NEAR_DISTANCE = 50.0
FAR_DISTANCE = 200.0
NEAR_TURN_FACTOR = 1.6
FAR_TURN_FACTOR = 0.6
STEERING_JITTER = 0.01

CONSERVATIVE_SPEED_FACTOR = 0.8
APPROACH_DISTANCE = 30.0
APPROACH_SPEED_FACTOR = 0.7
SHARP_TURN = math.pi / 4
SHARP_TURN_SPEED_FACTOR = 0.8


def bearing(from_point: Point, to_point: Point) -> float:
    """Heading (radians, clockwise from north) pointing from *from_point* to *to_point*."""
    return math.atan2(to_point.x - from_point.x, -(to_point.y - from_point.y))


class AIController:
    """Drives every AI car of a race.

    Parameters
    ----------
    profile:
        Difficulty tuning (turn fraction, speed cap, stuck thresholds).
    rng:
        Random source for jitter and recovery placement.  Pass a seeded
        :class:`random.Random` for reproducible races.
    """

    def __init__(self, profile: DifficultyProfile, rng: random.Random | None = None) -> None:
        self._profile = profile
        self._rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update(self, car: Car, state: RaceState) -> ControlState | None:
        """Run one tick of the state machine for *car*.

        Returns the control state to integrate, or None when the car should
        not be integrated this tick (finished, no checkpoints, or it was
        just relocated by stuck recovery).
        """
        checkpoints = state.checkpoints
        if car.finished or not checkpoints:
            return None
        repair_checkpoint_index(car, len(checkpoints))

        if self.detect_stuck(car):
            car.mode = AIMode.STUCK_RECOVERING
            self.handle_stuck(car, state)
            car.mode = AIMode.SEEKING
            return None

        car.controls = self.seek(car, checkpoints[car.checkpoint_index])
        return car.controls

    def detect_stuck(self, car: Car) -> bool:
        """Update the stationary timer from this tick's displacement.

        Returns True once the timer exceeds the car's stuck threshold.
        """
        moved = distance(car.position, car.last_position)
        car.last_position = car.position
        if moved < STUCK_MOVEMENT:
            car.stuck_timer += 1
        else:
            car.stuck_timer = 0
        return car.stuck_timer > car.stuck_threshold

    def handle_stuck(self, car: Car, state: RaceState) -> None:
        """Recover a stuck car by relocation or, from the third try, by skipping a checkpoint."""
        checkpoints = state.checkpoints
        car.stuck_attempts += 1
        _logger.debug("%s stuck, recovery attempt %d", car.name, car.stuck_attempts)

        if car.stuck_attempts <= RELOCATE_ATTEMPTS:
            target = checkpoints[car.checkpoint_index]
            car.move_to(self.random_point_near(target))
        else:
            previous = car.checkpoint_index
            advance_checkpoint(car, state)
            car.stuck_attempts = 0
            car.move_to(checkpoints[car.checkpoint_index].center)
            _logger.debug(
                "%s force-advanced from checkpoint %d to %d",
                car.name, previous, car.checkpoint_index,
            )

        car.stuck_timer = 0
        car.last_position = car.position

    def random_point_near(self, checkpoint: Checkpoint) -> Point:
        """Uniform angle, distance in [30, 80] from the checkpoint center."""
        theta = self._rng.uniform(0.0, 2 * math.pi)
        radius = self._rng.uniform(RELOCATE_MIN_DISTANCE, RELOCATE_MAX_DISTANCE)
        return Point(checkpoint.x + math.cos(theta) * radius, checkpoint.y + math.sin(theta) * radius)

    def seek(self, car: Car, target: Checkpoint) -> ControlState:
        """Steering and target speed towards *target*."""
        dist = distance(car.position, target.center)
        diff = normalize_angle(bearing(car.position, target.center) - car.angle)

        if dist < NEAR_DISTANCE:
            gain = car.turn_rate * NEAR_TURN_FACTOR
        elif dist > FAR_DISTANCE:
            gain = car.turn_rate * FAR_TURN_FACTOR
        else:
            gain = car.turn_rate
        gain *= self._profile.turn_fraction
        jitter = self._rng.uniform(-STEERING_JITTER, STEERING_JITTER)

        target_speed = car.max_speed
        if car.behavior is Behavior.CONSERVATIVE:
            target_speed *= CONSERVATIVE_SPEED_FACTOR
        if dist < APPROACH_DISTANCE:
            target_speed *= APPROACH_SPEED_FACTOR
        elif abs(diff) > SHARP_TURN:
            target_speed *= SHARP_TURN_SPEED_FACTOR

        return ControlState(
            accelerate=car.speed < target_speed,
            turn_left=diff < 0,
            turn_right=diff > 0,
            steering=(diff + jitter) * gain,
            target_speed=target_speed,
        )

    def check_checkpoint(self, car: Car, state: RaceState) -> bool:
        """Capture the target checkpoint with the enlarged AI radius."""
        checkpoints = state.checkpoints
        if car.finished or not checkpoints:
            return False
        repair_checkpoint_index(car, len(checkpoints))
        if not within_capture(car, checkpoints[car.checkpoint_index], AI_CAPTURE_FACTOR):
            return False

        advance_checkpoint(car, state)
        car.stuck_timer = 0
        car.stuck_attempts = 0
        return True
