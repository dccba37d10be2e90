"""Car physics: one integration step driven by the car's control state."""

from __future__ import annotations

import math

from topdown_racer.race.models import Car, ControlState

FRICTION = 0.95
"""Per-tick speed multiplier with neither throttle nor brake applied."""

BOOST_SPEED_CAP = 1.5
"""Boost may push speed up to this multiple of ``max_speed``."""

REVERSE_SPEED_FRACTION = 0.5


def update_speed(car: Car, controls: ControlState) -> None:
    """Longitudinal update (step 1)."""
    if controls.target_speed is not None:
        target = controls.target_speed
        if car.speed < target:
            car.speed = min(car.speed + car.acceleration, target)
        else:
            car.speed = max(car.speed - car.deceleration, target)
    elif controls.accelerate:
        car.speed = min(car.speed + car.acceleration, car.max_speed)
    elif controls.brake:
        car.speed = max(car.speed - car.acceleration, -car.max_speed * REVERSE_SPEED_FRACTION)
    else:
        car.speed *= FRICTION


def update_boost(car: Car, controls: ControlState) -> None:
    """Boost burn or recharge (step 2).  Boost stays within [0, max_boost]."""
    if controls.boost and car.boost > 0:
        car.speed = min(car.speed + car.boost_bonus, car.max_speed * BOOST_SPEED_CAP)
        car.boost = max(0.0, car.boost - car.boost_drain)
    else:
        car.boost = min(car.max_boost, car.boost + car.boost_recharge)


def update_heading(car: Car, controls: ControlState) -> None:
    """Turning (step 3); no rotational inertia."""
    if controls.steering is not None:
        car.angle += controls.steering
        return
    if controls.turn_left:
        car.angle -= car.turn_rate
    if controls.turn_right:
        car.angle += car.turn_rate


def integrate_position(car: Car) -> None:
    """Move along the heading (step 4)."""
    car.x += math.sin(car.angle) * car.speed
    car.y -= math.cos(car.angle) * car.speed


def step(car: Car, controls: ControlState | None = None) -> None:
    """Apply one physics tick to *car* in place.

    Uses ``car.controls`` unless *controls* is given, in which case they are
    stored on the car first.
    """
    if controls is not None:
        car.controls = controls
    controls = car.controls

    update_speed(car, controls)
    update_boost(car, controls)
    update_heading(car, controls)
    integrate_position(car)
