"""Tests for the headless input sources."""

from __future__ import annotations

import math

from topdown_racer.race.inputs import AutopilotInput, NeutralInput, ScriptedInput
from topdown_racer.race.models import Car, ControlState, RaceConfig, RaceState
from topdown_racer.track.layout import Track
from topdown_racer.track.models import Checkpoint, Point


def make_state(target: Point, angle: float = 0.0) -> RaceState:
    track = Track.from_polygon(
        [Point(-500, -500), Point(500, -500), Point(500, 500), Point(-500, 500)],
        [Checkpoint(0, 0), Checkpoint(target.x, target.y)],
    )
    player = Car(x=0, y=0, angle=angle, checkpoint_index=1)
    return RaceState(track=track, config=RaceConfig(), cars=[player])


def test_neutral_input_touches_nothing():
    assert NeutralInput().read(make_state(Point(0, -100))) == ControlState()


def test_scripted_input_replays_then_goes_neutral():
    script = [ControlState(accelerate=True), ControlState(turn_left=True)]
    source = ScriptedInput(script)
    state = make_state(Point(0, -100))
    assert [source.read(state) for _ in range(3)] == script + [ControlState()]
    assert len(source.history) == 3


def test_autopilot_drives_straight_at_target():
    controls = AutopilotInput().read(make_state(Point(0, -100)))
    assert controls.accelerate
    assert not controls.turn_left and not controls.turn_right
    assert not controls.boost


def test_autopilot_turns_towards_target():
    controls = AutopilotInput().read(make_state(Point(100, 0)))
    assert controls.turn_right
    assert not controls.accelerate

    controls = AutopilotInput().read(make_state(Point(-100, -100)))
    assert controls.turn_left
    assert controls.accelerate


def test_autopilot_boosts_when_aligned():
    controls = AutopilotInput(use_boost=True).read(make_state(Point(0, -100), angle=0.01))
    assert controls.boost


def test_autopilot_idle_after_finish():
    state = make_state(Point(0, -100))
    state.player.finished = True
    assert AutopilotInput().read(state) == ControlState()


def test_autopilot_uses_wrapped_heading():
    # Facing south, target slightly east of north: shortest turn is to the left.
    controls = AutopilotInput().read(make_state(Point(10, -100), angle=math.pi))
    assert controls.turn_left
    assert not controls.accelerate
