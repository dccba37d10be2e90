"""Input sources — objects with ``read(state) -> ControlState``.

Device handling (keyboard, touch) lives outside the core; these sources
cover headless runs and tests.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from topdown_racer.race.ai import bearing
from topdown_racer.race.models import ControlState, RaceState
from topdown_racer.track.geometry import normalize_angle


class InputSource(Protocol):
    def read(self, state: RaceState) -> ControlState: ...


class NeutralInput:
    """No-op source: never touches a control."""

    def read(self, state: RaceState) -> ControlState:
        return ControlState()


class ScriptedInput:
    """Replays a fixed sequence of control states, then stays neutral.

    Records every state handed out in ``history`` for test assertions.
    """

    def __init__(self, script: Iterable[ControlState]) -> None:
        self._script = iter(script)
        self.history: list[ControlState] = []

    def read(self, state: RaceState) -> ControlState:
        controls = next(self._script, ControlState())
        self.history.append(controls)
        return controls


class AutopilotInput:
    """Drives the player with plain booleans towards its next checkpoint.

    Parameters
    ----------
    deadband:
        Heading error (radians) tolerated before turning.
    use_boost:
        Hold boost whenever the car is pointed at the checkpoint.
    """

    def __init__(self, deadband: float = 0.05, use_boost: bool = False) -> None:
        self._deadband = deadband
        self._use_boost = use_boost

    def read(self, state: RaceState) -> ControlState:
        player = state.player
        checkpoints = state.checkpoints
        if not checkpoints or player.finished:
            return ControlState()

        target = checkpoints[player.checkpoint_index % len(checkpoints)]
        diff = normalize_angle(bearing(player.position, target.center) - player.angle)
        aligned = abs(diff) <= self._deadband
        return ControlState(
            accelerate=abs(diff) < 1.0,
            brake=False,
            turn_left=diff < -self._deadband,
            turn_right=diff > self._deadband,
            boost=self._use_boost and aligned,
        )
