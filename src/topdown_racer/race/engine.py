"""RaceEngine — wires input, AI, physics, collision and progress into one tick."""

from __future__ import annotations

import logging
import random

from topdown_racer.race import physics
from topdown_racer.race.ai import AIController
from topdown_racer.race.collision import apply_off_track_timeout, keep_car_on_track
from topdown_racer.race.models import (
    AIMode,
    Behavior,
    Car,
    ControlState,
    RaceConfig,
    RacePhase,
    RaceState,
)
from topdown_racer.race.progress import check_player_checkpoint, update_ranking
from topdown_racer.track.layout import Track

_logger = logging.getLogger(__name__)

AI_COLORS = ("#ff0000", "#00ff00", "#0000ff")
GRID_SPACING = 20.0
AI_ACCELERATION = 0.1
AI_DECELERATION = 0.05


class RaceEngine:
    """Owns one :class:`RaceState` and advances it a tick at a time.

    Parameters
    ----------
    track:
        Track to race on; the built-in default track when None.
    config:
        Race settings; defaults to :class:`RaceConfig` defaults.
    rng:
        Random source for AI temperament, thresholds and recovery.  Defaults
        to ``random.Random(config.seed)``.
    """

    def __init__(
        self,
        track: Track | None = None,
        config: RaceConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or RaceConfig()
        self._rng = rng or random.Random(self._config.seed)
        self._ai = AIController(self._config.profile, self._rng)
        track = track or Track.default()
        self.state = RaceState(track=track, config=self._config, cars=self._spawn_cars(track))
        update_ranking(self.state)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Leave the menu and start racing."""
        self.state.phase = RacePhase.RACING
        _logger.info(
            "Race started: %d laps, %d cars, difficulty=%s",
            self._config.laps, self._config.total_cars, self._config.difficulty.value,
        )

    def restart(self) -> None:
        """Put every car back on the grid and race again."""
        track = self.state.track
        self.state = RaceState(track=track, config=self._config, cars=self._spawn_cars(track))
        update_ranking(self.state)
        self.start()

    def load_track(self, track: Track) -> None:
        """Swap in a fully built *track* between ticks and restart the race."""
        self.state.track = track
        _logger.info("Loaded track %r with %d checkpoints", track.name, len(track.checkpoints))
        self.restart()

    def reset_ai_cars(self) -> None:
        """Return every AI car to the grid, keeping the player where it is."""
        start = self.state.track.start_position
        for i, car in enumerate(self.state.ai_cars):
            car.x = start.x + (i - 1) * GRID_SPACING
            car.y = start.y
            car.angle = 0.0
            car.speed = 0.0
            car.checkpoint_index = 0
            car.lap = 1
            car.stuck_timer = 0
            car.stuck_attempts = 0
            car.last_position = car.position
            car.off_track_time = 0.0
            car.boost = car.max_boost
            car.controls = ControlState()
            car.mode = AIMode.SEEKING
            if car.finished:
                self.state.finishers -= 1
                car.finished = False
                car.finish_order = 0

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self, controls: ControlState | None = None) -> RaceState:
        """Advance the race by one tick using *controls* for the player.

        Does nothing unless the race is in the racing phase.
        """
        state = self.state
        if state.phase is not RacePhase.RACING:
            return state
        state.tick += 1
        track = state.track
        dt = self._config.dt
        timeout = self._config.off_track_timeout_s

        player = state.player
        if not player.finished:
            physics.step(player, controls or ControlState())
            keep_car_on_track(player, track)
            apply_off_track_timeout(player, track, dt, timeout)

        for car in state.ai_cars:
            ai_controls = self._ai.update(car, state)
            if ai_controls is None:
                continue
            physics.step(car, ai_controls)
            keep_car_on_track(car, track)
            apply_off_track_timeout(car, track, dt, timeout)
            self._ai.check_checkpoint(car, state)

        check_player_checkpoint(state)
        if state.phase is RacePhase.RACING:
            update_ranking(state)
        return state

    def run(self, input_source, max_ticks: int, renderer=None) -> RaceState:
        """Tick until the race finishes or *max_ticks* have run.

        *input_source* needs ``read(state) -> ControlState``; the optional
        *renderer* gets ``draw(state)`` after every tick.
        """
        if self.state.phase is RacePhase.MENU:
            self.start()
        for _ in range(max_ticks):
            if self.state.phase is not RacePhase.RACING:
                break
            self.tick(input_source.read(self.state))
            if renderer is not None:
                renderer.draw(self.state)
        return self.state

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _spawn_cars(self, track: Track) -> list[Car]:
        start = track.start_position
        profile = self._config.profile
        cars = [Car(x=start.x, y=start.y)]

        low, high = profile.stuck_threshold_range
        for i in range(self._config.total_cars - 1):
            behavior = Behavior.AGGRESSIVE if self._rng.random() > 0.5 else Behavior.CONSERVATIVE
            base_speed = 4.0 if behavior is Behavior.AGGRESSIVE else 3.0
            variation = self._rng.uniform(0.0, 2.0)
            x = start.x + (i - 1) * GRID_SPACING
            cars.append(Car(
                x=x,
                y=start.y,
                name=f"AI {i + 1}",
                is_ai=True,
                color=AI_COLORS[i % len(AI_COLORS)],
                max_speed=min(base_speed + 2.0 + variation, profile.ai_max_speed),
                acceleration=AI_ACCELERATION,
                deceleration=AI_DECELERATION,
                behavior=behavior,
                stuck_threshold=self._rng.uniform(low, high),
            ))
        return cars
