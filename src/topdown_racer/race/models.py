"""Race data models — cars, control input, configuration and race state.

Units: positions in canvas pixels, speeds in pixels per tick, angles in
radians measured clockwise from north (``angle = 0`` drives towards -y).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from topdown_racer.track.layout import Track
from topdown_racer.track.models import Point

KMH_PER_PIXEL_TICK = 3.6
"""Conversion used by the difficulty profiles: ``px/tick = km/h / 3.6``."""


class Behavior(str, Enum):
    """AI driving temperament; conservative cars aim 20 % below max speed."""

    AGGRESSIVE = "aggressive"
    CONSERVATIVE = "conservative"


class Difficulty(str, Enum):
    EASY = "easy"
    HARD = "hard"


class RacePhase(str, Enum):
    MENU = "menu"
    RACING = "racing"
    FINISHED = "finished"


class AIMode(str, Enum):
    SEEKING = "seeking"
    STUCK_RECOVERING = "stuck_recovering"


@dataclass
class ControlState:
    """Normalized per-tick driver input.

    The booleans are what any InputSource produces.  AI controllers also set
    the analog ``steering`` (radians to add to the heading this tick) and
    ``target_speed`` (speed to approach this tick); physics prefers them over
    the corresponding booleans when they are not None.
    """

    accelerate: bool = False
    brake: bool = False
    turn_left: bool = False
    turn_right: bool = False
    boost: bool = False
    steering: float | None = None
    target_speed: float | None = None


@dataclass(frozen=True)
class DifficultyProfile:
    """AI tuning for one difficulty tier.

    Attributes:
        ai_max_speed_kmh: Absolute cap on every AI car's max speed.
        turn_fraction: Multiplier on each AI car's base turn rate.
        stuck_threshold_range: Inclusive tick range a car's stuck threshold
            is drawn from.
    """

    ai_max_speed_kmh: float
    turn_fraction: float
    stuck_threshold_range: tuple[float, float]

    @property
    def ai_max_speed(self) -> float:
        """AI speed cap in pixels per tick."""
        return self.ai_max_speed_kmh / KMH_PER_PIXEL_TICK


DIFFICULTY_PROFILES: dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(
        ai_max_speed_kmh=10.0, turn_fraction=0.8, stuck_threshold_range=(600.0, 900.0)
    ),
    Difficulty.HARD: DifficultyProfile(
        ai_max_speed_kmh=15.0, turn_fraction=1.0, stuck_threshold_range=(120.0, 180.0)
    ),
}


@dataclass
class RaceConfig:
    """Race settings.

    Args:
        laps: Laps needed to finish (>= 1).
        total_cars: Cars on the grid including the player (>= 1).
        difficulty: AI difficulty tier.
        tick_rate: Simulation ticks per simulated second.
        off_track_timeout_s: Seconds off-track before a car is returned to
            its previous checkpoint.
        seed: Seed for the race's random source; None for nondeterministic.
    """

    laps: int = 3
    total_cars: int = 4
    difficulty: Difficulty = Difficulty.EASY
    tick_rate: float = 60.0
    off_track_timeout_s: float = 0.5
    seed: int | None = None

    def __post_init__(self) -> None:
        self.difficulty = Difficulty(self.difficulty)
        if self.laps < 1:
            raise ValueError("laps must be >= 1")
        if self.total_cars < 1:
            raise ValueError("total_cars must be >= 1")
        if self.tick_rate <= 0:
            raise ValueError("tick_rate must be > 0")
        if self.off_track_timeout_s <= 0:
            raise ValueError("off_track_timeout_s must be > 0")

    @property
    def profile(self) -> DifficultyProfile:
        return DIFFICULTY_PROFILES[self.difficulty]

    @property
    def dt(self) -> float:
        """Simulated seconds per tick."""
        return 1.0 / self.tick_rate


@dataclass
class Car:
    """One car on the grid.  Player and AI cars share this record.

    AI-only fields keep their defaults on the player car.
    """

    x: float
    y: float
    name: str = "Player"
    is_ai: bool = False
    color: str = "#ffff00"
    angle: float = 0.0
    speed: float = 0.0
    width: float = 30.0
    height: float = 50.0

    max_speed: float = 8.0
    acceleration: float = 0.2
    deceleration: float = 0.1
    turn_rate: float = 0.05

    boost: float = 100.0
    max_boost: float = 100.0
    boost_drain: float = 1.0
    boost_recharge: float = 0.5
    boost_bonus: float = 0.5

    controls: ControlState = field(default_factory=ControlState)

    checkpoint_index: int = 0
    """Index of the checkpoint this car is heading for."""

    lap: int = 1
    finished: bool = False
    finish_order: int = 0
    """1 for the first car to finish, 2 for the next, …; 0 while racing."""

    off_track_time: float = 0.0

    behavior: Behavior = Behavior.AGGRESSIVE
    mode: AIMode = AIMode.SEEKING
    last_position: Point = Point(0.0, 0.0)
    stuck_timer: int = 0
    stuck_attempts: int = 0
    stuck_threshold: float = 120.0

    def __post_init__(self) -> None:
        if self.last_position == Point(0.0, 0.0):
            self.last_position = Point(self.x, self.y)

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def move_to(self, p: Point) -> None:
        self.x = p.x
        self.y = p.y

    def corners(self) -> list[Point]:
        """The four corners of the car's axis-aligned bounding box."""
        hw, hh = self.width / 2, self.height / 2
        return [
            Point(self.x - hw, self.y - hh),
            Point(self.x + hw, self.y - hh),
            Point(self.x - hw, self.y + hh),
            Point(self.x + hw, self.y + hh),
        ]


@dataclass
class RaceState:
    """Everything one race needs, passed explicitly to each component.

    ``cars[0]`` is always the player; AI cars follow in creation order.
    """

    track: Track
    config: RaceConfig
    cars: list[Car]
    phase: RacePhase = RacePhase.MENU
    tick: int = 0
    ranking: list[Car] = field(default_factory=list)
    finishers: int = 0
    message: str = ""

    @property
    def player(self) -> Car:
        return self.cars[0]

    @property
    def ai_cars(self) -> list[Car]:
        return self.cars[1:]

    @property
    def checkpoints(self):
        return self.track.checkpoints

    @property
    def current_lap(self) -> int:
        return self.player.lap

    @property
    def current_checkpoint(self) -> int:
        return self.player.checkpoint_index

    @property
    def player_rank(self) -> int:
        """1-based position of the player in the latest ranking."""
        for i, car in enumerate(self.ranking):
            if car is self.player:
                return i + 1
        return 1
