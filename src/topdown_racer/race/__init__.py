"""Real-time race simulation: physics, collision, AI and progress."""

from topdown_racer.race.ai import AIController
from topdown_racer.race.engine import RaceEngine
from topdown_racer.race.inputs import AutopilotInput, NeutralInput, ScriptedInput
from topdown_racer.race.models import (
    AIMode,
    Behavior,
    Car,
    ControlState,
    Difficulty,
    DifficultyProfile,
    RaceConfig,
    RacePhase,
    RaceState,
)

__all__ = [
    "AIController",
    "AIMode",
    "AutopilotInput",
    "Behavior",
    "Car",
    "ControlState",
    "Difficulty",
    "DifficultyProfile",
    "NeutralInput",
    "RaceConfig",
    "RaceEngine",
    "RacePhase",
    "RaceState",
    "ScriptedInput",
]
