"""Race progress: checkpoint capture, lap counting, ranking and finish."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from topdown_racer.race.models import Car, RacePhase, RaceState
from topdown_racer.track.geometry import distance
from topdown_racer.track.models import Checkpoint

_logger = logging.getLogger(__name__)

AI_CAPTURE_FACTOR = 1.5
"""AI cars capture a checkpoint within ``radius × 1.5``."""


def ordinal_suffix(n: int) -> str:
    """Return ``'st'``, ``'nd'``, ``'rd'`` or ``'th'`` for *n* (11–13 → ``'th'``)."""
    if n % 10 == 1 and n % 100 != 11:
        return "st"
    if n % 10 == 2 and n % 100 != 12:
        return "nd"
    if n % 10 == 3 and n % 100 != 13:
        return "rd"
    return "th"


def ordinal(n: int) -> str:
    return f"{n}{ordinal_suffix(n)}"


def repair_checkpoint_index(car: Car, n_checkpoints: int) -> bool:
    """Reset an out-of-range checkpoint pointer to 0.  Returns True if repaired."""
    if 0 <= car.checkpoint_index < n_checkpoints:
        return False
    _logger.warning(
        "%s checkpoint %d not found, resetting to 0", car.name, car.checkpoint_index
    )
    car.checkpoint_index = 0
    return True


def mark_finished(car: Car, state: RaceState) -> None:
    """Freeze *car* as finished and record its finishing order."""
    if car.finished:
        return
    state.finishers += 1
    car.finished = True
    car.finish_order = state.finishers
    car.speed = 0.0
    _logger.info("%s finished in position %d", car.name, car.finish_order)


def advance_checkpoint(car: Car, state: RaceState) -> bool:
    """Move *car* on to its next checkpoint, counting a lap on wrap-around.

    When the wrap completes the configured number of laps the car is
    finished.  Returns True if a lap was completed.
    """
    n = len(state.checkpoints)
    if n == 0:
        return False
    car.checkpoint_index = (car.checkpoint_index + 1) % n
    if car.checkpoint_index != 0:
        return False
    car.lap += 1
    if car.lap > state.config.laps:
        mark_finished(car, state)
    return True


def within_capture(car: Car, checkpoint: Checkpoint, factor: float = 1.0) -> bool:
    return distance(car.position, checkpoint.center) < checkpoint.radius * factor


def check_player_checkpoint(state: RaceState) -> bool:
    """Capture the player's target checkpoint if the player is inside it.

    Finishing the last lap switches the race to :attr:`RacePhase.FINISHED`.
    Returns True if a checkpoint was captured.
    """
    player = state.player
    checkpoints = state.checkpoints
    if not checkpoints or player.finished:
        return False
    repair_checkpoint_index(player, len(checkpoints))

    if not within_capture(player, checkpoints[player.checkpoint_index]):
        return False

    advance_checkpoint(player, state)
    if player.finished:
        finish_race(state)
    return True


def progress_score(car: Car, n_checkpoints: int, total_laps: int) -> int:
    """``(lap - 1) × n_checkpoints + checkpoint_index``; finished cars get the maximum."""
    if car.finished:
        return total_laps * n_checkpoints
    return (car.lap - 1) * n_checkpoints + car.checkpoint_index


def compute_ranking(cars: Sequence[Car], n_checkpoints: int, total_laps: int) -> list[Car]:
    """Order *cars* from leader to last.

    Stable descending sort on :func:`progress_score`, so equal scores keep
    the iteration order of *cars*; finished cars are ordered among
    themselves by who finished first.
    """
    def key(car: Car) -> tuple[int, int]:
        score = progress_score(car, n_checkpoints, total_laps)
        return (-score, car.finish_order if car.finished else 0)

    return sorted(cars, key=key)


def update_ranking(state: RaceState) -> int:
    """Recompute ``state.ranking`` and return the player's 1-based rank."""
    state.ranking = compute_ranking(state.cars, len(state.checkpoints), state.config.laps)
    return state.player_rank


def finish_race(state: RaceState) -> None:
    """Switch to the finished phase and compose the result message."""
    rank = update_ranking(state)
    state.phase = RacePhase.FINISHED
    title = "Victory!" if rank == 1 else "Race Finished"
    state.message = f"{title} You finished in {ordinal(rank)} place!"
    _logger.info("Race finished after %d ticks: player %s", state.tick, ordinal(rank))
