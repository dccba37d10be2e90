"""Overlay rendering — data formatting for the race HUD."""

from __future__ import annotations

from dataclasses import dataclass

from topdown_racer.race.collision import is_car_on_track
from topdown_racer.race.models import RaceState
from topdown_racer.race.progress import ordinal

SPEED_DISPLAY_FACTOR = 10
"""HUD km/h = speed in px/tick × 10."""

OFF_TRACK_WARNING_S = 2.0


@dataclass
class HudData:
    """Snapshot of data to display on the HUD.

    Parameters
    ----------
    lap:
        Player's current lap (1-based).
    total_laps:
        Laps in the race.
    rank:
        Player's 1-based race position.
    speed:
        Player speed in px/tick (negative when reversing).
    boost:
        Remaining boost.
    max_boost:
        Boost capacity.
    checkpoint:
        Index of the player's next checkpoint.
    checkpoint_count:
        Checkpoints on the track.
    on_track:
        Whether the player car is fully on the track.
    off_track_s:
        Seconds the player has currently spent off-track.
    off_track_timeout_s:
        Seconds before an off-track car is returned to its checkpoint.
    """

    lap: int
    total_laps: int
    rank: int
    speed: float
    boost: float
    max_boost: float
    checkpoint: int
    checkpoint_count: int
    on_track: bool = True
    off_track_s: float = 0.0
    off_track_timeout_s: float = 0.5

    @classmethod
    def from_state(cls, state: RaceState) -> HudData:
        player = state.player
        on_track = is_car_on_track(player, state.track)
        return cls(
            lap=min(player.lap, state.config.laps),
            total_laps=state.config.laps,
            rank=state.player_rank,
            speed=player.speed,
            boost=player.boost,
            max_boost=player.max_boost,
            checkpoint=player.checkpoint_index,
            checkpoint_count=len(state.checkpoints),
            on_track=on_track,
            off_track_s=player.off_track_time,
            off_track_timeout_s=state.config.off_track_timeout_s,
        )


class HudRenderer:
    """Formats :class:`HudData` for display.

    All values are pure data transformations with no side effects.
    """

    def format_speed(self, speed: float) -> str:
        """
        Examples
        --------
        >>> HudRenderer().format_speed(7.96)
        '80 km/h'
        """
        return f"{round(speed * SPEED_DISPLAY_FACTOR)} km/h"

    def off_track_warning(self, data: HudData) -> str | None:
        """Countdown text while off-track, or None when on-track."""
        if data.on_track:
            return None
        left = max(0.0, data.off_track_timeout_s - data.off_track_s)
        if left > OFF_TRACK_WARNING_S:
            return None
        return f"OFF TRACK! {left:.1f}s"

    def render(self, data: HudData) -> dict:
        """Return a display-ready dict from a :class:`HudData` snapshot.

        Returns
        -------
        dict with keys:
            ``lap``           – ``'2/3'``
            ``position``      – ``'1st'``
            ``speed``         – ``'80 km/h'``
            ``boost_pct``     – integer percentage 0–100
            ``checkpoint``    – ``'3/6'``
            ``lap_progress``  – integer percentage 0–100
            ``warning``       – off-track countdown text or None
        """
        progress = (
            round(data.checkpoint / data.checkpoint_count * 100) if data.checkpoint_count else 0
        )
        boost_pct = round(data.boost / data.max_boost * 100) if data.max_boost else 0
        return {
            "lap": f"{data.lap}/{data.total_laps}",
            "position": ordinal(data.rank),
            "speed": self.format_speed(data.speed),
            "boost_pct": boost_pct,
            "checkpoint": f"{data.checkpoint}/{data.checkpoint_count}",
            "lap_progress": progress,
            "warning": self.off_track_warning(data),
        }
