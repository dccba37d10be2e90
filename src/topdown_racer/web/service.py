"""RaceService — track storage and headless races for the Web API."""

from __future__ import annotations

import json

from topdown_racer.race.engine import RaceEngine
from topdown_racer.race.inputs import AutopilotInput
from topdown_racer.race.models import RaceConfig, RaceState
from topdown_racer.race.progress import ordinal
from topdown_racer.track.layout import Track
from topdown_racer.track.models import Point
from topdown_racer.track.storage import TrackStorage
from topdown_racer.web.schemas import CarResult, RaceRequest, RaceResponse, TrackDocument


class TrackNotFoundError(LookupError):
    """Raised when a track id has no saved row."""


class RaceService:
    """Wraps :class:`TrackStorage` and :class:`RaceEngine` for the endpoints.

    Every call opens and closes its own storage connection.

    Parameters
    ----------
    db_path:
        Path to the SQLite database.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    # ------------------------------------------------------------------
    # Tracks
    # ------------------------------------------------------------------

    def save_track(self, doc: TrackDocument) -> tuple[int, Track]:
        """Validate and persist *doc*.

        Raises
        ------
        ValueError
            If the document has no segments or describes an invalid track.
        """
        if not doc.track_points:
            raise ValueError("Track has no trackPoints. Draw something first.")
        track = Track.from_dict(doc.to_track_dict())
        storage = TrackStorage(self._db_path)
        try:
            track_id = storage.save_track(track, name=doc.name, description=doc.description)
        finally:
            storage.close()
        return track_id, track

    def list_tracks(self) -> list[dict]:
        storage = TrackStorage(self._db_path)
        try:
            return storage.list_tracks()
        finally:
            storage.close()

    def get_track_document(self, track_id: int) -> dict:
        """Return the stored editor JSON for *track_id*."""
        storage = TrackStorage(self._db_path)
        try:
            row = storage.get_track_record(track_id)
        finally:
            storage.close()
        if row is None:
            raise TrackNotFoundError(f"Track {track_id} not found")
        return json.loads(row["track_json"])

    def load_track(self, track_id: int) -> Track:
        return Track.from_dict(self.get_track_document(track_id))

    def delete_track(self, track_id: int) -> None:
        storage = TrackStorage(self._db_path)
        try:
            deleted = storage.delete_track(track_id)
        finally:
            storage.close()
        if not deleted:
            raise TrackNotFoundError(f"Track {track_id} not found")

    def probe(self, track_id: int, points: list[Point]) -> list[bool]:
        """On-track status of each of *points* on the saved track."""
        track = self.load_track(track_id)
        return [track.is_point_on_track(p) for p in points]

    # ------------------------------------------------------------------
    # Races
    # ------------------------------------------------------------------

    def run_race(self, req: RaceRequest) -> RaceResponse:
        """Run a headless race with the player on autopilot."""
        track = self.load_track(req.track_id) if req.track_id is not None else Track.default()
        config = RaceConfig(
            laps=req.laps,
            total_cars=req.total_cars,
            difficulty=req.difficulty,
            seed=req.seed,
        )
        engine = RaceEngine(track, config)
        state = engine.run(AutopilotInput(), max_ticks=req.max_ticks)
        return _race_response(state)


def _race_response(state: RaceState) -> RaceResponse:
    rank = state.player_rank
    return RaceResponse(
        phase=state.phase.value,
        ticks=state.tick,
        player_rank=rank,
        player_position=ordinal(rank),
        message=state.message,
        ranking=[
            CarResult(
                name=car.name,
                is_ai=car.is_ai,
                lap=car.lap,
                checkpoint=car.checkpoint_index,
                finished=car.finished,
                x=car.x,
                y=car.y,
            )
            for car in state.ranking
        ],
    )
