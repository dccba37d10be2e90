"""FastAPI Web application — saved tracks and headless races."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.responses import RedirectResponse

from topdown_racer import __version__
from topdown_racer.track.models import Point
from topdown_racer.web.schemas import (
    HealthResponse,
    ProbeRequest,
    ProbeResponse,
    RaceRequest,
    RaceResponse,
    TrackCreated,
    TrackDocument,
    TrackSummary,
    TracksResponse,
)
from topdown_racer.web.service import RaceService, TrackNotFoundError

load_dotenv()  # loads .env from project root; must run before env vars are consumed

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(title="Top-down Racer", version=__version__)

_DEFAULT_DB = os.environ.get("TOPDOWN_RACER_DB", "tracks.db")


def _service(db_path: str | None = None) -> RaceService:
    return RaceService(db_path or _DEFAULT_DB)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/")
def index():
    return RedirectResponse(url="/docs")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


@app.post("/api/tracks", response_model=TrackCreated, status_code=201)
def save_track(doc: TrackDocument, db: str | None = None) -> TrackCreated:
    """Validate and store an editor track document."""
    try:
        track_id, track = _service(db).save_track(doc)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return TrackCreated(track_id=track_id, name=doc.name, checkpoint_count=len(track.checkpoints))


@app.get("/api/tracks", response_model=TracksResponse)
def list_tracks(db: str | None = None) -> TracksResponse:
    """Return saved tracks, newest first."""
    rows = _service(db).list_tracks()
    return TracksResponse(
        tracks=[
            TrackSummary(
                id=r["id"],
                name=r["name"],
                description=r["description"],
                created_at=r["created_at"],
                segment_count=r["segment_count"] or 0,
                checkpoint_count=r["checkpoint_count"] or 0,
            )
            for r in rows
        ]
    )


@app.get("/api/tracks/{track_id}")
def get_track(track_id: int, db: str | None = None) -> dict:
    """Return the stored editor JSON for one track."""
    try:
        return _service(db).get_track_document(track_id)
    except TrackNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.delete("/api/tracks/{track_id}", status_code=204)
def delete_track(track_id: int, db: str | None = None) -> None:
    try:
        _service(db).delete_track(track_id)
    except TrackNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.post("/api/tracks/{track_id}/probe", response_model=ProbeResponse)
def probe_track(track_id: int, req: ProbeRequest, db: str | None = None) -> ProbeResponse:
    """Report whether each point lies on the saved track."""
    points = [Point(p.x, p.y) for p in req.points]
    try:
        return ProbeResponse(on_track=_service(db).probe(track_id, points))
    except TrackNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.post("/api/race", response_model=RaceResponse)
def run_race(req: RaceRequest, db: str | None = None) -> RaceResponse:
    """Run a headless race with the player on autopilot."""
    try:
        return _service(db).run_race(req)
    except TrackNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
