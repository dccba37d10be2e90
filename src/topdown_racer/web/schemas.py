"""Pydantic request/response schemas for the Web API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from topdown_racer.race.models import Difficulty


class PointModel(BaseModel):
    x: float
    y: float


class LineSegmentModel(BaseModel):
    type: Literal["line"]
    start: PointModel
    end: PointModel


class CurveSegmentModel(BaseModel):
    type: Literal["curve"]
    start: PointModel
    control: PointModel
    end: PointModel


class CheckpointModel(BaseModel):
    x: float
    y: float
    radius: float = Field(default=30.0, gt=0)


class TrackDocument(BaseModel):
    """Editor track JSON (camelCase keys on the wire)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = "My Track"
    description: str = ""
    track_points: list[LineSegmentModel | CurveSegmentModel] = Field(
        default_factory=list, alias="trackPoints"
    )
    checkpoints: list[CheckpointModel] = Field(default_factory=list)
    track_width: float = Field(default=40.0, gt=0, alias="trackWidth")
    track_color: str = Field(default="#0066cc", alias="trackColor")
    start_position: PointModel | None = Field(default=None, alias="startPosition")

    def to_track_dict(self) -> dict:
        """Dump in the editor layout accepted by ``Track.from_dict``."""
        return self.model_dump(by_alias=True, exclude_none=True)


class HealthResponse(BaseModel):
    status: str
    version: str


class TrackCreated(BaseModel):
    track_id: int
    name: str
    checkpoint_count: int


class TrackSummary(BaseModel):
    id: int
    name: str
    description: str
    created_at: str
    segment_count: int
    checkpoint_count: int


class TracksResponse(BaseModel):
    tracks: list[TrackSummary]


class ProbeRequest(BaseModel):
    points: list[PointModel]


class ProbeResponse(BaseModel):
    on_track: list[bool]


class RaceRequest(BaseModel):
    track_id: int | None = None
    laps: int = Field(default=3, ge=1)
    total_cars: int = Field(default=4, ge=1)
    difficulty: Difficulty = Difficulty.EASY
    seed: int | None = None
    max_ticks: int = Field(default=60 * 60 * 5, ge=1, le=60 * 60 * 30)


class CarResult(BaseModel):
    name: str
    is_ai: bool
    lap: int
    checkpoint: int
    finished: bool
    x: float
    y: float


class RaceResponse(BaseModel):
    phase: str
    ticks: int
    player_rank: int
    player_position: str
    message: str
    ranking: list[CarResult]
