"""Shared fixtures for web tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from topdown_racer.web.app import app


@pytest.fixture
def client():
    """FastAPI test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(tmp_path) -> dict:
    """Query params pointing every request at a throwaway database."""
    return {"db": str(tmp_path / "web_tracks.db")}


def make_track_doc(name: str = "Square", **overrides) -> dict:
    """Editor JSON for a wide 1200 px square circuit."""
    corners = [(200, 1400), (200, 200), (1400, 200), (1400, 1400)]
    points = [{"x": x, "y": y} for x, y in corners]
    doc = {
        "name": name,
        "description": "four straights",
        "trackPoints": [
            {"type": "line", "start": points[i], "end": points[(i + 1) % 4]} for i in range(4)
        ],
        "checkpoints": [dict(p, radius=30) for p in points],
        "trackWidth": 400,
        "trackColor": "#00aa00",
    }
    doc.update(overrides)
    return doc
