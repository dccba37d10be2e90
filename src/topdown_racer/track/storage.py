"""TrackStorage — saved-track list on SQLite, plus JSON file helpers.

Schema design notes:
  - Each row keeps the full editor JSON document in ``track_json`` so a
    reload reproduces exactly what was saved; ``name`` and ``created_at`` are
    copied out only for listing.
  - No AUTOINCREMENT: ``INTEGER PRIMARY KEY`` is a rowid alias.
"""

from __future__ import annotations

import json
import logging
import re
import sqlite3
from pathlib import Path

from topdown_racer.track.layout import Track

_logger = logging.getLogger(__name__)

_DDL = """
PRAGMA journal_mode = WAL;
PRAGMA synchronous  = NORMAL;

CREATE TABLE IF NOT EXISTS tracks (
    id          INTEGER PRIMARY KEY,
    name        TEXT    NOT NULL,
    description TEXT    NOT NULL DEFAULT '',
    created_at  TEXT    NOT NULL
                DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now')),
    track_json  TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_tracks_name ON tracks (name);
"""

_INSERT_TRACK = """
INSERT INTO tracks (name, description, track_json)
VALUES (?, ?, ?)
"""

_LIST_TRACKS = """
SELECT id, name, description, created_at,
       json_array_length(track_json, '$.trackPoints') AS segment_count,
       json_array_length(track_json, '$.checkpoints') AS checkpoint_count
FROM   tracks
ORDER  BY created_at DESC, id DESC
"""


def slugify_track_name(name: str) -> str:
    """Derive a download file name: ``'My Track!'`` → ``'my_track_.json'``."""
    return re.sub(r"[^a-z0-9]", "_", (name or "My Track"), flags=re.IGNORECASE).lower() + ".json"


def parse_track_json(text: str) -> Track:
    """Parse an editor JSON document into a :class:`Track`.

    Raises:
        ValueError: If *text* is not valid JSON, is not an object, or
            describes an invalid track.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Malformed track JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("Track JSON must be an object")
    try:
        return Track.from_dict(data)
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Invalid track definition: {exc!r}") from exc


def load_track_file(path: str | Path) -> Track:
    """Read a track from an editor JSON file."""
    track = parse_track_json(Path(path).read_text(encoding="utf-8"))
    _logger.info("Loaded track %r from %s", track.name, path)
    return track


def save_track_file(path: str | Path, track: Track) -> Path:
    """Write *track* as pretty-printed editor JSON and return the path."""
    target = Path(path)
    target.write_text(json.dumps(track.to_dict(), indent=2), encoding="utf-8")
    return target


class TrackStorage:
    """Stores and retrieves track definitions from a SQLite database.

    Parameters
    ----------
    db_path:
        Path to the SQLite file.  Pass ``":memory:"`` for in-process testing.
    """

    def __init__(self, db_path: str = "tracks.db") -> None:
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        for stmt in _DDL.strip().split(";"):
            stmt = stmt.strip()
            if stmt:
                self._conn.execute(stmt)
        self._conn.commit()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def save_track(self, track: Track, name: str | None = None, description: str | None = None) -> int:
        """Persist *track* and return the new row id.

        *name* / *description* override the values carried by the track.
        """
        doc = track.to_dict()
        doc["name"] = name if name is not None else (track.name or "My Track")
        doc["description"] = description if description is not None else track.description
        cursor = self._conn.execute(
            _INSERT_TRACK, (doc["name"], doc["description"], json.dumps(doc))
        )
        self._conn.commit()
        _logger.info("Saved track %r as id=%s", doc["name"], cursor.lastrowid)
        return cursor.lastrowid  # type: ignore[return-value]

    def get_track_record(self, track_id: int) -> dict | None:
        """Return the raw row (including ``track_json``) or None if not found."""
        row = self._conn.execute(
            "SELECT * FROM tracks WHERE id = ?", (track_id,)
        ).fetchone()
        return dict(row) if row else None

    def get_track(self, track_id: int) -> Track | None:
        """Return the stored :class:`Track`, or None if *track_id* is unknown."""
        row = self.get_track_record(track_id)
        if row is None:
            return None
        return parse_track_json(row["track_json"])

    def list_tracks(self) -> list[dict]:
        """Return summaries of all saved tracks, newest first."""
        return [dict(r) for r in self._conn.execute(_LIST_TRACKS).fetchall()]

    def delete_track(self, track_id: int) -> bool:
        """Delete a saved track.  Returns True if a row was removed."""
        cursor = self._conn.execute("DELETE FROM tracks WHERE id = ?", (track_id,))
        self._conn.commit()
        return cursor.rowcount > 0

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
