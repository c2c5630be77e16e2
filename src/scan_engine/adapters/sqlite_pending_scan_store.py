"""SQLite-backed queue of scans captured while offline."""

from __future__ import annotations

import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from uuid import UUID

from scan_engine.domain.scans import PendingScanPayload
from scan_engine.services.offline import PendingScanStore

_COLUMNS = (
    "local_id, event_id, attendee_id, timestamp, location_id, session_id, "
    "device_id, notes, attendee_name, location_name, sync_attempts, last_error"
)


class SqlitePendingScanStore(PendingScanStore):
    """Persist pending scans in a local SQLite file, in capture order."""

    def __init__(self, db_path: Path | str) -> None:
        path = Path(db_path)
        if str(db_path) != ":memory:":
            path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL;")
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS pending_scans (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                local_id TEXT NOT NULL UNIQUE,
                event_id TEXT NOT NULL,
                attendee_id TEXT NOT NULL,
                timestamp TEXT NOT NULL,
                location_id TEXT,
                session_id TEXT,
                device_id TEXT,
                notes TEXT,
                attendee_name TEXT,
                location_name TEXT,
                sync_attempts INTEGER NOT NULL DEFAULT 0,
                last_error TEXT
            )
            """
        )
        self._conn.commit()
        self._lock = threading.Lock()

    def enqueue(self, payload: PendingScanPayload) -> None:
        with self._lock:
            self._conn.execute(
                f"INSERT INTO pending_scans ({_COLUMNS}) "  # noqa: S608
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    payload.local_id,
                    str(payload.event_id),
                    str(payload.attendee_id),
                    payload.timestamp.isoformat(),
                    _str_or_none(payload.location_id),
                    _str_or_none(payload.session_id),
                    payload.device_id,
                    payload.notes,
                    payload.attendee_name,
                    payload.location_name,
                    payload.sync_attempts,
                    payload.last_error,
                ),
            )
            self._conn.commit()

    def list_pending(self) -> list[PendingScanPayload]:
        with self._lock:
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM pending_scans ORDER BY seq"  # noqa: S608
            ).fetchall()
        return [_parse_row(row) for row in rows]

    def remove(self, local_id: str) -> None:
        with self._lock:
            self._conn.execute(
                "DELETE FROM pending_scans WHERE local_id = ?", (local_id,)
            )
            self._conn.commit()

    def record_failure(self, local_id: str, error: str) -> None:
        with self._lock:
            self._conn.execute(
                "UPDATE pending_scans "
                "SET sync_attempts = sync_attempts + 1, last_error = ? "
                "WHERE local_id = ?",
                (error, local_id),
            )
            self._conn.commit()

    def count(self) -> int:
        with self._lock:
            row = self._conn.execute("SELECT COUNT(*) FROM pending_scans").fetchone()
        return int(row[0])

    def clear(self) -> None:
        with self._lock:
            self._conn.execute("DELETE FROM pending_scans")
            self._conn.commit()

    def close(self) -> None:
        with self._lock:
            self._conn.close()


def _str_or_none(value: UUID | None) -> str | None:
    return str(value) if value else None


def _parse_row(row: sqlite3.Row) -> PendingScanPayload:
    return PendingScanPayload(
        local_id=row["local_id"],
        event_id=UUID(row["event_id"]),
        attendee_id=UUID(row["attendee_id"]),
        timestamp=datetime.fromisoformat(row["timestamp"]),
        location_id=UUID(row["location_id"]) if row["location_id"] else None,
        session_id=UUID(row["session_id"]) if row["session_id"] else None,
        device_id=row["device_id"],
        notes=row["notes"],
        attendee_name=row["attendee_name"],
        location_name=row["location_name"],
        sync_attempts=row["sync_attempts"],
        last_error=row["last_error"],
    )
