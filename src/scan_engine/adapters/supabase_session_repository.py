"""Supabase-backed session repository."""

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import AsyncClient

from scan_engine.domain.sessions import Session, SessionKind
from scan_engine.services.sessions import SessionRepository

logger = logging.getLogger(__name__)

_SESSION_COLUMNS = (
    "id, event_id, name, start_time, end_time, session_type, location, config, "
    "session_booth_capacities (booth_id, capacity)"
)


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for event sessions."""

    client: AsyncClient

    async def list_sessions_for_event(self, event_id: UUID) -> list[Session]:
        """Return all valid sessions of an event ordered by start time."""
        response = await (
            self.client.table("sessions")
            .select(_SESSION_COLUMNS)
            .eq("event_id", str(event_id))
            .order("start_time", desc=False)
            .execute()
        )
        sessions = []
        for row in response.data or []:
            session = parse_session_row(row)
            if session is not None:
                sessions.append(session)
        return sessions

    async def get_session(self, session_id: UUID) -> Session | None:
        """Return a session by id, if present."""
        response = await (
            self.client.table("sessions")
            .select(_SESSION_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_session_row(response.data[0])


def parse_session_row(row: dict[str, object]) -> Session | None:
    """Map a sessions row to a Session, skipping rows with end <= start."""
    start_time = datetime.fromisoformat(str(row["start_time"]))
    end_time = datetime.fromisoformat(str(row["end_time"]))
    if end_time <= start_time:
        logger.warning(
            "Skipping session with invalid time range",
            extra={"session_id": row.get("id")},
        )
        return None
    config = row.get("config")
    return Session(
        id=UUID(str(row["id"])),
        event_id=UUID(str(row["event_id"])),
        name=str(row["name"]),
        start_time=start_time,
        end_time=end_time,
        kind=SessionKind(row.get("session_type") or SessionKind.MEETING),
        location=row.get("location"),
        capacity_by_location=_parse_capacities(row.get("session_booth_capacities")),
        requires_pre_assignment=bool(
            isinstance(config, dict) and config.get("requiresPreAssignment")
        ),
    )


def _parse_capacities(raw: object) -> dict[UUID, int]:
    if not isinstance(raw, list):
        return {}
    return {
        UUID(str(item["booth_id"])): int(item["capacity"])
        for item in raw
        if isinstance(item, dict)
    }
