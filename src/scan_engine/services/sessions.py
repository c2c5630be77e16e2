"""Session lookup and operational window resolution."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol
from uuid import UUID

from scan_engine.domain.sessions import Session, SessionWindow, WindowStatus

GRACE_PERIOD_MINUTES = 5


class SessionRepository(Protocol):
    """Persistence interface for event sessions."""

    async def list_sessions_for_event(self, event_id: UUID) -> list[Session]:
        """Return all sessions of an event."""

    async def get_session(self, session_id: UUID) -> Session | None:
        """Return a session by id, if present."""


def resolve_session_window(
    sessions: list[Session],
    now: datetime,
    grace_minutes: int = GRACE_PERIOD_MINUTES,
) -> SessionWindow:
    """Return the session that is operational at ``now``.

    A session is active when ``start <= now <= end``. Otherwise the earliest
    session starting within the grace period wins, then the session with the
    latest end that finished within the grace period.
    """
    if not sessions:
        return SessionWindow(
            session=None,
            status=WindowStatus.NONE,
            message="No sessions configured for the current event.",
        )

    grace = timedelta(minutes=grace_minutes)
    starting: Session | None = None
    ending: Session | None = None
    for session in sorted(sessions, key=lambda item: item.start_time):
        if session.start_time <= now <= session.end_time:
            return SessionWindow(
                session=session,
                status=WindowStatus.ACTIVE,
                message=f"Session '{session.name}' is currently active.",
            )
        if session.start_time - grace <= now < session.start_time:
            if starting is None or session.start_time < starting.start_time:
                starting = session
        if session.end_time < now <= session.end_time + grace:
            if ending is None or session.end_time > ending.end_time:
                ending = session

    if starting is not None:
        minutes = _rounded_minutes(starting.start_time - now)
        return SessionWindow(
            session=starting,
            status=WindowStatus.STARTING_SOON,
            message=f"Session '{starting.name}' starts in {_minutes_label(minutes)}.",
        )
    if ending is not None:
        minutes = _rounded_minutes(now - ending.end_time)
        return SessionWindow(
            session=ending,
            status=WindowStatus.ENDING_SOON,
            message=f"Session '{ending.name}' ended {_minutes_label(minutes)} ago.",
        )
    return SessionWindow(
        session=None,
        status=WindowStatus.NONE,
        message=(
            "No operational session for this event. "
            "Scans will be marked as 'Out of Schedule'."
        ),
    )


@dataclass
class SessionService:
    """Application service for session queries."""

    repository: SessionRepository
    grace_period_minutes: int = GRACE_PERIOD_MINUTES

    async def get_operational_window(
        self, event_id: UUID, at: datetime
    ) -> SessionWindow:
        """Resolve the operational session of an event at a point in time."""
        sessions = await self.repository.list_sessions_for_event(event_id)
        return resolve_session_window(sessions, at, self.grace_period_minutes)

    async def get_session(self, session_id: UUID) -> Session | None:
        """Return a session by id, if present."""
        return await self.repository.get_session(session_id)


def _rounded_minutes(delta: timedelta) -> int:
    return round(delta.total_seconds() / 60)


def _minutes_label(minutes: int) -> str:
    return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"
