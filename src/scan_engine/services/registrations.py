"""Session registration lookup and schedule conflict detection."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from scan_engine.domain.registrations import (
    Registration,
    RegistrationStatus,
    SessionRegistration,
)
from scan_engine.domain.sessions import Session

logger = logging.getLogger(__name__)


class RegistrationRepository(Protocol):
    """Persistence interface for session registrations."""

    async def get_registration(
        self, session_id: UUID, attendee_id: UUID
    ) -> Registration | None:
        """Return the registration for a (session, attendee) pair, if present."""

    async def list_registrations_excluding_session(
        self, attendee_id: UUID, excluded_session_id: UUID
    ) -> list[SessionRegistration]:
        """Return the attendee's other registrations with their session bounds."""

    async def create_registration(  # noqa: PLR0913
        self,
        event_id: UUID,
        session_id: UUID,
        attendee_id: UUID,
        status: RegistrationStatus,
        registration_time: datetime,
    ) -> Registration:
        """Upsert a registration keyed on (session, attendee) and return it."""

    async def link_scan_to_registration(
        self, attendee_id: UUID, session_id: UUID, scan_id: UUID
    ) -> None:
        """Mark the registration attended and store the scan back-reference."""


@dataclass
class RegistrationLookup:
    """Resolves and records an attendee's registration for a session."""

    repository: RegistrationRepository

    async def find(self, session_id: UUID, attendee_id: UUID) -> Registration | None:
        """Return the attendee's registration for the session, if any."""
        return await self.repository.get_registration(session_id, attendee_id)

    async def register_walk_in(
        self,
        event_id: UUID,
        session_id: UUID,
        attendee_id: UUID,
        scanned_at: datetime,
    ) -> Registration:
        """Record attendance of an attendee who was not registered.

        The expected location stays unset; only organizers assign booths.
        """
        registration = await self.repository.create_registration(
            event_id=event_id,
            session_id=session_id,
            attendee_id=attendee_id,
            status=RegistrationStatus.ATTENDED,
            registration_time=scanned_at,
        )
        logger.info(
            "Auto-registered walk-in",
            extra={"session_id": str(session_id), "attendee_id": str(attendee_id)},
        )
        return registration


@dataclass
class ConflictDetector:
    """Finds other registered sessions overlapping the one being scanned."""

    repository: RegistrationRepository

    async def find_conflicts(
        self, attendee_id: UUID, session: Session
    ) -> list[Session]:
        """Return overlapping sessions the attendee is registered for."""
        others = await self.repository.list_registrations_excluding_session(
            attendee_id, session.id
        )
        return [
            other.session for other in others if session.overlaps(other.session)
        ]
