"""Attendee resolution with walk-in provisioning."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from scan_engine.domain.attendees import Attendee, EventAttendee, ResolvedAttendee

logger = logging.getLogger(__name__)


class AttendeeRepository(Protocol):
    """Persistence interface for attendee profiles and event links."""

    async def get_event_attendee(
        self, event_id: UUID, attendee_id: UUID
    ) -> EventAttendee | None:
        """Return the event link with its profile, if present."""

    async def get_attendee(self, attendee_id: UUID) -> Attendee | None:
        """Return a global attendee profile, if present."""

    async def create_attendee(self, attendee: Attendee) -> Attendee:
        """Create the profile unless it exists, and return the stored row."""

    async def link_attendee_to_event(self, event_id: UUID, attendee_id: UUID) -> None:
        """Link an attendee to an event unless already linked."""


def walk_in_name(attendee_id: UUID) -> str:
    """Return the display name given to unknown badges."""
    return f"Walk-in ({str(attendee_id)[:8]})"


@dataclass
class AttendeeResolver:
    """Resolves who a badge belongs to, provisioning unknown badges."""

    repository: AttendeeRepository

    async def resolve(self, attendee_id: UUID, event_id: UUID) -> ResolvedAttendee:
        """Return the attendee identity, creating records when missing."""
        linked = await self.repository.get_event_attendee(event_id, attendee_id)
        if linked is not None:
            return ResolvedAttendee(
                id=attendee_id,
                name=linked.attendee.name,
                photo_url=linked.attendee.photo_url,
                was_auto_created=False,
            )

        profile = await self.repository.get_attendee(attendee_id)
        if profile is None:
            logger.info(
                "Unknown badge, creating walk-in attendee",
                extra={"attendee_id": str(attendee_id)},
            )
            profile = await self.repository.create_attendee(
                Attendee(id=attendee_id, name=walk_in_name(attendee_id))
            )
        await self.repository.link_attendee_to_event(event_id, attendee_id)
        return ResolvedAttendee(
            id=attendee_id,
            name=profile.name,
            photo_url=profile.photo_url,
            was_auto_created=True,
        )
