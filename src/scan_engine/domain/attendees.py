"""Domain models for attendees."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Attendee:
    """Global attendee profile."""

    id: UUID
    name: str
    email: str = ""
    organization: str = ""
    is_vendor: bool = False
    photo_url: str | None = None


@dataclass(frozen=True)
class EventAttendee:
    """Attendee linked to a specific event."""

    event_id: UUID
    attendee: Attendee
    check_in_time: datetime | None = None


@dataclass(frozen=True)
class ResolvedAttendee:
    """Identity used to attribute a scan."""

    id: UUID
    name: str
    photo_url: str | None
    was_auto_created: bool
