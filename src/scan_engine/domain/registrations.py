"""Domain models for session registrations."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from scan_engine.domain.sessions import Session


class RegistrationStatus(StrEnum):
    """Lifecycle of a session registration."""

    REGISTERED = "Registered"
    ATTENDED = "Attended"
    NO_SHOW = "No-Show"


@dataclass(frozen=True)
class Registration:
    """Links one attendee to one session."""

    id: UUID
    event_id: UUID
    session_id: UUID
    attendee_id: UUID
    status: RegistrationStatus
    expected_location_id: UUID | None = None
    expected_location_name: str | None = None
    registration_time: datetime | None = None
    actual_scan_id: UUID | None = None


@dataclass(frozen=True)
class SessionRegistration:
    """Registration joined with the bounds of its session."""

    registration: Registration
    session: Session
