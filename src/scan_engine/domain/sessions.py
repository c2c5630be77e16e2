"""Domain models for event sessions."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class SessionKind(StrEnum):
    """Kind of session on the event agenda."""

    MEETING = "meeting"
    PRESENTATION = "presentation"
    NETWORKING = "networking"
    BREAK = "break"


@dataclass(frozen=True)
class Session:
    """Represents a scheduled session of an event."""

    id: UUID
    event_id: UUID
    name: str
    start_time: datetime
    end_time: datetime
    kind: SessionKind = SessionKind.MEETING
    location: str | None = None
    capacity_by_location: dict[UUID, int] = field(default_factory=dict)
    requires_pre_assignment: bool = False

    def overlaps(self, other: "Session") -> bool:
        """Return true when the two sessions share any instant, bounds included."""
        return other.end_time >= self.start_time and other.start_time <= self.end_time


class WindowStatus(StrEnum):
    """Position of a timestamp relative to the agenda."""

    ACTIVE = "active"
    STARTING_SOON = "starting_soon"
    ENDING_SOON = "ending_soon"
    NONE = "none"


@dataclass(frozen=True)
class SessionWindow:
    """Operational session resolved for a point in time."""

    session: Session | None
    status: WindowStatus
    message: str
