"""Display names remembered from live lookups for use while offline."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass
class NameDirectory:
    """In-process cache of attendee and location display names."""

    attendees: dict[UUID, str] = field(default_factory=dict)
    locations: dict[UUID, str] = field(default_factory=dict)

    def remember_attendee(self, attendee_id: UUID, name: str) -> None:
        self.attendees[attendee_id] = name

    def remember_location(self, location_id: UUID, name: str) -> None:
        self.locations[location_id] = name

    def attendee_name(self, attendee_id: UUID) -> str | None:
        return self.attendees.get(attendee_id)

    def location_name(self, location_id: UUID | None) -> str | None:
        if location_id is None:
            return None
        return self.locations.get(location_id)
