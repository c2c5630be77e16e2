"""Supabase-backed attendee repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import AsyncClient

from scan_engine.adapters.errors import StorageError
from scan_engine.domain.attendees import Attendee, EventAttendee
from scan_engine.services.attendees import AttendeeRepository

_ATTENDEE_COLUMNS = "id, name, email, organization, is_vendor, avatar_url"


@dataclass
class SupabaseAttendeeRepository(AttendeeRepository):
    """Supabase implementation for attendee profiles and event links."""

    client: AsyncClient

    async def get_event_attendee(
        self, event_id: UUID, attendee_id: UUID
    ) -> EventAttendee | None:
        """Return the event link joined with the attendee profile."""
        response = await (
            self.client.table("event_attendees")
            .select(f"event_id, check_in_time, attendees!inner ({_ATTENDEE_COLUMNS})")
            .eq("event_id", str(event_id))
            .eq("attendee_id", str(attendee_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        profile = row.get("attendees")
        if not isinstance(profile, dict):
            return None
        check_in_raw = row.get("check_in_time")
        return EventAttendee(
            event_id=UUID(row["event_id"]),
            attendee=_parse_attendee(profile),
            check_in_time=(
                datetime.fromisoformat(check_in_raw)
                if isinstance(check_in_raw, str) and check_in_raw
                else None
            ),
        )

    async def get_attendee(self, attendee_id: UUID) -> Attendee | None:
        """Return a global attendee profile, if present."""
        response = await (
            self.client.table("attendees")
            .select(_ATTENDEE_COLUMNS)
            .eq("id", str(attendee_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_attendee(response.data[0])

    async def create_attendee(self, attendee: Attendee) -> Attendee:
        """Insert the profile, keeping an existing row with the same id."""
        response = await (
            self.client.table("attendees")
            .upsert(
                {
                    "id": str(attendee.id),
                    "name": attendee.name,
                    "email": attendee.email,
                    "organization": attendee.organization,
                    "is_vendor": attendee.is_vendor,
                },
                on_conflict="id",
                ignore_duplicates=True,
            )
            .execute()
        )
        if response.data:
            return _parse_attendee(response.data[0])
        # Another device created the profile first.
        existing = await self.get_attendee(attendee.id)
        if existing is None:
            raise StorageError("Failed to create attendee in Supabase")
        return existing

    async def link_attendee_to_event(self, event_id: UUID, attendee_id: UUID) -> None:
        """Create the event link unless it already exists."""
        await (
            self.client.table("event_attendees")
            .upsert(
                {"event_id": str(event_id), "attendee_id": str(attendee_id)},
                on_conflict="event_id,attendee_id",
                ignore_duplicates=True,
            )
            .execute()
        )


def _parse_attendee(row: dict[str, object]) -> Attendee:
    return Attendee(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        email=str(row.get("email") or ""),
        organization=str(row.get("organization") or ""),
        is_vendor=bool(row.get("is_vendor", False)),
        photo_url=row.get("avatar_url") or None,
    )
