"""Supabase-backed session registration repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import AsyncClient

from scan_engine.adapters.errors import StorageError
from scan_engine.adapters.supabase_session_repository import parse_session_row
from scan_engine.domain.registrations import (
    Registration,
    RegistrationStatus,
    SessionRegistration,
)
from scan_engine.services.registrations import RegistrationRepository

_REGISTRATION_COLUMNS = (
    "id, event_id, session_id, attendee_id, expected_booth_id, status, "
    "registration_time, actual_scan_id"
)


@dataclass
class SupabaseRegistrationRepository(RegistrationRepository):
    """Supabase implementation for session registrations."""

    client: AsyncClient

    async def get_registration(
        self, session_id: UUID, attendee_id: UUID
    ) -> Registration | None:
        """Return the registration with its expected booth name, if present."""
        response = await (
            self.client.table("session_registrations")
            .select(
                f"{_REGISTRATION_COLUMNS}, booths:expected_booth_id (company_name)"
            )
            .eq("session_id", str(session_id))
            .eq("attendee_id", str(attendee_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    async def list_registrations_excluding_session(
        self, attendee_id: UUID, excluded_session_id: UUID
    ) -> list[SessionRegistration]:
        """Return the attendee's other registrations joined with their session."""
        response = await (
            self.client.table("session_registrations")
            .select(
                f"{_REGISTRATION_COLUMNS}, sessions!inner "
                "(id, event_id, name, start_time, end_time, session_type, "
                "location, config)"
            )
            .eq("attendee_id", str(attendee_id))
            .neq("session_id", str(excluded_session_id))
            .execute()
        )
        registrations = []
        for row in response.data or []:
            session_row = row.get("sessions")
            if not isinstance(session_row, dict):
                continue
            session = parse_session_row(session_row)
            if session is None:
                continue
            registrations.append(
                SessionRegistration(registration=_parse_row(row), session=session)
            )
        return registrations

    async def create_registration(  # noqa: PLR0913
        self,
        event_id: UUID,
        session_id: UUID,
        attendee_id: UUID,
        status: RegistrationStatus,
        registration_time: datetime,
    ) -> Registration:
        """Upsert a registration keyed on (session_id, attendee_id)."""
        response = await (
            self.client.table("session_registrations")
            .upsert(
                {
                    "event_id": str(event_id),
                    "session_id": str(session_id),
                    "attendee_id": str(attendee_id),
                    "status": status.value,
                    "registration_time": registration_time.isoformat(),
                },
                on_conflict="session_id,attendee_id",
            )
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to create registration")
        return _parse_row(response.data[0])

    async def link_scan_to_registration(
        self, attendee_id: UUID, session_id: UUID, scan_id: UUID
    ) -> None:
        """Mark the registration attended and store the scan id."""
        await (
            self.client.table("session_registrations")
            .update(
                {
                    "status": RegistrationStatus.ATTENDED.value,
                    "actual_scan_id": str(scan_id),
                }
            )
            .eq("session_id", str(session_id))
            .eq("attendee_id", str(attendee_id))
            .execute()
        )


def _parse_row(row: dict[str, object]) -> Registration:
    booth = row.get("booths")
    registration_time_raw = row.get("registration_time")
    return Registration(
        id=UUID(str(row["id"])),
        event_id=UUID(str(row["event_id"])),
        session_id=UUID(str(row["session_id"])),
        attendee_id=UUID(str(row["attendee_id"])),
        status=RegistrationStatus(row.get("status") or RegistrationStatus.REGISTERED),
        expected_location_id=(
            UUID(str(row["expected_booth_id"])) if row.get("expected_booth_id") else None
        ),
        expected_location_name=(
            booth.get("company_name") if isinstance(booth, dict) else None
        ),
        registration_time=(
            datetime.fromisoformat(registration_time_raw)
            if isinstance(registration_time_raw, str) and registration_time_raw
            else None
        ),
        actual_scan_id=(
            UUID(str(row["actual_scan_id"])) if row.get("actual_scan_id") else None
        ),
    )
