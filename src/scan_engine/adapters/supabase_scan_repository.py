"""Supabase-backed scan record repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import AsyncClient

from scan_engine.adapters.errors import StorageError
from scan_engine.domain.scans import (
    LocationKey,
    NewScan,
    ScanMode,
    ScanRecord,
    ScanStatus,
    ScanType,
)
from scan_engine.services.persistence import ScanRepository

_KEY_COLUMNS = {
    ScanMode.LOCATION: "booth_id",
    ScanMode.SESSION: "session_id",
}


@dataclass
class SupabaseScanRepository(ScanRepository):
    """Supabase implementation for scan records."""

    client: AsyncClient

    async def insert_scan(self, scan: NewScan) -> ScanRecord:
        """Insert a scan row and return it."""
        response = await (
            self.client.table("scan_records")
            .insert(
                {
                    "event_id": str(scan.event_id),
                    "attendee_id": str(scan.attendee_id),
                    "attendee_name": scan.attendee_name,
                    "booth_id": _str_or_none(scan.location_id),
                    "booth_name": scan.location_name,
                    "session_id": _str_or_none(scan.session_id),
                    "notes": scan.notes,
                    "device_id": scan.device_id,
                    "scan_type": scan.scan_type.value,
                    "scan_status": scan.scan_status.value,
                    "timestamp": scan.timestamp.isoformat(),
                    "expected_booth_id": _str_or_none(scan.expected_location_id),
                }
            )
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to save scan record")
        return _parse_row(response.data[0])

    async def find_recent_scan(
        self,
        attendee_id: UUID,
        location_key: LocationKey,
        since: datetime,
        until: datetime,
    ) -> bool:
        """Return true if a scan exists for the attendee and key in the range."""
        response = await (
            self.client.table("scan_records")
            .select("id")
            .eq("attendee_id", str(attendee_id))
            .eq(_KEY_COLUMNS[location_key.mode], str(location_key.id))
            .gte("timestamp", since.isoformat())
            .lte("timestamp", until.isoformat())
            .limit(1)
            .execute()
        )
        return bool(response.data)

    async def list_scans_for_event(
        self, event_id: UUID, limit: int
    ) -> list[ScanRecord]:
        """Return the most recent scans of an event."""
        response = await (
            self.client.table("scan_records")
            .select("*")
            .eq("event_id", str(event_id))
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _str_or_none(value: UUID | None) -> str | None:
    return str(value) if value else None


def _uuid_or_none(value: object) -> UUID | None:
    return UUID(str(value)) if value else None


def _parse_row(row: dict[str, object]) -> ScanRecord:
    scan_status = row.get("scan_status")
    return ScanRecord(
        id=UUID(str(row["id"])),
        event_id=UUID(str(row["event_id"])),
        attendee_id=UUID(str(row["attendee_id"])),
        attendee_name=row.get("attendee_name"),
        timestamp=datetime.fromisoformat(str(row["timestamp"])),
        scan_type=ScanType(row.get("scan_type") or ScanType.REGULAR),
        scan_status=ScanStatus(scan_status) if scan_status else None,
        location_id=_uuid_or_none(row.get("booth_id")),
        location_name=row.get("booth_name"),
        session_id=_uuid_or_none(row.get("session_id")),
        notes=row.get("notes"),
        device_id=row.get("device_id"),
        expected_location_id=_uuid_or_none(row.get("expected_booth_id")),
    )
