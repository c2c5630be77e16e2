"""Scan persistence and registration linking."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from scan_engine.domain.scans import NewScan, ScanRecord
from scan_engine.services.duplicates import RecentScanRepository
from scan_engine.services.registrations import RegistrationRepository

logger = logging.getLogger(__name__)


class ScanRepository(RecentScanRepository, Protocol):
    """Persistence interface for scan records."""

    async def insert_scan(self, scan: NewScan) -> ScanRecord:
        """Insert a scan record and return it."""

    async def list_scans_for_event(
        self, event_id: UUID, limit: int
    ) -> list[ScanRecord]:
        """Return the most recent scans of an event."""


@dataclass
class ScanRecorder:
    """Writes scan records and back-links them to registrations."""

    scan_repository: ScanRepository
    registration_repository: RegistrationRepository

    async def insert_scan(self, scan: NewScan) -> ScanRecord:
        """Persist a scan record. Errors propagate to the caller."""
        return await self.scan_repository.insert_scan(scan)

    async def link_scan_to_registration(
        self, attendee_id: UUID, session_id: UUID, scan_id: UUID
    ) -> bool:
        """Link a scan to its registration; failures are logged, not raised."""
        try:
            await self.registration_repository.link_scan_to_registration(
                attendee_id, session_id, scan_id
            )
        except Exception:
            logger.exception(
                "Failed to link scan to registration",
                extra={
                    "attendee_id": str(attendee_id),
                    "session_id": str(session_id),
                    "scan_id": str(scan_id),
                },
            )
            return False
        return True

    async def list_recent(self, event_id: UUID, limit: int = 50) -> list[ScanRecord]:
        """Return recent scans of an event, newest first."""
        return await self.scan_repository.list_scans_for_event(event_id, limit)
