"""Scan frequency guard."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol
from uuid import UUID

from scan_engine.domain.scans import LocationKey

SCAN_COOLDOWN = timedelta(minutes=5)


class RecentScanRepository(Protocol):
    """Query interface for recently persisted scans."""

    async def find_recent_scan(
        self,
        attendee_id: UUID,
        location_key: LocationKey,
        since: datetime,
        until: datetime,
    ) -> bool:
        """Return true if a scan exists for the attendee and key in the range."""


@dataclass
class DuplicateGuard:
    """Rejects repeated scans of the same badge at the same place."""

    repository: RecentScanRepository

    async def is_duplicate(
        self, attendee_id: UUID, location_key: LocationKey, attempted_at: datetime
    ) -> bool:
        """Return true if the attendee was scanned here within the cooldown."""
        return await self.repository.find_recent_scan(
            attendee_id,
            location_key,
            since=attempted_at - SCAN_COOLDOWN,
            until=attempted_at,
        )
