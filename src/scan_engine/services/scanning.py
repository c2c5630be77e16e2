"""Entry point for badge scans, live or offline."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from scan_engine.domain.scans import (
    PendingScanPayload,
    ScanAttempt,
    ScanResult,
    ScanStatus,
)
from scan_engine.services.messages import message
from scan_engine.services.offline import (
    PendingScanStore,
    SyncCoordinator,
    SyncReport,
)
from scan_engine.services.scans import ScanClassifier

logger = logging.getLogger(__name__)


class Connectivity(Protocol):
    """Reports whether the backend is reachable."""

    @property
    def is_online(self) -> bool:
        """Return the last known connectivity state."""


@dataclass(frozen=True)
class SyncStatus:
    """Snapshot of the offline queue for status indicators."""

    is_online: bool
    is_syncing: bool
    pending_count: int


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class ScanService:
    """Routes scans to the classifier or to the offline queue."""

    event_id: UUID
    classifier: ScanClassifier
    pending_store: PendingScanStore
    sync_coordinator: SyncCoordinator
    connectivity: Connectivity
    clock: Callable[[], datetime] = _utc_now

    async def submit_scan(  # noqa: PLR0913
        self,
        attendee_id: UUID,
        location_id: UUID | None = None,
        session_id: UUID | None = None,
        device_id: str | None = None,
        notes: str | None = None,
    ) -> ScanResult:
        """Submit a badge scan timestamped now."""
        attempt = ScanAttempt(
            event_id=self.event_id,
            attendee_id=attendee_id,
            timestamp=self.clock(),
            location_id=location_id,
            session_id=session_id,
            device_id=device_id,
            notes=notes,
        )
        locale = self.classifier.locale
        if attempt.location_key is None:
            return ScanResult(
                success=False,
                status=ScanStatus.OUT_OF_SCHEDULE,
                message=message(locale, "missing_target"),
            )
        if self.connectivity.is_online:
            return await self.classifier.submit(attempt)
        return await self._capture_offline(attempt)

    async def sync_pending_scans(self) -> SyncReport | None:
        """Replay scans captured while offline."""
        return await self.sync_coordinator.sync_pending_scans()

    async def list_pending(self) -> list[PendingScanPayload]:
        """Return scans waiting to be synced."""
        return await asyncio.to_thread(self.pending_store.list_pending)

    async def status(self) -> SyncStatus:
        """Return the current queue status."""
        pending_count = await asyncio.to_thread(self.pending_store.count)
        return SyncStatus(
            is_online=self.connectivity.is_online,
            is_syncing=self.sync_coordinator.is_syncing,
            pending_count=pending_count,
        )

    async def _capture_offline(self, attempt: ScanAttempt) -> ScanResult:
        locale = self.classifier.locale
        directory = self.classifier.directory
        payload = PendingScanPayload.capture(
            local_id=str(uuid4()),
            attempt=attempt,
            attendee_name=directory.attendee_name(attempt.attendee_id),
            location_name=directory.location_name(attempt.location_id),
        )
        try:
            await asyncio.to_thread(self.pending_store.enqueue, payload)
        except Exception as exc:
            logger.exception(
                "Failed to queue offline scan",
                extra={"attendee_id": str(attempt.attendee_id)},
            )
            return ScanResult(
                success=False,
                status=ScanStatus.OUT_OF_SCHEDULE,
                message=message(locale, "save_failed", error=exc),
                was_offline=True,
            )
        logger.info(
            "Scan queued while offline",
            extra={"local_id": payload.local_id},
        )
        return ScanResult(
            success=True,
            status=ScanStatus.OUT_OF_SCHEDULE,
            message=message(
                locale,
                "offline_saved",
                name=payload.attendee_name or str(attempt.attendee_id)[:8],
            ),
            was_offline=True,
        )
