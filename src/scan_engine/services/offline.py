"""Offline scan queue replay."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from scan_engine.domain.scans import PendingScanPayload
from scan_engine.services.scans import ScanClassifier

logger = logging.getLogger(__name__)


class PendingScanStore(Protocol):
    """Local persistent queue of scans captured while offline."""

    def enqueue(self, payload: PendingScanPayload) -> None:
        """Append a payload to the queue."""

    def list_pending(self) -> list[PendingScanPayload]:
        """Return queued payloads in capture order."""

    def remove(self, local_id: str) -> None:
        """Delete a payload from the queue."""

    def record_failure(self, local_id: str, error: str) -> None:
        """Count a failed replay and keep the last error."""

    def count(self) -> int:
        """Return the number of queued payloads."""

    def clear(self) -> None:
        """Delete every queued payload."""


@dataclass(frozen=True)
class SyncReport:
    """Counts of a single sync pass."""

    total: int
    synced: int
    rejected: int
    failed: int


@dataclass
class SyncCoordinator:
    """Replays queued scans through the classifier, one pass at a time."""

    store: PendingScanStore
    classifier: ScanClassifier
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    @property
    def is_syncing(self) -> bool:
        return self._lock.locked()

    async def sync_pending_scans(self) -> SyncReport | None:
        """Replay the queue in FIFO order.

        Returns None without doing anything when another pass is running;
        anything queued meanwhile is picked up by the next trigger.
        """
        if self._lock.locked():
            logger.info("Sync already in progress, skipping trigger")
            return None
        async with self._lock:
            return await self._sync_once()

    async def _sync_once(self) -> SyncReport:
        pending = await asyncio.to_thread(self.store.list_pending)
        if not pending:
            return SyncReport(total=0, synced=0, rejected=0, failed=0)

        logger.info("Syncing offline scans", extra={"count": len(pending)})
        synced = rejected = failed = 0
        for payload in pending:
            result = await self.classifier.submit(payload.to_attempt())
            if result.success:
                await asyncio.to_thread(self.store.remove, payload.local_id)
                synced += 1
            elif result.is_duplicate:
                # Rejections are final; a retry would be rejected again.
                await asyncio.to_thread(self.store.remove, payload.local_id)
                rejected += 1
            else:
                await asyncio.to_thread(
                    self.store.record_failure, payload.local_id, result.message
                )
                failed += 1
                logger.warning(
                    "Failed to sync offline scan",
                    extra={"local_id": payload.local_id, "error": result.message},
                )

        report = SyncReport(
            total=len(pending), synced=synced, rejected=rejected, failed=failed
        )
        logger.info(
            "Offline sync finished",
            extra={"synced": synced, "rejected": rejected, "failed": failed},
        )
        return report
