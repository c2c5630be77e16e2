"""Tests for the SQLite offline queue."""

from uuid import uuid4

from scan_engine.adapters.sqlite_pending_scan_store import SqlitePendingScanStore
from scan_engine.domain.scans import PendingScanPayload, ScanAttempt
from tests.conftest import EVENT_ID, at


def _payload(minute: int) -> PendingScanPayload:
    attempt = ScanAttempt(
        event_id=EVENT_ID,
        attendee_id=uuid4(),
        timestamp=at(9, minute),
        location_id=uuid4(),
        device_id="scanner-1",
    )
    return PendingScanPayload.capture(
        local_id=str(uuid4()), attempt=attempt, location_name="Booth-1"
    )


def test_queue_preserves_capture_order(tmp_path) -> None:
    store = SqlitePendingScanStore(tmp_path / "queue" / "pending.db")
    payloads = [_payload(minute) for minute in (30, 10, 20)]
    for payload in payloads:
        store.enqueue(payload)

    pending = store.list_pending()

    assert pending == payloads
    assert pending[0].timestamp == at(9, 30)
    assert pending[0].session_id is None
    assert store.count() == 3
    store.close()


def test_queue_survives_reopen(tmp_path) -> None:
    path = tmp_path / "pending.db"
    store = SqlitePendingScanStore(path)
    payload = _payload(5)
    store.enqueue(payload)
    store.close()

    reopened = SqlitePendingScanStore(path)

    assert reopened.list_pending() == [payload]
    reopened.close()


def test_queue_remove_and_record_failure() -> None:
    store = SqlitePendingScanStore(":memory:")
    first = _payload(1)
    second = _payload(2)
    store.enqueue(first)
    store.enqueue(second)

    store.record_failure(second.local_id, "timeout")
    store.record_failure(second.local_id, "storage unavailable")
    store.remove(first.local_id)

    pending = store.list_pending()
    assert len(pending) == 1
    assert pending[0].local_id == second.local_id
    assert pending[0].sync_attempts == 2
    assert pending[0].last_error == "storage unavailable"

    store.clear()
    assert store.count() == 0
    store.close()
