"""Domain models for badge scans."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class ScanStatus(StrEnum):
    """Classification of a scan against the attendee's schedule."""

    EXPECTED = "EXPECTED"
    WRONG_BOOTH = "WRONG_BOOTH"
    WALK_IN = "WALK_IN"
    OUT_OF_SCHEDULE = "OUT_OF_SCHEDULE"

    @property
    def scan_type(self) -> "ScanType":
        """Return the scan type recorded for this status."""
        if self is ScanStatus.OUT_OF_SCHEDULE:
            return ScanType.OUT_OF_SCHEDULE
        return ScanType.REGULAR


class ScanType(StrEnum):
    """Whether a scan happened within an operational session."""

    REGULAR = "regular"
    OUT_OF_SCHEDULE = "out_of_schedule"


class ScanMode(StrEnum):
    """What the scanning device is anchored to."""

    LOCATION = "location"
    SESSION = "session"


@dataclass(frozen=True)
class LocationKey:
    """Identifies where a scan happened for cooldown purposes."""

    mode: ScanMode
    id: UUID


@dataclass(frozen=True)
class ScanAttempt:
    """A single presentation of a badge, before classification."""

    event_id: UUID
    attendee_id: UUID
    timestamp: datetime
    location_id: UUID | None = None
    session_id: UUID | None = None
    device_id: str | None = None
    notes: str | None = None

    @property
    def location_key(self) -> LocationKey | None:
        """Return the cooldown key, preferring the physical location."""
        if self.location_id is not None:
            return LocationKey(mode=ScanMode.LOCATION, id=self.location_id)
        if self.session_id is not None:
            return LocationKey(mode=ScanMode.SESSION, id=self.session_id)
        return None


@dataclass(frozen=True)
class NewScan:
    """Scan fields to persist."""

    event_id: UUID
    attendee_id: UUID
    attendee_name: str
    timestamp: datetime
    scan_type: ScanType
    scan_status: ScanStatus
    location_id: UUID | None = None
    location_name: str | None = None
    session_id: UUID | None = None
    notes: str | None = None
    device_id: str | None = None
    expected_location_id: UUID | None = None


@dataclass(frozen=True)
class ScanRecord:
    """Persisted outcome of an accepted scan attempt."""

    id: UUID
    event_id: UUID
    attendee_id: UUID
    attendee_name: str | None
    timestamp: datetime
    scan_type: ScanType
    scan_status: ScanStatus | None
    location_id: UUID | None = None
    location_name: str | None = None
    session_id: UUID | None = None
    notes: str | None = None
    device_id: str | None = None
    expected_location_id: UUID | None = None


@dataclass(frozen=True)
class ScanResultDetails:
    """Operator-facing details attached to a scan result."""

    is_registered: bool
    expected_location_id: UUID | None = None
    expected_location_name: str | None = None
    attendee_photo: str | None = None
    session_name: str | None = None
    conflict_session_name: str | None = None
    registration_required: bool = False


@dataclass(frozen=True)
class ScanResult:
    """Outcome of submitting a scan attempt."""

    success: bool
    status: ScanStatus
    message: str
    scan: ScanRecord | None = None
    was_offline: bool = False
    details: ScanResultDetails | None = None
    is_duplicate: bool = False


@dataclass(frozen=True)
class PendingScanPayload:
    """Scan attempt captured while offline, waiting to be replayed."""

    local_id: str
    event_id: UUID
    attendee_id: UUID
    timestamp: datetime
    location_id: UUID | None = None
    session_id: UUID | None = None
    device_id: str | None = None
    notes: str | None = None
    attendee_name: str | None = None
    location_name: str | None = None
    sync_attempts: int = 0
    last_error: str | None = None

    @classmethod
    def capture(
        cls,
        local_id: str,
        attempt: ScanAttempt,
        attendee_name: str | None = None,
        location_name: str | None = None,
    ) -> "PendingScanPayload":
        """Build a payload that preserves the attempt's own timestamp."""
        return cls(
            local_id=local_id,
            event_id=attempt.event_id,
            attendee_id=attempt.attendee_id,
            timestamp=attempt.timestamp,
            location_id=attempt.location_id,
            session_id=attempt.session_id,
            device_id=attempt.device_id,
            notes=attempt.notes,
            attendee_name=attendee_name,
            location_name=location_name,
        )

    def to_attempt(self) -> ScanAttempt:
        """Return the original scan attempt for replay."""
        return ScanAttempt(
            event_id=self.event_id,
            attendee_id=self.attendee_id,
            timestamp=self.timestamp,
            location_id=self.location_id,
            session_id=self.session_id,
            device_id=self.device_id,
            notes=self.notes,
        )
