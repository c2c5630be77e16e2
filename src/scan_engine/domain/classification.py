"""Outcome variants of scan classification."""

from dataclasses import dataclass
from typing import ClassVar
from uuid import UUID

from scan_engine.domain.scans import ScanStatus
from scan_engine.domain.sessions import Session


@dataclass(frozen=True)
class Expected:
    """Attendee is registered for the session at this location."""

    session: Session
    status: ClassVar[ScanStatus] = ScanStatus.EXPECTED
    is_registered: ClassVar[bool] = True


@dataclass(frozen=True)
class WrongBooth:
    """Registered elsewhere, or a walk-in blocked by pre-assignment."""

    session: Session
    is_registered: bool
    expected_location_id: UUID | None = None
    expected_location_name: str | None = None
    status: ClassVar[ScanStatus] = ScanStatus.WRONG_BOOTH

    @property
    def registration_required(self) -> bool:
        return not self.is_registered


@dataclass(frozen=True)
class WalkIn:
    """No prior registration; one was created on the spot."""

    session: Session
    conflict: Session | None = None
    status: ClassVar[ScanStatus] = ScanStatus.WALK_IN
    is_registered: ClassVar[bool] = False


@dataclass(frozen=True)
class OutOfSchedule:
    """No operational session matched the scan."""

    reason: str
    session: ClassVar[Session | None] = None
    status: ClassVar[ScanStatus] = ScanStatus.OUT_OF_SCHEDULE
    is_registered: ClassVar[bool] = False


Classification = Expected | WrongBooth | WalkIn | OutOfSchedule
