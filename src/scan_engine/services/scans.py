"""Scan classification: the live path from badge scan to scan record."""

import logging
from dataclasses import dataclass, field, replace
from typing import Protocol
from uuid import UUID

from scan_engine.domain.attendees import ResolvedAttendee
from scan_engine.domain.classification import (
    Classification,
    Expected,
    OutOfSchedule,
    WalkIn,
    WrongBooth,
)
from scan_engine.domain.locations import Location
from scan_engine.domain.scans import (
    LocationKey,
    NewScan,
    ScanAttempt,
    ScanMode,
    ScanResult,
    ScanResultDetails,
    ScanStatus,
)
from scan_engine.services.attendees import AttendeeResolver
from scan_engine.services.directory import NameDirectory
from scan_engine.services.duplicates import DuplicateGuard
from scan_engine.services.messages import DEFAULT_LOCALE, feedback_message, message
from scan_engine.services.persistence import ScanRecorder
from scan_engine.services.registrations import ConflictDetector, RegistrationLookup
from scan_engine.services.sessions import SessionService

logger = logging.getLogger(__name__)


class LocationRepository(Protocol):
    """Lookup interface for scanning locations."""

    async def get_location(self, location_id: UUID) -> Location | None:
        """Return a location by id, if present."""


@dataclass
class ScanClassifier:
    """Classifies scan attempts and persists their outcome.

    Every step awaits storage before the next one runs. Storage is queried
    fresh for each attempt; display names seen along the way are kept in
    ``directory`` so scans captured offline can still name the attendee.
    """

    attendee_resolver: AttendeeResolver
    duplicate_guard: DuplicateGuard
    session_service: SessionService
    registration_lookup: RegistrationLookup
    conflict_detector: ConflictDetector
    recorder: ScanRecorder
    location_repository: LocationRepository
    locale: str = DEFAULT_LOCALE
    directory: NameDirectory = field(default_factory=NameDirectory)

    async def submit(self, attempt: ScanAttempt) -> ScanResult:
        """Classify a scan attempt. Failures are returned, never raised."""
        location_key = attempt.location_key
        if location_key is None:
            return ScanResult(
                success=False,
                status=ScanStatus.OUT_OF_SCHEDULE,
                message=message(self.locale, "missing_target"),
            )
        try:
            return await self._submit(attempt, location_key)
        except Exception as exc:
            logger.exception(
                "Scan attempt failed",
                extra={
                    "attendee_id": str(attempt.attendee_id),
                    "event_id": str(attempt.event_id),
                },
            )
            return ScanResult(
                success=False,
                status=ScanStatus.OUT_OF_SCHEDULE,
                message=message(self.locale, "processing_failed", error=exc),
            )

    async def _submit(
        self, attempt: ScanAttempt, location_key: LocationKey
    ) -> ScanResult:
        attendee = await self.attendee_resolver.resolve(
            attempt.attendee_id, attempt.event_id
        )
        self.directory.remember_attendee(attempt.attendee_id, attendee.name)

        if await self.duplicate_guard.is_duplicate(
            attempt.attendee_id, location_key, attempt.timestamp
        ):
            place = (
                "place_location"
                if location_key.mode is ScanMode.LOCATION
                else "place_session"
            )
            logger.info(
                "Rejected frequent scan",
                extra={
                    "attendee_id": str(attempt.attendee_id),
                    "location_key": str(location_key.id),
                },
            )
            return ScanResult(
                success=False,
                status=ScanStatus.EXPECTED,
                message=message(
                    self.locale,
                    "duplicate",
                    name=attendee.name,
                    place=message(self.locale, place),
                ),
                is_duplicate=True,
            )

        location = (
            await self.location_repository.get_location(attempt.location_id)
            if attempt.location_id is not None
            else None
        )
        if location is not None:
            self.directory.remember_location(location.id, location.name)
        if location_key.mode is ScanMode.LOCATION:
            classification = await self._classify_at_location(
                attempt, location_key.id
            )
        else:
            classification = await self._classify_for_session(
                attempt, location_key.id
            )

        details = _build_details(classification, attendee)
        status = classification.status
        session = classification.session
        try:
            scan = await self.recorder.insert_scan(
                NewScan(
                    event_id=attempt.event_id,
                    attendee_id=attempt.attendee_id,
                    attendee_name=attendee.name,
                    timestamp=attempt.timestamp,
                    scan_type=status.scan_type,
                    scan_status=status,
                    location_id=attempt.location_id,
                    location_name=location.name if location else None,
                    session_id=session.id if session else None,
                    notes=attempt.notes,
                    device_id=attempt.device_id,
                    expected_location_id=details.expected_location_id,
                )
            )
        except Exception as exc:
            logger.exception(
                "Failed to save scan",
                extra={"attendee_id": str(attempt.attendee_id), "status": status},
            )
            return ScanResult(
                success=False,
                status=status,
                message=message(self.locale, "save_failed", error=exc),
                details=details,
            )

        if scan.session_id is not None and classification.is_registered:
            await self.recorder.link_scan_to_registration(
                scan.attendee_id, scan.session_id, scan.id
            )

        feedback = feedback_message(
            self.locale, classification, attendee.name, attendee.was_auto_created
        )
        logger.info(
            "Scan classified",
            extra={"scan_id": str(scan.id), "status": status},
        )
        return ScanResult(
            success=True,
            status=status,
            message=feedback,
            scan=scan,
            details=details,
        )

    async def _classify_at_location(
        self, attempt: ScanAttempt, location_id: UUID
    ) -> Classification:
        window = await self.session_service.get_operational_window(
            attempt.event_id, attempt.timestamp
        )
        session = window.session
        if session is None:
            return OutOfSchedule(reason=window.message)

        registration = await self.registration_lookup.find(
            session.id, attempt.attendee_id
        )
        if registration is None:
            if session.requires_pre_assignment:
                return WrongBooth(session=session, is_registered=False)
            await self.registration_lookup.register_walk_in(
                event_id=attempt.event_id,
                session_id=session.id,
                attendee_id=attempt.attendee_id,
                scanned_at=attempt.timestamp,
            )
            return WalkIn(session=session)

        expected_location_id = registration.expected_location_id
        if expected_location_id is None or expected_location_id == location_id:
            return Expected(session=session)
        return WrongBooth(
            session=session,
            is_registered=True,
            expected_location_id=expected_location_id,
            expected_location_name=registration.expected_location_name,
        )

    async def _classify_for_session(
        self, attempt: ScanAttempt, session_id: UUID
    ) -> Classification:
        session = await self.session_service.get_session(session_id)
        if session is None:
            return OutOfSchedule(reason=f"Session {session_id} not found.")

        registration = await self.registration_lookup.find(
            session.id, attempt.attendee_id
        )
        if registration is not None:
            return Expected(session=session)
        if session.requires_pre_assignment:
            return WrongBooth(session=session, is_registered=False)

        conflicts = await self.conflict_detector.find_conflicts(
            attempt.attendee_id, session
        )
        await self.registration_lookup.register_walk_in(
            event_id=attempt.event_id,
            session_id=session.id,
            attendee_id=attempt.attendee_id,
            scanned_at=attempt.timestamp,
        )
        return WalkIn(session=session, conflict=conflicts[0] if conflicts else None)


def _build_details(
    classification: Classification, attendee: ResolvedAttendee
) -> ScanResultDetails:
    session = classification.session
    details = ScanResultDetails(
        is_registered=classification.is_registered,
        attendee_photo=attendee.photo_url,
        session_name=session.name if session else None,
    )
    if isinstance(classification, WrongBooth):
        return replace(
            details,
            expected_location_id=classification.expected_location_id,
            expected_location_name=classification.expected_location_name,
            registration_required=classification.registration_required,
        )
    if isinstance(classification, WalkIn) and classification.conflict is not None:
        return replace(details, conflict_session_name=classification.conflict.name)
    return details
