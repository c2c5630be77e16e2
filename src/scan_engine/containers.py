"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import AsyncClient

from scan_engine.adapters.connectivity_probe import HttpxConnectivityProbe
from scan_engine.adapters.sqlite_pending_scan_store import SqlitePendingScanStore
from scan_engine.adapters.supabase_attendee_repository import (
    SupabaseAttendeeRepository,
)
from scan_engine.adapters.supabase_location_repository import (
    SupabaseLocationRepository,
)
from scan_engine.adapters.supabase_registration_repository import (
    SupabaseRegistrationRepository,
)
from scan_engine.adapters.supabase_scan_repository import SupabaseScanRepository
from scan_engine.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from scan_engine.config import Settings
from scan_engine.services.attendees import AttendeeResolver
from scan_engine.services.duplicates import DuplicateGuard
from scan_engine.services.offline import SyncCoordinator
from scan_engine.services.persistence import ScanRecorder
from scan_engine.services.registrations import ConflictDetector, RegistrationLookup
from scan_engine.services.scanning import ScanService
from scan_engine.services.scans import ScanClassifier
from scan_engine.services.sessions import SessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_service: SessionService
    scan_recorder: ScanRecorder
    scan_classifier: ScanClassifier
    sync_coordinator: SyncCoordinator
    scan_service: ScanService
    watch_connectivity: Callable[[], Awaitable[None]]
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = AsyncClient(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    registration_repository = SupabaseRegistrationRepository(supabase_client)
    scan_repository = SupabaseScanRepository(supabase_client)
    session_service = SessionService(
        repository=SupabaseSessionRepository(supabase_client),
        grace_period_minutes=resolved_settings.grace_period_minutes,
    )
    scan_recorder = ScanRecorder(
        scan_repository=scan_repository,
        registration_repository=registration_repository,
    )
    scan_classifier = ScanClassifier(
        attendee_resolver=AttendeeResolver(SupabaseAttendeeRepository(supabase_client)),
        duplicate_guard=DuplicateGuard(scan_repository),
        session_service=session_service,
        registration_lookup=RegistrationLookup(registration_repository),
        conflict_detector=ConflictDetector(registration_repository),
        recorder=scan_recorder,
        location_repository=SupabaseLocationRepository(supabase_client),
        locale=resolved_settings.locale,
    )
    pending_store = SqlitePendingScanStore(resolved_settings.offline_queue_path)
    sync_coordinator = SyncCoordinator(store=pending_store, classifier=scan_classifier)
    connectivity_probe = HttpxConnectivityProbe.create(
        base_url=resolved_settings.supabase_url,
        api_key=resolved_settings.supabase_service_key,
        interval_seconds=resolved_settings.connectivity_probe_interval_seconds,
        timeout_seconds=resolved_settings.connectivity_probe_timeout_seconds,
    )
    scan_service = ScanService(
        event_id=resolved_settings.event_id,
        classifier=scan_classifier,
        pending_store=pending_store,
        sync_coordinator=sync_coordinator,
        connectivity=connectivity_probe,
    )

    async def watch_connectivity() -> None:
        await connectivity_probe.watch(sync_coordinator.sync_pending_scans)

    async def close_resources() -> None:
        await connectivity_probe.close()
        pending_store.close()

    return AppContainer(
        settings=resolved_settings,
        session_service=session_service,
        scan_recorder=scan_recorder,
        scan_classifier=scan_classifier,
        sync_coordinator=sync_coordinator,
        scan_service=scan_service,
        watch_connectivity=watch_connectivity,
        close_resources=close_resources,
    )
