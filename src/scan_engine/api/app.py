"""FastAPI application factory."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress
from datetime import UTC, datetime
from uuid import UUID

from fastapi import FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder

from scan_engine.api.models import ScanRequest
from scan_engine.app_logging import configure_logging
from scan_engine.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        watcher = asyncio.create_task(state_container.watch_connectivity())
        try:
            await state_container.sync_coordinator.sync_pending_scans()
        except Exception:
            logger.exception("Failed to sync pending scans on startup")
        yield
        watcher.cancel()
        with suppress(asyncio.CancelledError):
            await watcher
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/scans")
    async def submit_scan(payload: ScanRequest, request: Request) -> dict[str, object]:
        """Classify and record a badge scan, or queue it while offline."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.scan_service.submit_scan(
            attendee_id=payload.attendee_id,
            location_id=payload.location_id,
            session_id=payload.session_id,
            device_id=payload.device_id or state_container.settings.device_id,
            notes=payload.notes,
        )
        return jsonable_encoder(result)

    @app.post("/scans/sync")
    async def sync_scans(request: Request) -> dict[str, object]:
        """Replay scans captured while offline."""
        state_container: AppContainer = request.app.state.container
        report = await state_container.scan_service.sync_pending_scans()
        if report is None:
            return {"status": "busy"}
        return {"status": "ok", "report": jsonable_encoder(report)}

    @app.get("/scans/pending")
    async def pending_scans(request: Request) -> dict[str, object]:
        """Return scans waiting to be synced."""
        state_container: AppContainer = request.app.state.container
        pending = await state_container.scan_service.list_pending()
        return {"count": len(pending), "pending": jsonable_encoder(pending)}

    @app.get("/sync/status")
    async def sync_status(request: Request) -> dict[str, object]:
        """Return connectivity and offline queue state."""
        state_container: AppContainer = request.app.state.container
        return jsonable_encoder(await state_container.scan_service.status())

    @app.get("/events/{event_id}/scans")
    async def list_scans(
        event_id: UUID, request: Request, limit: int = Query(default=50, ge=1, le=500)
    ) -> dict[str, object]:
        """Return recent scan records of an event."""
        state_container: AppContainer = request.app.state.container
        scans = await state_container.scan_recorder.list_recent(event_id, limit)
        return {"scans": jsonable_encoder(scans)}

    @app.get("/events/{event_id}/sessions/operational")
    async def operational_session(
        event_id: UUID, request: Request, at: datetime | None = None
    ) -> dict[str, object]:
        """Return the session that is operational at ``at`` (default: now)."""
        state_container: AppContainer = request.app.state.container
        window = await state_container.session_service.get_operational_window(
            event_id, _as_utc(at) if at else datetime.now(tz=UTC)
        )
        return jsonable_encoder(window)

    return app


def _as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
