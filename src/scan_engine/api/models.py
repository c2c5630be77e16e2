"""Pydantic models for scanner API payloads."""

from uuid import UUID

from pydantic import BaseModel, Field


class ScanRequest(BaseModel):
    """Badge scan submitted by a scanning station."""

    attendee_id: UUID
    location_id: UUID | None = None
    session_id: UUID | None = None
    device_id: str | None = None
    notes: str | None = Field(default=None, max_length=2000)
