"""Application configuration."""

import os
from uuid import UUID

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    event_id: UUID
    device_id: str | None = None
    grace_period_minutes: int = Field(default=5, ge=0)
    locale: str = "es"
    offline_queue_path: str = "pending_scans.db"
    connectivity_probe_interval_seconds: float = Field(default=15.0, gt=0)
    connectivity_probe_timeout_seconds: float = Field(default=5.0, gt=0)
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
