"""Supabase-backed location (booth) repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import AsyncClient

from scan_engine.domain.locations import Location
from scan_engine.services.scans import LocationRepository


@dataclass
class SupabaseLocationRepository(LocationRepository):
    """Supabase implementation for booth lookups."""

    client: AsyncClient

    async def get_location(self, location_id: UUID) -> Location | None:
        """Return a booth by id, if present."""
        response = await (
            self.client.table("booths")
            .select("id, event_id, company_name")
            .eq("id", str(location_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return Location(
            id=UUID(row["id"]),
            event_id=UUID(row["event_id"]),
            name=row["company_name"],
        )
