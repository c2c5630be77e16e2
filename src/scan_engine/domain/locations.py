"""Domain models for scanning locations."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Location:
    """Physical location (booth) where badges are scanned."""

    id: UUID
    event_id: UUID
    name: str
