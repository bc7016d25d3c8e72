"""Common types and enums shared across all models."""

from datetime import datetime, time
from enum import Enum

from pydantic import BaseModel


class TimeWindow(BaseModel):
    """Time window in local island time."""

    start: time
    end: time

    def label(self) -> str:
        """Display form, e.g. ``08:00–09:30``."""
        return f"{self.start:%H:%M}–{self.end:%H:%M}"


class Mood(str, Enum):
    """Mood tag vocabulary, in display order."""

    relaxed = "Relaxed"
    balanced = "Balanced"
    active = "Active"
    adventure = "Adventure"
    family = "Family"
    photography = "Photography"
    offbeat = "Offbeat"
    romantic = "Romantic"


class TimeOfDay(str, Enum):
    """Best time-of-day affinity."""

    morning = "morning"
    afternoon = "afternoon"
    evening = "evening"


class TransportMode(str, Enum):
    """Ground transport mode for a day."""

    point_to_point = "Point-to-Point"
    day_cab = "Day Cab"
    scooter = "Scooter"
    none = "None"


class FerryClass(str, Enum):
    """Ferry seating class."""

    economy = "Economy"
    deluxe = "Deluxe"
    luxury = "Luxury"


class HotelTier(str, Enum):
    """Hotel tier."""

    value = "Value"
    mid = "Mid"
    premium = "Premium"


class Provenance(BaseModel):
    """Provenance metadata for loaded catalogs."""

    source: str  # e.g. "catalog.http.locations", "catalog.fixtures.hotels"
    ref_id: str | None = None
    source_url: str | None = None
    fetched_at: datetime
    record_count: int | None = None
