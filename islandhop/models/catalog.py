"""Catalog models - read-only reference data loaded once per session."""

from pydantic import BaseModel, ConfigDict, Field

from islandhop.models.common import HotelTier, Mood, Provenance, TimeOfDay, TimeWindow


class Location(BaseModel):
    """Point of interest a traveller can visit."""

    model_config = ConfigDict(frozen=True)

    id: str
    island: str
    name: str
    duration_hours: float = Field(..., gt=0)
    moods: list[Mood] = Field(..., min_length=1)
    best_times: list[TimeOfDay] = Field(default_factory=list)
    brief: str = ""
    image: str | None = None


class Activity(BaseModel):
    """Optional paid add-on (snorkelling, scuba, kayaking...)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: int = Field(..., ge=0)
    islands: list[str] = Field(default_factory=list)


class TransitLegRecord(BaseModel):
    """Advisory ferry schedule metadata for an island pair."""

    model_config = ConfigDict(frozen=True)

    origin: str
    destination: str
    operator: str | None = None
    window: TimeWindow | None = None


class Hotel(BaseModel):
    """Hotel option offered on an island."""

    model_config = ConfigDict(frozen=True)

    id: str
    island: str
    name: str
    tier: HotelTier
    nightly_rate: int = Field(..., ge=0)


class CatalogBundle(BaseModel):
    """Everything a session needs from catalog storage."""

    locations: list[Location]
    activities: list[Activity]
    transit_legs: list[TransitLegRecord]
    hotels: list[Hotel] = Field(default_factory=list)
    # location id -> activity ids suggested for it
    location_activities: dict[str, list[str]] = Field(default_factory=dict)
    provenance: dict[str, Provenance] = Field(default_factory=dict)

    def location_by_id(self) -> dict[str, Location]:
        return {loc.id: loc for loc in self.locations}

    def activity_by_id(self) -> dict[str, Activity]:
        return {a.id: a for a in self.activities}

    def hotels_for(self, island: str) -> list[Hotel]:
        return [h for h in self.hotels if h.island == island]
