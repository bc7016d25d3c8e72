"""Selection models - user-owned inputs that drive regeneration and pricing."""

from pydantic import BaseModel, Field

from islandhop.config import get_settings
from islandhop.models.common import FerryClass, Mood


def _default_ferry_class() -> FerryClass:
    return FerryClass(get_settings().default_ferry_class)


def _default_cab_model() -> str:
    return get_settings().default_cab_model


class SelectionState(BaseModel):
    """What the traveller picked in the wizard.

    Id lists keep toggle order but never hold duplicates.
    """

    location_ids: list[str] = Field(default_factory=list)
    activity_ids: list[str] = Field(default_factory=list)
    start_at_hub: bool = True
    mood_filter: Mood | None = None
    island_filter: str | None = None


class PricingOptions(BaseModel):
    """Pricing choices made in the hotel and transport steps."""

    hotels: dict[str, str] = Field(default_factory=dict)  # island -> hotel id
    ferry_class: FerryClass = Field(default_factory=_default_ferry_class)
    cab_model_id: str = Field(default_factory=_default_cab_model)
    scooter_islands: list[str] = Field(default_factory=list)
    adults: int = Field(default=2, ge=1)
    infants: int = Field(default=0, ge=0)
