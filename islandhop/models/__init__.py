"""Models package - re-exports for convenience."""

from islandhop.models.catalog import (
    Activity,
    CatalogBundle,
    Hotel,
    Location,
    TransitLegRecord,
)
from islandhop.models.common import (
    FerryClass,
    HotelTier,
    Mood,
    Provenance,
    TimeOfDay,
    TimeWindow,
    TransportMode,
)
from islandhop.models.itinerary import (
    ArrivalItem,
    CostBreakdown,
    Day,
    DepartureItem,
    FerryItem,
    Item,
    Itinerary,
    LocationVisit,
    TransferItem,
)
from islandhop.models.selection import PricingOptions, SelectionState

__all__ = [
    # Common
    "TimeWindow",
    "Mood",
    "TimeOfDay",
    "TransportMode",
    "FerryClass",
    "HotelTier",
    "Provenance",
    # Catalog
    "Location",
    "Activity",
    "TransitLegRecord",
    "Hotel",
    "CatalogBundle",
    # Itinerary
    "Itinerary",
    "Day",
    "Item",
    "ArrivalItem",
    "DepartureItem",
    "TransferItem",
    "FerryItem",
    "LocationVisit",
    "CostBreakdown",
    # Selection
    "SelectionState",
    "PricingOptions",
]
