"""Itinerary models - day-by-day trip output and its cost breakdown."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from islandhop.models.common import TimeOfDay, TimeWindow, TransportMode


class ArrivalItem(BaseModel):
    """Landing at the hub airport."""

    kind: Literal["arrival"] = "arrival"
    name: str


class DepartureItem(BaseModel):
    """Flight out from the hub airport."""

    kind: Literal["departure"] = "departure"
    name: str


class TransferItem(BaseModel):
    """Airport <-> hotel transfer."""

    kind: Literal["transfer"] = "transfer"
    name: str


class FerryItem(BaseModel):
    """Inter-island ferry leg."""

    kind: Literal["ferry"] = "ferry"
    name: str
    origin: str
    destination: str
    window: TimeWindow
    operator: str | None = None


class LocationVisit(BaseModel):
    """Scheduled stop at a catalog location.

    Duration and time-of-day hints are captured when the day is generated, so a
    later catalog change never alters an already scheduled day.
    """

    kind: Literal["location"] = "location"
    location_id: str
    name: str
    duration_hours: float
    best_times: list[TimeOfDay] = Field(default_factory=list)


Item = Annotated[
    ArrivalItem | DepartureItem | TransferItem | FerryItem | LocationVisit,
    Field(discriminator="kind"),
]


class Day(BaseModel):
    """One day of the trip."""

    island: str
    items: list[Item] = Field(default_factory=list)
    transport: TransportMode = TransportMode.point_to_point
    locked: bool = False

    @property
    def is_transit(self) -> bool:
        """Ferry day: spent crossing between islands."""
        return any(item.kind == "ferry" for item in self.items)

    @property
    def is_departure(self) -> bool:
        return any(item.kind == "departure" for item in self.items)

    @property
    def is_arrival(self) -> bool:
        return any(item.kind == "arrival" for item in self.items)

    @property
    def stops(self) -> list[LocationVisit]:
        return [item for item in self.items if isinstance(item, LocationVisit)]

    @property
    def hours(self) -> float:
        return sum(stop.duration_hours for stop in self.stops)


class Itinerary(BaseModel):
    """Ordered sequence of days, arrival first and departure last."""

    days: list[Day]

    @property
    def ferry_legs(self) -> list[FerryItem]:
        return [item for day in self.days for item in day.items if isinstance(item, FerryItem)]

    def island_sequence(self) -> list[str]:
        return [day.island for day in self.days]


class CostBreakdown(BaseModel):
    """Cost breakdown by category (whole INR)."""

    accommodation: int
    ferries: int
    ground_transport: int
    activities: int
    total: int
