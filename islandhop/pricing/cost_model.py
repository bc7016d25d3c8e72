"""Derived trip costs.

Every subtotal is a pure function of the itinerary shape and the traveller's
pricing options, so the totals can be recomputed synchronously after any
change. Unknown hotel or activity ids cost nothing; nothing here raises.
"""

from collections.abc import Iterable, Sequence

from pydantic import BaseModel

from islandhop.config import Settings, get_settings
from islandhop.models.catalog import Activity, Hotel
from islandhop.models.common import FerryClass, TransportMode
from islandhop.models.itinerary import CostBreakdown, Day, Itinerary
from islandhop.models.selection import PricingOptions


class RateCard(BaseModel):
    """Static rates used by the cost model (whole INR)."""

    ferry_base_rate: int
    ferry_class_multipliers: dict[str, float]
    cab_day_rates: dict[str, int]
    p2p_rate_per_hop: int
    scooter_day_rate: int

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "RateCard":
        settings = settings or get_settings()
        return cls(
            ferry_base_rate=settings.ferry_base_rate,
            ferry_class_multipliers=settings.ferry_class_multipliers,
            cab_day_rates=settings.cab_day_rates,
            p2p_rate_per_hop=settings.p2p_rate_per_hop,
            scooter_day_rate=settings.scooter_day_rate,
        )

    def ferry_multiplier(self, ferry_class: FerryClass) -> float:
        return self.ferry_class_multipliers.get(FerryClass(ferry_class).value, 1.0)

    def cab_day_rate(self, cab_model_id: str) -> int:
        """Day rate for a cab model; unknown ids fall back to the first model."""
        if cab_model_id in self.cab_day_rates:
            return self.cab_day_rates[cab_model_id]
        return next(iter(self.cab_day_rates.values()), 0)


def _is_billable_day(day: Day) -> bool:
    # Ferry days are priced as legs; the departure day has no night or ground leg
    return not day.is_transit and not day.is_departure


def nights_by_island(itinerary: Itinerary) -> dict[str, int]:
    """Nights spent on each island, in first-visit order.

    A night is any day that is neither a ferry day nor the departure day.
    """
    nights: dict[str, int] = {}
    for day in itinerary.days:
        if _is_billable_day(day):
            nights[day.island] = nights.get(day.island, 0) + 1
    return nights


def accommodation_cost(
    itinerary: Itinerary,
    chosen_hotels: dict[str, str],
    hotels: Iterable[Hotel],
) -> int:
    """Nights on each island times the chosen hotel's nightly rate."""
    rates = {(hotel.island, hotel.id): hotel.nightly_rate for hotel in hotels}
    total = 0
    for island, nights in nights_by_island(itinerary).items():
        hotel_id = chosen_hotels.get(island)
        if not hotel_id:
            continue
        total += rates.get((island, hotel_id), 0) * nights
    return total


def ferry_cost(
    itinerary: Itinerary,
    ferry_class: FerryClass,
    adults: int,
    rates: RateCard,
) -> int:
    """Ferry legs times per-adult fare for the class. Infants travel free."""
    legs = len(itinerary.ferry_legs)
    fare = rates.ferry_base_rate * rates.ferry_multiplier(ferry_class)
    return round(legs * fare * max(1, adults))


def ground_transport_cost(
    itinerary: Itinerary,
    cab_model_id: str,
    scooter_islands: Sequence[str],
    rates: RateCard,
) -> int:
    """Per-day ground transport.

    Ferry days and the arrival and departure anchors are free. Every other
    day is charged, first match wins:
    1. Island opted into scooters -> scooter day rate
    2. Day Cab -> chosen cab model's day rate
    3. Scooter -> scooter day rate
    4. Anything else (Point-to-Point, or None set by hand) -> one hop per
       stop after the first, minimum one hop
    """
    cab_rate = rates.cab_day_rate(cab_model_id)
    total = 0
    for day in itinerary.days:
        if not _is_billable_day(day) or day.is_arrival:
            continue

        if day.island in scooter_islands:
            total += rates.scooter_day_rate
        elif day.transport == TransportMode.day_cab:
            total += cab_rate
        elif day.transport == TransportMode.scooter:
            total += rates.scooter_day_rate
        else:
            total += max(1, len(day.stops) - 1) * rates.p2p_rate_per_hop
    return total


def activities_cost(activity_ids: Iterable[str], activities: Iterable[Activity]) -> int:
    """Sum of selected add-on prices, each id counted once."""
    prices = {activity.id: activity.price for activity in activities}
    return sum(prices.get(activity_id, 0) for activity_id in set(activity_ids))


def compute_costs(
    itinerary: Itinerary,
    options: PricingOptions,
    *,
    activity_ids: Iterable[str],
    hotels: Iterable[Hotel],
    activities: Iterable[Activity],
    rates: RateCard | None = None,
) -> CostBreakdown:
    """Compute all cost subtotals and the grand total.

    Args:
        itinerary: Current itinerary (generated or edited)
        options: Hotel, ferry class, cab, scooter and passenger choices
        activity_ids: Selected add-on ids
        hotels: Hotel catalog
        activities: Add-on catalog
        rates: Rate card (defaults to settings)

    Returns:
        CostBreakdown with the four subtotals and their sum
    """
    rates = rates or RateCard.from_settings()

    accommodation = accommodation_cost(itinerary, options.hotels, hotels)
    ferries = ferry_cost(itinerary, options.ferry_class, options.adults, rates)
    ground = ground_transport_cost(itinerary, options.cab_model_id, options.scooter_islands, rates)
    addons = activities_cost(activity_ids, activities)

    return CostBreakdown(
        accommodation=accommodation,
        ferries=ferries,
        ground_transport=ground,
        activities=addons,
        total=accommodation + ferries + ground + addons,
    )
