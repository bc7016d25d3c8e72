"""Itinerary scheduler: selected locations -> day-by-day itinerary.

Day 1 is always the locked arrival at the hub and the last day the locked
departure from it. Sightseeing days are built island by island with a greedy
bucketing pass (at most ``max_stops_per_day`` stops and ``max_hours_per_day``
hours), and a single ferry day is inserted whenever the traveller changes
island, including the final crossing back to the hub.

The greedy pass is an accepted approximation rather than an optimal packing;
day counts and therefore costs depend on its exact order.
"""

import logging
from collections import deque
from collections.abc import Iterable, Sequence
from datetime import time

from islandhop.config import Settings, get_settings
from islandhop.models.catalog import Location, TransitLegRecord
from islandhop.models.common import TimeOfDay, TimeWindow, TransportMode
from islandhop.models.itinerary import (
    ArrivalItem,
    Day,
    DepartureItem,
    FerryItem,
    Itinerary,
    LocationVisit,
    TransferItem,
)
from islandhop.scheduling.island_order import resolve_island_order

logger = logging.getLogger(__name__)

TIME_OF_DAY_RANK = {
    TimeOfDay.morning: 0,
    TimeOfDay.afternoon: 1,
    TimeOfDay.evening: 2,
}
UNSPECIFIED_RANK = 3


def time_of_day_rank(location: Location) -> int:
    """Earliest day part the location prefers; unspecified sorts last."""
    ranks = [TIME_OF_DAY_RANK[part] for part in location.best_times]
    return min(ranks) if ranks else UNSPECIFIED_RANK


def order_by_best_time(locations: Iterable[Location]) -> list[Location]:
    """Stable sort: morning < afternoon < evening < no preference."""
    return sorted(locations, key=time_of_day_rank)


def _close_bucket(bucket: list[Location], queue: deque[Location]) -> list[Location]:
    # Pull one more stop instead of leaving a lone-stop day, once per close
    if len(bucket) == 1 and queue:
        bucket.append(queue.popleft())
    return bucket


def bucket_locations(
    locations: Sequence[Location],
    *,
    max_stops: int,
    max_hours: float,
) -> list[list[Location]]:
    """Greedily group one island's locations into days.

    Locations are ordered by time-of-day affinity, then added to the current
    bucket while it has fewer than ``max_stops`` stops and the next duration
    still fits in ``max_hours``. A bucket about to close with a single stop
    pulls the next queued location in (without re-checking the caps).

    Args:
        locations: Locations on a single island, in catalog order
        max_stops: Stop cap per day
        max_hours: Hour budget per day

    Returns:
        Buckets in visiting order; empty when there are no locations
    """
    queue = deque(order_by_best_time(locations))
    buckets: list[list[Location]] = []
    bucket: list[Location] = []
    hours = 0.0

    while queue:
        location = queue.popleft()
        if bucket and (len(bucket) >= max_stops or hours + location.duration_hours > max_hours):
            buckets.append(_close_bucket(bucket, queue))
            bucket, hours = [], 0.0
        bucket.append(location)
        hours += location.duration_hours

    if bucket:
        buckets.append(_close_bucket(bucket, queue))

    return buckets


def derive_transport(stop_count: int, island: str, scooter_islands: Sequence[str]) -> TransportMode:
    """Transport for a generated sightseeing day."""
    if stop_count >= 3:
        return TransportMode.day_cab
    if island in scooter_islands:
        return TransportMode.scooter
    return TransportMode.point_to_point


def _visit(location: Location) -> LocationVisit:
    return LocationVisit(
        location_id=location.id,
        name=location.name,
        duration_hours=location.duration_hours,
        best_times=list(location.best_times),
    )


def _parse_window(window: tuple[str, str]) -> TimeWindow:
    start, end = window
    return TimeWindow(start=time.fromisoformat(start), end=time.fromisoformat(end))


class _FerryBuilder:
    """Builds ferry days, preferring scheduled transit records."""

    def __init__(self, transit_legs: Iterable[TransitLegRecord], settings: Settings) -> None:
        self._legs: dict[tuple[str, str], TransitLegRecord] = {}
        for leg in transit_legs:
            # First record per island pair wins
            self._legs.setdefault((leg.origin, leg.destination), leg)
        self._outbound = _parse_window(settings.ferry_outbound_window)
        self._return = _parse_window(settings.ferry_return_window)
        self._hub = settings.hub_island

    def day(self, origin: str, destination: str) -> Day:
        record = self._legs.get((origin, destination))
        default_window = self._return if destination == self._hub else self._outbound
        name = f"Ferry {origin} → {destination}"
        operator = None
        window = default_window
        if record is not None:
            operator = record.operator
            window = record.window or default_window
            if operator:
                name = f"{operator}: {origin} → {destination}"

        ferry = FerryItem(
            name=name,
            origin=origin,
            destination=destination,
            window=window,
            operator=operator,
        )
        return Day(island=origin, items=[ferry], transport=TransportMode.none)


def arrival_day(settings: Settings) -> Day:
    hub = settings.hub_island
    return Day(
        island=hub,
        items=[
            ArrivalItem(name=f"Arrival — {settings.airport_name}"),
            TransferItem(name=f"Airport → Hotel ({_short_name(hub)})"),
        ],
        transport=TransportMode.none,
        locked=True,
    )


def departure_day(settings: Settings) -> Day:
    hub = settings.hub_island
    return Day(
        island=hub,
        items=[
            TransferItem(name=f"Hotel ({_short_name(hub)}) → Airport"),
            DepartureItem(name=f"Departure — {settings.airport_name}"),
        ],
        transport=TransportMode.none,
        locked=True,
    )


def _short_name(island: str) -> str:
    # "Port Blair (South Andaman)" -> "Port Blair"
    return island.split(" (", 1)[0]


def schedule(
    selected_locations: Sequence[Location],
    island_order: Sequence[str],
    *,
    transit_legs: Iterable[TransitLegRecord] = (),
    settings: Settings | None = None,
) -> Itinerary:
    """Build the itinerary for a selection.

    Args:
        selected_locations: Selected locations in catalog order
        island_order: Visiting order from ``resolve_island_order``
        transit_legs: Optional ferry schedule metadata for labels and windows
        settings: Override settings (defaults to ``get_settings()``)

    Returns:
        Itinerary anchored by locked arrival and departure days at the hub.
        An empty selection yields exactly those two days.
    """
    settings = settings or get_settings()
    hub = settings.hub_island
    ferries = _FerryBuilder(transit_legs, settings)

    days: list[Day] = [arrival_day(settings)]
    if not selected_locations:
        days.append(departure_day(settings))
        return Itinerary(days=days)

    by_island: dict[str, list[Location]] = {}
    for location in selected_locations:
        by_island.setdefault(location.island, []).append(location)

    # Islands the order does not mention are still visited, after the rest
    order = list(dict.fromkeys([*island_order, *by_island]))

    current_island = hub
    for island in order:
        buckets = bucket_locations(
            by_island.get(island, []),
            max_stops=settings.max_stops_per_day,
            max_hours=settings.max_hours_per_day,
        )
        if not buckets:
            continue

        if island != current_island:
            days.append(ferries.day(current_island, island))
            current_island = island

        for bucket in buckets:
            days.append(
                Day(
                    island=island,
                    items=[_visit(location) for location in bucket],
                    transport=derive_transport(len(bucket), island, settings.scooter_islands),
                )
            )

    if current_island != hub:
        days.append(ferries.day(current_island, hub))
    days.append(departure_day(settings))

    itinerary = Itinerary(days=days)
    logger.debug(
        "Scheduled itinerary",
        extra={
            "structured": {
                "locations": len(selected_locations),
                "islands": order,
                "days": len(itinerary.days),
                "ferry_legs": len(itinerary.ferry_legs),
            }
        },
    )
    return itinerary


def generate_itinerary(
    selected_locations: Sequence[Location],
    *,
    start_at_hub: bool = True,
    transit_legs: Iterable[TransitLegRecord] = (),
    settings: Settings | None = None,
) -> Itinerary:
    """Resolve the island order for a selection and schedule it."""
    settings = settings or get_settings()
    island_order = resolve_island_order(
        (location.island for location in selected_locations),
        settings.island_priority,
        prefer_hub_first=start_at_hub,
        hub=settings.hub_island,
    )
    return schedule(
        selected_locations,
        island_order,
        transit_legs=transit_legs,
        settings=settings,
    )
