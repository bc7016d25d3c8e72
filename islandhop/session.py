"""Trip-builder session: explicit state plus synchronous recomputation.

The UI layer owns a ``TripSession`` and sends it one event at a time. Each
event replaces part of the state; selection events regenerate the itinerary
(discarding manual day edits), everything else leaves it alone. Costs and
nights are derived on read, so they always match the current state.
"""

import logging
import re
from collections.abc import Iterable
from enum import Enum

from islandhop.adapters.loader import CatalogLoader, CatalogLoadError
from islandhop.config import Settings, get_settings
from islandhop.models.catalog import Activity, CatalogBundle, Hotel, Location
from islandhop.models.common import FerryClass, Mood, TransportMode
from islandhop.models.itinerary import CostBreakdown, Itinerary
from islandhop.models.selection import PricingOptions, SelectionState
from islandhop.pricing.cost_model import RateCard, compute_costs, nights_by_island
from islandhop.scheduling import mutations
from islandhop.scheduling.scheduler import generate_itinerary
from islandhop.utils.metrics import itinerary_regenerations_total

logger = logging.getLogger(__name__)

AIRPORT_PATTERN = re.compile(r"airport", re.IGNORECASE)


class SessionStatus(str, Enum):
    """Whether the session can be used."""

    ready = "ready"
    unavailable = "unavailable"


class SessionUnavailableError(Exception):
    """The session's catalogs failed to load; it cannot be used."""

    pass


def _toggled(ids: list[str], item_id: str) -> list[str]:
    if item_id in ids:
        return [i for i in ids if i != item_id]
    return [*ids, item_id]


class TripSession:
    """In-memory trip-builder state for one traveller."""

    def __init__(
        self,
        catalog: CatalogBundle | None,
        *,
        status: SessionStatus = SessionStatus.ready,
        error: str | None = None,
        selection: SelectionState | None = None,
        options: PricingOptions | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.status = status
        self.error = error
        self.settings = settings or get_settings()
        self.rates = RateCard.from_settings(self.settings)
        self.catalog = catalog or CatalogBundle(locations=[], activities=[], transit_legs=[])
        self.selection = selection or SelectionState()
        self.options = options or PricingOptions(
            ferry_class=FerryClass(self.settings.default_ferry_class),
            cab_model_id=self.settings.default_cab_model,
        )
        self.itinerary: Itinerary | None = None

        self._locations = self.catalog.location_by_id()
        self._selectable_ids = {loc.id for loc in self.selectable_locations}
        self._activities = self.catalog.activity_by_id()

        if self.status == SessionStatus.ready:
            self._regenerate()

    @classmethod
    def unavailable(cls, error: str, settings: Settings | None = None) -> "TripSession":
        """Terminal session for a failed catalog load."""
        return cls(None, status=SessionStatus.unavailable, error=error, settings=settings)

    @property
    def ready(self) -> bool:
        return self.status == SessionStatus.ready

    def _ensure_ready(self) -> Itinerary:
        if not self.ready or self.itinerary is None:
            raise SessionUnavailableError(self.error or "catalog data unavailable")
        return self.itinerary

    def _ignored(self, event: str, reason: str, **details: object) -> None:
        logger.debug(
            f"Ignoring session event: {event}",
            extra={"structured": {"event": event, "reason": reason, **details}},
        )

    def _regenerate(self) -> None:
        self.itinerary = generate_itinerary(
            self.selected_locations,
            start_at_hub=self.selection.start_at_hub,
            transit_legs=self.catalog.transit_legs,
            settings=self.settings,
        )
        itinerary_regenerations_total.inc()

    # --- Selection events ---

    def toggle_location(self, location_id: str) -> None:
        """Select or deselect a location, then regenerate the itinerary.

        Only ids offered by ``selectable_locations`` are accepted.
        """
        self._ensure_ready()
        if location_id not in self._selectable_ids:
            self._ignored("toggle_location", "unknown_location", location_id=location_id)
            return
        self.selection = self.selection.model_copy(
            update={"location_ids": _toggled(self.selection.location_ids, location_id)}
        )
        self._regenerate()

    def toggle_activity(self, activity_id: str) -> None:
        self._ensure_ready()
        if activity_id not in self._activities:
            self._ignored("toggle_activity", "unknown_activity", activity_id=activity_id)
            return
        self.selection = self.selection.model_copy(
            update={"activity_ids": _toggled(self.selection.activity_ids, activity_id)}
        )

    def set_mood_filter(self, mood: Mood | str | None) -> None:
        """Filter the location browser by mood; ``None`` or "All" clears it."""
        self._ensure_ready()
        if mood is None or mood == "All":
            parsed = None
        else:
            try:
                parsed = Mood(mood)
            except ValueError:
                self._ignored("set_mood_filter", "unknown_mood", mood=str(mood))
                return
        self.selection = self.selection.model_copy(update={"mood_filter": parsed})

    def set_island_filter(self, island: str | None) -> None:
        """Filter the location browser by island; ``None`` or "All" clears it."""
        self._ensure_ready()
        value = None if island in (None, "All") else island
        self.selection = self.selection.model_copy(update={"island_filter": value})

    def set_start_at_hub(self, start_at_hub: bool) -> None:
        self._ensure_ready()
        if start_at_hub == self.selection.start_at_hub:
            return
        self.selection = self.selection.model_copy(update={"start_at_hub": start_at_hub})
        self._regenerate()

    # --- Day edits ---

    def insert_day_after(self, index: int) -> None:
        self.itinerary = mutations.insert_empty_day(self._ensure_ready(), index)

    def delete_day(self, index: int) -> None:
        self.itinerary = mutations.delete_day(self._ensure_ready(), index)

    def move_item(self, from_day: int, position: int, direction: int) -> None:
        self.itinerary = mutations.move_item(self._ensure_ready(), from_day, position, direction)

    def set_transport(self, index: int, mode: TransportMode | str) -> None:
        itinerary = self._ensure_ready()
        try:
            parsed = TransportMode(mode)
        except ValueError:
            self._ignored("set_transport", "unknown_mode", mode=str(mode))
            return
        self.itinerary = mutations.set_transport(itinerary, index, parsed)

    # --- Pricing events ---

    def _update_options(self, **changes: object) -> None:
        self.options = self.options.model_copy(update=changes)

    def set_ferry_class(self, ferry_class: FerryClass | str) -> None:
        self._ensure_ready()
        try:
            parsed = FerryClass(ferry_class)
        except ValueError:
            self._ignored("set_ferry_class", "unknown_class", ferry_class=str(ferry_class))
            return
        self._update_options(ferry_class=parsed)

    def set_cab_model(self, cab_model_id: str) -> None:
        self._ensure_ready()
        if cab_model_id not in self.rates.cab_day_rates:
            self._ignored("set_cab_model", "unknown_cab_model", cab_model_id=cab_model_id)
            return
        self._update_options(cab_model_id=cab_model_id)

    def toggle_scooter_island(self, island: str) -> None:
        self._ensure_ready()
        self._update_options(scooter_islands=_toggled(self.options.scooter_islands, island))

    def choose_hotel(self, island: str, hotel_id: str | None) -> None:
        """Pick the hotel for an island; ``None`` clears the choice."""
        self._ensure_ready()
        hotels = dict(self.options.hotels)
        if hotel_id is None:
            hotels.pop(island, None)
        elif hotel_id in {hotel.id for hotel in self.catalog.hotels_for(island)}:
            hotels[island] = hotel_id
        else:
            self._ignored("choose_hotel", "unknown_hotel", island=island, hotel_id=hotel_id)
            return
        self._update_options(hotels=hotels)

    def set_adult_count(self, adults: int) -> None:
        self._ensure_ready()
        if adults < 1:
            self._ignored("set_adult_count", "below_minimum", adults=adults)
            return
        self._update_options(adults=adults)

    def set_infant_count(self, infants: int) -> None:
        self._ensure_ready()
        if infants < 0:
            self._ignored("set_infant_count", "below_minimum", infants=infants)
            return
        self._update_options(infants=infants)

    # --- Derived read-outs ---

    @property
    def selected_locations(self) -> list[Location]:
        """Selected locations in catalog order."""
        selected = set(self.selection.location_ids)
        return [loc for loc in self.catalog.locations if loc.id in selected]

    @property
    def selected_activities(self) -> list[Activity]:
        selected = set(self.selection.activity_ids)
        return [a for a in self.catalog.activities if a.id in selected]

    @property
    def selectable_locations(self) -> list[Location]:
        """Locations the traveller can pick (the airport is implied)."""
        return [loc for loc in self.catalog.locations if not AIRPORT_PATTERN.search(loc.name)]

    @property
    def filtered_locations(self) -> list[Location]:
        island = self.selection.island_filter
        mood = self.selection.mood_filter
        return [
            loc
            for loc in self.selectable_locations
            if (island is None or loc.island == island) and (mood is None or mood in loc.moods)
        ]

    @property
    def islands(self) -> list[str]:
        """Islands present in the catalog, or the canonical list when it is empty."""
        islands = list(dict.fromkeys(loc.island for loc in self.catalog.locations))
        return islands or list(self.settings.island_priority)

    @property
    def islands_in_plan(self) -> list[str]:
        itinerary = self._ensure_ready()
        return list(dict.fromkeys(day.island for day in itinerary.days))

    @property
    def nights_by_island(self) -> dict[str, int]:
        return nights_by_island(self._ensure_ready())

    def hotel_options(self, island: str) -> list[Hotel]:
        return self.catalog.hotels_for(island)

    @property
    def costs(self) -> CostBreakdown:
        return compute_costs(
            self._ensure_ready(),
            self.options,
            activity_ids=self.selection.activity_ids,
            hotels=self.catalog.hotels,
            activities=self.catalog.activities,
            rates=self.rates,
        )

    def _activities_for(self, ids: Iterable[str]) -> list[Activity]:
        return [self._activities[i] for i in ids if i in self._activities]

    @property
    def suggested_activities(self) -> list[Activity]:
        """Add-ons mapped to the selected locations.

        Without any mapping, falls back to add-ons offered on the selected
        islands (capped at ``suggestion_limit``).
        """
        mapped: list[str] = []
        for location_id in self.selection.location_ids:
            for activity_id in self.catalog.location_activities.get(location_id, []):
                if activity_id not in mapped:
                    mapped.append(activity_id)
        if mapped:
            return [a for a in self.catalog.activities if a.id in set(mapped)]

        islands = {loc.island for loc in self.selected_locations}
        if not islands:
            return []
        offered = [a for a in self.catalog.activities if islands.intersection(a.islands)]
        return offered[: self.settings.suggestion_limit]

    def suggested_for_location(self, location_id: str) -> list[Activity]:
        """Up to ``per_location_suggestion_limit`` add-ons for one location card."""
        limit = self.settings.per_location_suggestion_limit
        ids = self.catalog.location_activities.get(location_id, [])
        if not ids:
            location = self._locations.get(location_id)
            if location is None:
                return []
            ids = [a.id for a in self.catalog.activities if location.island in a.islands][:limit]
        return self._activities_for(ids)[:limit]


async def open_session(
    loader: CatalogLoader,
    *,
    settings: Settings | None = None,
) -> TripSession:
    """Load the catalogs and start a session.

    A failed load yields a session in the terminal ``unavailable`` state rather
    than raising; the UI shows "data unavailable" and offers nothing else.
    """
    try:
        catalog = await loader.load()
    except CatalogLoadError as e:
        logger.error(
            "Catalog load failed; session unavailable",
            extra={"structured": {"resource": e.resource, "error": str(e)}},
        )
        return TripSession.unavailable(str(e), settings=settings)

    logger.info(
        "Catalogs loaded",
        extra={
            "structured": {
                "locations": len(catalog.locations),
                "activities": len(catalog.activities),
                "transit_legs": len(catalog.transit_legs),
            }
        },
    )
    return TripSession(catalog, settings=settings)
