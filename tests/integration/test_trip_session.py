"""Integration tests for the trip-builder session over the fixture catalog."""

import httpx
import pytest
from prometheus_client import REGISTRY

from islandhop.adapters.loader import FIXTURES_DIR, CatalogLoader
from islandhop.models import FerryClass, Mood, TransportMode
from islandhop.session import SessionUnavailableError, TripSession, open_session

PB = "Port Blair (South Andaman)"
HL = "Havelock (Swaraj Dweep)"


def select(session: TripSession, *location_ids: str) -> None:
    for location_id in location_ids:
        session.toggle_location(location_id)


def test_new_session_has_anchor_days_and_zero_cost(session: TripSession) -> None:
    assert session.ready
    assert len(session.itinerary.days) == 2
    assert session.costs.total == 0
    assert session.nights_by_island == {PB: 1}


def test_selection_regenerates_itinerary(session: TripSession) -> None:
    """Two Port Blair stops and Radhanagar -> six days with scheduled ferries."""
    select(session, "pb_cellular", "pb_corbyn", "hl_radhanagar")
    days = session.itinerary.days

    assert len(days) == 6
    assert [stop.location_id for stop in days[1].stops] == ["pb_cellular", "pb_corbyn"]
    assert [stop.location_id for stop in days[3].stops] == ["hl_radhanagar"]
    outbound, inbound = session.itinerary.ferry_legs
    assert outbound.operator == "Makruzz"
    assert outbound.window.label() == "08:00–09:30"
    assert inbound.window.label() == "16:00–17:30"
    assert session.islands_in_plan == [PB, HL]
    assert session.nights_by_island == {PB: 2, HL: 1}


def test_costs_follow_pricing_events(session: TripSession) -> None:
    select(session, "pb_cellular", "pb_corbyn", "hl_radhanagar")

    costs = session.costs
    assert costs.ferries == 8400
    assert costs.ground_transport == 1300
    assert costs.total == 9700

    session.choose_hotel(PB, "pb_h2")
    session.choose_hotel(HL, "hl_h1")
    assert session.costs.accommodation == 2 * 5499 + 4499
    assert session.costs.total == 9700 + 2 * 5499 + 4499

    session.toggle_activity("ad_scuba")
    assert session.costs.activities == 4200

    session.set_adult_count(3)
    session.set_infant_count(2)
    assert session.costs.ferries == 12600

    session.set_ferry_class(FerryClass.economy)
    assert session.costs.ferries == 9000

    session.choose_hotel(PB, None)
    assert session.costs.accommodation == 4499


def test_invalid_events_are_ignored(session: TripSession) -> None:
    """Unknown ids and out-of-range values leave the state unchanged."""
    select(session, "hl_radhanagar")
    itinerary = session.itinerary
    options = session.options

    session.toggle_location("nowhere")
    session.toggle_activity("ad_unknown")
    session.set_adult_count(0)
    session.set_infant_count(-1)
    session.set_ferry_class("Platinum")
    session.set_cab_model("limo")
    session.choose_hotel(PB, "hl_h1")
    session.set_transport(3, "Helicopter")

    assert session.itinerary is itinerary
    assert session.options == options
    assert session.selection.activity_ids == []


def test_airport_cannot_be_selected(session: TripSession) -> None:
    """The airport is implied by the anchors, never scheduled as a stop."""
    itinerary = session.itinerary

    session.toggle_location("pb_airport")

    assert session.selection.location_ids == []
    assert session.itinerary is itinerary
    stops = [stop.location_id for day in session.itinerary.days for stop in day.stops]
    assert "pb_airport" not in stops


def test_toggling_twice_deselects(session: TripSession) -> None:
    select(session, "pb_ross", "pb_ross")
    session.toggle_activity("ad_kayak")
    session.toggle_activity("ad_kayak")

    assert session.selection.location_ids == []
    assert session.selection.activity_ids == []
    assert len(session.itinerary.days) == 2


def test_manual_edits_discarded_on_selection_change(session: TripSession) -> None:
    select(session, "pb_cellular", "pb_corbyn", "hl_radhanagar")

    session.insert_day_after(1)
    session.set_transport(1, "Day Cab")
    assert len(session.itinerary.days) == 7
    assert session.costs.ground_transport == 3200 + 500 + 800

    session.toggle_location("pb_ross")

    days = session.itinerary.days
    assert len(days) == 6
    assert [stop.location_id for stop in days[1].stops] == ["pb_cellular", "pb_ross", "pb_corbyn"]
    assert days[1].transport == TransportMode.day_cab


def test_day_edits_through_session(session: TripSession) -> None:
    select(session, "pb_cellular", "pb_corbyn")

    session.move_item(1, 0, +1)
    assert [item.kind for item in session.itinerary.days[2].items][-1] == "location"

    session.delete_day(0)
    assert session.itinerary.days[0].is_arrival


def test_start_at_hub_regenerates_only_on_change(session: TripSession) -> None:
    select(session, "hl_elephant")
    session.insert_day_after(2)
    assert len(session.itinerary.days) == 6

    session.set_start_at_hub(True)
    assert len(session.itinerary.days) == 6

    session.set_start_at_hub(False)
    assert len(session.itinerary.days) == 5
    assert session.itinerary.days[0].island == PB


def test_regeneration_is_counted(session: TripSession) -> None:
    before = REGISTRY.get_sample_value("itinerary_regenerations_total") or 0

    select(session, "pb_ross")

    assert REGISTRY.get_sample_value("itinerary_regenerations_total") == before + 1


def test_location_filters(session: TripSession) -> None:
    """The airport is never offered; island and mood filters combine."""
    assert "pb_airport" not in {loc.id for loc in session.selectable_locations}
    assert len(session.filtered_locations) == 16

    session.set_island_filter(HL)
    assert [loc.id for loc in session.filtered_locations] == [
        "hl_radhanagar",
        "hl_elephant",
        "hl_kalapathar",
    ]

    session.set_island_filter("All")
    session.set_mood_filter("Romantic")
    assert [loc.id for loc in session.filtered_locations] == ["pb_corbyn", "hl_radhanagar"]

    session.set_mood_filter("Spooky")
    assert session.selection.mood_filter == Mood.romantic

    session.set_mood_filter(None)
    assert len(session.filtered_locations) == 16


def test_islands_and_hotel_options(session: TripSession) -> None:
    assert session.islands[:2] == [PB, HL]
    assert len(session.islands) == 5
    assert [hotel.id for hotel in session.hotel_options(HL)] == ["hl_h1", "hl_h2", "hl_h3"]


def test_suggested_activities(session: TripSession) -> None:
    """Mapped add-ons win; otherwise add-ons offered on the selected islands."""
    assert session.suggested_activities == []

    select(session, "pb_corbyn")
    assert [a.id for a in session.suggested_activities] == [
        "ad_kayak",
        "ad_snorkel",
        "ad_seawalk",
        "ad_glassboat",
        "ad_parasail",
    ]

    select(session, "hl_radhanagar")
    assert [a.id for a in session.suggested_activities] == ["ad_scuba"]


def test_suggested_for_location(session: TripSession) -> None:
    north_bay = session.suggested_for_location("pb_north_bay")
    assert [a.id for a in north_bay] == ["ad_seawalk", "ad_glassboat", "ad_snorkel"]

    neil = session.suggested_for_location("nl_bridge")
    assert [a.id for a in neil] == ["ad_snorkel", "ad_scuba", "ad_glassboat"]

    assert session.suggested_for_location("nowhere") == []


def test_unavailable_session_rejects_events() -> None:
    session = TripSession.unavailable("locations: HTTP 500")

    assert not session.ready
    assert session.itinerary is None
    with pytest.raises(SessionUnavailableError):
        session.toggle_location("pb_ross")
    with pytest.raises(SessionUnavailableError):
        _ = session.costs


def fixture_transport(failing: str | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        resource = request.url.path.rsplit("/", 1)[-1].removesuffix(".json")
        if resource == failing:
            return httpx.Response(500)
        return httpx.Response(200, content=(FIXTURES_DIR / f"{resource}.json").read_bytes())

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_open_session_ready() -> None:
    client = httpx.AsyncClient(transport=fixture_transport())
    loader = CatalogLoader("http://catalog.test/data", client=client)

    session = await open_session(loader)

    assert session.ready
    assert len(session.catalog.locations) == 17
    session.toggle_location("nl_bridge")
    assert len(session.itinerary.days) == 5


@pytest.mark.asyncio
async def test_open_session_unavailable_on_load_failure() -> None:
    client = httpx.AsyncClient(transport=fixture_transport(failing="locations"))
    loader = CatalogLoader("http://catalog.test/data", client=client)

    session = await open_session(loader)

    assert not session.ready
    assert "locations" in session.error
    with pytest.raises(SessionUnavailableError):
        session.set_adult_count(3)


@pytest.mark.asyncio
async def test_open_session_unavailable_on_client_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.InvalidURL("invalid host")

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    loader = CatalogLoader("http://catalog.test/data", client=client)

    session = await open_session(loader)

    assert not session.ready
    assert "InvalidURL" in session.error
