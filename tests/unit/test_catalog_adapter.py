"""Tests for catalog row normalization."""

from collections.abc import Mapping
from typing import Any

from islandhop.adapters.catalog import (
    normalize_activities,
    normalize_hotels,
    normalize_location_activities,
    normalize_locations,
    normalize_transit_legs,
    parse_time_window,
)
from islandhop.models.catalog import CatalogBundle
from islandhop.models.common import HotelTier, Mood, TimeOfDay

PB = "Port Blair (South Andaman)"
HL = "Havelock (Swaraj Dweep)"


class RomanticInferrer:
    """Stub strategy that tags everything Romantic."""

    def __init__(self) -> None:
        self.records: list[Mapping[str, Any]] = []

    def infer(self, record: Mapping[str, Any]) -> list[Mood]:
        self.records.append(record)
        return [Mood.romantic]


def test_location_with_all_fields() -> None:
    """Explicit fields are kept; mood tags are matched case-insensitively."""
    rows = [
        {
            "id": "hl_radhanagar",
            "island": HL,
            "location": "Radhanagar Beach",
            "typicalHours": 3,
            "moods": ["relaxed", "Romantic"],
            "brief": "White sand beach",
            "bestTime": "Sunset",
            "image": "https://img.example/radhanagar.jpg",
        }
    ]

    (location,) = normalize_locations(rows)

    assert location.id == "hl_radhanagar"
    assert location.island == HL
    assert location.name == "Radhanagar Beach"
    assert location.duration_hours == 3
    assert location.moods == [Mood.relaxed, Mood.romantic]
    assert location.best_times == [TimeOfDay.evening]
    assert location.image == "https://img.example/radhanagar.jpg"


def test_location_defaults() -> None:
    """Missing island -> hub, missing duration -> 2h, missing id -> positional id."""
    (location,) = normalize_locations([{"name": "Aberdeen Bazaar"}])

    assert location.id == "loc-0"
    assert location.island == PB
    assert location.duration_hours == 2.0
    assert location.moods == [Mood.relaxed]
    assert location.best_times == []
    assert location.image is None


def test_invalid_durations_use_default() -> None:
    """Non-positive or non-numeric durations fall back to 2h; numeric strings parse."""
    rows = [
        {"id": "a", "name": "A", "typicalHours": -1},
        {"id": "b", "name": "B", "typicalHours": "abc"},
        {"id": "c", "name": "C", "durationHrs": "3.5"},
        {"id": "d", "name": "D", "typicalHours": True},
    ]

    durations = [loc.duration_hours for loc in normalize_locations(rows)]

    assert durations == [2.0, 2.0, 3.5, 2.0]


def test_mood_aliases_and_unknown_tags() -> None:
    """Aliases map onto the vocabulary; unknown tags are dropped."""
    rows = [
        {"id": "a", "name": "Zoo", "moods": ["Family-friendly", "Spooky"]},
        {"id": "b", "name": "Market", "mood": "adventurous"},
    ]

    first, second = normalize_locations(rows)

    assert first.moods == [Mood.family]
    assert second.moods == [Mood.adventure]


def test_missing_moods_use_inferrer() -> None:
    """Rows without usable moods are tagged by the injected strategy."""
    inferrer = RomanticInferrer()
    rows = [
        {"id": "a", "location": "Ross Island", "typicalHours": 2.5},
        {"id": "b", "location": "Corbyn's Cove", "moods": ["Spooky"]},
        {"id": "c", "location": "Radhanagar", "moods": ["Relaxed"]},
    ]

    locations = normalize_locations(rows, inferrer=inferrer)

    assert [loc.moods for loc in locations] == [[Mood.romantic], [Mood.romantic], [Mood.relaxed]]
    # The inferrer sees the normalized name and duration
    assert inferrer.records[0]["name"] == "Ross Island"
    assert inferrer.records[0]["duration_hours"] == 2.5
    assert inferrer.records[1]["duration_hours"] == 2.0


def test_best_times_list_wins_over_text() -> None:
    rows = [
        {"id": "a", "name": "A", "bestTimes": ["Morning", "nope", "evening"], "bestTime": "Noon"}
    ]

    (location,) = normalize_locations(rows)

    assert location.best_times == [TimeOfDay.morning, TimeOfDay.evening]


def test_malformed_rows_are_skipped() -> None:
    """Non-object rows are dropped; the rest of the catalog survives."""
    locations = normalize_locations([None, "oops", {"id": "ok", "name": "Fine"}, 42])

    assert [loc.id for loc in locations] == ["ok"]


def test_catalog_order_is_kept() -> None:
    rows = [{"id": f"l{i}", "name": f"L{i}"} for i in range(5)]
    assert [loc.id for loc in normalize_locations(rows)] == ["l0", "l1", "l2", "l3", "l4"]


def test_activity_price_fields() -> None:
    """basePriceINR or price; negative and missing prices become 0."""
    rows = [
        {"id": "ad_kayak", "name": "Kayak", "basePriceINR": 1800, "islands": [PB, HL]},
        {"id": "ad_walk", "name": "Walk", "price": "1499.6"},
        {"id": "ad_free", "name": "Free", "price": -50},
        {"id": "ad_none", "name": "None"},
    ]

    activities = normalize_activities(rows)

    assert [a.price for a in activities] == [1800, 1500, 0, 0]
    assert activities[0].islands == [PB, HL]
    assert activities[1].islands == []


def test_transit_leg_formats() -> None:
    """Both origin/destination + time and from/to + departure/arrival are accepted."""
    rows = [
        {"origin": PB, "destination": HL, "operator": "Makruzz", "time": "08:00–09:30"},
        {"from": PB, "to": "Long Island", "departure": "06:00", "arrival": "11:30"},
        {"origin": HL, "destination": PB},
        {"origin": HL, "operator": "Nowhere"},
    ]

    legs = normalize_transit_legs(rows)

    assert len(legs) == 3
    assert legs[0].operator == "Makruzz"
    assert legs[0].window is not None
    assert legs[0].window.label() == "08:00–09:30"
    assert legs[1].destination == "Long Island"
    assert legs[1].window is not None
    assert legs[1].window.label() == "06:00–11:30"
    assert legs[2].operator is None
    assert legs[2].window is None


def test_parse_time_window() -> None:
    assert parse_time_window("10:00-11:00").label() == "10:00–11:00"
    assert parse_time_window("10:00 — 11:00").label() == "10:00–11:00"
    assert parse_time_window("morning") is None
    assert parse_time_window("25:00-26:00") is None
    assert parse_time_window(None) is None


def test_hotels() -> None:
    """Hotels need an island and a known tier."""
    rows = [
        {"id": "pb_h1", "island": PB, "name": "PB Value", "tier": "Value", "sell_price": 3299},
        {"id": "hl_h3", "island": HL, "name": "HL Top", "tier": "Premium", "nightly_rate": 10999},
        {"id": "x", "island": PB, "name": "No tier", "sell_price": 1000},
        {"id": "y", "name": "No island", "tier": "Mid", "sell_price": 1000},
    ]

    hotels = normalize_hotels(rows)

    assert [(h.id, h.tier, h.nightly_rate) for h in hotels] == [
        ("pb_h1", HotelTier.value, 3299),
        ("hl_h3", HotelTier.premium, 10999),
    ]


def test_location_activity_mapping() -> None:
    """Mapping rows are indexed by location id; duplicates collapse."""
    rows = [
        {"locationId": "pb_north_bay", "adventureIds": ["ad_seawalk", "ad_snorkel"]},
        {"locationId": "pb_north_bay", "adventureIds": ["ad_snorkel", "ad_glassboat"]},
        {"locationId": "hl_elephant", "adventureIds": "ad_snorkel"},
        {"adventureIds": ["ad_kayak"]},
    ]

    mapping = normalize_location_activities(rows)

    assert mapping == {"pb_north_bay": ["ad_seawalk", "ad_snorkel", "ad_glassboat"]}


def test_fixture_bundle(fixture_bundle: CatalogBundle) -> None:
    """Packaged fixtures normalize into a complete catalog."""
    assert len(fixture_bundle.locations) == 17
    assert len(fixture_bundle.activities) == 7
    assert len(fixture_bundle.transit_legs) == 5
    assert len(fixture_bundle.hotels) == 10
    assert fixture_bundle.location_activities["hl_radhanagar"] == ["ad_scuba"]
    assert all(loc.moods for loc in fixture_bundle.locations)
    assert fixture_bundle.provenance["locations"].source == "catalog.fixtures.locations"
    assert fixture_bundle.provenance["hotels"].record_count == 10
