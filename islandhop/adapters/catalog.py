"""Catalog adapter: raw catalog rows -> canonical models.

Raw rows come from hand-maintained JSON files, so the adapter is forgiving: a
row missing a field gets a safe default instead of failing the whole catalog.
Only rows that are not objects at all are dropped.
"""

import logging
import math
import re
from collections.abc import Mapping, Sequence
from datetime import time
from typing import Any

from islandhop.config import Settings, get_settings
from islandhop.inference.moods import KeywordMoodInferrer, MoodInferrer, best_time_to_parts
from islandhop.models.catalog import Activity, Hotel, Location, TransitLegRecord
from islandhop.models.common import HotelTier, Mood, TimeOfDay, TimeWindow

logger = logging.getLogger(__name__)

DURATION_KEYS = ("typicalHours", "durationHrs", "duration_hours", "duration")
PRICE_KEYS = ("basePriceINR", "price")
WINDOW_SPLIT = re.compile(r"\s*[–—-]\s*")

MOOD_ALIASES = {
    "family-friendly": Mood.family,
    "family friendly": Mood.family,
    "adventurous": Mood.adventure,
    "relaxing": Mood.relaxed,
}


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _first_present(raw: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def parse_duration(raw: Mapping[str, Any], default_hours: float) -> float:
    """Visit duration in hours; non-positive or missing values use the default."""
    hours = _as_float(_first_present(raw, DURATION_KEYS))
    if hours is None or hours <= 0:
        return default_hours
    return hours


def parse_moods(value: Any) -> list[Mood]:
    """Known mood tags from a raw list (or single string); unknown tags are dropped."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []

    by_name = {mood.value.lower(): mood for mood in Mood}
    moods: list[Mood] = []
    for tag in value:
        key = _text(tag).lower()
        mood = by_name.get(key) or MOOD_ALIASES.get(key)
        if mood is not None and mood not in moods:
            moods.append(mood)
    return moods


def parse_best_times(raw: Mapping[str, Any]) -> list[TimeOfDay]:
    best_times = raw.get("bestTimes")
    if isinstance(best_times, list):
        parts: list[TimeOfDay] = []
        for part in best_times:
            try:
                parsed = TimeOfDay(_text(part).lower())
            except ValueError:
                continue
            if parsed not in parts:
                parts.append(parsed)
        return parts
    best_time = raw.get("bestTime")
    return best_time_to_parts(best_time if isinstance(best_time, str) else None)


def parse_time_window(text: Any) -> TimeWindow | None:
    """Parse ``"08:00–09:30"`` (en dash, em dash or hyphen) into a TimeWindow."""
    if not isinstance(text, str):
        return None
    pieces = WINDOW_SPLIT.split(text.strip(), maxsplit=1)
    if len(pieces) != 2:
        return None
    try:
        return TimeWindow(start=time.fromisoformat(pieces[0]), end=time.fromisoformat(pieces[1]))
    except ValueError:
        return None


def _rows(rows: Sequence[Any], resource: str) -> list[tuple[int, Mapping[str, Any]]]:
    kept = []
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            logger.warning(
                f"Skipping malformed {resource} row",
                extra={"structured": {"resource": resource, "index": index}},
            )
            continue
        kept.append((index, row))
    return kept


def normalize_location(
    raw: Mapping[str, Any],
    index: int,
    *,
    inferrer: MoodInferrer,
    settings: Settings,
) -> Location:
    """Normalize one raw location row.

    Defaults: id -> ``loc-<index>``, name -> id, island -> hub island,
    duration -> ``default_duration_hours``, moods -> inferred.
    """
    location_id = _text(raw.get("id")) or f"loc-{index}"
    name = _text(raw.get("location") or raw.get("name")) or location_id
    island = _text(raw.get("island")) or settings.hub_island
    duration = parse_duration(raw, settings.default_duration_hours)

    moods = parse_moods(raw.get("moods") or raw.get("mood"))
    if not moods:
        moods = inferrer.infer({**raw, "name": name, "duration_hours": duration})

    image = raw.get("image")
    return Location(
        id=location_id,
        island=island,
        name=name,
        duration_hours=duration,
        moods=moods,
        best_times=parse_best_times(raw),
        brief=_text(raw.get("brief")),
        image=image if isinstance(image, str) and image else None,
    )


def normalize_locations(
    rows: Sequence[Any],
    *,
    inferrer: MoodInferrer | None = None,
    settings: Settings | None = None,
) -> list[Location]:
    """Normalize the locations catalog, keeping catalog order."""
    settings = settings or get_settings()
    inferrer = inferrer or KeywordMoodInferrer(settings.default_duration_hours)
    return [
        normalize_location(raw, index, inferrer=inferrer, settings=settings)
        for index, raw in _rows(rows, "locations")
    ]


def normalize_activity(raw: Mapping[str, Any], index: int) -> Activity:
    """Normalize one add-on row; a missing or negative price becomes 0."""
    activity_id = _text(raw.get("id")) or f"activity-{index}"
    price = _as_float(_first_present(raw, PRICE_KEYS))
    islands = raw.get("islands")
    return Activity(
        id=activity_id,
        name=_text(raw.get("name")) or activity_id,
        price=max(0, round(price)) if price is not None else 0,
        islands=[_text(i) for i in islands if _text(i)] if isinstance(islands, list) else [],
    )


def normalize_activities(rows: Sequence[Any]) -> list[Activity]:
    return [normalize_activity(raw, index) for index, raw in _rows(rows, "activities")]


def normalize_transit_leg(raw: Mapping[str, Any]) -> TransitLegRecord | None:
    """Normalize one ferry schedule row; rows without both ends are unusable."""
    origin = _text(raw.get("origin") or raw.get("from"))
    destination = _text(raw.get("destination") or raw.get("to"))
    if not origin or not destination:
        return None

    window = parse_time_window(raw.get("time"))
    if window is None and raw.get("departure") and raw.get("arrival"):
        window = parse_time_window(f"{raw['departure']}-{raw['arrival']}")

    return TransitLegRecord(
        origin=origin,
        destination=destination,
        operator=_text(raw.get("operator")) or None,
        window=window,
    )


def normalize_transit_legs(rows: Sequence[Any]) -> list[TransitLegRecord]:
    legs = []
    for _, raw in _rows(rows, "ferries"):
        leg = normalize_transit_leg(raw)
        if leg is not None:
            legs.append(leg)
    return legs


def normalize_hotels(rows: Sequence[Any]) -> list[Hotel]:
    """Normalize hotel rows; rows with an unknown tier or no island are dropped."""
    hotels = []
    for index, raw in _rows(rows, "hotels"):
        island = _text(raw.get("island"))
        rate = _as_float(raw.get("sell_price", raw.get("nightly_rate")))
        try:
            tier = HotelTier(_text(raw.get("tier")))
        except ValueError:
            tier = None
        if not island or tier is None:
            logger.warning(
                "Skipping hotel row without island or tier",
                extra={"structured": {"resource": "hotels", "index": index}},
            )
            continue
        hotel_id = _text(raw.get("id")) or f"hotel-{index}"
        hotels.append(
            Hotel(
                id=hotel_id,
                island=island,
                name=_text(raw.get("name")) or hotel_id,
                tier=tier,
                nightly_rate=max(0, round(rate)) if rate is not None else 0,
            )
        )
    return hotels


def normalize_location_activities(rows: Sequence[Any]) -> dict[str, list[str]]:
    """Index ``[{locationId, adventureIds}]`` rows by location id."""
    mapping: dict[str, list[str]] = {}
    for _, raw in _rows(rows, "location_adventures"):
        location_id = _text(raw.get("locationId"))
        activity_ids = raw.get("adventureIds")
        if not location_id or not isinstance(activity_ids, list):
            continue
        ids = mapping.setdefault(location_id, [])
        for activity_id in activity_ids:
            text = _text(activity_id)
            if text and text not in ids:
                ids.append(text)
    return mapping
