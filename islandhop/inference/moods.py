"""Heuristic mood and time-of-day inference for catalog records.

Keyword rules are deliberately simple; any object with an ``infer`` method can
replace ``KeywordMoodInferrer`` (e.g. a trained classifier) without touching the
scheduler.
"""

import re
from collections.abc import Mapping
from typing import Any, Protocol

from islandhop.models.common import Mood, TimeOfDay

ADVENTURE_PATTERN = re.compile(r"snorkel|scuba|dive|diving|trek|kayak|surf|jet|parasail")
RELAXED_PATTERN = re.compile(r"beach|sunset|view|cove|lagoon|mangrove")
FAMILY_PATTERN = re.compile(r"museum|culture|heritage|jail|cellular|memorial")
PHOTOGRAPHY_PATTERN = re.compile(r"wildlife|reef|coral|mangrove|bird|nature|peak")
OFFBEAT_PATTERN = re.compile(
    r"lighthouse|mangrove|cave|mud volcano|baratang|ross|smith|saddle peak|long island"
)

MORNING_PATTERN = re.compile(r"morning|sunrise|\bam\b")
AFTERNOON_PATTERN = re.compile(r"afternoon|noon|midday")
EVENING_PATTERN = re.compile(r"evening|sunset|\bpm\b")

MOOD_ORDER = list(Mood)


class MoodInferrer(Protocol):
    """Strategy for deriving mood tags from a raw catalog record."""

    def infer(self, record: Mapping[str, Any]) -> list[Mood]: ...


def infer_moods(text: str, duration_hours: float) -> list[Mood]:
    """Infer mood tags from free text and visit duration.

    Every rule is evaluated independently, so a record can carry several tags.
    Falls back to Balanced when nothing fires; never returns an empty list.

    Args:
        text: Free-text fields (name, brief) of the location
        duration_hours: Typical visit duration in hours

    Returns:
        Mood tags in vocabulary order, without duplicates
    """
    haystack = text.lower()
    moods: set[Mood] = set()

    # Duration rules
    if duration_hours <= 2:
        moods.add(Mood.relaxed)
    if duration_hours >= 3:
        moods.add(Mood.balanced)
    if duration_hours >= 4:
        moods.add(Mood.active)

    # Keyword rules
    if ADVENTURE_PATTERN.search(haystack):
        moods.add(Mood.adventure)
    if RELAXED_PATTERN.search(haystack):
        moods.add(Mood.relaxed)
    if FAMILY_PATTERN.search(haystack):
        moods.add(Mood.family)
    if PHOTOGRAPHY_PATTERN.search(haystack):
        moods.add(Mood.photography)
    if OFFBEAT_PATTERN.search(haystack):
        moods.add(Mood.offbeat)

    if not moods:
        moods.add(Mood.balanced)

    return [mood for mood in MOOD_ORDER if mood in moods]


class KeywordMoodInferrer:
    """Default regex-driven mood strategy."""

    def __init__(self, default_duration_hours: float = 2.0) -> None:
        self.default_duration_hours = default_duration_hours

    def infer(self, record: Mapping[str, Any]) -> list[Mood]:
        text = " ".join(
            str(record.get(key) or "") for key in ("location", "name", "brief")
        )
        duration = record.get("duration_hours")
        if not isinstance(duration, int | float) or duration <= 0:
            duration = self.default_duration_hours
        return infer_moods(text, float(duration))


def best_time_to_parts(best_time: str | None) -> list[TimeOfDay]:
    """Map a free-text "best time" hint to day parts.

    Examples:
        "Early morning" -> [morning]
        "Sunset"        -> [evening]
        "Anytime"       -> []
    """
    text = (best_time or "").lower()
    parts: list[TimeOfDay] = []
    if MORNING_PATTERN.search(text):
        parts.append(TimeOfDay.morning)
    if AFTERNOON_PATTERN.search(text):
        parts.append(TimeOfDay.afternoon)
    if EVENING_PATTERN.search(text):
        parts.append(TimeOfDay.evening)
    return parts
