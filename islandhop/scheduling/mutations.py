"""Manual edits to a generated itinerary.

Every function is pure: the input itinerary is never mutated. A rejected edit
(bad index, locked day, too few days) returns the input itinerary itself, so
callers can detect a no-op with ``result is itinerary``. Rejections are not
errors; the UI is expected to disable those controls already.
"""

import logging

from islandhop.models.common import TransportMode
from islandhop.models.itinerary import Day, Itinerary

logger = logging.getLogger(__name__)

MIN_DAYS = 2
ANCHOR_KINDS = ("arrival", "departure")


def _in_range(itinerary: Itinerary, index: int) -> bool:
    return 0 <= index < len(itinerary.days)


def _rejected(op: str, reason: str, **details: object) -> None:
    logger.debug(
        f"Itinerary edit rejected: {op}",
        extra={"structured": {"op": op, "reason": reason, **details}},
    )


def insert_empty_day(itinerary: Itinerary, index: int) -> Itinerary:
    """Insert an unlocked, empty Point-to-Point day right after ``index``.

    The new day sits on the same island as day ``index``.
    """
    if not _in_range(itinerary, index):
        _rejected("insert_empty_day", "out_of_range", index=index)
        return itinerary

    updated = itinerary.model_copy(deep=True)
    updated.days.insert(
        index + 1,
        Day(island=updated.days[index].island, items=[], transport=TransportMode.point_to_point),
    )
    return updated


def delete_day(itinerary: Itinerary, index: int) -> Itinerary:
    """Delete day ``index`` unless it is an anchor day or the trip would shrink below 2 days."""
    if not _in_range(itinerary, index):
        _rejected("delete_day", "out_of_range", index=index)
        return itinerary
    if itinerary.days[index].locked:
        _rejected("delete_day", "locked", index=index)
        return itinerary
    if len(itinerary.days) <= MIN_DAYS:
        _rejected("delete_day", "min_days", index=index)
        return itinerary

    updated = itinerary.model_copy(deep=True)
    del updated.days[index]
    return updated


def move_item(itinerary: Itinerary, from_day: int, position: int, direction: int) -> Itinerary:
    """Move one item to the end of the previous (``-1``) or next (``+1``) day.

    Day capacity is not re-validated; the scheduler's caps only apply at
    generation time. Arrival and Departure items never leave their anchor days.
    """
    if direction not in (-1, 1):
        _rejected("move_item", "bad_direction", direction=direction)
        return itinerary
    to_day = from_day + direction
    if not _in_range(itinerary, from_day) or not _in_range(itinerary, to_day):
        _rejected("move_item", "out_of_range", from_day=from_day, to_day=to_day)
        return itinerary
    if not 0 <= position < len(itinerary.days[from_day].items):
        _rejected("move_item", "bad_position", from_day=from_day, position=position)
        return itinerary
    if itinerary.days[from_day].items[position].kind in ANCHOR_KINDS:
        _rejected("move_item", "anchor_item", from_day=from_day, position=position)
        return itinerary

    updated = itinerary.model_copy(deep=True)
    item = updated.days[from_day].items.pop(position)
    updated.days[to_day].items.append(item)
    return updated


def set_transport(itinerary: Itinerary, index: int, mode: TransportMode) -> Itinerary:
    """Overwrite the transport mode of an unlocked day."""
    if not _in_range(itinerary, index):
        _rejected("set_transport", "out_of_range", index=index)
        return itinerary
    if itinerary.days[index].locked:
        _rejected("set_transport", "locked", index=index)
        return itinerary

    updated = itinerary.model_copy(deep=True)
    updated.days[index].transport = TransportMode(mode)
    return updated
