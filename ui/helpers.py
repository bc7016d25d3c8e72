"""Helper functions for UI - read-only views over session output."""

from datetime import date, timedelta
from typing import Any

from islandhop.models.itinerary import CostBreakdown, Itinerary


def format_inr(amount: float | int | None) -> str:
    """Format whole rupees with Indian digit grouping.

    Examples:
        1500    -> "₹1,500"
        123456  -> "₹1,23,456"
        None    -> "₹0"
    """
    value = round(amount) if isinstance(amount, int | float) else 0
    digits = str(abs(value))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join([*groups, tail])
    sign = "-" if value < 0 else ""
    return f"{sign}₹{digits}"


def build_trip_summary(
    itinerary: Itinerary, start_date: date | None = None
) -> list[dict[str, Any]]:
    """Build one summary row per day.

    Args:
        itinerary: Current itinerary
        start_date: Optional trip start; without it rows carry no calendar date

    Returns:
        List of dicts with day, date, island, stops and transport
    """
    rows = []
    for i, day in enumerate(itinerary.days):
        rows.append(
            {
                "day": i + 1,
                "date": (start_date + timedelta(days=i)).isoformat() if start_date else None,
                "island": day.island,
                "stops": ", ".join(item.name for item in day.items),
                "transport": day.transport.value,
                "locked": day.locked,
            }
        )
    return rows


def build_cost_line_items(costs: CostBreakdown) -> list[dict[str, Any]]:
    """Build the line items shown in the price summary bar."""
    items = [
        ("Hotels", costs.accommodation),
        ("Add-ons", costs.activities),
        ("Transport", costs.ground_transport),
        ("Ferries", costs.ferries),
    ]
    return [
        {"label": label, "amount": amount, "display": format_inr(amount)}
        for label, amount in items
    ]
