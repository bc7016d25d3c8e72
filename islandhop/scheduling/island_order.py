"""Island visiting order."""

from collections.abc import Iterable, Sequence


def resolve_island_order(
    islands: Iterable[str],
    priority: Sequence[str],
    *,
    prefer_hub_first: bool,
    hub: str,
) -> list[str]:
    """Order the islands touched by a selection.

    Islands sort by their index in the canonical priority list; islands missing
    from that list go last in first-seen order. With ``prefer_hub_first`` the hub
    is moved to the front, and injected there when the selection does not touch
    it, so the trip always starts and ends on the hub.

    Args:
        islands: Islands among the selected locations (duplicates ignored)
        priority: Canonical ordering of every known island
        prefer_hub_first: Whether to start the trip on the hub island
        hub: Arrival/departure island

    Returns:
        Ordered islands, each appearing exactly once
    """
    unique = list(dict.fromkeys(islands))
    rank = {island: i for i, island in enumerate(priority)}
    # sorted() is stable, so unknown islands keep first-seen order
    order = sorted(unique, key=lambda island: rank.get(island, len(priority)))

    if prefer_hub_first:
        order = [hub, *(island for island in order if island != hub)]

    return order
