"""Ordering engine - time-derived display order and manual swaps.

Clock comparison is lexicographic on the stripped raw string. For zero-padded
``HH:MM`` values this equals chronological order; malformed values such as
``"9:30"`` simply sort by raw string (``"10:00" < "9:30"``).
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Literal, Protocol, TypeVar


class HasId(Protocol):
    """Anything addressable by an ``id`` attribute."""

    id: str


T = TypeVar("T")
E = TypeVar("E", bound=HasId)

Direction = Literal["up", "down"]


def _item_clock(entry: object) -> str | None:
    return getattr(entry, "time", None)


def _event_start(entry: object) -> datetime:
    return getattr(entry, "start_at")


def clock_sort_key(clock: str | None) -> tuple[int, str]:
    """Sort key placing blank clocks after every present clock."""
    stripped = (clock or "").strip()
    if not stripped:
        return (1, "")
    return (0, stripped)


def sort_by_clock(
    entries: Sequence[T], clock: Callable[[T], str | None] = _item_clock
) -> list[T]:
    """Order entries by clock-of-day ascending.

    Blank or missing clocks come last. Python's sort is stable, so equal
    clocks and blank clocks keep their insertion order.

    Args:
        entries: Entries in insertion order
        clock: Accessor returning the entry's clock string

    Returns:
        New list in display order
    """
    return sorted(entries, key=lambda entry: clock_sort_key(clock(entry)))


def sort_by_timestamp(
    entries: Sequence[T], timestamp: Callable[[T], datetime] = _event_start
) -> list[T]:
    """Order entries chronologically, stable for equal timestamps."""
    return sorted(entries, key=timestamp)


def swap_entries(ordered: Sequence[E], id_a: str, id_b: str) -> list[E] | None:
    """Swap two entries within an existing ordering.

    The result is meant to be persisted verbatim, not re-sorted.

    Returns:
        New list with the two entries swapped, or None if either ID is
        missing or both IDs are the same
    """
    if id_a == id_b:
        return None

    positions = {entry.id: idx for idx, entry in enumerate(ordered)}
    if id_a not in positions or id_b not in positions:
        return None

    i, j = positions[id_a], positions[id_b]
    swapped = list(ordered)
    swapped[i], swapped[j] = swapped[j], swapped[i]
    return swapped


def move_entry(ordered: Sequence[E], entry_id: str, direction: Direction) -> list[E] | None:
    """Swap an entry with its neighbour above or below.

    Returns:
        New list, or None for unknown IDs and moves past either end
    """
    idx = next((i for i, entry in enumerate(ordered) if entry.id == entry_id), -1)
    if idx < 0:
        return None

    j = idx - 1 if direction == "up" else idx + 1
    if j < 0 or j >= len(ordered):
        return None

    return swap_entries(ordered, ordered[idx].id, ordered[j].id)
