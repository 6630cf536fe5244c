"""Grouping engine - bucket a flat event pool into calendar days."""

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from tripbook.models.pool import DayRecord, Event
from tripbook.planning.ordering import sort_by_timestamp


@dataclass(frozen=True)
class EventIndex:
    """Events bucketed by calendar date, each bucket chronologically sorted.

    Built once per pool change so that reading any day is a dict lookup.
    """

    by_date: dict[date, list[Event]] = field(default_factory=dict)

    @classmethod
    def build(cls, events: Sequence[Event]) -> "EventIndex":
        """Build the index in a single pass over the pool."""
        buckets: dict[date, list[Event]] = defaultdict(list)
        for event in sort_by_timestamp(events):
            buckets[event.date].append(event)
        return cls(by_date=dict(buckets))

    def for_date(self, day: date) -> list[Event]:
        """Events on a date (copy), empty if none."""
        return list(self.by_date.get(day, []))


def group_by_day(days: Sequence[DayRecord], events: Sequence[Event]) -> dict[str, list[Event]]:
    """Compute each day's events.

    Args:
        days: Day list
        events: Flat event pool

    Returns:
        Mapping of day ID to that day's events in chronological order;
        days without events map to an empty list
    """
    index = EventIndex.build(events)
    return {day.id: index.for_date(day.date) for day in days}
