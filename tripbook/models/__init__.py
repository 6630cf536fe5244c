"""Models package - re-exports for convenience."""

from pydantic import TypeAdapter

from tripbook.models.export import PoolExport, TripExport
from tripbook.models.pool import DayRecord, Event
from tripbook.models.trip import Day, Item, Trip

# Persisted document shapes
TRIP_DOCUMENT: TypeAdapter[Trip] = TypeAdapter(Trip)
DAY_LIST_DOCUMENT: TypeAdapter[list[DayRecord]] = TypeAdapter(list[DayRecord])
EVENT_POOL_DOCUMENT: TypeAdapter[list[Event]] = TypeAdapter(list[Event])

__all__ = [
    # Day-owns-items
    "Trip",
    "Day",
    "Item",
    # Event pool
    "DayRecord",
    "Event",
    # Export
    "TripExport",
    "PoolExport",
    # Document adapters
    "TRIP_DOCUMENT",
    "DAY_LIST_DOCUMENT",
    "EVENT_POOL_DOCUMENT",
]
