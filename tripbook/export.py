"""Export codec - pure transformation of current state into a download payload."""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from tripbook.models.export import PoolExport, TripExport
from tripbook.models.pool import DayRecord, Event
from tripbook.models.trip import Trip
from tripbook.planning.ordering import sort_by_timestamp

_WHITESPACE_RE = re.compile(r"\s+")
_UNSAFE_FILENAME_RE = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


@dataclass(frozen=True)
class ExportFile:
    """Export payload ready to hand to a download/write collaborator."""

    filename: str
    content: str
    media_type: str = "application/json;charset=utf-8"


def export_filename(name: str | None, now: datetime, fallback_prefix: str = "trip") -> str:
    """Derive a deterministic file name.

    Whitespace runs become ``_`` and characters unsafe in file names are
    replaced, so ``"Tokyo Trip"`` yields ``Tokyo_Trip.json``. A blank name
    falls back to ``{fallback_prefix}_YYYYMMDD_HHMM.json``.
    """
    stem = _UNSAFE_FILENAME_RE.sub("_", _WHITESPACE_RE.sub("_", (name or "").strip()))
    if not stem.strip("._"):
        stem = f"{fallback_prefix}_{now.strftime('%Y%m%d_%H%M')}"
    return f"{stem}.json"


def build_trip_export(trip: Trip, exported_at: datetime) -> TripExport:
    """Trip document plus export timestamp."""
    return TripExport(**trip.model_dump(), exported_at=exported_at)


def build_pool_export(
    days: Sequence[DayRecord], events: Sequence[Event], exported_at: datetime
) -> PoolExport:
    """Day list plus the whole pool sorted chronologically, regardless of in-memory order."""
    return PoolExport(
        days=[day.model_copy() for day in days],
        events=[event.model_copy() for event in sort_by_timestamp(events)],
        exported_at=exported_at,
    )


def render_export(document: TripExport | PoolExport, indent: int = 2) -> str:
    """Pretty JSON text of an export document."""
    return document.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


def export_trip(trip: Trip, now: datetime, indent: int = 2) -> ExportFile:
    """Export payload for a day-owns-items trip, named after the trip."""
    document = build_trip_export(trip, exported_at=now)
    return ExportFile(
        filename=export_filename(trip.name, now),
        content=render_export(document, indent=indent),
    )


def export_pool(
    days: Sequence[DayRecord], events: Sequence[Event], now: datetime, indent: int = 2
) -> ExportFile:
    """Export payload for a day list + event pool, named after the export time."""
    document = build_pool_export(days, events, exported_at=now)
    return ExportFile(
        filename=export_filename(None, now, fallback_prefix="itinerary"),
        content=render_export(document, indent=indent),
    )
