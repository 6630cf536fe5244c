"""Day-owns-items itinerary session.

Every mutating operation runs through ``_commit``: the mutation is applied to a
deep copy of the trip, rejected mutations leave state and storage untouched,
and accepted ones refresh ``updated_at`` and are written through immediately.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from tripbook.config import Settings, get_settings
from tripbook.db.gateway import PersistenceGateway
from tripbook.db.repositories import Absent, KeyValueStore
from tripbook.export import ExportFile, export_trip
from tripbook.maps import maps_search_url
from tripbook.models import TRIP_DOCUMENT
from tripbook.models.trip import Day, Item, Trip
from tripbook.planning.ordering import Direction, move_entry, sort_by_clock, swap_entries
from tripbook.planning.seed import day_label, default_trip
from tripbook.session.base import (
    LOAD_FAILED_MESSAGE,
    RESET_MESSAGE,
    Notifier,
    WriteThroughSession,
)
from tripbook.utils.ids import new_id
from tripbook.utils.timeutil import parse_clock, touch

logger = logging.getLogger(__name__)


def normalize_time(raw: str | None) -> str:
    """Zero-pad well-formed clocks; keep anything else as typed (stripped)."""
    stripped = (raw or "").strip()
    return parse_clock(stripped) or stripped


def display_order(day: Day) -> list[Item]:
    """Items as they should be shown: manual sequence or time-derived."""
    if day.manual_order:
        return list(day.items)
    return sort_by_clock(day.items)


class TripSession(WriteThroughSession):
    """Owns one trip and its active-day selection."""

    def __init__(
        self,
        gateway: PersistenceGateway[Trip],
        trip: Trip,
        settings: Settings | None = None,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(notifier=notifier, clock=clock)
        self._gateway = gateway
        self._trip = trip
        self._settings = settings or get_settings()
        self._active_day_id = trip.days[0].id if trip.days else ""

    @classmethod
    def open(
        cls,
        store: KeyValueStore,
        settings: Settings | None = None,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> "TripSession":
        """Restore the trip from storage, or seed and persist the default one.

        When the store cannot be read at all, the default trip is kept in
        memory only so the stored document is not overwritten.
        """
        settings = settings or get_settings()
        gateway = PersistenceGateway(store, settings.trip_key, TRIP_DOCUMENT)

        result = gateway.load()
        if isinstance(result, Absent):
            reason = result.reason
        elif not result.value.days:
            reason = "empty"
        else:
            logger.info(f"[trip_session] restored trip {result.value.id} ({len(result.value.days)} days)")
            return cls(gateway, result.value, settings, notifier, clock)

        session = cls(gateway, default_trip(settings), settings, notifier, clock)
        if reason == "unavailable":
            logger.warning("[trip_session] storage unreadable, default trip kept in memory only")
            session._notify(LOAD_FAILED_MESSAGE, "warning")
        else:
            logger.info(f"[trip_session] seeding default trip (stored state {reason})")
            session._persist()
        return session

    # --- Reads ---

    @property
    def trip(self) -> Trip:
        """Current trip (treat as read-only; mutate through session methods)."""
        return self._trip

    @property
    def active_day(self) -> Day:
        """Selected day, falling back to the first day."""
        return self._trip.find_day(self._active_day_id) or self._trip.days[0]

    def items_for_day(self, day_id: str | None = None) -> list[Item]:
        """Items of a day (default: active) in display order."""
        day = self._resolve_day(self._trip, day_id)
        return display_order(day) if day else []

    # --- Navigation (not persisted) ---

    def select_day(self, day_id: str) -> bool:
        """Make a day active."""
        if self._trip.find_day(day_id) is None:
            return False
        self._active_day_id = day_id
        return True

    # --- Trip-level mutations ---

    def rename(self, name: str) -> bool:
        """Set the trip's display name."""

        def mutate(trip: Trip) -> bool:
            trip.name = name
            return True

        return self._commit(mutate)

    def set_date_range(self, text: str) -> bool:
        """Set the free-text date-range label."""

        def mutate(trip: Trip) -> bool:
            trip.date_range = text
            return True

        return self._commit(mutate)

    def add_day(self, date_text: str | None = None) -> Day:
        """Append a day labelled with the next ordinal and make it active."""
        new_day = Day(
            id=new_id("day"),
            label=day_label(len(self._trip.days) + 1),
            date_text=date_text if date_text is not None else self._settings.new_day_date_text,
        )

        def mutate(trip: Trip) -> bool:
            trip.days.append(new_day)
            return True

        self._commit(mutate)
        self._active_day_id = new_day.id
        return new_day

    def set_day_date(self, day_id: str, date_text: str) -> bool:
        """Set a day's free-text date."""

        def mutate(trip: Trip) -> bool:
            day = trip.find_day(day_id)
            if day is None:
                return False
            day.date_text = date_text
            return True

        return self._commit(mutate)

    # --- Item mutations ---

    def add_item(
        self,
        title: str,
        time: str | None = None,
        location: str = "",
        note: str = "",
        day_id: str | None = None,
    ) -> Item | None:
        """Add an item to a day (default: active).

        A blank title is silently rejected. ``time=None`` uses the default
        item time; ``time=""`` leaves the item unscheduled. On a manually
        ordered day the new item goes last.

        Returns:
            The new item, or None if rejected
        """
        clean_title = title.strip()
        if not clean_title:
            return None

        item = Item(
            id=new_id("item"),
            time=normalize_time(self._settings.default_item_time if time is None else time),
            title=clean_title,
            location=location.strip(),
            note=note.strip(),
        )

        def mutate(trip: Trip) -> bool:
            day = self._resolve_day(trip, day_id)
            if day is None:
                return False
            day.items.append(item)
            return True

        return item if self._commit(mutate) else None

    def update_item(
        self,
        item_id: str,
        *,
        time: str | None = None,
        title: str | None = None,
        location: str | None = None,
        note: str | None = None,
        day_id: str | None = None,
    ) -> bool:
        """Edit an item's fields; omitted fields are left alone.

        Editing the time drops the day's manual order so display order is
        derived from times again.
        """
        if title is not None and not title.strip():
            return False

        def mutate(trip: Trip) -> bool:
            day = self._resolve_day(trip, day_id)
            item = day.find_item(item_id) if day else None
            if day is None or item is None:
                return False
            if time is not None:
                item.time = normalize_time(time)
                day.manual_order = False
            if title is not None:
                item.title = title.strip()
            if location is not None:
                item.location = location.strip()
            if note is not None:
                item.note = note.strip()
            return True

        return self._commit(mutate)

    def delete_item(self, item_id: str, day_id: str | None = None) -> bool:
        """Remove an item permanently."""

        def mutate(trip: Trip) -> bool:
            day = self._resolve_day(trip, day_id)
            if day is None or day.find_item(item_id) is None:
                return False
            day.items = [item for item in day.items if item.id != item_id]
            return True

        return self._commit(mutate)

    def move_item(self, item_id: str, direction: Direction, day_id: str | None = None) -> bool:
        """Swap an item with its neighbour in display order and pin that order."""

        def mutate(trip: Trip) -> bool:
            day = self._resolve_day(trip, day_id)
            if day is None:
                return False
            return self._pin_order(day, move_entry(display_order(day), item_id, direction))

        return self._commit(mutate)

    def swap_items(self, id_a: str, id_b: str, day_id: str | None = None) -> bool:
        """Swap two items in display order and pin that order."""

        def mutate(trip: Trip) -> bool:
            day = self._resolve_day(trip, day_id)
            if day is None:
                return False
            return self._pin_order(day, swap_entries(display_order(day), id_a, id_b))

        return self._commit(mutate)

    # --- Whole-aggregate operations ---

    def reset(self) -> Trip:
        """Discard everything and reseed the default trip."""
        fresh = default_trip(self._settings, updated_at=touch(self._trip.updated_at, self._now_ms()))
        self._trip = fresh
        self._active_day_id = fresh.days[0].id
        self._persist()
        self._notify(RESET_MESSAGE)
        logger.info(f"[trip_session] reset to fresh trip {fresh.id}")
        return fresh

    def export(self, now: datetime | None = None) -> ExportFile:
        """Export payload for the current trip (no side effects)."""
        return export_trip(self._trip, now or self._now(), indent=self._settings.export_indent)

    def location_link(self, location: str | None) -> str | None:
        """Map-search URL for a location, built from this session's settings."""
        return maps_search_url(location, settings=self._settings)

    # --- Internals ---

    def _resolve_day(self, trip: Trip, day_id: str | None) -> Day | None:
        if day_id is None:
            return trip.find_day(self._active_day_id) or (trip.days[0] if trip.days else None)
        return trip.find_day(day_id)

    @staticmethod
    def _pin_order(day: Day, ordered: list[Item] | None) -> bool:
        if ordered is None:
            return False
        day.items = ordered
        day.manual_order = True
        return True

    def _commit(self, mutate: Callable[[Trip], bool]) -> bool:
        draft = self._trip.model_copy(deep=True)
        if not mutate(draft):
            return False
        draft.updated_at = touch(self._trip.updated_at, self._now_ms())
        self._trip = draft
        self._persist()
        return True

    def _persist(self) -> None:
        self._record_saves([self._gateway.save(self._trip)])
