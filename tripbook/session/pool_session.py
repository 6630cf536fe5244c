"""Event-pool itinerary session.

Days and events are two independently persisted documents, loaded together at
startup and both written after every mutation. Events carry absolute
timestamps; whatever time the user picks is re-anchored onto the date of the
day the event is filed under.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from tripbook.config import Settings, get_settings
from tripbook.db.gateway import PersistenceGateway
from tripbook.db.repositories import Absent, KeyValueStore, Parsed
from tripbook.export import ExportFile, export_pool
from tripbook.maps import maps_search_url
from tripbook.models import DAY_LIST_DOCUMENT, EVENT_POOL_DOCUMENT
from tripbook.models.pool import DayRecord, Event
from tripbook.planning.grouping import EventIndex
from tripbook.planning.seed import default_pool
from tripbook.session.base import (
    LOAD_FAILED_MESSAGE,
    RESET_MESSAGE,
    Notifier,
    WriteThroughSession,
)
from tripbook.utils.ids import new_id
from tripbook.utils.timeutil import anchor_to_day, clock_of, now_plus, touch

logger = logging.getLogger(__name__)

PoolMutation = Callable[[list[DayRecord], list[Event]], bool]


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


class PoolSession(WriteThroughSession):
    """Owns the day list, the event pool and the active-day selection."""

    def __init__(
        self,
        day_gateway: PersistenceGateway[list[DayRecord]],
        event_gateway: PersistenceGateway[list[Event]],
        days: list[DayRecord],
        events: list[Event],
        settings: Settings | None = None,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(notifier=notifier, clock=clock)
        self._day_gateway = day_gateway
        self._event_gateway = event_gateway
        self._days = days
        self._events = events
        self._settings = settings or get_settings()
        self._active_day_id = days[0].id if days else ""
        self.updated_at = self._now_ms()

        # Grouping index, rebuilt lazily once per pool revision
        self._revision = 0
        self._index: EventIndex | None = None
        self._index_revision = -1

    @classmethod
    def open(
        cls,
        store: KeyValueStore,
        settings: Settings | None = None,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> "PoolSession":
        """Restore days and events from storage, seeding whatever is absent.

        Default events are only seeded on a fresh start (no usable day list);
        if only the event document is lost the pool starts empty. Nothing is
        written back when either document could not be read.
        """
        settings = settings or get_settings()
        day_gateway = PersistenceGateway(store, settings.days_key, DAY_LIST_DOCUMENT)
        event_gateway = PersistenceGateway(store, settings.events_key, EVENT_POOL_DOCUMENT)

        day_result = day_gateway.load()
        event_result = event_gateway.load()

        restored_days = isinstance(day_result, Parsed) and bool(day_result.value)
        restored_events = isinstance(event_result, Parsed)

        if isinstance(day_result, Parsed) and restored_days:
            days, seed_events = day_result.value, []
        else:
            days, seed_events = default_pool(settings)
        events = event_result.value if isinstance(event_result, Parsed) else seed_events

        unreadable = any(
            isinstance(result, Absent) and result.reason == "unavailable"
            for result in (day_result, event_result)
        )

        session = cls(day_gateway, event_gateway, days, events, settings, notifier, clock)
        if restored_days and restored_events:
            logger.info(f"[pool_session] restored {len(days)} days, {len(events)} events")
        elif unreadable:
            logger.warning("[pool_session] storage unreadable, defaults kept in memory only")
            session._notify(LOAD_FAILED_MESSAGE, "warning")
        else:
            logger.info(
                f"[pool_session] seeded defaults (days restored={restored_days}, "
                f"events restored={restored_events})"
            )
            session._persist()
        return session

    # --- Reads ---

    @property
    def days(self) -> list[DayRecord]:
        """Day list in append order."""
        return list(self._days)

    @property
    def events(self) -> list[Event]:
        """Event pool in insertion order."""
        return list(self._events)

    @property
    def active_day(self) -> DayRecord:
        """Selected day, falling back to the first day."""
        return self._find_day(self._days, self._active_day_id) or self._days[0]

    @property
    def index(self) -> EventIndex:
        """Grouping index for the current pool revision."""
        if self._index is None or self._index_revision != self._revision:
            self._index = EventIndex.build(self._events)
            self._index_revision = self._revision
        return self._index

    def events_for_day(self, day_id: str | None = None) -> list[Event]:
        """Events whose date matches the day (default: active), chronologically."""
        day = self._find_day(self._days, day_id) if day_id is not None else self.active_day
        if day is None:
            return []
        return self.index.for_date(day.date)

    def grouped(self) -> dict[str, list[Event]]:
        """Every day's events, keyed by day ID."""
        index = self.index
        return {day.id: index.for_date(day.date) for day in self._days}

    # --- Navigation (not persisted) ---

    def select_day(self, day_id: str) -> bool:
        """Make a day active."""
        if self._find_day(self._days, day_id) is None:
            return False
        self._active_day_id = day_id
        return True

    # --- Mutations ---

    def add_day(self) -> DayRecord:
        """Append the day after the latest one (today if none) and make it active."""
        if self._days:
            next_date = max(day.date for day in self._days) + timedelta(days=1)
        else:
            next_date = self._now().date()
        new_day = DayRecord(id=new_id("day"), date=next_date)

        def mutate(days: list[DayRecord], events: list[Event]) -> bool:
            days.append(new_day)
            return True

        self._commit(mutate)
        self._active_day_id = new_day.id
        return new_day

    def add_event(
        self,
        title: str,
        when: str | datetime | None = None,
        location: str | None = None,
        note: str | None = None,
        day_id: str | None = None,
    ) -> Event | None:
        """File a new event under a day (default: active).

        ``when`` keeps only its clock-of-day; the date is forced to the day's
        date. Blank or malformed ``when`` defaults to now plus the configured
        offset. A blank title is silently rejected.

        Returns:
            The new event, or None if rejected
        """
        clean_title = title.strip()
        if not clean_title:
            return None

        day = self._find_day(self._days, day_id) if day_id is not None else self.active_day
        if day is None:
            return None

        event = Event(
            id=new_id("event"),
            title=clean_title,
            start_at=anchor_to_day(when, day.date, fallback_clock=self._default_clock()),
            location=_optional_text(location),
            note=_optional_text(note),
        )

        def mutate(days: list[DayRecord], events: list[Event]) -> bool:
            events.append(event)
            return True

        return event if self._commit(mutate) else None

    def update_event(
        self,
        event_id: str,
        *,
        when: str | datetime | None = None,
        title: str | None = None,
        location: str | None = None,
        note: str | None = None,
    ) -> bool:
        """Edit an event; a new time stays on the event's current date.

        Passing an empty ``location``/``note`` clears it.
        """
        if title is not None and not title.strip():
            return False

        def mutate(days: list[DayRecord], events: list[Event]) -> bool:
            idx = self._event_position(events, event_id)
            if idx < 0:
                return False
            event = events[idx]
            updates: dict[str, object] = {}
            if when is not None:
                updates["start_at"] = anchor_to_day(
                    when, event.date, fallback_clock=clock_of(event.start_at)
                )
            if title is not None:
                updates["title"] = title.strip()
            if location is not None:
                updates["location"] = _optional_text(location)
            if note is not None:
                updates["note"] = _optional_text(note)
            events[idx] = event.model_copy(update=updates)
            return True

        return self._commit(mutate)

    def move_event(self, event_id: str, day_id: str) -> bool:
        """Refile an event under another day, keeping its clock-of-day."""

        def mutate(days: list[DayRecord], events: list[Event]) -> bool:
            target = self._find_day(days, day_id)
            idx = self._event_position(events, event_id)
            if target is None or idx < 0:
                return False
            event = events[idx]
            events[idx] = event.model_copy(
                update={"start_at": anchor_to_day(event.start_at, target.date)}
            )
            return True

        return self._commit(mutate)

    def delete_event(self, event_id: str) -> bool:
        """Remove an event permanently."""

        def mutate(days: list[DayRecord], events: list[Event]) -> bool:
            idx = self._event_position(events, event_id)
            if idx < 0:
                return False
            del events[idx]
            return True

        return self._commit(mutate)

    # --- Whole-aggregate operations ---

    def reset(self) -> None:
        """Discard all days and events and reseed defaults."""
        self._days, self._events = default_pool(self._settings)
        self._active_day_id = self._days[0].id
        self._revision += 1
        self.updated_at = touch(self.updated_at, self._now_ms())
        self._persist()
        self._notify(RESET_MESSAGE)
        logger.info("[pool_session] reset to defaults")

    def export(self, now: datetime | None = None) -> ExportFile:
        """Export payload with the pool sorted chronologically (no side effects)."""
        return export_pool(
            self._days, self._events, now or self._now(), indent=self._settings.export_indent
        )

    def location_link(self, location: str | None) -> str | None:
        """Map-search URL for a location, built from this session's settings."""
        return maps_search_url(location, settings=self._settings)

    # --- Internals ---

    def _default_clock(self) -> str:
        return clock_of(now_plus(minutes=self._settings.default_event_offset_minutes, now=self._now()))

    @staticmethod
    def _find_day(days: list[DayRecord], day_id: str) -> DayRecord | None:
        return next((day for day in days if day.id == day_id), None)

    @staticmethod
    def _event_position(events: list[Event], event_id: str) -> int:
        return next((i for i, event in enumerate(events) if event.id == event_id), -1)

    def _commit(self, mutate: PoolMutation) -> bool:
        days = list(self._days)
        events = list(self._events)
        if not mutate(days, events):
            return False
        self._days, self._events = days, events
        self._revision += 1
        self.updated_at = touch(self.updated_at, self._now_ms())
        self._persist()
        return True

    def _persist(self) -> None:
        self._record_saves(
            [self._day_gateway.save(self._days), self._event_gateway.save(self._events)]
        )
