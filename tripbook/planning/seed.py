"""Default state seeded on first run and on reset."""

from datetime import timedelta

from tripbook.config import Settings
from tripbook.models.pool import DayRecord, Event
from tripbook.models.trip import Day, Item, Trip
from tripbook.utils.ids import new_id
from tripbook.utils.timeutil import combine, now_millis


def day_label(ordinal: int) -> str:
    """Ordinal label for the nth day (1-indexed)."""
    return f"Day {ordinal}"


def default_trip(settings: Settings, updated_at: int | None = None) -> Trip:
    """Fresh trip with three days starting at the configured seed date."""
    start = settings.seed_start_date
    dates = [(start + timedelta(days=offset)).strftime("%Y/%m/%d") for offset in range(3)]

    return Trip(
        id=new_id("trip"),
        name=settings.default_trip_name,
        date_range=settings.default_date_range,
        updated_at=updated_at if updated_at is not None else now_millis(),
        days=[
            Day(
                id=new_id("day"),
                label=day_label(1),
                date_text=dates[0],
                items=[
                    Item(
                        id=new_id("item"),
                        time="09:30",
                        title="Breakfast",
                        location="Nearby breakfast place",
                        note="Fuel up before the walking starts",
                    ),
                    Item(
                        id=new_id("item"),
                        time="11:00",
                        title="Sightseeing",
                        location="Taipei 101",
                        note="Observation deck / photos",
                    ),
                ],
            ),
            Day(
                id=new_id("day"),
                label=day_label(2),
                date_text=dates[1],
                items=[Item(id=new_id("item"), time="10:00", title="Coffee", location="Cafe")],
            ),
            Day(id=new_id("day"), label=day_label(3), date_text=dates[2]),
        ],
    )


def default_pool(settings: Settings) -> tuple[list[DayRecord], list[Event]]:
    """Fresh day list and event pool mirroring the default trip."""
    start = settings.seed_start_date
    days = [DayRecord(id=new_id("day"), date=start + timedelta(days=offset)) for offset in range(3)]

    events = [
        Event(
            id=new_id("event"),
            title="Breakfast",
            start_at=combine(days[0].date, "09:30"),
            location="Nearby breakfast place",
            note="Fuel up before the walking starts",
        ),
        Event(
            id=new_id("event"),
            title="Sightseeing",
            start_at=combine(days[0].date, "11:00"),
            location="Taipei 101",
        ),
        Event(
            id=new_id("event"),
            title="Coffee",
            start_at=combine(days[1].date, "10:00"),
            location="Cafe",
        ),
    ]
    return days, events
