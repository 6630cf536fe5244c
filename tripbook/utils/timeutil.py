"""Date and clock-of-day helpers.

All values are timezone-naive and interpreted in the ambient local time zone.
No timezone conversion is attempted anywhere.
"""

import re
import time as _time
from datetime import date, datetime, time, timedelta

_DATE_RE = re.compile(r"^(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})(?:[T ].*)?$")
_CLOCK_RE = re.compile(
    r"^(?:\d{4}[-/.]\d{1,2}[-/.]\d{1,2}[T ])?(\d{1,2}):(\d{2})(?::(\d{2})(?:\.\d+)?)?$"
)


def parse_date(value: str | date | None) -> date | None:
    """Parse a calendar date.

    Accepts ``YYYY-MM-DD``, ``YYYY/MM/DD``, ``YYYY.MM.DD`` and ISO datetimes.

    Returns:
        The date, or None when blank or unparseable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    match = _DATE_RE.match(value.strip())
    if not match:
        return None
    year, month, day = (int(g) for g in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_clock(value: str | time | datetime | None) -> str | None:
    """Normalize a clock-of-day to zero-padded ``HH:MM``.

    Accepts ``H:MM``, ``HH:MM``, ``HH:MM:SS`` and ISO datetimes such as
    ``2026-02-05T14:30``. Seconds are dropped.

    Returns:
        ``HH:MM`` string, or None when blank or unparseable
    """
    if value is None:
        return None
    if isinstance(value, (datetime, time)):
        return f"{value.hour:02d}:{value.minute:02d}"

    match = _CLOCK_RE.match(value.strip())
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"


def format_date(value: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return value.strftime("%Y-%m-%d")


def clock_of(value: datetime) -> str:
    """Clock-of-day component of a timestamp as ``HH:MM``."""
    return f"{value.hour:02d}:{value.minute:02d}"


def combine(day: date, clock: str) -> datetime:
    """Combine a calendar date and an ``HH:MM`` clock into a timestamp.

    Raises:
        ValueError: If the clock cannot be parsed
    """
    normalized = parse_clock(clock)
    if normalized is None:
        raise ValueError(f"Invalid clock-of-day: {clock!r}")
    hour, minute = (int(part) for part in normalized.split(":"))
    return at_clock(day, hour, minute)


def at_clock(day: date, hour: int, minute: int) -> datetime:
    """Timestamp for an explicit hour/minute on a given date."""
    return datetime.combine(day, time(hour, minute))


def now_plus(minutes: int = 0, hours: int = 0, now: datetime | None = None) -> datetime:
    """Current local time shifted forward, truncated to the minute."""
    base = now if now is not None else datetime.now()
    shifted = base + timedelta(hours=hours, minutes=minutes)
    return shifted.replace(second=0, microsecond=0)


def anchor_to_day(
    raw: str | datetime | None, day: date, fallback_clock: str = "09:00"
) -> datetime:
    """Re-anchor a user-supplied time onto a day's calendar date.

    The clock-of-day of ``raw`` is kept and the calendar date is forced to
    ``day``, whatever date the raw input carried. When ``raw`` has no
    parseable clock the fallback clock is used.

    Args:
        raw: Picker value (clock string, ISO datetime string or datetime)
        day: Date of the day the event is filed under
        fallback_clock: Clock used when raw is blank or malformed

    Returns:
        Naive timestamp on ``day``
    """
    clock = parse_clock(raw) or parse_clock(fallback_clock) or "00:00"
    return combine(day, clock)


def now_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return _time.time_ns() // 1_000_000


def touch(previous_ms: int, now_ms: int | None = None) -> int:
    """Refreshed last-modified stamp, strictly greater than the previous one."""
    current = now_ms if now_ms is not None else now_millis()
    return max(current, previous_ms + 1)
