"""Calendar-day helpers shared by the trend aggregator and chart projector.

Every stored mood timestamp is read as the UTC calendar day it falls on.
Window bounds are built in UTC too, so bucketing and querying agree.
"""

from datetime import date, datetime, time, timedelta, timezone

from shared_types import ChartRange, TrendRange

# Logged moods are stored at this UTC time of day, whichever day is chosen.
CANONICAL_TIME = time(12, 0, tzinfo=timezone.utc)

WINDOW_DAYS = {
    TrendRange.LAST_7_DAYS: 7,
    TrendRange.LAST_30_DAYS: 30,
    ChartRange.WEEKLY: 7,
    ChartRange.MONTHLY: 30,
}


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max, tzinfo=timezone.utc)


def window_bounds(time_range: str, today: date | None = None) -> tuple[datetime, datetime]:
    """Inclusive [start, end] of the trailing window ending today.

    N-day windows include today: start is midnight of today - (N-1) days,
    end is the last microsecond of today.

    Raises:
        KeyError: for an unknown range.
    """
    days = WINDOW_DAYS[time_range]
    today = today or utc_today()
    return start_of_day(today - timedelta(days=days - 1)), end_of_day(today)


def day_of(ts: datetime) -> date:
    """Calendar day a stored timestamp describes."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).date()


def canonical_timestamp(day: date) -> datetime:
    return datetime.combine(day, CANONICAL_TIME)


def parse_day(value: str) -> date:
    """Parse a `yyyy-MM-dd` string.

    Raises:
        ValueError: on any other format.
    """
    value = value.strip()
    parts = value.split("-")
    if len(parts) != 3 or len(parts[0]) != 4 or len(parts[1]) != 2 or len(parts[2]) != 2:
        raise ValueError(f"Invalid date string format: {value}")
    return date.fromisoformat(value)


def short_date(day: date) -> str:
    """`Jun 5` style label."""
    return f"{day:%b} {day.day}"
