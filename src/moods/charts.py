"""Per-day chart series: stacked mood distribution and daily average score."""

from collections import defaultdict
from datetime import date

import structlog

from moods.dates import day_of, short_date, window_bounds
from moods.definitions import empty_distribution, score_for
from moods.models import ChartPoint, MoodEntry
from moods.storage import MoodStore
from shared_types import ChartMode, ChartRange

logger = structlog.get_logger()


def day_label(day: date, time_range: str) -> str:
    """`Mon` for weekly charts, `Jun 5` for monthly ones."""
    if ChartRange(time_range) == ChartRange.WEEKLY:
        return f"{day:%a}"
    return short_date(day)


def group_by_day(entries: list[MoodEntry]) -> dict[date, list[MoodEntry]]:
    buckets: dict[date, list[MoodEntry]] = defaultdict(list)
    for entry in entries:
        buckets[day_of(entry.timestamp)].append(entry)
    return dict(buckets)


def project(
    entries: list[MoodEntry],
    time_range: str = ChartRange.WEEKLY,
    mode: str = ChartMode.DISTRIBUTION,
) -> list[ChartPoint]:
    """Project entries into one chart point per day that has entries.

    Points are ordered by their real date. Labels are display-only and never
    used for ordering, since different days can share a weekday label.
    """
    mode = ChartMode(mode)
    points = []
    for day, day_entries in sorted(group_by_day(entries).items()):
        label = day_label(day, time_range)
        if mode == ChartMode.DISTRIBUTION:
            counts = empty_distribution()
            for entry in day_entries:
                counts[entry.mood.value] += 1
            points.append(ChartPoint(date=day, day_label=label, counts=counts))
        else:
            total = sum(score_for(e.mood) for e in day_entries)
            points.append(
                ChartPoint(
                    date=day,
                    day_label=label,
                    average_score=round(total / len(day_entries), 2),
                )
            )
    return points


def load_chart(
    store: MoodStore,
    user_id: str,
    time_range: str = ChartRange.WEEKLY,
    mode: str = ChartMode.DISTRIBUTION,
    today: date | None = None,
) -> list[ChartPoint]:
    """Fetch the chart window for a user and project it.

    Raises:
        MoodStoreError: if the entries cannot be read.
    """
    time_range = ChartRange(time_range)
    start, end = window_bounds(time_range, today)
    entries = store.query(user_id, start, end)
    logger.debug("charts.loaded", user_id=user_id, time_range=time_range.value, entries=len(entries))
    return project(entries, time_range, mode)
