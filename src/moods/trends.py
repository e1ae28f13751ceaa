"""Mood trend aggregation over a trailing window."""

from datetime import date, datetime

import structlog

from moods.dates import WINDOW_DAYS, short_date, window_bounds
from moods.definitions import empty_distribution, label_for, score_for
from moods.models import MoodEntry, TrendAnalysis
from moods.storage import MoodStore, MoodStoreError
from observability import metrics
from shared_types import TrendRange

logger = structlog.get_logger()

EMPTY_SUMMARY = "No mood data logged for this period."
NO_DOMINANT_SUMMARY = "No specific mood was dominant."


def _window_phrase(time_range: str) -> str:
    return f"last {WINDOW_DAYS[time_range]} days"


def rank_moods(distribution: dict[str, int]) -> list[tuple[str, int]]:
    """Labels with a non-zero count, most frequent first.

    Sorting is stable over scale order, so on equal counts the label defined
    first (awful before bad before ... great) ranks higher.
    """
    logged = [(mood, count) for mood, count in distribution.items() if count > 0]
    return sorted(logged, key=lambda item: item[1], reverse=True)


def build_summary(
    time_range: str,
    start: datetime,
    end: datetime,
    average_score: float,
    distribution: dict[str, int],
) -> str:
    summary = (
        f"Over the {_window_phrase(time_range)} "
        f"(from {short_date(start.date())} to {short_date(end.date())}), "
        f"your average mood score was {average_score:.1f} out of 5. "
    )
    ranked = rank_moods(distribution)
    if not ranked:
        return summary + NO_DOMINANT_SUMMARY

    top, top_count = ranked[0]
    summary += f"You most frequently logged feeling {label_for(top)} ({top_count} times)."
    if len(ranked) > 1:
        second, second_count = ranked[1]
        summary += f" Other moods included {label_for(second)} ({second_count} times)."
    return summary


def summarize_entries(
    entries: list[MoodEntry],
    time_range: str,
    start: datetime,
    end: datetime,
) -> TrendAnalysis:
    """Average score, per-label distribution and summary for already-fetched entries."""
    period_start = start.date().isoformat()
    period_end = end.date().isoformat()

    if not entries:
        return TrendAnalysis(
            summary=EMPTY_SUMMARY,
            is_empty=True,
            period_start=period_start,
            period_end=period_end,
        )

    distribution = empty_distribution()
    total = 0
    for entry in entries:
        total += score_for(entry.mood)
        distribution[entry.mood.value] += 1

    average_score = round(total / len(entries), 2)
    return TrendAnalysis(
        summary=build_summary(time_range, start, end, average_score, distribution),
        is_empty=False,
        period_start=period_start,
        period_end=period_end,
        average_score=average_score,
        distribution=distribution,
    )


def analyze_mood_trends(
    store: MoodStore,
    user_id: str,
    time_range: str = TrendRange.LAST_7_DAYS,
    today: date | None = None,
) -> TrendAnalysis:
    """Analyze a user's moods over the last 7 or 30 days (today included).

    Store failures do not raise: the returned analysis carries `error` and a
    readable summary, and the caller decides how to present it.
    """
    time_range = TrendRange(time_range)
    start, end = window_bounds(time_range, today)
    logger.info("trends.analyze", user_id=user_id, time_range=time_range.value)

    with metrics.timer("trends.analyze"):
        try:
            entries = store.query(user_id, start, end)
        except MoodStoreError as e:
            logger.error("trends.analyze_failed", user_id=user_id, error=str(e))
            metrics.counter("trends.failed")
            return TrendAnalysis(
                summary=f"Mood analysis is unavailable: {e}",
                is_empty=False,
                period_start=start.date().isoformat(),
                period_end=end.date().isoformat(),
                error=str(e),
            )
        analysis = summarize_entries(entries, time_range, start, end)

    metrics.counter("trends.analyzed")
    logger.debug(
        "trends.analyzed",
        user_id=user_id,
        entries=len(entries),
        average_score=analysis.average_score,
    )
    return analysis
