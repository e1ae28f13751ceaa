"""Mood domain records: stored entries and derived results."""

from dataclasses import asdict, dataclass
from datetime import date, datetime

from shared_types import MoodScale


@dataclass(frozen=True)
class MoodEntry:
    """One logged mood. `timestamp` identifies a calendar day (UTC)."""

    id: str
    user_id: str
    mood: MoodScale
    timestamp: datetime
    created_at: datetime
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "mood": self.mood.value,
            "notes": self.notes,
            "timestamp": self.timestamp.isoformat(),
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class TrendAnalysis:
    """Derived summary of a user's moods over a trailing window.

    `error` is only set when the mood store could not be read; an empty
    window is reported through `is_empty` instead.
    """

    summary: str
    is_empty: bool
    period_start: str
    period_end: str
    average_score: float | None = None
    distribution: dict[str, int] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class ChartPoint:
    date: date
    day_label: str
    counts: dict[str, int] | None = None
    average_score: float | None = None

    def to_dict(self) -> dict:
        data = {"date": self.date.isoformat(), "day_label": self.day_label}
        if self.counts is not None:
            data["counts"] = dict(self.counts)
        if self.average_score is not None:
            data["average_score"] = self.average_score
        return data


@dataclass
class ActionResult:
    """Outcome of a user-facing write action."""

    success: bool
    message: str | None = None
    error: str | None = None
    entry_id: str | None = None
    deleted: int | None = None
    # True when the failure came from the store rather than the input
    store_error: bool = False

    @classmethod
    def succeeded(cls, message: str, **kwargs) -> "ActionResult":
        return cls(success=True, message=message, **kwargs)

    @classmethod
    def failed(cls, error: str, store_error: bool = False) -> "ActionResult":
        return cls(success=False, error=error, store_error=store_error)
