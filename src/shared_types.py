"""Shared enums and types for mindful-chat."""

from enum import StrEnum


class MoodScale(StrEnum):
    AWFUL = "awful"
    BAD = "bad"
    NEUTRAL = "neutral"
    GOOD = "good"
    GREAT = "great"


class TrendRange(StrEnum):
    LAST_7_DAYS = "last7days"
    LAST_30_DAYS = "last30days"


class ChartRange(StrEnum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ChartMode(StrEnum):
    DISTRIBUTION = "distribution"
    AVERAGE = "average"


class ChatRole(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"
