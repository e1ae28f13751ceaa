"""Mood logging, trend aggregation and chart projection."""

from .charts import load_chart, project
from .definitions import MOOD_DEFINITIONS, label_for, parse_mood, score_for
from .models import ActionResult, ChartPoint, MoodEntry, TrendAnalysis
from .storage import MoodStore, MoodStoreError
from .trends import analyze_mood_trends

__all__ = [
    "MOOD_DEFINITIONS",
    "ActionResult",
    "ChartPoint",
    "MoodEntry",
    "MoodStore",
    "MoodStoreError",
    "TrendAnalysis",
    "analyze_mood_trends",
    "label_for",
    "load_chart",
    "parse_mood",
    "project",
    "score_for",
]
