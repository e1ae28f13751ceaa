"""Display metadata for mood labels (icons, colours). Not used by aggregation."""

from moods.definitions import MOOD_DEFINITIONS
from shared_types import MoodScale

MOOD_STYLES: dict[MoodScale, dict[str, str]] = {
    MoodScale.AWFUL: {"icon": "frown", "color": "#ef4444", "chart_color": "hsl(var(--chart-1))"},
    MoodScale.BAD: {"icon": "meh", "color": "#f97316", "chart_color": "hsl(var(--chart-2))"},
    MoodScale.NEUTRAL: {"icon": "smile", "color": "#eab308", "chart_color": "hsl(var(--chart-3))"},
    MoodScale.GOOD: {"icon": "smile-plus", "color": "#84cc16", "chart_color": "hsl(var(--chart-4))"},
    MoodScale.GREAT: {"icon": "laugh", "color": "#22c55e", "chart_color": "hsl(var(--chart-5))"},
}


def style_for(mood: str) -> dict[str, str]:
    return MOOD_STYLES.get(mood, {"icon": "circle", "color": "#9ca3af", "chart_color": ""})


def chart_legend() -> list[dict]:
    """Legend rows for the stacked distribution chart, in scale order."""
    return [
        {"value": d.value.value, "label": d.label, "color": MOOD_STYLES[d.value]["chart_color"]}
        for d in MOOD_DEFINITIONS
    ]
