"""Mood scale definitions: ordered labels with their 1-5 scores."""

from dataclasses import dataclass

from shared_types import MoodScale


@dataclass(frozen=True)
class MoodDefinition:
    value: MoodScale
    label: str
    score: int


# Order matters: it is the distribution order and the tie-break order.
MOOD_DEFINITIONS: tuple[MoodDefinition, ...] = (
    MoodDefinition(MoodScale.AWFUL, "Awful", 1),
    MoodDefinition(MoodScale.BAD, "Bad", 2),
    MoodDefinition(MoodScale.NEUTRAL, "Neutral", 3),
    MoodDefinition(MoodScale.GOOD, "Good", 4),
    MoodDefinition(MoodScale.GREAT, "Great", 5),
)

MOOD_VALUES: tuple[str, ...] = tuple(d.value.value for d in MOOD_DEFINITIONS)

_BY_VALUE = {d.value: d for d in MOOD_DEFINITIONS}


def parse_mood(value: str | MoodScale | None) -> MoodScale:
    """Coerce a raw label into a MoodScale.

    Raises:
        ValueError: if the value is empty or not one of the defined labels.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError("Mood is required.")
    try:
        return MoodScale(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Invalid mood: {value}. Must be one of {', '.join(MOOD_VALUES)}.")


def get_definition(mood: str | MoodScale) -> MoodDefinition:
    return _BY_VALUE[parse_mood(mood)]


def score_for(mood: str | MoodScale) -> int:
    """Numeric score (1-5) for a mood label."""
    return get_definition(mood).score


def label_for(mood: str | MoodScale) -> str:
    """Display label for a mood label."""
    return get_definition(mood).label


def empty_distribution() -> dict[str, int]:
    """Zero count for every label, in scale order."""
    return {value: 0 for value in MOOD_VALUES}
