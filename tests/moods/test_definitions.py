"""Tests for the mood scale and its presentation metadata."""

import pytest

from moods.definitions import (
    MOOD_DEFINITIONS,
    MOOD_VALUES,
    empty_distribution,
    label_for,
    parse_mood,
    score_for,
)
from moods.presentation import chart_legend, style_for
from shared_types import MoodScale


class TestMoodScale:
    def test_scale_order_and_scores(self):
        assert MOOD_VALUES == ("awful", "bad", "neutral", "good", "great")
        assert [d.score for d in MOOD_DEFINITIONS] == [1, 2, 3, 4, 5]

    def test_scores_are_strictly_increasing(self):
        scores = [score_for(v) for v in MOOD_VALUES]
        assert scores == sorted(set(scores))

    def test_label_for(self):
        assert label_for("great") == "Great"
        assert label_for(MoodScale.BAD) == "Bad"

    def test_empty_distribution_has_every_label(self):
        dist = empty_distribution()
        assert list(dist) == list(MOOD_VALUES)
        assert set(dist.values()) == {0}

    def test_empty_distribution_is_fresh_each_call(self):
        dist = empty_distribution()
        dist["good"] = 3
        assert empty_distribution()["good"] == 0


class TestParseMood:
    def test_normalizes_case_and_whitespace(self):
        assert parse_mood("  Good ") == MoodScale.GOOD

    def test_accepts_enum(self):
        assert parse_mood(MoodScale.AWFUL) == MoodScale.AWFUL

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing(self, value):
        with pytest.raises(ValueError, match="Mood is required"):
            parse_mood(value)

    def test_unknown_label(self):
        with pytest.raises(ValueError, match="Invalid mood: ecstatic"):
            parse_mood("ecstatic")


class TestPresentation:
    def test_every_label_has_a_style(self):
        for value in MoodScale:
            style = style_for(value)
            assert style["icon"]
            assert style["color"].startswith("#")

    def test_unknown_label_gets_default_style(self):
        assert style_for("unknown")["icon"] == "circle"

    def test_legend_follows_scale_order(self):
        legend = chart_legend()
        assert [row["value"] for row in legend] == list(MOOD_VALUES)
        assert legend[0]["label"] == "Awful"
