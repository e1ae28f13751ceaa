"""Shared test fixtures for Mindful Chat."""

import sys
from datetime import date, datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from llm.base import GenerateResponse, LLMProvider  # noqa: E402
from moods.dates import canonical_timestamp  # noqa: E402
from moods.models import MoodEntry  # noqa: E402
from moods.storage import MoodStore  # noqa: E402
from observability import metrics  # noqa: E402
from shared_types import MoodScale  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "mindful.db"


@pytest.fixture
def mood_store(db_path):
    return MoodStore(db_path)


@pytest.fixture
def make_entry():
    """Build an in-memory MoodEntry for a calendar day."""
    counter = iter(range(1, 10_000))

    def _make(mood: str, day: date, user_id: str = "user-1", notes: str = "") -> MoodEntry:
        ts = canonical_timestamp(day)
        return MoodEntry(
            id=f"entry-{next(counter)}",
            user_id=user_id,
            mood=MoodScale(mood),
            timestamp=ts,
            created_at=datetime(2024, 6, 10, 18, 0, tzinfo=timezone.utc),
            notes=notes,
        )

    return _make


@pytest.fixture
def log_moods(mood_store):
    """Insert (mood, day) pairs for a user straight into the store."""

    def _log(pairs, user_id: str = "user-1"):
        return [
            mood_store.insert(user_id, mood, "", canonical_timestamp(day))
            for mood, day in pairs
        ]

    return _log


@pytest.fixture
def mock_llm():
    """LLMProvider double; set generate/generate_with_tools return values per test."""
    llm = MagicMock(spec=LLMProvider)
    llm.generate.return_value = "Mocked reply"
    llm.generate_with_tools.return_value = GenerateResponse(content="Mocked reply")
    return llm
