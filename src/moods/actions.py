"""User-facing mood write actions: log, delete one, delete all.

Each action validates its input before touching the store and reports the
outcome as an ActionResult instead of raising.
"""

import structlog

from moods.dates import canonical_timestamp, parse_day
from moods.definitions import parse_mood
from moods.models import ActionResult
from moods.storage import MoodStore, MoodStoreError
from observability import metrics

logger = structlog.get_logger()

NOTES_MAX_CHARS = 2000


def log_mood(
    store: MoodStore,
    user_id: str | None,
    mood: str | None,
    notes: str | None,
    date_str: str | None,
    notes_max_chars: int = NOTES_MAX_CHARS,
) -> ActionResult:
    """Record a mood for the selected calendar day.

    The day is stored at 12:00 UTC regardless of whether it is today, so a
    log for "today" and one back-dated to the same day bucket identically.
    """
    if not user_id:
        return ActionResult.failed("User ID is required.")
    try:
        mood_value = parse_mood(mood)
    except ValueError as e:
        return ActionResult.failed(str(e))
    if not date_str:
        return ActionResult.failed("Date is required.")
    try:
        day = parse_day(date_str)
    except ValueError:
        logger.warning("moods.invalid_date", user_id=user_id, value=date_str)
        return ActionResult.failed("Invalid date format.")

    clean_notes = (notes or "").strip()
    if len(clean_notes) > notes_max_chars:
        return ActionResult.failed(f"Notes must be at most {notes_max_chars} characters.")

    try:
        entry_id = store.insert(user_id, mood_value, clean_notes, canonical_timestamp(day))
    except MoodStoreError as e:
        return ActionResult.failed(str(e), store_error=True)

    metrics.counter("moods.logged")
    logger.info("moods.logged", user_id=user_id, mood=mood_value.value, day=day.isoformat())
    return ActionResult.succeeded("Mood logged successfully!", entry_id=entry_id)


def delete_mood(store: MoodStore, user_id: str | None, entry_id: str | None) -> ActionResult:
    if not user_id:
        return ActionResult.failed("User ID is required.")
    if not entry_id:
        return ActionResult.failed("Mood entry ID is required.")
    try:
        deleted = store.delete_by_id(entry_id, user_id)
    except MoodStoreError as e:
        return ActionResult.failed(f"Failed to delete mood entry: {e}", store_error=True)
    if not deleted:
        return ActionResult.failed("Mood entry not found.")
    logger.info("moods.deleted", user_id=user_id, entry_id=entry_id)
    return ActionResult.succeeded("Mood entry deleted.", entry_id=entry_id, deleted=1)


def delete_all_moods(store: MoodStore, user_id: str | None) -> ActionResult:
    """Remove every mood entry of a user (account data reset)."""
    if not user_id:
        return ActionResult.failed("User ID is required.")
    try:
        deleted = store.delete_all(user_id)
    except MoodStoreError as e:
        return ActionResult.failed(f"Failed to delete all mood data: {e}", store_error=True)
    if deleted == 0:
        return ActionResult.succeeded("No mood data found to delete.", deleted=0)
    return ActionResult.succeeded("All mood data deleted successfully.", deleted=deleted)
