"""SQLite persistence for mood entries, one row per logged mood."""

import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path

import structlog

from db import wal_connect
from moods.definitions import MOOD_VALUES, parse_mood
from moods.models import MoodEntry

logger = structlog.get_logger()


class MoodStoreError(Exception):
    """Mood store read/write failure, with a human-readable message."""


def _to_db_time(ts: datetime) -> str:
    # Fixed-width UTC ISO strings so range filters can compare lexically.
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _from_db_time(value: str) -> datetime:
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


class MoodStore:
    """Per-user mood entries with range queries and bulk delete."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path).expanduser()
        self._init_tables()

    def _connect(self) -> sqlite3.Connection:
        return wal_connect(self.db_path)

    def _init_tables(self):
        allowed = ", ".join(f"'{v}'" for v in MOOD_VALUES)
        conn = self._connect()
        try:
            with conn:
                conn.execute(f"""
                    CREATE TABLE IF NOT EXISTS mood_entries (
                        id TEXT PRIMARY KEY,
                        user_id TEXT NOT NULL,
                        mood TEXT NOT NULL CHECK(mood IN ({allowed})),
                        notes TEXT NOT NULL DEFAULT '',
                        timestamp TEXT NOT NULL,
                        created_at TEXT NOT NULL
                    )
                """)
                conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_mood_user_ts ON mood_entries(user_id, timestamp)"
                )
        finally:
            conn.close()

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> MoodEntry:
        return MoodEntry(
            id=row["id"],
            user_id=row["user_id"],
            mood=parse_mood(row["mood"]),
            notes=row["notes"] or "",
            timestamp=_from_db_time(row["timestamp"]),
            created_at=_from_db_time(row["created_at"]),
        )

    def query(self, user_id: str, start: datetime, end: datetime) -> list[MoodEntry]:
        """Entries whose timestamp lies in [start, end], oldest first."""
        try:
            conn = self._connect()
            try:
                rows = conn.execute(
                    """SELECT * FROM mood_entries
                    WHERE user_id = ? AND timestamp >= ? AND timestamp <= ?
                    ORDER BY timestamp ASC, created_at ASC""",
                    (user_id, _to_db_time(start), _to_db_time(end)),
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("mood_store.query_failed", user_id=user_id, error=str(e))
            raise MoodStoreError(f"Failed to query mood entries: {e}") from e
        return [self._row_to_entry(r) for r in rows]

    def list_recent(self, user_id: str, limit: int = 50) -> list[MoodEntry]:
        """Latest entries first (history view)."""
        try:
            conn = self._connect()
            try:
                rows = conn.execute(
                    """SELECT * FROM mood_entries WHERE user_id = ?
                    ORDER BY timestamp DESC, created_at DESC LIMIT ?""",
                    (user_id, limit),
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("mood_store.list_failed", user_id=user_id, error=str(e))
            raise MoodStoreError(f"Failed to list mood entries: {e}") from e
        return [self._row_to_entry(r) for r in rows]

    def get(self, entry_id: str, user_id: str) -> MoodEntry | None:
        try:
            conn = self._connect()
            try:
                row = conn.execute(
                    "SELECT * FROM mood_entries WHERE id = ? AND user_id = ?",
                    (entry_id, user_id),
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise MoodStoreError(f"Failed to read mood entry: {e}") from e
        return self._row_to_entry(row) if row else None

    def insert(self, user_id: str, mood: str, notes: str, timestamp: datetime) -> str:
        """Store a new entry and return its id."""
        entry_id = uuid.uuid4().hex
        now = _to_db_time(datetime.now(timezone.utc))
        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute(
                        """INSERT INTO mood_entries (id, user_id, mood, notes, timestamp, created_at)
                        VALUES (?, ?, ?, ?, ?, ?)""",
                        (entry_id, user_id, parse_mood(mood).value, notes or "",
                         _to_db_time(timestamp), now),
                    )
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("mood_store.insert_failed", user_id=user_id, error=str(e))
            raise MoodStoreError(f"Failed to save mood to database: {e}") from e
        return entry_id

    def delete_by_id(self, entry_id: str, user_id: str) -> bool:
        """Delete one entry owned by user_id. Returns False if nothing matched."""
        try:
            conn = self._connect()
            try:
                with conn:
                    cur = conn.execute(
                        "DELETE FROM mood_entries WHERE id = ? AND user_id = ?",
                        (entry_id, user_id),
                    )
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("mood_store.delete_failed", entry_id=entry_id, error=str(e))
            raise MoodStoreError(f"Failed to delete mood entry: {e}") from e
        return cur.rowcount > 0

    def delete_all(self, user_id: str) -> int:
        """Delete every entry for user_id in one transaction.

        Returns the number of deleted rows (0 is success). On failure the
        transaction is rolled back, so no entry is removed.
        """
        step = "connect"
        try:
            conn = self._connect()
            try:
                with conn:
                    step = "count"
                    (count,) = conn.execute(
                        "SELECT COUNT(*) FROM mood_entries WHERE user_id = ?", (user_id,)
                    ).fetchone()
                    if count == 0:
                        return 0
                    step = "delete"
                    cur = conn.execute("DELETE FROM mood_entries WHERE user_id = ?", (user_id,))
                    deleted = cur.rowcount
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("mood_store.delete_all_failed", user_id=user_id, step=step, error=str(e))
            raise MoodStoreError(f"Bulk delete failed during {step}: {e}") from e
        logger.info("mood_store.delete_all", user_id=user_id, deleted=deleted)
        return deleted
