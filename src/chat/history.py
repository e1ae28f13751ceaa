"""Chat transcript persistence: per-user message history in SQLite."""

import sqlite3
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import structlog

from db import wal_connect
from moods.models import ActionResult
from shared_types import ChatRole

logger = structlog.get_logger()


@dataclass(frozen=True)
class ChatMessage:
    id: str
    user_id: str
    role: ChatRole
    content: str
    timestamp: str

    def to_prompt(self) -> dict:
        return {"role": self.role.value, "content": self.content}


class ChatHistoryStore:
    """Append-only chat transcript with bulk reset."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path).expanduser()
        self._init_tables()

    def _connect(self) -> sqlite3.Connection:
        return wal_connect(self.db_path)

    def _init_tables(self):
        conn = self._connect()
        try:
            with conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS chat_messages (
                        id TEXT PRIMARY KEY,
                        user_id TEXT NOT NULL,
                        role TEXT NOT NULL CHECK(role IN ('user','assistant')),
                        content TEXT NOT NULL,
                        timestamp TEXT NOT NULL,
                        seq INTEGER NOT NULL,
                        UNIQUE(user_id, seq)
                    )
                """)
        finally:
            conn.close()

    def fetch(self, user_id: str, count: int = 20) -> list[ChatMessage]:
        """Last `count` messages, oldest first. Read failures yield []."""
        if not user_id:
            logger.warning("chat_history.fetch_without_user")
            return []
        try:
            conn = self._connect()
            try:
                rows = conn.execute(
                    """SELECT * FROM (
                        SELECT * FROM chat_messages WHERE user_id = ?
                        ORDER BY seq DESC LIMIT ?
                    ) sub ORDER BY seq ASC""",
                    (user_id, count),
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("chat_history.fetch_failed", user_id=user_id, error=str(e))
            return []
        return [
            ChatMessage(
                id=r["id"],
                user_id=r["user_id"],
                role=ChatRole(r["role"]),
                content=r["content"],
                timestamp=r["timestamp"],
            )
            for r in rows
        ]

    def add(self, user_id: str, role: str, content: str) -> ActionResult:
        return self._append(user_id, [(role, content)], "Message saved.")

    def add_exchange(self, user_id: str, user_content: str, assistant_content: str) -> ActionResult:
        """Save a user turn and its reply together: both rows or neither."""
        return self._append(
            user_id,
            [(ChatRole.USER, user_content), (ChatRole.ASSISTANT, assistant_content)],
            "Exchange saved.",
        )

    def _append(self, user_id: str, turns: list[tuple[str, str]], message: str) -> ActionResult:
        if not user_id:
            return ActionResult.failed("User ID is required.")
        rows = []
        for role, content in turns:
            try:
                role = ChatRole(role)
            except ValueError:
                return ActionResult.failed("Invalid message format.")
            if not isinstance(content, str):
                return ActionResult.failed("Invalid message format.")
            rows.append((uuid.uuid4().hex, role.value, content))

        now = datetime.now(timezone.utc).isoformat()
        try:
            conn = self._connect()
            try:
                # Take the write lock before reading MAX(seq) so concurrent
                # writers cannot hand out the same seq
                conn.execute("BEGIN IMMEDIATE")
                try:
                    for msg_id, role, content in rows:
                        conn.execute(
                            """INSERT INTO chat_messages (id, user_id, role, content, timestamp, seq)
                            SELECT ?, ?, ?, ?, ?, COALESCE(MAX(seq), 0) + 1
                            FROM chat_messages WHERE user_id = ?""",
                            (msg_id, user_id, role, content, now, user_id),
                        )
                    conn.commit()
                except sqlite3.Error:
                    conn.rollback()
                    raise
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("chat_history.add_failed", user_id=user_id, turns=len(rows), error=str(e))
            return ActionResult.failed(f"Failed to save message: {e}", store_error=True)
        return ActionResult.succeeded(message, entry_id=rows[-1][0])

    def delete_all(self, user_id: str) -> ActionResult:
        """Delete a user's whole transcript in one transaction."""
        if not user_id:
            return ActionResult.failed("User ID is required.")
        try:
            conn = self._connect()
            try:
                with conn:
                    cur = conn.execute("DELETE FROM chat_messages WHERE user_id = ?", (user_id,))
                    deleted = cur.rowcount
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("chat_history.delete_failed", user_id=user_id, error=str(e))
            return ActionResult.failed(f"Failed to delete chat history: {e}", store_error=True)

        if deleted == 0:
            return ActionResult.succeeded("No chat history found to delete.", deleted=0)
        logger.info("chat_history.deleted", user_id=user_id, deleted=deleted)
        return ActionResult.succeeded("All chat history deleted successfully.", deleted=deleted)
