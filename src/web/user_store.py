"""Users seen through identity tokens, plus a lightweight usage event log."""

import json as _json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog

from db import wal_connect

logger = structlog.get_logger()


def init_db(db_path: Path) -> None:
    """Create tables if they don't exist."""
    conn = wal_connect(db_path)
    try:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email TEXT,
                name TEXT,
                created_at TEXT NOT NULL,
                last_seen_at TEXT NOT NULL
            );
            CREATE TABLE IF NOT EXISTS usage_events (
                id         INTEGER PRIMARY KEY AUTOINCREMENT,
                event      TEXT NOT NULL,
                user_id    TEXT,
                metadata   TEXT,
                created_at TEXT NOT NULL
            );
            CREATE INDEX IF NOT EXISTS idx_usage_event ON usage_events(event, created_at DESC);
        """)
        conn.commit()
    finally:
        conn.close()


def get_or_create_user(
    user_id: str,
    db_path: Path,
    email: str | None = None,
    name: str | None = None,
) -> dict:
    """Upsert the user row; email/name are refreshed when the token carries them."""
    now = datetime.now(timezone.utc).isoformat()
    conn = wal_connect(db_path)
    try:
        conn.execute(
            """INSERT INTO users (id, email, name, created_at, last_seen_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                email = COALESCE(excluded.email, users.email),
                name = COALESCE(excluded.name, users.name),
                last_seen_at = excluded.last_seen_at""",
            (user_id, email, name, now, now),
        )
        conn.commit()
        row = conn.execute(
            "SELECT id, email, name, created_at FROM users WHERE id = ?", (user_id,)
        ).fetchone()
        return dict(row)
    finally:
        conn.close()


def log_event(event: str, user_id: str | None, db_path: Path, metadata: dict[str, Any] | None = None) -> None:
    """Record a usage event. Failures are logged, never raised."""
    try:
        conn = wal_connect(db_path)
        try:
            conn.execute(
                "INSERT INTO usage_events (event, user_id, metadata, created_at) VALUES (?, ?, ?, ?)",
                (
                    event,
                    user_id,
                    _json.dumps(metadata) if metadata else None,
                    datetime.now(timezone.utc).isoformat(),
                ),
            )
            conn.commit()
        finally:
            conn.close()
    except sqlite3.Error as e:
        logger.warning("usage_event.failed", usage_event=event, error=str(e))


def count_events(event: str, db_path: Path, user_id: str | None = None) -> int:
    conn = wal_connect(db_path)
    try:
        if user_id:
            row = conn.execute(
                "SELECT COUNT(*) FROM usage_events WHERE event = ? AND user_id = ?", (event, user_id)
            ).fetchone()
        else:
            row = conn.execute("SELECT COUNT(*) FROM usage_events WHERE event = ?", (event,)).fetchone()
        return row[0]
    finally:
        conn.close()
