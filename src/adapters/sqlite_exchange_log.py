"""SQLite exchange log adapter.

Implements the core ExchangeLogPort using a simple SQLite database.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from core.models import ChatId


@dataclass(frozen=True)
class Exchange:
    """One recorded request/reply pair."""

    thread_id: str
    chat_id: str
    user_id: int
    text: str
    reply: str
    created_at: str


class SQLiteExchangeLog:
    """Thin SQLite wrapper that satisfies the ExchangeLogPort contract."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create the exchanges table if it does not exist."""

        with self._connect() as conn:
            # exchanges is an append-only log keyed by thread.
            # Fields:
            # - id: auto-increment primary key, also the ordering key
            # - thread_id: chat (and forum topic) the exchange belongs to
            # - chat_id: stored as text since chats may be @usernames
            # - user_id: Telegram user id of the sender
            # - text: raw incoming message
            # - reply: text the policy produced (empty when ignored)
            # - created_at: UTC timestamp for TTL cleanup
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS exchanges (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    thread_id TEXT NOT NULL,
                    chat_id TEXT NOT NULL,
                    user_id INTEGER NOT NULL,
                    text TEXT NOT NULL,
                    reply TEXT NOT NULL,
                    created_at TIMESTAMP NOT NULL
                )
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_exchanges_thread ON exchanges (thread_id, id)"
            )

    def record(self, thread_id: str, chat_id: ChatId, user_id: int, text: str, reply: str) -> None:
        """Append one exchange to the log."""

        created_at = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO exchanges (thread_id, chat_id, user_id, text, reply, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (thread_id, str(chat_id), user_id, text, reply, created_at.isoformat()),
            )

    def recent(self, thread_id: str, limit: int = 10) -> list[Exchange]:
        """Return the last ``limit`` exchanges of a thread, oldest first."""

        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT thread_id, chat_id, user_id, text, reply, created_at
                FROM exchanges
                WHERE thread_id = ?
                ORDER BY id DESC
                LIMIT ?
                """,
                (thread_id, limit),
            ).fetchall()
        return [
            Exchange(
                thread_id=row["thread_id"],
                chat_id=row["chat_id"],
                user_id=int(row["user_id"]),
                text=row["text"],
                reply=row["reply"],
                created_at=row["created_at"],
            )
            for row in reversed(rows)
        ]

    def cleanup(self, ttl_days: int) -> int:
        """Delete exchanges older than ``ttl_days`` and return the number removed."""

        cutoff = datetime.now(timezone.utc) - timedelta(days=ttl_days)
        with self._connect() as conn:
            cur = conn.execute(
                "DELETE FROM exchanges WHERE created_at < ?",
                (cutoff.isoformat(),),
            )
            return cur.rowcount
