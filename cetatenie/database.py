"""SQLite storage for decree subscriptions."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass

_SCHEMA = """
CREATE TABLE IF NOT EXISTS subscriptions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    chat_id INTEGER,
    decree_number TEXT UNIQUE
)
"""


@dataclass(frozen=True)
class Subscription:
    id: int
    chat_id: int
    decree_number: str


class SubscriptionExistsError(Exception):
    """The chat is already subscribed to the decree."""

    def __init__(self, decree_number: str) -> None:
        super().__init__(f"subscription already exists for decree number {decree_number}")
        self.decree_number = decree_number


def init_db(path: str = "./data.db") -> sqlite3.Connection:
    """Open the database at ``path`` and make sure the schema exists."""
    connection = sqlite3.connect(path, check_same_thread=False)
    with connection:
        connection.execute(_SCHEMA)
    return connection


class SubscriptionStore:
    """Creates, lists and removes subscriptions."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._conn = connection
        self._lock = threading.Lock()

    def create_subscription(self, chat_id: int, decree_number: str) -> None:
        with self._lock, self._conn:
            row = self._conn.execute(
                "SELECT 1 FROM subscriptions WHERE chat_id = ? AND decree_number = ? LIMIT 1",
                (chat_id, decree_number),
            ).fetchone()
            if row is not None:
                raise SubscriptionExistsError(decree_number)
            self._conn.execute(
                "INSERT INTO subscriptions (chat_id, decree_number) VALUES (?, ?)",
                (chat_id, decree_number),
            )

    def delete_subscription(self, chat_id: int, decree_number: str) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                "DELETE FROM subscriptions WHERE chat_id = ? AND decree_number = ?",
                (chat_id, decree_number),
            )

    def delete_all_subscriptions(self, chat_id: int) -> None:
        with self._lock, self._conn:
            self._conn.execute("DELETE FROM subscriptions WHERE chat_id = ?", (chat_id,))

    def get_subscriptions(self, chat_id: int) -> list[str]:
        """Decree numbers the chat is subscribed to."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT decree_number FROM subscriptions WHERE chat_id = ? ORDER BY id",
                (chat_id,),
            ).fetchall()
        return [number for (number,) in rows]

    def get_all_subscriptions(self) -> list[Subscription]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, chat_id, decree_number FROM subscriptions ORDER BY id"
            ).fetchall()
        return [Subscription(*row) for row in rows]

    def close(self) -> None:
        self._conn.close()