"""Durable key-value store on SQLite."""

import sqlite3
from pathlib import Path


class SqliteStore:
    """File-backed store; every instance opened on the same file shares state."""

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._init_db()

    def _init_db(self) -> None:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self._db_path)
        conn.execute(
            """CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )"""
        )
        conn.commit()
        conn.close()

    def get(self, key: str) -> str | None:
        conn = sqlite3.connect(self._db_path)
        row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        conn.close()
        return row[0] if row is not None else None

    def set(self, key: str, value: str) -> None:
        conn = sqlite3.connect(self._db_path)
        conn.execute(
            "INSERT INTO kv (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value),
        )
        conn.commit()
        conn.close()

    def remove(self, key: str) -> None:
        conn = sqlite3.connect(self._db_path)
        conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        conn.commit()
        conn.close()

    def keys(self) -> list[str]:
        """Return all stored keys, sorted."""
        conn = sqlite3.connect(self._db_path)
        rows = conn.execute("SELECT key FROM kv ORDER BY key").fetchall()
        conn.close()
        return [row[0] for row in rows]
