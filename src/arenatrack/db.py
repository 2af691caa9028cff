"""Local key-value storage used when the remote store is unavailable."""

import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

STORAGE_KEYS = {
    "profiles": "arena-god-profiles",
    "champion_progress": "arena-god-champion-progress",
}


class LocalStorage:
    """SQLite-backed blob store keyed by fixed string identifiers."""

    def __init__(self, db_path: str):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self._init_db()

    def _init_db(self):
        """Create database tables if they don't exist."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.commit()

    @contextmanager
    def get_connection(self):
        """Get database connection context manager."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def get_item(self, key: str) -> Optional[str]:
        """Get the raw blob stored under a key.

        Args:
            key: Storage key

        Returns:
            Stored string or None if the key is absent
        """
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT value FROM kv_store WHERE key = ?",
                (key,)
            )
            row = cursor.fetchone()
            return row["value"] if row else None

    def set_item(self, key: str, value: str):
        """Store a raw blob under a key, replacing any previous value.

        Args:
            key: Storage key
            value: String to store
        """
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                """,
                (key, value, datetime.now().isoformat())
            )
            conn.commit()

    def remove_item(self, key: str):
        """Remove a key."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()

    def get_json(self, key: str, default: Any = None) -> Any:
        """Get a JSON blob, or ``default`` when the key is absent."""
        raw = self.get_item(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set_json(self, key: str, value: Any):
        """Serialize ``value`` as JSON and store it under ``key``."""
        self.set_item(key, json.dumps(value))

    def keys(self) -> list[str]:
        """List stored keys."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT key FROM kv_store ORDER BY key")
            return [row["key"] for row in cursor.fetchall()]

    def clear(self):
        """Remove every stored blob."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM kv_store")
            conn.commit()
