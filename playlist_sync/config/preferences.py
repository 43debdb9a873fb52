"""Durable key-value preferences for Playlist Sync."""

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Union

PreferenceValue = Union[str, int]


class PreferenceStore:
    """SQLite-backed key-value store that survives restarts."""

    def __init__(self, db_path: Path):
        """Initialize preference store.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.init_database()

    @contextmanager
    def get_connection(self):
        """Context manager for database connections.

        Yields:
            sqlite3.Connection: Database connection
        """
        conn = sqlite3.connect(self.db_path, timeout=10)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_database(self) -> None:
        """Initialize database schema."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS config (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

    def _get(self, key: str) -> Optional[str]:
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM config WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row['value'] if row else None

    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a string value.

        Args:
            key: Preference key
            default: Value returned when the key is absent

        Returns:
            Stored value or default
        """
        value = self._get(key)
        return default if value is None else value

    def get_int(self, key: str, default: int = 0) -> int:
        """Get an integer value.

        A stored value that is not an integer is treated as absent.

        Args:
            key: Preference key
            default: Value returned when the key is absent

        Returns:
            Stored value or default
        """
        value = self._get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def put_string(self, key: str, value: str) -> None:
        """Persist a string value."""
        self.put_values({key: value})

    def put_int(self, key: str, value: int) -> None:
        """Persist an integer value."""
        self.put_values({key: int(value)})

    def put_values(self, values: Dict[str, PreferenceValue]) -> None:
        """Persist several values in a single transaction.

        Args:
            values: Mapping of key to string or integer value
        """
        now = datetime.now().isoformat()
        with self.get_connection() as conn:
            cursor = conn.cursor()
            for key, value in values.items():
                cursor.execute("""
                    INSERT OR REPLACE INTO config (key, value, updated_at)
                    VALUES (?, ?, ?)
                """, (key, str(value), now))
