"""SQLite data store for TZ Journal.

The journal is stored the way a browser keeps it in local storage: a small
key/value table holding whole JSON documents. Every save rewrites the entire
document for its key.
"""

import hashlib
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

STATE_KEY = "tz_pro_v1"
PREFS_KEY = "tz_prefs_v1"


def recovery_key(raw: str) -> str:
    """Key an unreadable state blob is preserved under, stable per content."""
    digest = hashlib.sha1(raw.encode("utf-8")).hexdigest()[:12]
    return f"{STATE_KEY}.recovery.{digest}"


class DataStore:
    """SQLite-backed key/value blob store."""

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def get_blob(self, key: str) -> Optional[str]:
        """Get a stored document.

        Args:
            key: Storage key.

        Returns:
            The stored text, or None if the key was never written.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM kv WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def put_blob(self, key: str, value: str) -> None:
        """Replace the document stored under a key in a single write.

        Args:
            key: Storage key.
            value: Full document text.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO kv (key, value, updated_at)
                VALUES (?, ?, ?)
                """,
                (key, value, datetime.now().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

