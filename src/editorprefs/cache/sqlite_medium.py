# src/editorprefs/cache/sqlite_medium.py — v1
"""SQLite-based medium (default CACHE_BACKEND=sqlite).

Uses stdlib sqlite3, no external dependency. The quota is enforced on the
summed length of keys and values, like a browser's per-origin storage.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from editorprefs.cache.base_medium import BaseStoreMedium, CapacityExceeded, entry_size

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_entries (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


class SqliteStoreMedium(BaseStoreMedium):
    """SQLite-backed medium for caches that must survive restarts."""

    def __init__(self, db_path: Path | str, quota: int | None = None) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._quota = quota
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    def get(self, key: str) -> str | None:
        row = self._conn.execute(
            "SELECT value FROM kv_entries WHERE key = ?", (key,)
        ).fetchone()
        return None if row is None else row[0]

    def set(self, key: str, value: str) -> None:
        if self._quota is not None:
            used = self._conn.execute(
                "SELECT COALESCE(SUM(LENGTH(key) + LENGTH(value)), 0) "
                "FROM kv_entries WHERE key != ?",
                (key,),
            ).fetchone()[0]
            required = used + entry_size(key, value)
            if required > self._quota:
                raise CapacityExceeded(key, required, self._quota)
        self._conn.execute(
            "INSERT INTO kv_entries (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value),
        )
        self._conn.commit()

    def remove(self, key: str) -> None:
        self._conn.execute("DELETE FROM kv_entries WHERE key = ?", (key,))
        self._conn.commit()

    def key(self, index: int) -> str | None:
        if index < 0:
            return None
        row = self._conn.execute(
            "SELECT key FROM kv_entries ORDER BY rowid LIMIT 1 OFFSET ?",
            (index,),
        ).fetchone()
        return None if row is None else row[0]

    @property
    def length(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM kv_entries").fetchone()[0]

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()
        logger.debug("Closed cache database %s", self._db_path)
