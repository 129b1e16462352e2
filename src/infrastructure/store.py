"""
Key-value stores for saved test snapshots.

Two backends share the :class:`KeyValueStore` protocol:

- :class:`MemoryStore`: a dict, used by tests and as the stand-in for a
  browser's local storage.  ``available=False`` simulates a disabled store.
- :class:`SqliteStore`: a single ``kv`` table in an SQLite file (or
  ``":memory:"``).

Any backend failure surfaces as :class:`~core.errors.StoreUnavailableError`,
the one environmental condition the UI has to report to the user.
"""
from __future__ import annotations

import logging
import sqlite3
from threading import RLock
from typing import Optional, Protocol

from core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """String-to-string persistent store."""
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...
    def keys(self) -> list[str]: ...


class MemoryStore:
    """In-process dict store."""

    def __init__(self, available: bool = True) -> None:
        self._data: dict[str, str] = {}
        self.available = available

    def get(self, key: str) -> Optional[str]:
        self._check()
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._check()
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._check()
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        self._check()
        return list(self._data)

    def _check(self) -> None:
        if not self.available:
            raise StoreUnavailableError("Local storage is not available")


class SqliteStore:
    """SQLite-backed key-value store.

    Thread-safe: all statements are serialised through an internal lock.
    """

    def __init__(self, path: str = ":memory:") -> None:
        self._db_lock = RLock()
        self._is_closed = False
        self.path = path
        try:
            self._db_conn = sqlite3.connect(path, check_same_thread=False)
            self._db_conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                ) WITHOUT ROWID
            """)
            self._db_conn.commit()
        except sqlite3.Error as exc:
            self._is_closed = True
            raise StoreUnavailableError(f"Cannot open store at {path}: {exc}") from exc
        logger.info("Opened snapshot store at %s", path)

    # ------------------------------------------------------------------
    # KeyValueStore
    # ------------------------------------------------------------------

    def get(self, key: str) -> Optional[str]:
        rows = self._execute("SELECT value FROM kv WHERE key = ?", (key,))
        return rows[0][0] if rows else None

    def set(self, key: str, value: str) -> None:
        self._execute(
            "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
            (key, value),
            commit=True,
        )

    def delete(self, key: str) -> None:
        self._execute("DELETE FROM kv WHERE key = ?", (key,), commit=True)

    def keys(self) -> list[str]:
        return [row[0] for row in self._execute("SELECT key FROM kv ORDER BY key")]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Explicitly release the database connection."""
        with self._db_lock:
            if self._is_closed:
                return
            try:
                self._db_conn.close()
            finally:
                self._is_closed = True

    def __enter__(self) -> "SqliteStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _execute(self, query: str, params: tuple = (), *, commit: bool = False) -> list:
        with self._db_lock:
            if self._is_closed:
                raise StoreUnavailableError("Snapshot store is closed")
            try:
                cursor = self._db_conn.cursor()
                cursor.execute(query, params)
                rows = cursor.fetchall()
                if commit:
                    self._db_conn.commit()
            except sqlite3.Error as exc:
                raise StoreUnavailableError(f"Snapshot store error: {exc}") from exc
            return rows
