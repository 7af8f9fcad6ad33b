"""Key-value storage for calculator inputs that survive between sessions."""

from __future__ import annotations

from contextlib import closing
import logging
import os
import sqlite3
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when the backing store cannot be read or written."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryKeyValueStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


def _db_path() -> str:
    configured = os.getenv("DOSECALC_DB_PATH")
    if configured:
        return configured
    return os.path.join(os.path.dirname(__file__), "data", "dosecalc.db")


class SqliteKeyValueStore:
    """Single-table SQLite store; the file is created on first use."""

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or _db_path()

    def _connect(self) -> sqlite3.Connection:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        return sqlite3.connect(self.path)

    def init_db(self) -> None:
        try:
            with closing(self._connect()) as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                    """
                )
                conn.commit()
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"Could not initialise store at {self.path}: {exc}") from exc
        logger.info("Key-value store ready at %s", self.path)

    def get(self, key: str) -> Optional[str]:
        try:
            with closing(self._connect()) as conn:
                row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"Could not read {key!r}: {exc}") from exc
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            with closing(self._connect()) as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value
                    """,
                    (key, value),
                )
                conn.commit()
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"Could not write {key!r}: {exc}") from exc

    def remove(self, key: str) -> None:
        try:
            with closing(self._connect()) as conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                conn.commit()
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"Could not remove {key!r}: {exc}") from exc
