"""Persisted key-value substrate.

The expense store only needs read/write/delete of text values by key.
SqliteKeyValueStore is the durable backend; MemoryKeyValueStore stands in
for it in tests.
"""

import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Protocol

from spendlog.errors import StorageError
from spendlog.store.schema import get_db_path, init_database

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Text key-value persistence."""

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed key-value store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self.data.get(key)

    def write(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class SqliteKeyValueStore:
    """Key-value store backed by a single sqlite table."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path if db_path is not None else get_db_path()
        try:
            init_database(self.db_path)
        except sqlite3.Error as e:
            # Reads will come back empty and writes will raise StorageError
            logger.warning("Could not initialize %s: %s", self.db_path, e)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def read(self, key: str) -> str | None:
        """Read a value.

        A database that cannot be read is treated like a missing key, so
        callers fall back to empty state instead of failing.
        """
        try:
            with closing(self._connect()) as conn:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            logger.warning("Could not read %r from %s: %s", key, self.db_path, e)
            return None
        return row[0] if row else None

    def write(self, key: str, value: str) -> None:
        """Insert or replace a value.

        Raises:
            StorageError: If the write fails.
        """
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    "INSERT INTO kv (key, value, updated_at) VALUES (?, ?, datetime('now')) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at",
                    (key, value),
                )
        except sqlite3.Error as e:
            raise StorageError(f"Could not write {key!r} to {self.db_path}: {e}") from e

    def delete(self, key: str) -> None:
        """Remove a key if present.

        Raises:
            StorageError: If the delete fails.
        """
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        except sqlite3.Error as e:
            raise StorageError(f"Could not delete {key!r} from {self.db_path}: {e}") from e
