"""Key-value persistence used for the last searched city and favorites.

The controller and favorites store only see the small ``KeyValueStore``
interface (get/set/remove of strings), so the SQLite-backed store can be
swapped for ``MemoryKeyValueStore`` in tests.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Protocol

from weatherapp.config.defaults import FAVORITES_KEY, LAST_CITY_KEY
from weatherapp.storage import kv_repo

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store. Writes are visible immediately to later reads."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class SqliteKeyValueStore:
    """KeyValueStore over the kv_store table; each write commits."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    @classmethod
    def open(cls, db_path: str | Path) -> "SqliteKeyValueStore":
        """Open (creating if needed) the database file in WAL mode."""
        if str(db_path) != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        kv_repo.create_table(conn)
        return cls(conn)

    def get(self, key: str) -> str | None:
        return kv_repo.get_value(self.conn, key)

    def set(self, key: str, value: str) -> None:
        kv_repo.set_value(self.conn, key, value)

    def remove(self, key: str) -> None:
        kv_repo.delete_value(self.conn, key)

    def close(self) -> None:
        self.conn.close()


# --- Typed accessors for the two persisted entries ---

def load_last_city(store: KeyValueStore) -> str | None:
    return store.get(LAST_CITY_KEY) or None


def save_last_city(store: KeyValueStore, city: str) -> None:
    store.set(LAST_CITY_KEY, city)


def load_favorites(store: KeyValueStore) -> list[str]:
    """Read the favorites list. Absent or unreadable values yield []."""
    raw = store.get(FAVORITES_KEY)
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring unreadable favorites value: %r", raw)
        return []
    if not isinstance(data, list) or not all(isinstance(c, str) for c in data):
        logger.warning("Ignoring favorites value with unexpected shape: %r", raw)
        return []
    return data


def save_favorites(store: KeyValueStore, cities: list[str]) -> None:
    store.set(FAVORITES_KEY, json.dumps(cities))
