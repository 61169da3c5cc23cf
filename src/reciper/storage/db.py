import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

from ..errors import StorageError
from ..logger import get_logger
from ..profile import Profile
from .keyvalue import validate_key

logger = get_logger("db")


class SQLiteKeyValueStore:
    """SQLite-backed key-value namespace for a specific app.

    All apps share one ``kv`` table in the profile database, partitioned by
    the ``namespace`` column.
    """

    def __init__(self, app_name: str, db_path: Path):
        self.app_name = app_name
        self.db_path = Path(db_path)
        self._ensure_schema()

    @classmethod
    def for_app(cls, app_name: str, profile: Optional[Profile] = None) -> "SQLiteKeyValueStore":
        """Get a namespace for an app inside the profile database."""
        profile = profile or Profile.current()
        return cls(app_name, profile.db_path)

    @contextmanager
    def _connection(self):
        """Get a database connection, translating sqlite failures."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open {self.db_path}: {e}") from e
        try:
            yield conn
        except sqlite3.Error as e:
            raise StorageError(f"SQLite error in namespace '{self.app_name}': {e}") from e
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    namespace TEXT NOT NULL,
                    key TEXT NOT NULL,
                    value BLOB NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    PRIMARY KEY (namespace, key)
                )
            """)
            conn.commit()

    def get(self, key: str) -> Optional[bytes]:
        validate_key(key)
        with self._connection() as conn:
            row = conn.execute(
                "SELECT value FROM kv WHERE namespace = ? AND key = ?",
                (self.app_name, key)
            ).fetchone()
        return bytes(row[0]) if row else None

    def set(self, key: str, value: bytes) -> None:
        validate_key(key)
        if not isinstance(value, (bytes, bytearray)):
            raise ValueError("Values must be bytes")

        with self._connection() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO kv (namespace, key, value) VALUES (?, ?, ?)",
                (self.app_name, key, sqlite3.Binary(bytes(value)))
            )
            conn.commit()
        logger.debug(f"Wrote {len(value)} bytes to {self.app_name}/{key}")

    def remove(self, key: str) -> bool:
        validate_key(key)
        with self._connection() as conn:
            cursor = conn.execute(
                "DELETE FROM kv WHERE namespace = ? AND key = ?",
                (self.app_name, key)
            )
            conn.commit()
            return cursor.rowcount > 0

    def keys(self) -> List[str]:
        with self._connection() as conn:
            cursor = conn.execute(
                "SELECT key FROM kv WHERE namespace = ? ORDER BY key",
                (self.app_name,)
            )
            return [row[0] for row in cursor.fetchall()]
