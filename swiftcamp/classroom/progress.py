"""
Progress stores - Persist learner progress as a single named record.

Stores user progress separately from the lesson catalog:
- SQLiteProgressStore: durable key/value entry in ~/.swiftcamp/progress.db
- MemoryProgressStore: in-memory store (tests, or no durable storage)

The engine only depends on the ProgressStore interface, so any
load/save/delete implementation can be injected.
"""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from swiftcamp.schemas import UserProgress


DEFAULT_PROGRESS_DIR = Path.home() / ".swiftcamp"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"
PROGRESS_KEY = "userProgress"


class ProgressStoreError(RuntimeError):
    """Progress record could not be read, written or removed."""


def _decode(payload: str) -> UserProgress:
    try:
        return UserProgress.model_validate_json(payload)
    except ValidationError as e:
        raise ProgressStoreError(f"Stored progress record is invalid: {e}") from e


class ProgressStore:
    """Persistence port for the progress record."""

    def load(self) -> Optional[UserProgress]:
        """Return the stored progress, or None if nothing is stored."""
        raise NotImplementedError

    def save(self, progress: UserProgress):
        """Store progress, replacing any previous record."""
        raise NotImplementedError

    def delete(self):
        """Remove the stored record (no-op if absent)."""
        raise NotImplementedError


class MemoryProgressStore(ProgressStore):
    """Keeps the serialized record in memory."""

    def __init__(self, progress: Optional[UserProgress] = None):
        self._payload: Optional[str] = progress.model_dump_json() if progress else None

    @property
    def payload(self) -> Optional[str]:
        return self._payload

    def load(self) -> Optional[UserProgress]:
        if self._payload is None:
            return None
        return _decode(self._payload)

    def save(self, progress: UserProgress):
        self._payload = progress.model_dump_json()

    def delete(self):
        self._payload = None


class SQLiteProgressStore(ProgressStore):
    """
    Store progress as one JSON entry in a SQLite key/value table.

    Each method opens its own connection, so the store can be shared
    with the evaluator's worker threads.
    """

    def __init__(self, db_path: Optional[Path] = None, key: str = PROGRESS_KEY):
        """
        Initialize progress store.

        Args:
            db_path: Path to progress.db (default: ~/.swiftcamp/progress.db)
            key: Name of the entry holding the progress record
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self.key = key
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
        except (OSError, sqlite3.Error) as e:
            raise ProgressStoreError(f"Cannot open progress database {self.db_path}: {e}") from e
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS key_value (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
            """)
            conn.commit()
        except sqlite3.Error as e:
            raise ProgressStoreError(f"Cannot initialize progress database: {e}") from e
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def load(self) -> Optional[UserProgress]:
        try:
            conn = self._get_connection()
            try:
                cursor = conn.execute(
                    "SELECT value FROM key_value WHERE key = ?", (self.key,)
                )
                row = cursor.fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise ProgressStoreError(f"Cannot read progress: {e}") from e

        if not row:
            return None
        return _decode(row["value"])

    def save(self, progress: UserProgress):
        now = datetime.now().isoformat()
        try:
            conn = self._get_connection()
            try:
                conn.execute(
                    """INSERT INTO key_value (key, value, updated_at)
                       VALUES (?, ?, ?)
                       ON CONFLICT(key) DO UPDATE SET
                         value = excluded.value,
                         updated_at = excluded.updated_at""",
                    (self.key, progress.model_dump_json(), now)
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise ProgressStoreError(f"Cannot write progress: {e}") from e

    def delete(self):
        try:
            conn = self._get_connection()
            try:
                conn.execute("DELETE FROM key_value WHERE key = ?", (self.key,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise ProgressStoreError(f"Cannot delete progress: {e}") from e
