"""
SQLite key-value store.

Two tables:
- kv: scalar keys holding one JSON value each
- kv_list: append-only lists of JSON values, ordered by insertion

List ranges use inclusive start/end indices; negative indices count from
the end (-1 is the last element).
"""

import json
import sqlite3
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List

from ..errors import PersistenceError

logger = logging.getLogger(__name__)

_MISSING = object()


class SQLiteKVStore:
    """SQLite-backed key-value and list storage."""

    def __init__(self, db_path: str = "adaptive_trader.db"):
        self.db_path = Path(db_path)
        if self.db_path.parent and not self.db_path.parent.exists():
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize_schema()

    @contextmanager
    def get_connection(self):
        """Connection context manager with WAL mode. SQLite errors become PersistenceError."""
        try:
            conn = sqlite3.connect(str(self.db_path), timeout=30)
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot open {self.db_path}: {e}") from e

        try:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.row_factory = sqlite3.Row
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise PersistenceError(f"SQLite error on {self.db_path}: {e}") from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _initialize_schema(self):
        """Create tables and indexes."""
        with self.get_connection() as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS kv_list (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    key TEXT NOT NULL,
                    value TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_kv_list_key ON kv_list(key, id);
            """)

    # ─────────────────────────────────────────────────────────────
    # SCALAR KEYS
    # ─────────────────────────────────────────────────────────────

    def get(self, key: str, default: Any = None) -> Any:
        with self.get_connection() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        if row is None:
            return default
        return json.loads(row["value"])

    def set(self, key: str, value: Any):
        payload = json.dumps(value, default=str)
        with self.get_connection() as conn:
            conn.execute(
                "INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at",
                (key, payload, datetime.now(timezone.utc).isoformat()),
            )

    def delete(self, key: str):
        """Remove a key from both scalar and list storage."""
        with self.get_connection() as conn:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.execute("DELETE FROM kv_list WHERE key = ?", (key,))

    def exists(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING or self.list_length(key) > 0

    # ─────────────────────────────────────────────────────────────
    # LISTS
    # ─────────────────────────────────────────────────────────────

    def list_append(self, key: str, value: Any) -> int:
        """Append to a list. Returns the new length."""
        payload = json.dumps(value, default=str)
        with self.get_connection() as conn:
            conn.execute("INSERT INTO kv_list (key, value) VALUES (?, ?)", (key, payload))
            row = conn.execute("SELECT COUNT(*) AS n FROM kv_list WHERE key = ?", (key,)).fetchone()
        return row["n"]

    def list_trim(self, key: str, keep_last: int) -> int:
        """
        Keep only the newest `keep_last` elements.

        Returns:
            Number of elements removed
        """
        keep_last = max(0, keep_last)
        with self.get_connection() as conn:
            cursor = conn.execute(
                """
                DELETE FROM kv_list WHERE key = ? AND id NOT IN (
                    SELECT id FROM kv_list WHERE key = ? ORDER BY id DESC LIMIT ?
                )
                """,
                (key, key, keep_last),
            )
            removed = cursor.rowcount
        if removed:
            logger.debug(f"Trimmed {removed} entries from {key}")
        return removed

    def list_range(self, key: str, start: int = 0, end: int = -1) -> List[Any]:
        """
        Elements from `start` to `end` inclusive, oldest first.

        Args:
            key: List key
            start: First index (negative counts from the end)
            end: Last index (negative counts from the end)
        """
        with self.get_connection() as conn:
            rows = conn.execute(
                "SELECT value FROM kv_list WHERE key = ? ORDER BY id", (key,)
            ).fetchall()

        n = len(rows)
        if start < 0:
            start = max(0, n + start)
        if end < 0:
            end = n + end
        end = min(end, n - 1)
        if start > end:
            return []
        return [json.loads(r["value"]) for r in rows[start:end + 1]]

    def list_length(self, key: str) -> int:
        with self.get_connection() as conn:
            row = conn.execute("SELECT COUNT(*) AS n FROM kv_list WHERE key = ?", (key,)).fetchone()
        return row["n"]

    def list_replace(self, key: str, values: List[Any]):
        """Replace a whole list in one transaction."""
        with self.get_connection() as conn:
            conn.execute("DELETE FROM kv_list WHERE key = ?", (key,))
            conn.executemany(
                "INSERT INTO kv_list (key, value) VALUES (?, ?)",
                [(key, json.dumps(v, default=str)) for v in values],
            )

    def keys(self) -> List[str]:
        with self.get_connection() as conn:
            scalar = [r["key"] for r in conn.execute("SELECT key FROM kv ORDER BY key")]
            lists = [r["key"] for r in conn.execute("SELECT DISTINCT key FROM kv_list ORDER BY key")]
        return sorted(set(scalar) | set(lists))
