from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Optional, Protocol

log = logging.getLogger("stockcount.storage")


class Storage(Protocol):
    """Key/value string storage used for best-effort persistence.

    Implementations never raise on read or write: a failed read is reported
    as "nothing stored" and a failed write is dropped.
    """

    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SqliteStorage:
    """Stores values in a single-table sqlite database."""

    def __init__(self, db_path: Path | str):
        self.db_path = str(db_path)
        self._ready = False

    def _conn(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def init_db(self) -> bool:
        try:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            conn = self._conn()
            try:
                cur = conn.cursor()
                cur.execute("CREATE TABLE IF NOT EXISTS schema_migrations (version INTEGER PRIMARY KEY, applied_at TEXT NOT NULL)")
                cur.execute("SELECT COALESCE(MAX(version), 0) FROM schema_migrations")
                current_version = int(cur.fetchone()[0])
                if current_version < 1:
                    self._migration_v1_kv(cur)
                    cur.execute(
                        "INSERT INTO schema_migrations (version, applied_at) VALUES (?, datetime('now'))",
                        (1,),
                    )
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            log.warning("storage_init_failed path=%s error=%s", self.db_path, e)
            return False
        self._ready = True
        return True

    def _migration_v1_kv(self, cur: sqlite3.Cursor) -> None:
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
            """
        )

    def _ensure_ready(self) -> bool:
        return self._ready or self.init_db()

    def get(self, key: str) -> Optional[str]:
        if not self._ensure_ready():
            return None
        try:
            conn = self._conn()
            try:
                cur = conn.cursor()
                cur.execute("SELECT value FROM kv_store WHERE key=?", (key,))
                row = cur.fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            log.warning("storage_read_failed key=%s error=%s", key, e)
            return None
        return str(row[0]) if row else None

    def set(self, key: str, value: str) -> None:
        if not self._ensure_ready():
            return
        try:
            conn = self._conn()
            try:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, datetime('now'))
                    ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at
                    """,
                    (key, value),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            log.warning("storage_write_failed key=%s error=%s", key, e)
