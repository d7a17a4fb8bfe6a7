from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generator, Optional

from .storage import Storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "records"
    key: str = "key"
    value: str = "value"
    updated_at: str = "updated_at"


_COLS = _Cols()


class SQLiteStorage(Storage):
    """
    Key/value record storage backed by a local SQLite file.

    Each storage key owns one row; writes upsert that row.
    """

    def __init__(self, db_path: str, key: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._key = key
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.key} TEXT PRIMARY KEY,
                    {_COLS.value} BLOB NOT NULL,
                    {_COLS.updated_at} TEXT NOT NULL
                )
                """
            )

    def read(self) -> Optional[bytes]:
        try:
            with self._conn() as conn:
                row = conn.execute(
                    f"SELECT {_COLS.value} FROM {_COLS.table} WHERE {_COLS.key} = ?", (self._key,)
                ).fetchone()
        except sqlite3.Error:
            logger.exception("Failed to read key=%s from %s", self._key, self._db_path)
            return None
        if row is None:
            return None
        value = row[_COLS.value]
        return value.encode("utf-8") if isinstance(value, str) else bytes(value)

    def write(self, data: bytes) -> bool:
        now = datetime.now(timezone.utc).isoformat()
        try:
            with self._conn() as conn:
                conn.execute(
                    f"""
                    INSERT INTO {_COLS.table} ({_COLS.key}, {_COLS.value}, {_COLS.updated_at})
                    VALUES (?, ?, ?)
                    ON CONFLICT({_COLS.key}) DO UPDATE SET
                        {_COLS.value} = excluded.{_COLS.value},
                        {_COLS.updated_at} = excluded.{_COLS.updated_at}
                    """,
                    (self._key, sqlite3.Binary(data), now),
                )
        except sqlite3.Error:
            logger.exception("Failed to write key=%s to %s", self._key, self._db_path)
            return False
        return True
