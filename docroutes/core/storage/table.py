"""Shared helpers for the per-table storage classes."""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Callable, Sequence
from typing import Any


class TableStorage:
    """Base for storage helpers sharing one connection.

    The connection is shared across enumeration worker threads, so every
    statement runs under the repository's lock.
    """

    def __init__(
        self, get_connection: Callable[[], sqlite3.Connection], lock: threading.RLock
    ) -> None:
        self._get_connection = get_connection
        self._lock = lock

    def _fetchone(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Row | None:
        with self._lock:
            return self._get_connection().execute(sql, params).fetchone()

    def _fetchall(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        with self._lock:
            return self._get_connection().execute(sql, params).fetchall()

    def _write(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        with self._lock:
            conn = self._get_connection()
            cursor = conn.execute(sql, params)
            conn.commit()
            return cursor
