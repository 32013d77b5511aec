"""SQLite implementation of the database handle.

The connection runs in autocommit mode (``isolation_level=None``) so that
transactions are opened and closed explicitly with BEGIN/COMMIT/ROLLBACK.
SQLite DDL is transactional, which lets a failed migration roll back its
CREATE/ALTER statements together with its bookkeeping row.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

from dbmigrate_cli.core.handle import DatabaseHandle, Params

MEMORY = ":memory:"
SQLITE_SCHEME = "sqlite:///"


class SQLiteHandle(DatabaseHandle):
    """Database handle over a single sqlite3 connection."""

    def __init__(self, path: str | Path = MEMORY, timeout: float = 30.0):
        """Open the database.

        Args:
            path: Database file, or ":memory:"
            timeout: Seconds to wait for locks held by other connections
        """
        self.path = str(path)
        if self.path != MEMORY:
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        self.connection = sqlite3.connect(
            self.path,
            timeout=timeout,
            isolation_level=None,
        )
        self.connection.execute("PRAGMA foreign_keys = ON")

    def begin_transaction(self) -> None:
        self.connection.execute("BEGIN")

    def commit(self) -> None:
        if self.connection.in_transaction:
            self.connection.execute("COMMIT")

    def rollback(self) -> None:
        if self.connection.in_transaction:
            self.connection.execute("ROLLBACK")

    def execute(self, sql: str, params: Params = None) -> int:
        cursor = self.connection.execute(sql, tuple(params or ()))
        return cursor.rowcount

    def query(self, sql: str, params: Params = None) -> list[tuple[Any, ...]]:
        cursor = self.connection.execute(sql, tuple(params or ()))
        return [tuple(row) for row in cursor.fetchall()]

    def table_exists(self, name: str) -> bool:
        row = self.connection.execute(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
            (name,),
        ).fetchone()
        return row is not None

    def close(self) -> None:
        self.connection.close()


def open_handle(url: str, timeout: float = 30.0) -> SQLiteHandle:
    """Open a handle from a ``sqlite:///path`` URL, a plain path or ":memory:".

    Raises:
        ValueError: If the URL names a database other than SQLite
    """
    if url.startswith(SQLITE_SCHEME):
        path = url[len(SQLITE_SCHEME):] or MEMORY
    elif "://" in url:
        raise ValueError(f"Unsupported database URL: {url}")
    else:
        path = url
    return SQLiteHandle(path, timeout=timeout)
