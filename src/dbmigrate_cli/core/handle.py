"""Database handle contract used by the store, the runner and migrations.

The core never talks to a driver directly. Anything that can begin, commit
and roll back a transaction and run a statement can drive migrations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

Params = Sequence[Any] | None


class DatabaseHandle(ABC):
    """Narrow interface over a single database connection.

    Statement parameters use the qmark style (``?`` placeholders).
    """

    @abstractmethod
    def begin_transaction(self) -> None:
        """Open a transaction."""

    @abstractmethod
    def commit(self) -> None:
        """Commit the open transaction."""

    @abstractmethod
    def rollback(self) -> None:
        """Roll back the open transaction."""

    @abstractmethod
    def execute(self, sql: str, params: Params = None) -> int:
        """Run a statement.

        Returns:
            Number of affected rows (-1 if the driver does not know)
        """

    @abstractmethod
    def query(self, sql: str, params: Params = None) -> list[tuple]:
        """Run a query and return all rows."""

    @abstractmethod
    def table_exists(self, name: str) -> bool:
        """Check whether a table exists."""

    def query_scalar(self, sql: str, params: Params = None) -> Any:
        """First column of the first row, or None if there are no rows."""
        rows = self.query(sql, params)
        if not rows:
            return None
        return rows[0][0]

    def close(self) -> None:
        """Release the underlying connection."""

    def __enter__(self) -> DatabaseHandle:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
