"""Base class for user-supplied migrations.

A migration file defines one subclass of ``Migration`` implementing ``up()``
and ``down()``. The runner instantiates it with the active database handle
and the version it was discovered under, then calls one of the two methods
inside a transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from .handle import DatabaseHandle, Params


class Migration(ABC):
    """One reversible schema change."""

    def __init__(self, handle: DatabaseHandle, version: str):
        """Initialize migration.

        Args:
            handle: Database handle the statements run against
            version: Normalized version this migration is registered under
        """
        self.handle = handle
        self.version = version

    @property
    def description(self) -> str:
        """First line of the class docstring, or the class name."""
        doc = (type(self).__doc__ or "").strip()
        return doc.splitlines()[0] if doc else type(self).__name__

    @abstractmethod
    def up(self) -> None:
        """Apply the change."""

    @abstractmethod
    def down(self) -> None:
        """Revert the change."""

    def execute_sql(self, sql: str, params: Params = None) -> int:
        """Run a statement, returning the affected row count."""
        return self.handle.execute(sql, params)

    def query(self, sql: str, params: Params = None) -> list[tuple[Any, ...]]:
        """Run a query and return its rows."""
        return self.handle.query(sql, params)

    def load_sql(self, path: str | Path) -> int:
        """Run every statement of a SQL file.

        Statements are separated by ``;``. Blank statements are skipped.

        Returns:
            Number of statements executed
        """
        text = Path(path).read_text(encoding="utf-8")
        count = 0
        for statement in text.split(";"):
            if statement.strip():
                self.handle.execute(statement)
                count += 1
        return count
