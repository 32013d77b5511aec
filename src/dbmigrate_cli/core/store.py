"""Persistence of applied migration versions.

Applied versions live in a single-column table, one row per version in
normalized form. The table is created on first use. Databases that were
tracked by the older single-row ``schema_info`` table are backfilled so
that every version from 0 up to the recorded one counts as applied.
"""

from __future__ import annotations

import logging
import re

from . import version as versions
from .errors import NoPriorVersionError, StoreAccessError
from .handle import DatabaseHandle

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "schema_migration"
DEFAULT_LEGACY_TABLE = "schema_info"

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_identifier(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid table name: {name!r}")
    return name


class SchemaVersionStore:
    """Reads and writes the set of applied versions."""

    def __init__(
        self,
        handle: DatabaseHandle,
        table: str = DEFAULT_TABLE,
        legacy_table: str = DEFAULT_LEGACY_TABLE,
    ):
        self.handle = handle
        self.table = _check_identifier(table)
        self.legacy_table = _check_identifier(legacy_table)

    def current_version(self) -> str:
        """Highest applied version, "0" if nothing is applied.

        Bootstraps the version table when it does not exist yet.
        """
        if not self._table_exists(self.table):
            return self.bootstrap()

        applied = self.applied_versions()
        return applied[-1] if applied else versions.ZERO

    def bootstrap(self) -> str:
        """Create the version table and backfill it from the legacy table.

        Failures are logged and rolled back; the database is then treated
        as having nothing applied.

        Returns:
            The legacy version that was backfilled, or "0"
        """
        logger.info("Creating version table %s", self.table)
        try:
            self.handle.begin_transaction()
            self.handle.execute(
                f"CREATE TABLE {self.table} ("
                "version VARCHAR(255) NOT NULL, "
                f"CONSTRAINT unique_{self.table} UNIQUE (version))"
            )
            current = self._backfill_legacy()
            self.handle.commit()
        except Exception as e:
            logger.warning("Version table bootstrap failed, assuming version 0: %s", e)
            try:
                self.handle.rollback()
            except Exception as rollback_error:
                logger.warning("Rollback after bootstrap failure failed: %s", rollback_error)
            return versions.ZERO
        return current

    def _backfill_legacy(self) -> str:
        if not self.handle.table_exists(self.legacy_table):
            return versions.ZERO

        legacy = self.handle.query_scalar(f"SELECT version FROM {self.legacy_table}")
        if legacy is None:
            return versions.ZERO

        legacy_version = int(legacy)
        for number in range(legacy_version + 1):
            self.handle.execute(
                f"INSERT INTO {self.table} (version) VALUES (?)", (str(number),)
            )
        logger.info(
            "Backfilled versions 0..%d from legacy table %s",
            legacy_version,
            self.legacy_table,
        )
        return versions.normalize(max(legacy_version, 0))

    def applied_versions(self) -> list[str]:
        """All applied versions in ascending natural order."""
        try:
            rows = self.handle.query(f"SELECT version FROM {self.table}")
        except Exception as e:
            raise StoreAccessError(f"Unable to read applied versions: {e}") from e
        return versions.sort_versions(row[0] for row in rows)

    def is_applied(self, version: str | int) -> bool:
        normalized = versions.normalize(version)
        try:
            count = self.handle.query_scalar(
                f"SELECT COUNT(*) FROM {self.table} WHERE version = ?", (normalized,)
            )
        except Exception as e:
            raise StoreAccessError(f"Unable to retrieve version info: {e}") from e
        return bool(count)

    def record_applied(self, version: str | int) -> None:
        """Mark a version applied. Must run inside the migration's transaction."""
        normalized = versions.normalize(version)
        try:
            self.handle.execute(
                f"INSERT INTO {self.table} (version) "
                f"SELECT ? WHERE NOT EXISTS "
                f"(SELECT 1 FROM {self.table} WHERE version = ?)",
                (normalized, normalized),
            )
        except Exception as e:
            raise StoreAccessError(f"Unable to record version {normalized}: {e}") from e

    def record_unapplied(self, version: str | int) -> None:
        """Mark a version unapplied. Must run inside the migration's transaction."""
        normalized = versions.normalize(version)
        try:
            self.handle.execute(
                f"DELETE FROM {self.table} WHERE version = ?", (normalized,)
            )
        except Exception as e:
            raise StoreAccessError(f"Unable to unrecord version {normalized}: {e}") from e

    def previous_applied(self, excluding: str | int | None = None) -> str:
        """Highest applied version strictly below ``excluding``.

        Args:
            excluding: Upper bound, defaults to the current version

        Raises:
            NoPriorVersionError: If no applied version lies below the bound
        """
        bound = (
            self.current_version() if excluding is None else versions.normalize(excluding)
        )
        below = [
            v for v in self.applied_versions() if versions.compare(v, bound) < 0
        ]
        if not below:
            raise NoPriorVersionError(f"No applied version before {bound}")
        return below[-1]

    def _table_exists(self, name: str) -> bool:
        try:
            return self.handle.table_exists(name)
        except Exception as e:
            raise StoreAccessError(f"Unable to inspect table {name}: {e}") from e
