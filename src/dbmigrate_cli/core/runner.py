"""Migration orchestration.

The runner brings the database from its current version to a target
version. Every migration runs in its own transaction together with the
bookkeeping row that records it, so a version is either fully applied or
not applied at all. A failure stops the batch; migrations committed before
the failing one stay applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from . import version as versions
from .errors import (
    InvalidTargetError,
    MalformedVersionError,
    MigrationExecutionError,
    MigrationLoadError,
    UnknownVersionError,
)
from .handle import DatabaseHandle
from .source import MigrationCatalog, MigrationSource
from .store import SchemaVersionStore

logger = logging.getLogger(__name__)

UP = "up"
DOWN = "down"


@dataclass(frozen=True)
class MigrationStatus:
    """Applied state of one catalog entry."""

    version: str
    name: str
    applied: bool


class MigrationRunner:
    """Applies and reverts migrations against one database."""

    def __init__(
        self,
        handle: DatabaseHandle,
        source: MigrationSource,
        store: SchemaVersionStore | None = None,
    ):
        """Initialize migration runner.

        Args:
            handle: Database the migrations run against
            source: Where migrations are discovered; its catalog is read once
            store: Applied-version store, defaults to one on ``handle``
        """
        self.handle = handle
        self.source = source
        self.store = store if store is not None else SchemaVersionStore(handle)
        self.catalog: MigrationCatalog = source.catalog()

    def max_version(self) -> str:
        return self.catalog.max_version()

    def min_version(self) -> str:
        return self.catalog.min_version()

    def current_version(self) -> str:
        return self.store.current_version()

    def migrate(self, target: str | int | None = None) -> int:
        """Migrate up or down to ``target``.

        Args:
            target: Version to end at, defaults to the highest known version

        Returns:
            Number of migrations executed

        Raises:
            InvalidTargetError: If the target is not in [0, max version]
            MigrationExecutionError: If a migration fails
        """
        max_version = self.catalog.max_version()
        if target is None:
            target = max_version
        else:
            try:
                target = versions.normalize(target)
            except MalformedVersionError:
                raise InvalidTargetError(
                    f"Migration {target} does not exist"
                ) from None
            if versions.compare(target, max_version) > 0:
                raise InvalidTargetError(f"Migration {target} does not exist")

        source_version = self.store.current_version()

        if versions.compare(target, source_version) < 0:
            logger.info("Migrating down from %s to %s", source_version, target)
            count = self._migrate_down(target)
        else:
            logger.info("Migrating up from %s to %s", source_version, target)
            count = self._migrate_up(target)

        logger.info("Executed %d migration(s)", count)
        return count

    def rollback(self) -> int:
        """Revert to the applied version preceding the current one.

        Everything applied above that version is undone in one call.

        Raises:
            NoPriorVersionError: If nothing is applied below the current version
        """
        current = self.store.current_version()
        previous = self.store.previous_applied(current)
        logger.info("Rolling back from %s to %s", current, previous)
        return self.migrate(previous)

    def _migrate_up(self, target: str) -> int:
        counter = 0
        for entry in self.catalog:
            if versions.compare(entry.version, target) <= 0:
                counter += self.apply_one(entry.version)
        return counter

    def _migrate_down(self, target: str) -> int:
        counter = 0
        for entry in self.catalog:
            if versions.compare(entry.version, target) > 0:
                counter += self.undo_one(entry.version)
        return counter

    def apply_one(self, version: str | int) -> int:
        """Run one migration's ``up`` and record it.

        Returns:
            1 if the migration ran, 0 if it was already applied
        """
        if self.store.is_applied(version):
            return 0
        self._execute(versions.normalize(version), UP)
        return 1

    def undo_one(self, version: str | int) -> int:
        """Run one migration's ``down`` and unrecord it.

        Returns:
            1 if the migration ran, 0 if it was not applied
        """
        if not self.store.is_applied(version):
            return 0
        self._execute(versions.normalize(version), DOWN)
        return 1

    def _execute(self, version: str, direction: str) -> None:
        self.handle.begin_transaction()
        try:
            migration = self.source.load(version, self.handle)
            if direction == UP:
                migration.up()
                self.store.record_applied(version)
            else:
                migration.down()
                self.store.record_unapplied(version)
            self.handle.commit()
        except (MigrationLoadError, UnknownVersionError):
            self._rollback(version)
            raise
        except Exception as e:
            self._rollback(version)
            logger.error("Migration %s failed (%s): %s", version, direction, e)
            raise MigrationExecutionError(version, direction, e) from e

        if direction == UP:
            logger.info("Migrated version %s", version)
        else:
            logger.info("Rolled back version %s", version)

    def _rollback(self, version: str) -> None:
        try:
            self.handle.rollback()
        except Exception as rollback_error:
            logger.warning(
                "Rollback of migration %s failed: %s", version, rollback_error
            )

    def status(self) -> list[MigrationStatus]:
        """Applied state of every catalog entry, ascending."""
        self.store.current_version()
        applied = set(self.store.applied_versions())
        return [
            MigrationStatus(entry.version, entry.name, entry.version in applied)
            for entry in self.catalog
        ]

    def pending(self) -> list[str]:
        """Catalog versions that are not applied yet."""
        return [s.version for s in self.status() if not s.applied]
