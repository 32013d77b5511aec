"""Migration discovery.

A source produces an immutable, naturally ordered catalog of migrations
and turns a catalog version into a runnable ``Migration`` instance.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from . import version as versions
from .errors import (
    DuplicateVersionError,
    MalformedVersionError,
    MigrationLoadError,
    UnknownVersionError,
)
from .handle import DatabaseHandle
from .migration import Migration

logger = logging.getLogger(__name__)

MIGRATION_FILE_PATTERN = re.compile(r"^\d{3}.*\.py$")


@dataclass(frozen=True)
class CatalogEntry:
    """A discovered migration definition."""

    version: str
    name: str
    path: Path | None = None


class MigrationCatalog:
    """Immutable catalog of migrations in ascending natural version order."""

    def __init__(self, entries: Iterable[CatalogEntry] = ()):
        ordered = sorted(entries, key=lambda e: versions.version_key(e.version))
        by_version: dict[str, CatalogEntry] = {}
        for entry in ordered:
            if entry.version in by_version:
                raise DuplicateVersionError(
                    f"Duplicate migration version {entry.version}: "
                    f"{by_version[entry.version].name!r} and {entry.name!r}"
                )
            by_version[entry.version] = entry
        self._entries = tuple(ordered)
        self._by_version = by_version

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, version: object) -> bool:
        if not isinstance(version, (str, int)):
            return False
        try:
            return versions.normalize(version) in self._by_version
        except MalformedVersionError:
            return False

    def versions(self) -> list[str]:
        """All versions, ascending."""
        return [entry.version for entry in self._entries]

    def max_version(self) -> str:
        """Highest version, or "0" for an empty catalog."""
        return self._entries[-1].version if self._entries else versions.ZERO

    def min_version(self) -> str:
        """Lowest version, or "0" for an empty catalog."""
        return self._entries[0].version if self._entries else versions.ZERO

    def get(self, version: str | int) -> CatalogEntry:
        """Look up an entry by version.

        Raises:
            UnknownVersionError: If the version is not in the catalog
        """
        normalized = versions.normalize(version)
        try:
            return self._by_version[normalized]
        except KeyError:
            raise UnknownVersionError(normalized) from None


class MigrationSource(ABC):
    """Produces the catalog and loads migration units from it."""

    _catalog: MigrationCatalog | None = None

    def catalog(self) -> MigrationCatalog:
        """The catalog, discovered on first call and then reused."""
        if self._catalog is None:
            self._catalog = MigrationCatalog(self.discover())
        return self._catalog

    @abstractmethod
    def discover(self) -> list[CatalogEntry]:
        """Enumerate every available migration definition."""

    @abstractmethod
    def migration_class(self, entry: CatalogEntry) -> type[Migration]:
        """Resolve the Migration subclass behind a catalog entry."""

    def load(self, version: str | int, handle: DatabaseHandle) -> Migration:
        """Instantiate the migration registered under ``version``.

        Raises:
            UnknownVersionError: If the version is not in the catalog
            MigrationLoadError: If the definition cannot be turned into a Migration
        """
        entry = self.catalog().get(version)
        migration_cls = self.migration_class(entry)
        return migration_cls(handle, entry.version)

    def list_versions(self) -> list[str]:
        return self.catalog().versions()

    def max_version(self) -> str:
        return self.catalog().max_version()

    def min_version(self) -> str:
        return self.catalog().min_version()


class DirectoryMigrationSource(MigrationSource):
    """Migrations stored as ``<version>_<name>.py`` files in one directory.

    Only files whose name starts with at least three digits are considered;
    subdirectories are not searched.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self._classes: dict[str, type[Migration]] = {}

    def discover(self) -> list[CatalogEntry]:
        if not self.directory.is_dir():
            logger.warning("Migrations directory not found: %s", self.directory)
            return []

        entries = []
        for path in self.directory.iterdir():
            if not path.is_file() or not MIGRATION_FILE_PATTERN.match(path.name):
                continue
            version = versions.parse(path.name)
            name = path.stem.split("_", 1)[1] if "_" in path.stem else ""
            entries.append(CatalogEntry(version=version, name=name, path=path))

        logger.debug("Discovered %d migrations in %s", len(entries), self.directory)
        return entries

    def migration_class(self, entry: CatalogEntry) -> type[Migration]:
        if entry.version in self._classes:
            return self._classes[entry.version]

        if entry.path is None:
            raise MigrationLoadError(f"Migration {entry.version} has no file")
        module_name = f"_dbmigrate_migration_{entry.version}"
        try:
            spec = importlib.util.spec_from_file_location(module_name, entry.path)
            if spec is None or spec.loader is None:
                raise MigrationLoadError(f"Cannot load migration: {entry.path}")
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
        except MigrationLoadError:
            raise
        except Exception as e:
            raise MigrationLoadError(
                f"Failed to load migration {entry.path}: {e}"
            ) from e

        token = entry.path.name.split("_", 1)[0].split(".", 1)[0]
        migration_cls = getattr(module, f"Migration{token}", None)
        if not (inspect.isclass(migration_cls) and issubclass(migration_cls, Migration)):
            candidates = [
                obj
                for obj in vars(module).values()
                if inspect.isclass(obj)
                and issubclass(obj, Migration)
                and obj is not Migration
                and obj.__module__ == module.__name__
            ]
            if len(candidates) != 1:
                raise MigrationLoadError(
                    f"Migration {entry.path} must define exactly one Migration "
                    f"subclass (found {len(candidates)})"
                )
            migration_cls = candidates[0]

        self._classes[entry.version] = migration_cls
        return migration_cls


class StaticMigrationSource(MigrationSource):
    """Migrations given in code as a mapping of version -> Migration subclass."""

    def __init__(self, migrations: Mapping[str | int, type[Migration]]):
        self._migrations: dict[str, type[Migration]] = {}
        self._names: dict[str, str] = {}
        for raw_version, migration_cls in migrations.items():
            normalized = versions.normalize(raw_version)
            if normalized in self._migrations:
                raise DuplicateVersionError(
                    f"Duplicate migration version {normalized}"
                )
            self._migrations[normalized] = migration_cls
            self._names[normalized] = migration_cls.__name__

    def discover(self) -> list[CatalogEntry]:
        return [
            CatalogEntry(version=v, name=self._names[v]) for v in self._migrations
        ]

    def migration_class(self, entry: CatalogEntry) -> type[Migration]:
        return self._migrations[entry.version]
