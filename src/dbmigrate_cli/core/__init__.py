"""Migration orchestration core: versions, sources, version store and runner."""

from .errors import (
    DuplicateVersionError,
    InvalidTargetError,
    MalformedVersionError,
    MigrationExecutionError,
    MigrationLoadError,
    MigratorError,
    NoPriorVersionError,
    StoreAccessError,
    UnknownVersionError,
)
from .handle import DatabaseHandle
from .migration import Migration
from .runner import MigrationRunner, MigrationStatus
from .source import (
    CatalogEntry,
    DirectoryMigrationSource,
    MigrationCatalog,
    MigrationSource,
    StaticMigrationSource,
)
from .store import SchemaVersionStore

__all__ = [
    "CatalogEntry",
    "DatabaseHandle",
    "DirectoryMigrationSource",
    "DuplicateVersionError",
    "InvalidTargetError",
    "MalformedVersionError",
    "Migration",
    "MigrationCatalog",
    "MigrationExecutionError",
    "MigrationLoadError",
    "MigrationRunner",
    "MigrationSource",
    "MigrationStatus",
    "MigratorError",
    "NoPriorVersionError",
    "SchemaVersionStore",
    "StaticMigrationSource",
    "StoreAccessError",
    "UnknownVersionError",
]
