"""Error kinds raised by the migration core.

Every error derives from MigratorError and carries the exit code the CLI
reports when the error reaches the top level.
"""

from __future__ import annotations

from dbmigrate_cli.utils import exit_codes


class MigratorError(Exception):
    """Base class for all migration errors."""

    exit_code: int = exit_codes.ERROR_GENERAL


class MalformedVersionError(MigratorError):
    """A migration identifier does not carry an all-digit version token."""

    exit_code = exit_codes.ERROR_INVALID_ARGS


class DuplicateVersionError(MigratorError):
    """Two catalog entries normalize to the same version."""

    exit_code = exit_codes.ERROR_INVALID_ARGS


class UnknownVersionError(MigratorError):
    """The requested version is not in the migration catalog."""

    exit_code = exit_codes.ERROR_NOT_FOUND

    def __init__(self, version: str):
        super().__init__(f"Migration {version} does not exist")
        self.version = version


class InvalidTargetError(MigratorError):
    """The target version lies outside [0, max version]."""

    exit_code = exit_codes.ERROR_INVALID_ARGS


class NoPriorVersionError(MigratorError):
    """Rollback was requested with nothing applied below the current version."""

    exit_code = exit_codes.ERROR_NOT_FOUND


class MigrationLoadError(MigratorError):
    """A migration definition could not be imported or instantiated."""

    exit_code = exit_codes.ERROR_MIGRATION_FAILED


class MigrationExecutionError(MigratorError):
    """A migration's up/down (or its bookkeeping) failed and was rolled back."""

    exit_code = exit_codes.ERROR_MIGRATION_FAILED

    def __init__(self, version: str, direction: str, cause: BaseException):
        super().__init__(f"Migration {version} failed ({direction}): {cause}")
        self.version = version
        self.direction = direction


class StoreAccessError(MigratorError):
    """Reading or writing the applied-version table failed."""

    exit_code = exit_codes.ERROR_DATABASE
