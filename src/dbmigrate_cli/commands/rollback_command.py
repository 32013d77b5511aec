"""Rollback command - Revert to the previously applied version."""

from dbmigrate_cli.services.migration_service import open_runner
from dbmigrate_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .options import DatabaseOption, MigrationsDirOption


@command_wrapper
def rollback(
    database: str | None = DatabaseOption,
    migrations_dir: str | None = MigrationsDirOption,
) -> None:
    """Undo every migration applied after the previous version."""
    with open_runner(database, migrations_dir) as runner:
        count = runner.rollback()
        current = runner.current_version()

    format_success(f"Rolled back {count} migration(s), now at version {current}")
