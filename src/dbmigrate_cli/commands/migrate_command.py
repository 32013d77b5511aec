"""Migrate command - Bring the schema to a target version."""

import typer

from dbmigrate_cli.services.migration_service import open_runner
from dbmigrate_cli.utils.ui.console import get_console
from dbmigrate_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .options import DatabaseOption, MigrationsDirOption

console = get_console(highlight=False)


@command_wrapper
def migrate(
    version: str | None = typer.Argument(
        None, help="Target version (defaults to the latest migration)"
    ),
    database: str | None = DatabaseOption,
    migrations_dir: str | None = MigrationsDirOption,
) -> None:
    """Migrate the database up or down to VERSION."""
    with open_runner(database, migrations_dir) as runner:
        count = runner.migrate(version)
        current = runner.current_version()

    if count:
        format_success(f"Executed {count} migration(s), now at version {current}")
    else:
        console.print(f"Nothing to migrate, database is at version {current}")
