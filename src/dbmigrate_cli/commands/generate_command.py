"""Generate command - Create a new migration stub."""

import typer

from dbmigrate_cli.config import get_config_manager
from dbmigrate_cli.services.generator import generate_migration
from dbmigrate_cli.utils import exit_codes
from dbmigrate_cli.utils.ui.formatters import format_success

from .decorators import AppError, command_wrapper
from .options import MigrationsDirOption


@command_wrapper
def generate(
    name: str = typer.Argument(..., help="Name of the migration, e.g. add_users"),
    migrations_dir: str | None = MigrationsDirOption,
) -> None:
    """Create an empty migration file named after the current timestamp."""
    directory = get_config_manager().migrations_dir(migrations_dir)
    try:
        path = generate_migration(name, directory)
    except (ValueError, FileExistsError) as e:
        raise AppError(str(e), exit_codes.ERROR_INVALID_ARGS) from e
    format_success(f"Created {path}")
