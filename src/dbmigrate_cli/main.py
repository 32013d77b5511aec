"""Main entry point for dbmigrate-cli."""

import typer

from dbmigrate_cli.commands import (
    config_command,
    generate_command,
    migrate_command,
    rollback_command,
    status_command,
    version_command,
)
from dbmigrate_cli.utils.typer_helpers import SuggestingGroup

# Create main app with custom group class
app = typer.Typer(
    name="dbmigrate",
    cls=SuggestingGroup,
    help="Versioned schema migrations for relational databases",
    no_args_is_help=True,
)

# Add top-level commands
app.command("migrate")(migrate_command.migrate)
app.command("rollback")(rollback_command.rollback)
app.command("status")(status_command.status)
app.command("generate")(generate_command.generate)
app.command("version")(version_command.version)

# Add subcommands
app.add_typer(config_command.app, name="config", help="Configuration management")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
