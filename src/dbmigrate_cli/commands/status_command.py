"""Status command - Show applied and pending migrations."""

import typer

from dbmigrate_cli.services.migration_service import open_runner
from dbmigrate_cli.utils.ui.console import get_console
from dbmigrate_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper
from .options import DatabaseOption, MigrationsDirOption

console = get_console(highlight=False)


@command_wrapper
def status(
    output: str = typer.Option(
        "table", "--output", "-o", help="Output format (table, json, yaml)"
    ),
    database: str | None = DatabaseOption,
    migrations_dir: str | None = MigrationsDirOption,
) -> None:
    """Show the current version and the state of every migration."""
    with open_runner(database, migrations_dir) as runner:
        rows = [
            {"version": s.version, "name": s.name, "applied": s.applied}
            for s in runner.status()
        ]
        current = runner.current_version()
        latest = runner.max_version()

    if output == "table":
        console.print(f"Current version: [cyan]{current}[/cyan]")
        console.print(f"Latest version:  [cyan]{latest}[/cyan]")
        format_output(rows, output)
    else:
        format_output(
            {"current_version": current, "latest_version": latest, "migrations": rows},
            output,
        )
