"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table

from dbmigrate_cli.utils.ui.console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format a list of dicts (or a single dict) as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    rows = data if isinstance(data, list) else [data]
    table = Table(show_header=True, header_style="bold")
    for column in rows[0]:
        table.add_column(str(column).replace("_", " ").title())
    for row in rows:
        table.add_row(*(_format_cell(value) for value in row.values()))
    console.print(table)


def _format_cell(value: Any) -> str:
    if isinstance(value, bool):
        return "[green]yes[/green]" if value else "[dim]no[/dim]"
    if value is None:
        return ""
    return str(value)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")
