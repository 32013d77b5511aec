"""Configuration management commands."""

from typing import Optional

import typer

from dbmigrate_cli.config import get_config_manager
from dbmigrate_cli.utils import exit_codes
from dbmigrate_cli.utils.typer_helpers import SuggestingGroup
from dbmigrate_cli.utils.ui.console import get_console
from dbmigrate_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console(highlight=False)


@app.command("show")
@command_wrapper
def show_config(
    output: str = typer.Option("json", "--output", "-o", help="Output format (json, yaml)"),
) -> None:
    """Show the current configuration."""
    format_output(get_config_manager().config.model_dump(), output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., database.url)"),
) -> None:
    """Get a configuration value."""
    value = get_config_manager().get(key)
    if value is None:
        raise AppError(f"Configuration key '{key}' not found", exit_codes.ERROR_NOT_FOUND)
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., database.url)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    try:
        get_config_manager().set(key, value)
    except KeyError:
        raise AppError(
            f"Configuration key '{key}' not found", exit_codes.ERROR_NOT_FOUND
        ) from None
    except ValueError as e:
        raise AppError(
            f"Invalid value for '{key}': {e}", exit_codes.ERROR_INVALID_ARGS
        ) from e
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(0)

    try:
        get_config_manager().reset(key)
    except KeyError:
        raise AppError(
            f"Configuration key '{key}' not found", exit_codes.ERROR_NOT_FOUND
        ) from None

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
