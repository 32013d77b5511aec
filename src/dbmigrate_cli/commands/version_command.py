"""Command 'version' of dbmigrate-cli"""

from dbmigrate_cli import __version__
from dbmigrate_cli.utils.ui.console import get_console

console = get_console(highlight=False)


def version() -> None:
    """Show version information"""
    console.print(__version__)
