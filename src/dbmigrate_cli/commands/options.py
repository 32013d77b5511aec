"""Options shared by the commands that open a database."""

import typer

DatabaseOption = typer.Option(
    None,
    "--database",
    "-d",
    help="Database URL (sqlite:///path) overriding config and DBMIGRATE_DATABASE_URL",
)

MigrationsDirOption = typer.Option(
    None,
    "--migrations-dir",
    "-m",
    help="Migrations directory overriding config and DBMIGRATE_MIGRATIONS_DIR",
)
