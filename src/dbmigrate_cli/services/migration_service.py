"""Builds migration runners from configuration.

Commands use ``open_runner`` so that the database handle is closed however
the command ends.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from dbmigrate_cli.adapters.sqlite.handle import open_handle
from dbmigrate_cli.config import ConfigManager, get_config_manager
from dbmigrate_cli.core.runner import MigrationRunner
from dbmigrate_cli.core.source import DirectoryMigrationSource
from dbmigrate_cli.core.store import SchemaVersionStore
from dbmigrate_cli.utils.logger import get_logger


@contextmanager
def open_runner(
    database: str | None = None,
    migrations_dir: str | Path | None = None,
    config_manager: ConfigManager | None = None,
) -> Iterator[MigrationRunner]:
    """Open the configured database and yield a runner over it.

    Args:
        database: Database URL overriding environment and config file
        migrations_dir: Migrations directory overriding environment and config file
        config_manager: Configuration to read, defaults to the global one
    """
    manager = config_manager or get_config_manager()
    config = manager.config

    url = manager.database_url(database)
    directory = manager.migrations_dir(str(migrations_dir) if migrations_dir else None)
    get_logger().debug("Opening %s with migrations from %s", url, directory)

    handle = open_handle(url, timeout=config.database.timeout)
    try:
        store = SchemaVersionStore(
            handle,
            table=config.migrations.table,
            legacy_table=config.migrations.legacy_table,
        )
        yield MigrationRunner(handle, DirectoryMigrationSource(directory), store)
    finally:
        handle.close()
