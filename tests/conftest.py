"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config, data and log
directories, plus small migration classes and in-memory databases.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from dbmigrate_cli.adapters.sqlite.handle import SQLiteHandle
from dbmigrate_cli.core.migration import Migration
from dbmigrate_cli.core.source import StaticMigrationSource


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point config, data and log directories at *tmp_path*.

    Also resets the config manager and logger singletons so each test
    starts from a clean slate.
    """
    import dbmigrate_cli.config as config_mod
    import dbmigrate_cli.utils.logger as logger_mod

    monkeypatch.delenv(config_mod.ENV_DATABASE_URL, raising=False)
    monkeypatch.delenv(config_mod.ENV_MIGRATIONS_DIR, raising=False)

    config_mod.reset_config_manager()
    logger_mod._logger = None
    app_logger = logging.getLogger("dbmigrate_cli")
    app_logger.handlers.clear()
    app_logger.propagate = True
    app_logger.setLevel(logging.NOTSET)

    config_dir = str(tmp_path / "config")
    data_dir = str(tmp_path / "data")
    log_dir = str(tmp_path / "logs")
    with patch("dbmigrate_cli.config.user_config_dir", return_value=config_dir):
        with patch("dbmigrate_cli.config.user_data_dir", return_value=data_dir):
            with patch("dbmigrate_cli.utils.logger.user_log_dir", return_value=log_dir):
                yield tmp_path

    config_mod.reset_config_manager()
    for handler in logging.getLogger("dbmigrate_cli").handlers:
        handler.close()
    logging.getLogger("dbmigrate_cli").handlers.clear()
    logger_mod._logger = None


# ---------------------------------------------------------------------------
# Databases
# ---------------------------------------------------------------------------


@pytest.fixture
def handle():
    """In-memory SQLite handle."""
    h = SQLiteHandle(":memory:")
    yield h
    h.close()


def _table_names(handle) -> set[str]:
    rows = handle.query("SELECT name FROM sqlite_master WHERE type = 'table'")
    return {row[0] for row in rows}


# ---------------------------------------------------------------------------
# Migrations
# ---------------------------------------------------------------------------


def _make_table_migration(table: str) -> type[Migration]:
    """Build a migration that creates ``table`` on up and drops it on down."""

    class _CreateTable(Migration):
        def up(self) -> None:
            self.execute_sql(f"CREATE TABLE {table} (id INTEGER PRIMARY KEY)")

        def down(self) -> None:
            self.execute_sql(f"DROP TABLE {table}")

    _CreateTable.__name__ = f"Create_{table}"
    _CreateTable.__doc__ = f"Create {table}"
    return _CreateTable


@pytest.fixture
def make_table_migration():
    """Factory for migrations that create a table on up and drop it on down."""
    return _make_table_migration


@pytest.fixture
def table_names():
    """Function listing the tables of a SQLite handle."""
    return _table_names


class _FailingMigration(Migration):
    """Intentionally fails"""

    def up(self) -> None:
        self.execute_sql("CREATE TABLE half_done (id INTEGER)")
        raise RuntimeError("Migration failure!")

    def down(self) -> None:
        raise RuntimeError("Down failure!")


@pytest.fixture
def failing_migration():
    """Migration whose up and down both raise."""
    return _FailingMigration


@pytest.fixture
def three_step_source():
    """Versions 10, 20 and 30, each creating its own table."""
    return StaticMigrationSource(
        {
            "10": _make_table_migration("t10"),
            "20": _make_table_migration("t20"),
            "30": _make_table_migration("t30"),
        }
    )
