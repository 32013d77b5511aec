"""Generation of new migration stub files."""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

from dbmigrate_cli.core.source import DirectoryMigrationSource

VERSION_FORMAT = "%Y%m%d%H%M%S"

STUB_TEMPLATE = '''"""Migrations between versions {previous} and {version}."""

from dbmigrate_cli.core.migration import Migration


class Migration{version}(Migration):
    """{title}"""

    def up(self) -> None:
        """Migrate up to version {version}."""

    def down(self) -> None:
        """Migrate down to version {previous}."""
'''


def sanitize_name(name: str) -> str:
    """Replace anything that is not a letter or digit with an underscore."""
    return re.sub(r"[^a-zA-Z0-9]", "_", name.strip())


def generate_migration(
    name: str,
    migrations_dir: str | Path,
    now: datetime | None = None,
) -> Path:
    """Write a new, empty migration stub.

    The version is the current local time as ``YYYYMMDDHHMMSS``.

    Args:
        name: Human-readable name, sanitized into the file name
        migrations_dir: Directory holding the migrations (created if missing)
        now: Timestamp to derive the version from, defaults to now

    Returns:
        Path of the new migration file

    Raises:
        ValueError: If the name is empty
        FileExistsError: If a migration with the same version exists
    """
    safe_name = sanitize_name(name)
    if not safe_name.strip("_"):
        raise ValueError("Migration name cannot be empty")

    directory = Path(migrations_dir)
    catalog = DirectoryMigrationSource(directory).catalog()
    version = (now or datetime.now()).strftime(VERSION_FORMAT)
    if version in catalog:
        raise FileExistsError(
            f"Migration version {version} already exists in {directory}"
        )

    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{version}_{safe_name}.py"

    path.write_text(
        STUB_TEMPLATE.format(
            previous=catalog.max_version(),
            version=version,
            title=name.strip().replace("\\", "\\\\").replace('"', "'"),
        ),
        encoding="utf-8",
    )
    return path
