"""CLI tests for migrate, rollback, status and generate."""

import json

import pytest
from typer.testing import CliRunner

from dbmigrate_cli.main import app
from dbmigrate_cli.utils import exit_codes

runner = CliRunner()

MIGRATION_TEMPLATE = '''
from dbmigrate_cli.core.migration import Migration


class Migration{token}(Migration):
    """{title}"""

    def up(self):
        self.execute_sql("CREATE TABLE t{token} (id INTEGER)")

    def down(self):
        self.execute_sql("DROP TABLE t{token}")
'''

FAILING_TEMPLATE = '''
from dbmigrate_cli.core.migration import Migration


class Migration{token}(Migration):
    def up(self):
        raise RuntimeError("boom")

    def down(self):
        raise RuntimeError("boom")
'''


@pytest.fixture
def project(tmp_path):
    """Migrations 001..003 and the CLI options pointing at them."""
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    for token, title in (("001", "Create users"), ("002", "Create posts"), ("003", "Create tags")):
        (migrations / f"{token}_{title.lower().replace(' ', '_')}.py").write_text(
            MIGRATION_TEMPLATE.format(token=token, title=title), encoding="utf-8"
        )
    return migrations, ["-d", f"sqlite:///{tmp_path / 'app.db'}", "-m", str(migrations)]


def _status(options):
    result = runner.invoke(app, ["status", "-o", "json", *options])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


# ---------------------------------------------------------------------------
# migrate
# ---------------------------------------------------------------------------


class TestMigrateCommand:
    def test_migrates_to_latest(self, project):
        _, options = project
        result = runner.invoke(app, ["migrate", *options])
        assert result.exit_code == 0, result.output
        assert "Executed 3 migration(s), now at version 3" in result.output

    def test_migrates_to_target(self, project):
        _, options = project
        result = runner.invoke(app, ["migrate", "2", *options])
        assert result.exit_code == 0
        assert _status(options)["current_version"] == "2"

    def test_migrates_down(self, project):
        _, options = project
        runner.invoke(app, ["migrate", *options])
        result = runner.invoke(app, ["migrate", "0", *options])
        assert result.exit_code == 0
        assert "Executed 3 migration(s), now at version 0" in result.output

    def test_nothing_to_do(self, project):
        _, options = project
        runner.invoke(app, ["migrate", *options])
        result = runner.invoke(app, ["migrate", *options])
        assert result.exit_code == 0
        assert "Nothing to migrate" in result.output

    def test_target_above_latest(self, project):
        _, options = project
        result = runner.invoke(app, ["migrate", "9", *options])
        assert result.exit_code == exit_codes.ERROR_INVALID_ARGS
        assert "Error:" in result.output

    def test_non_numeric_target(self, project):
        _, options = project
        result = runner.invoke(app, ["migrate", "latest", *options])
        assert result.exit_code == exit_codes.ERROR_INVALID_ARGS

    def test_failing_migration(self, project):
        migrations, options = project
        (migrations / "004_broken.py").write_text(
            FAILING_TEMPLATE.format(token="004"), encoding="utf-8"
        )
        result = runner.invoke(app, ["migrate", *options])
        assert result.exit_code == exit_codes.ERROR_MIGRATION_FAILED
        assert "boom" in result.output
        assert _status(options)["current_version"] == "3"

    def test_unloadable_migration(self, project):
        migrations, options = project
        (migrations / "004_syntax.py").write_text("def broken(:\n", encoding="utf-8")
        result = runner.invoke(app, ["migrate", *options])
        assert result.exit_code == exit_codes.ERROR_MIGRATION_FAILED

    def test_unsupported_database(self, project):
        migrations, _ = project
        result = runner.invoke(
            app, ["migrate", "-d", "postgresql://localhost/db", "-m", str(migrations)]
        )
        assert result.exit_code == exit_codes.ERROR_GENERAL
        assert "Unsupported database URL" in result.output

    def test_environment_database(self, project, tmp_path, monkeypatch):
        migrations, _ = project
        monkeypatch.setenv("DBMIGRATE_DATABASE_URL", f"sqlite:///{tmp_path / 'env.db'}")
        monkeypatch.setenv("DBMIGRATE_MIGRATIONS_DIR", str(migrations))
        result = runner.invoke(app, ["migrate"])
        assert result.exit_code == 0
        assert (tmp_path / "env.db").exists()

    def test_writes_log_file(self, project, tmp_path):
        _, options = project
        runner.invoke(app, ["migrate", *options])
        content = (tmp_path / "logs" / "dbmigrate.log").read_text(encoding="utf-8")
        assert "command started: migrate" in content
        assert "Migrated version 3" in content


# ---------------------------------------------------------------------------
# rollback
# ---------------------------------------------------------------------------


class TestRollbackCommand:
    def test_rolls_back_latest(self, project):
        _, options = project
        runner.invoke(app, ["migrate", *options])
        result = runner.invoke(app, ["rollback", *options])
        assert result.exit_code == 0
        assert "Rolled back 1 migration(s), now at version 2" in result.output

    def test_nothing_to_roll_back(self, project):
        _, options = project
        runner.invoke(app, ["migrate", "1", *options])
        result = runner.invoke(app, ["rollback", *options])
        assert result.exit_code == exit_codes.ERROR_NOT_FOUND

    def test_rejects_step_count(self, project):
        _, options = project
        result = runner.invoke(app, ["rollback", "2", *options])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# status
# ---------------------------------------------------------------------------


class TestStatusCommand:
    def test_json(self, project):
        _, options = project
        runner.invoke(app, ["migrate", "1", *options])
        data = _status(options)
        assert data["current_version"] == "1"
        assert data["latest_version"] == "3"
        assert data["migrations"][0] == {
            "version": "1",
            "name": "create_users",
            "applied": True,
        }
        assert [m["applied"] for m in data["migrations"]] == [True, False, False]

    def test_table(self, project):
        _, options = project
        result = runner.invoke(app, ["status", *options])
        assert result.exit_code == 0
        assert "Current version: 0" in result.output
        assert "Latest version:  3" in result.output
        assert "create_posts" in result.output

    def test_yaml(self, project):
        _, options = project
        result = runner.invoke(app, ["status", "-o", "yaml", *options])
        assert result.exit_code == 0
        assert "current_version: '0'" in result.output

    def test_missing_directory(self, tmp_path):
        result = runner.invoke(
            app,
            ["status", "-o", "json", "-d", str(tmp_path / "app.db"), "-m", str(tmp_path / "none")],
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["migrations"] == []


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


class TestGenerateCommand:
    def test_creates_stub(self, tmp_path):
        target = tmp_path / "migrations"
        result = runner.invoke(app, ["generate", "add_users", "-m", str(target)])
        assert result.exit_code == 0, result.output
        files = list(target.glob("*_add_users.py"))
        assert len(files) == 1
        assert "Created" in result.output

    def test_generated_stub_migrates(self, tmp_path):
        target = tmp_path / "migrations"
        runner.invoke(app, ["generate", "init", "-m", str(target)])
        result = runner.invoke(
            app, ["migrate", "-d", str(tmp_path / "app.db"), "-m", str(target)]
        )
        assert result.exit_code == 0
        assert "Executed 1 migration(s)" in result.output

    def test_invalid_name(self, tmp_path):
        result = runner.invoke(app, ["generate", "!!!", "-m", str(tmp_path)])
        assert result.exit_code == exit_codes.ERROR_INVALID_ARGS
