"""Tests for the user management CLI."""

import pytest
import uvicorn
from sqlalchemy.exc import OperationalError
from typer.testing import CliRunner

from src.cli import app
from src.user_admin.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    DatabaseConfig,
)
from src.user_admin.runtime.context import with_context

runner = CliRunner()


@pytest.fixture
def file_database(tmp_path):
    """Point the CLI at a throwaway SQLite file for the duration of a test."""
    config = ConfigData(database=DatabaseConfig(url=f"sqlite:///{tmp_path}/cli.db"))
    with with_context(config):
        yield


@pytest.mark.usefixtures("file_database")
class TestUserCommands:
    def test_list_empty(self):
        result = runner.invoke(app, ["users", "list"])

        assert result.exit_code == 0
        assert "No users found" in result.output

    def test_add_then_list(self):
        added = runner.invoke(app, ["users", "add", "Alice", "--email", "alice@example.com"])
        listed = runner.invoke(app, ["users", "list"])

        assert added.exit_code == 0
        assert "Created user 1: Alice" in added.output
        assert listed.exit_code == 0
        assert "Alice" in listed.output
        assert "alice@example.com" in listed.output

    def test_delete(self):
        runner.invoke(app, ["users", "add", "Alice"])

        deleted = runner.invoke(app, ["users", "delete", "1"])
        listed = runner.invoke(app, ["users", "list"])

        assert deleted.exit_code == 0
        assert "No users found" in listed.output

    def test_delete_missing_user(self):
        result = runner.invoke(app, ["users", "delete", "5"])

        assert result.exit_code == 0

    def test_init_db(self):
        result = runner.invoke(app, ["init-db"])

        assert result.exit_code == 0
        assert "Database tables created" in result.output


@pytest.mark.usefixtures("file_database")
class TestSchemaCreation:
    @pytest.fixture
    def without_table_creation(self):
        with with_context(ConfigData(database=DatabaseConfig(create_tables=False))):
            yield

    @pytest.mark.usefixtures("without_table_creation")
    def test_commands_leave_schema_alone_when_disabled(self):
        result = runner.invoke(app, ["users", "list"])

        assert result.exit_code != 0
        assert isinstance(result.exception, OperationalError)

    @pytest.mark.usefixtures("without_table_creation")
    def test_init_db_prepares_schema(self):
        runner.invoke(app, ["init-db"])

        result = runner.invoke(app, ["users", "list"])

        assert result.exit_code == 0
        assert "No users found" in result.output


class TestStartServer:
    @pytest.fixture
    def uvicorn_calls(self, monkeypatch):
        calls = []
        monkeypatch.setattr(
            uvicorn,
            "run",
            lambda target, **kwargs: calls.append((target, kwargs)),
        )
        return calls

    def test_binds_configured_host_and_port(self, uvicorn_calls):
        config = ConfigData(app=AppConfig(host="127.0.0.2", port=9100))
        with with_context(config):
            result = runner.invoke(app, ["start-server"])

        assert result.exit_code == 0
        assert uvicorn_calls == [
            (
                "src.user_admin.api.http.app:app",
                {"host": "127.0.0.2", "port": 9100, "reload": False, "log_level": "info"},
            )
        ]
        assert "http://127.0.0.2:9100/users" in result.output

    def test_options_override_config(self, uvicorn_calls):
        result = runner.invoke(app, ["start-server", "--host", "0.0.0.0", "--port", "8080"])

        assert result.exit_code == 0
        _, kwargs = uvicorn_calls[0]
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 8080
