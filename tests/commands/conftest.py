"""Fixtures for CLI command tests."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from todorecur.adapters.sqlite.connection import DatabaseConnection
from todorecur.main import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def cli_env(tmp_path, monkeypatch):
    """Run every command against a throwaway config dir and database."""
    from todorecur.services.config_service import get_config_service

    monkeypatch.setenv("TODORECUR_DB", str(tmp_path / "cli.db"))
    get_config_service.cache_clear()
    DatabaseConnection.close_connection()
    with patch("todorecur.services.config_service.user_config_dir", return_value=str(tmp_path)):
        with patch("todorecur.services.config_service.user_data_dir", return_value=str(tmp_path)):
            yield tmp_path
    DatabaseConnection.close_connection()
    get_config_service.cache_clear()


@pytest.fixture
def invoke(runner):
    """Invoke the CLI and return the result."""

    def _invoke(*args: str):
        return runner.invoke(app, list(args))

    return _invoke


@pytest.fixture
def invoke_json(invoke):
    """Invoke a command that prints only JSON and parse its output."""

    def _invoke_json(*args: str):
        result = invoke(*args, "--output", "json")
        assert result.exit_code == 0, result.output
        return json.loads(result.output)

    return _invoke_json


@pytest.fixture
def template_id(invoke, invoke_json) -> str:
    """Create a template task through the CLI and return its id."""
    result = invoke("tasks", "add", "Water the plants", "--priority", "low")
    assert result.exit_code == 0, result.output
    return invoke_json("tasks", "list")[0]["id"]
