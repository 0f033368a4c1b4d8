"""Unit tests for SuggestingGroup (typer_helpers.py)."""

from __future__ import annotations

import typer
from typer.testing import CliRunner

from todorecur.utils.typer_helpers import SuggestingGroup

runner = CliRunner()


def _app() -> typer.Typer:
    app = typer.Typer(cls=SuggestingGroup)

    @app.command("create")
    def create() -> None:
        print("created")

    @app.command("preview")
    def preview() -> None:
        print("previewed")

    return app


class TestSuggestingGroup:
    def test_valid_command_passes_through(self):
        result = runner.invoke(_app(), ["create"])

        assert result.exit_code == 0
        assert "created" in result.output

    def test_typo_suggests_closest_command(self):
        result = runner.invoke(_app(), ["craete"])

        assert result.exit_code == 2
        assert "Did you mean this?" in result.output
        assert "create" in result.output

    def test_unrelated_name_keeps_usage_error(self):
        result = runner.invoke(_app(), ["zzzz"])

        assert result.exit_code == 2
        assert "Did you mean" not in result.output
