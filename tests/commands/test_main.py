"""Tests for the top-level application."""

from __future__ import annotations

from todorecur import __version__


def test_version(invoke):
    result = invoke("version")

    assert result.exit_code == 0
    assert __version__ in result.output


def test_typo_suggests_command(invoke):
    result = invoke("patern")

    assert result.exit_code == 2
    assert "patterns" in result.output


def test_no_args_shows_help(invoke):
    result = invoke()

    assert "patterns" in result.output
