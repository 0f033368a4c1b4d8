"""Tests for the 'tasks' commands."""

from __future__ import annotations


def test_add_task(invoke):
    result = invoke("tasks", "add", "Pay rent", "--priority", "HIGH", "--due", "2025-02-01")

    assert result.exit_code == 0, result.output
    assert "Created task" in result.output


def test_add_blank_description_fails(invoke):
    result = invoke("tasks", "add", "   ")

    assert result.exit_code == 2
    assert "Error" in result.output


def test_list_tasks_json(invoke, invoke_json):
    invoke("tasks", "add", "Pay rent", "--category", "bills")

    tasks = invoke_json("tasks", "list")

    assert len(tasks) == 1
    assert tasks[0]["description"] == "Pay rent"
    assert tasks[0]["category"] == "bills"
    assert tasks[0]["priority"] == "MEDIUM"


def test_list_tasks_pretty(invoke):
    invoke("tasks", "add", "Pay rent")

    result = invoke("tasks", "list", "--output", "pretty")

    assert result.exit_code == 0
    assert "Pay rent" in result.output
