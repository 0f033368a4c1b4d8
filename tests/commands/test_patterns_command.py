"""Tests for the 'patterns' commands."""

from __future__ import annotations


def test_create_prints_pattern(invoke, template_id):
    result = invoke(
        "patterns", "create", template_id,
        "--frequency", "daily", "--start", "2025-01-01", "--output", "yaml",
    )

    assert result.exit_code == 0, result.output
    assert "Created recurrence pattern" in result.output
    assert "frequency: DAILY" in result.output


def test_create_and_list(invoke, invoke_json, template_id):
    invoke("patterns", "create", template_id, "--frequency", "weekly",
           "--day", "mon", "--day", "fri", "--start", "2025-01-06", "--max", "4")

    patterns = invoke_json("patterns", "list")

    assert len(patterns) == 1
    assert patterns[0]["task_id"] == template_id
    assert patterns[0]["days_of_week"] == ["MONDAY", "FRIDAY"]
    assert patterns[0]["next_occurrence"] == "2025-01-06"
    assert patterns[0]["completed"] is False


def test_create_weekly_without_days_is_rejected(invoke, template_id):
    result = invoke("patterns", "create", template_id, "--frequency", "weekly")

    assert result.exit_code == 2
    assert "days_of_week" in result.output


def test_create_for_unknown_task(invoke):
    result = invoke("patterns", "create", "missing", "--frequency", "daily")

    assert result.exit_code == 5
    assert "Task not found" in result.output


def test_show_unknown_pattern(invoke):
    result = invoke("patterns", "show", "ghost")

    assert result.exit_code == 5
    assert "not found" in result.output


def test_update_keeps_unset_options(invoke, invoke_json, template_id):
    invoke("patterns", "create", template_id, "--frequency", "weekly",
           "--day", "mon", "--start", "2025-01-06", "--max", "4")
    pattern_id = invoke_json("patterns", "list")[0]["id"]

    updated = invoke("patterns", "update", pattern_id, "--interval", "2")
    assert updated.exit_code == 0, updated.output

    pattern = invoke_json("patterns", "show", pattern_id)
    assert pattern["interval_value"] == 2
    assert pattern["days_of_week"] == ["MONDAY"]
    assert pattern["max_occurrences"] == 4

    invoke("patterns", "update", pattern_id, "--clear-max")
    assert invoke_json("patterns", "show", pattern_id)["max_occurrences"] is None


def test_preview(invoke, invoke_json, template_id):
    invoke("patterns", "create", template_id, "--frequency", "monthly",
           "--day-of-month", "31", "--start", "2025-01-31")
    pattern_id = invoke_json("patterns", "list")[0]["id"]

    preview = invoke_json("patterns", "preview", pattern_id, "--count", "3")

    assert preview == {
        "pattern_id": pattern_id,
        "dates": ["2025-02-28", "2025-03-31", "2025-04-30"],
    }


def test_delete_with_confirmation_declined(invoke, invoke_json, runner, template_id):
    from todorecur.main import app

    invoke("patterns", "create", template_id, "--frequency", "daily", "--start", "2025-01-01")
    pattern_id = invoke_json("patterns", "list")[0]["id"]

    result = runner.invoke(app, ["patterns", "delete", pattern_id], input="n\n")

    assert result.exit_code == 0
    assert "Cancelled" in result.output
    assert len(invoke_json("patterns", "list")) == 1


def test_delete(invoke, invoke_json, template_id):
    invoke("patterns", "create", template_id, "--frequency", "daily", "--start", "2025-01-01")
    pattern_id = invoke_json("patterns", "list")[0]["id"]

    result = invoke("patterns", "delete", pattern_id, "--yes")

    assert result.exit_code == 0
    assert invoke_json("patterns", "list") == []
    assert invoke("patterns", "delete", pattern_id, "--yes").exit_code == 5
