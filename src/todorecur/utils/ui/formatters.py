"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table

from todorecur.utils.ui.console import get_console

# Status Icons
STATUS_ICONS = {
    "active": "🔄",
    "completed": "☑️",
    "open": "⬜",
}

PRIORITY_COLORS = {
    "HIGH": "bold red",
    "MEDIUM": "bold yellow",
    "LOW": "green",
}


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    console = get_console()
    if not data:
        console.print("[yellow]No items found[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    console = get_console()
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    get_console().print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console().print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    get_console().print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    get_console().print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================


def format_pretty(data: Any) -> None:
    """Format patterns and tasks as readable one-line entries."""
    console = get_console()
    if not data:
        console.print("[yellow]No items found[/yellow]")
        return

    if isinstance(data, dict):
        format_single_item(data)
        return

    for item in data:
        if isinstance(item, dict) and "frequency" in item:
            format_pattern_item(item)
        elif isinstance(item, dict) and "description" in item:
            format_task_item(item)
        else:
            console.print(item)


def format_pattern_item(pattern: dict) -> None:
    """One line per pattern: status icon, id, summary, next occurrence."""
    status = "completed" if pattern.get("completed") else "active"
    icon = STATUS_ICONS[status]
    next_occurrence = pattern.get("next_occurrence") or "none"
    get_console().print(
        f"{icon} [cyan]{pattern.get('id')}[/cyan] {pattern.get('summary', '')} "
        f"[dim](generated {pattern.get('generated_count', 0)}, next {next_occurrence})[/dim]"
    )


def format_task_item(task: dict) -> None:
    """One line per task: status icon, priority, description, due date."""
    icon = STATUS_ICONS["completed" if task.get("is_completed") else "open"]
    priority = str(task.get("priority") or "MEDIUM")
    color = PRIORITY_COLORS.get(priority, "white")
    due = task.get("due_date")
    due_text = f" [dim]📅 {str(due)[:10]}[/dim]" if due else ""
    get_console().print(
        f"{icon} [{color}]{priority:<6}[/{color}] {task.get('description')}"
        f" [dim]({task.get('id')})[/dim]{due_text}"
    )
