"""Template task commands."""

from datetime import datetime

import typer

from todorecur.models import Priority
from todorecur.services.storage import get_storage
from todorecur.utils.typer_helpers import SuggestingGroup
from todorecur.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper
from .utils import resolve_output_format

app = typer.Typer(cls=SuggestingGroup, help="Task commands")


@app.command("add")
@command_wrapper
async def add_task(
    description: str = typer.Argument(..., help="Task description"),
    priority: Priority = typer.Option(
        Priority.MEDIUM, "--priority", "-p", case_sensitive=False, help="LOW, MEDIUM or HIGH"
    ),
    category: str | None = typer.Option(None, "--category", "-c", help="Category"),
    due: datetime | None = typer.Option(
        None, "--due", formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M"], help="Due date"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Add a task (use it as the template of a recurrence pattern)."""
    service = get_storage().task_service()
    task = await service.add_task(
        description, priority=priority, category=category, due_date=due
    )
    format_success(f"Created task {task.id}")
    output = resolve_output_format(output)
    if output != "pretty":
        format_output(task.model_dump(mode="json"), output)


@app.command("list")
@command_wrapper
async def list_tasks(
    status: str = typer.Option("active", "--status", help="active, completed or all"),
    limit: int | None = typer.Option(None, "--limit", min=1, help="Limit results"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List tasks, generated instances included."""
    service = get_storage().task_service()
    tasks = await service.list_tasks(status=status, limit=limit)
    format_output(
        [task.model_dump(mode="json") for task in tasks], resolve_output_format(output)
    )
