"""Recurrence pattern management commands."""

from datetime import date, datetime

import typer

from todorecur.exceptions import PatternNotFoundError
from todorecur.models import Frequency, RecurrencePattern
from todorecur.services.storage import get_clock, get_storage
from todorecur.utils.recurrence import pattern_to_dict, preview_occurrences
from todorecur.utils.typer_helpers import SuggestingGroup
from todorecur.utils.ui.console import get_console
from todorecur.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper
from .utils import resolve_output_format

app = typer.Typer(cls=SuggestingGroup, help="Recurrence pattern management commands")
console = get_console()

DATE_FORMATS = ["%Y-%m-%d"]


def _as_date(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


def _show(pattern: RecurrencePattern, output: str) -> None:
    format_output(pattern_to_dict(pattern), output)


@app.command("create")
@command_wrapper
async def create_pattern(
    task_id: str = typer.Argument(..., help="Template task ID"),
    frequency: Frequency = typer.Option(
        ..., "--frequency", "-f", case_sensitive=False, help="DAILY, WEEKLY or MONTHLY"
    ),
    interval: int = typer.Option(1, "--interval", "-i", help="Repeat every N units"),
    start: datetime | None = typer.Option(
        None, "--start", formats=DATE_FORMATS, help="First day (default: today)"
    ),
    end: datetime | None = typer.Option(None, "--end", formats=DATE_FORMATS, help="Last day"),
    day: list[str] | None = typer.Option(
        None, "--day", "-d", help="Weekday for WEEKLY rules (repeatable, e.g. --day mon)"
    ),
    day_of_month: int | None = typer.Option(
        None, "--day-of-month", help="Day of month (1-31) for MONTHLY rules"
    ),
    max_occurrences: int | None = typer.Option(
        None, "--max", help="Stop after this many instances"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Attach a recurrence rule to a task."""
    service = get_storage().pattern_service()
    pattern = await service.create_pattern(
        task_id,
        frequency=frequency,
        interval_value=interval,
        start_date=_as_date(start) or get_clock().today(),
        end_date=_as_date(end),
        days_of_week=day or None,
        day_of_month=day_of_month,
        max_occurrences=max_occurrences,
    )
    format_success(f"Created recurrence pattern {pattern.id}")
    _show(pattern, resolve_output_format(output))


@app.command("list")
@command_wrapper
async def list_patterns(
    active: bool = typer.Option(False, "--active", help="Hide completed patterns"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List recurrence patterns."""
    service = get_storage().pattern_service()
    patterns = await service.list_patterns(active_only=active)
    format_output([pattern_to_dict(p) for p in patterns], resolve_output_format(output))


@app.command("show")
@command_wrapper
async def show_pattern(
    pattern_id: str = typer.Argument(..., help="Pattern ID"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show one recurrence pattern."""
    service = get_storage().pattern_service()
    _show(await service.get_pattern(pattern_id), resolve_output_format(output))


@app.command("update")
@command_wrapper
async def update_pattern(
    pattern_id: str = typer.Argument(..., help="Pattern ID"),
    frequency: Frequency | None = typer.Option(
        None, "--frequency", "-f", case_sensitive=False, help="DAILY, WEEKLY or MONTHLY"
    ),
    interval: int | None = typer.Option(None, "--interval", "-i", help="Repeat every N units"),
    end: datetime | None = typer.Option(None, "--end", formats=DATE_FORMATS, help="Last day"),
    clear_end: bool = typer.Option(False, "--clear-end", help="Remove the end date"),
    day: list[str] | None = typer.Option(
        None, "--day", "-d", help="Weekday for WEEKLY rules (repeatable)"
    ),
    day_of_month: int | None = typer.Option(
        None, "--day-of-month", help="Day of month (1-31) for MONTHLY rules"
    ),
    max_occurrences: int | None = typer.Option(None, "--max", help="Occurrence cap"),
    clear_max: bool = typer.Option(False, "--clear-max", help="Remove the occurrence cap"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Edit the rule of a recurrence pattern. Unset options keep their value."""
    service = get_storage().pattern_service()
    current = await service.get_pattern(pattern_id)

    pattern = await service.update_pattern(
        pattern_id,
        frequency=frequency or current.frequency,
        interval_value=interval if interval is not None else current.interval_value,
        end_date=None if clear_end else (_as_date(end) or current.end_date),
        days_of_week=day or None,
        day_of_month=day_of_month,
        max_occurrences=(
            None
            if clear_max
            else max_occurrences if max_occurrences is not None else current.max_occurrences
        ),
    )
    format_success(f"Updated recurrence pattern {pattern.id}")
    _show(pattern, resolve_output_format(output))


@app.command("delete")
@command_wrapper
async def delete_pattern(
    pattern_id: str = typer.Argument(..., help="Pattern ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a recurrence pattern. Generated tasks are kept."""
    if not yes and not typer.confirm(f"Delete recurrence pattern {pattern_id}?"):
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(0)

    service = get_storage().pattern_service()
    if not await service.delete_pattern(pattern_id):
        raise PatternNotFoundError(pattern_id)
    format_success(f"Deleted recurrence pattern {pattern_id}")


@app.command("preview")
@command_wrapper
async def preview_pattern(
    pattern_id: str = typer.Argument(..., help="Pattern ID"),
    count: int = typer.Option(5, "--count", "-n", min=1, help="Number of dates"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show the next occurrence dates without generating anything."""
    service = get_storage().pattern_service()
    pattern = await service.get_pattern(pattern_id)
    dates = [d.isoformat() for d in preview_occurrences(pattern, count)]

    output = resolve_output_format(output)
    if output in ("json", "yaml"):
        format_output({"pattern_id": pattern.id, "dates": dates}, output)
        return
    if not dates:
        console.print("[yellow]No further occurrences[/yellow]")
        return
    for d in dates:
        console.print(f"📅 {d}")
