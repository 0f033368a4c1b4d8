"""Command 'run' of todorecur - one generation pass over pending patterns."""

from datetime import datetime

import typer

from todorecur.services.config_service import get_config_service
from todorecur.services.storage import get_clock, get_storage
from todorecur.utils.clock import Clock, FixedClock
from todorecur.utils.exit_codes import ERROR_PARTIAL_FAILURE
from todorecur.utils.ui.console import get_console
from todorecur.utils.ui.formatters import format_output, format_success, format_warning

from .decorators import command_wrapper
from .utils import resolve_output_format

console = get_console()


@command_wrapper
async def run(
    as_of: datetime | None = typer.Option(
        None, "--date", formats=["%Y-%m-%d"], help="Run as if today were this date"
    ),
    workers: int | None = typer.Option(
        None, "--workers", "-w", min=1, help="Patterns processed concurrently"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Generate the next task instance of every due recurrence pattern.

    Meant to be called once a day by cron or a systemd timer. Exits with
    code 7 when some patterns failed.
    """
    output = resolve_output_format(output, json_opt)

    clock: Clock = FixedClock(as_of.date()) if as_of else get_clock()
    if workers is None:
        workers = get_config_service().config.scheduler.max_workers

    runner = get_storage().batch_runner(clock, max_workers=workers)
    report = await runner.run()

    if output in ("json", "yaml"):
        format_output(report.to_dict(), output)
    elif report.pending == 0:
        console.print(f"[dim]No pending recurrence patterns for {report.as_of}[/dim]")
    else:
        format_success(
            f"Generated {report.generated} instance(s) from "
            f"{report.pending} pending pattern(s) for {report.as_of}"
        )
        for failure in report.failures:
            format_warning(f"Pattern {failure.pattern_id} failed: {failure.error}")

    if report.failures:
        raise typer.Exit(ERROR_PARTIAL_FAILURE)
