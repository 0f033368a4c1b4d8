"""Main entry point for todorecur."""

import typer

from todorecur import __version__
from todorecur.commands import config, patterns, run_command, tasks
from todorecur.utils.typer_helpers import SuggestingGroup
from todorecur.utils.ui.console import get_console

# Create main app with custom group class
app = typer.Typer(
    name="todorecur",
    cls=SuggestingGroup,
    help="Generate task instances from recurrence rules",
    no_args_is_help=True,
)

console = get_console()

# Add subcommands
app.add_typer(patterns.app, name="patterns", help="Recurrence pattern management")
app.add_typer(tasks.app, name="tasks", help="Template task commands")
app.add_typer(config.app, name="config", help="Configuration management")
app.command("run")(run_command.run)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]todorecur[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
