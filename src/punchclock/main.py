"""Main entry point for punchclock."""

import typer

from punchclock import __version__
from punchclock.commands import config, logs, projects, punch_command
from punchclock.utils.typer_helpers import SuggestingGroup
from punchclock.utils.ui.console import get_console

app = typer.Typer(
    name="punchclock",
    cls=SuggestingGroup,
    help="Track time on projects with a single punch toggle",
    no_args_is_help=True,
)

console = get_console(highlight=False)


# Add subcommands
app.add_typer(projects.app, name="projects", help="Project management commands")
app.add_typer(logs.app, name="logs", help="Log management commands")
app.add_typer(config.app, name="config", help="Configuration management commands")

# Add top-level commands
app.command("punch")(punch_command.punch)
app.command("status")(punch_command.status)
app.command("check")(punch_command.check)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]punchclock[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Run the CLI."""
    app()


if __name__ == "__main__":
    main()
