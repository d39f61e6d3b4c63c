"""Configuration management commands."""

import typer

from punchclock.services.config_service import get_config_service
from punchclock.utils.typer_helpers import SuggestingGroup
from punchclock.utils.ui.formatters import format_error, format_output, format_success

from .common import OUTPUT_HELP
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")


@app.command("view")
@command_wrapper
def view_config(
    output: str = typer.Option("table", "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """View the current configuration and the paths in effect."""
    config_service = get_config_service()

    config_dict = config_service.config.model_dump()
    config_dict["config_file"] = str(config_service.config_path)
    config_dict["database_file"] = str(config_service.database_path)
    format_output(config_dict, output)


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Are you sure you want to reset the entire configuration?"):
        format_error("Cancelled")
        raise typer.Exit(0)

    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
