"""Project management commands."""

import typer

from punchclock.exceptions import NotFoundError
from punchclock.models import DeleteOutcome
from punchclock.services.project_service import get_project_service
from punchclock.utils.typer_helpers import SuggestingGroup
from punchclock.utils.ui.formatters import (
    format_error,
    format_info,
    format_output,
    format_success,
    status_to_row,
)

from .common import OUTPUT_HELP, current_owner_id, output_format, resolve_project
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Project management commands")


@app.command("create")
@command_wrapper
async def create_project(
    name: str = typer.Argument(..., help="Project name"),
) -> None:
    """Create a new project."""
    project_service = get_project_service()

    project = await project_service.create_project(current_owner_id(), name)
    format_success(f"Project created: {project.name} (#{project.id})")


@app.command("list")
@command_wrapper
async def list_projects(
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List projects with their punch state."""
    project_service = get_project_service()

    entries = await project_service.list_projects_with_latest_log(current_owner_id())
    result = {"projects": [status_to_row(entry) for entry in entries]}
    format_output(result, output_format(output))


@app.command("delete")
@command_wrapper
async def delete_project(
    project: str = typer.Argument(..., help="Project name or ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a project and all of its logs.

    Deleting a project that does not exist is a no-op, not an error.
    """
    try:
        target = await resolve_project(project)
    except NotFoundError:
        format_info(f"No project {project}; nothing deleted")
        return

    if not yes and not typer.confirm(
        f"Delete project '{target.name}' and all of its logs?"
    ):
        format_error("Cancelled")
        raise typer.Exit(0)

    outcome = await get_project_service().delete_project(target.id)
    if outcome is DeleteOutcome.DELETED:
        format_success(f"Project deleted: {target.name}")
    else:
        format_info(f"Project already gone: {target.name}")
