"""Log management commands."""

from datetime import datetime

import typer

from punchclock.models import DeleteOutcome
from punchclock.services.log_service import get_log_service
from punchclock.services.project_service import get_project_service
from punchclock.utils.exit_codes import ERROR_INVALID_ARGS
from punchclock.utils.typer_helpers import SuggestingGroup
from punchclock.utils.ui.formatters import (
    format_error,
    format_info,
    format_output,
    format_success,
    format_warning,
    log_to_row,
)

from .common import (
    DATETIME_FORMATS,
    OUTPUT_HELP,
    current_owner_id,
    output_format,
    resolve_project,
)
from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Log management commands")


@app.command("list")
@command_wrapper
async def list_logs(
    project: str | None = typer.Option(
        None, "--project", "-p", help="Only show logs of this project (name or ID)"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List logs, most recent first."""
    log_service = get_log_service()

    if project is not None:
        target = await resolve_project(project)
        logs = await log_service.list_project_logs(target.id)
        names = {target.id: target.name}
    else:
        logs = await log_service.list_all_logs()
        entries = await get_project_service().list_projects_with_latest_log(
            current_owner_id()
        )
        names = {entry.project.id: entry.project.name for entry in entries}

    result = {"logs": [log_to_row(log, names.get(log.project_id)) for log in logs]}
    format_output(result, output_format(output))


@app.command("edit")
@command_wrapper
async def edit_log(
    log_id: int = typer.Argument(..., help="Log ID"),
    start: datetime = typer.Option(
        ..., "--start", formats=DATETIME_FORMATS, help="New start time (UTC)"
    ),
    end: datetime | None = typer.Option(
        None, "--end", formats=DATETIME_FORMATS, help="New end time (UTC)"
    ),
    reopen: bool = typer.Option(False, "--open", help="Clear the end time"),
) -> None:
    """Replace the start and end of a log."""
    if end is not None and reopen:
        raise AppError("Use either --end or --open, not both", ERROR_INVALID_ARGS)
    if end is None and not reopen:
        raise AppError("Specify --end TIME, or --open to leave the log open", ERROR_INVALID_ARGS)

    log_service = get_log_service()

    log = await log_service.edit_log(log_id, start, end)
    format_success(f"Log updated: #{log.id}")
    format_output(log_to_row(log), "table")

    if log.is_open:
        issues = await log_service.check_integrity(log.project_id)
        if any(issue.kind == "multiple_open_logs" for issue in issues):
            format_warning(
                "This project now has more than one open log. "
                "Run 'punchclock check' for details."
            )


@app.command("delete")
@command_wrapper
async def delete_log(
    log_id: int = typer.Argument(..., help="Log ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a log."""
    if not yes and not typer.confirm(f"Are you sure you want to delete log {log_id}?"):
        format_error("Cancelled")
        raise typer.Exit(0)

    outcome = await get_log_service().delete_log(log_id)
    if outcome is DeleteOutcome.DELETED:
        format_success(f"Log deleted: #{log_id}")
    else:
        format_info(f"No log with ID {log_id}; nothing deleted")
