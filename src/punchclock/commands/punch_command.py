"""Punch, status and integrity check commands."""

import typer

from punchclock.models import PunchAction
from punchclock.services.log_service import get_log_service
from punchclock.services.project_service import get_project_service
from punchclock.services.punch_service import get_punch_service
from punchclock.utils.exit_codes import ERROR_DATA_INTEGRITY
from punchclock.utils.ui.formatters import (
    format_output,
    format_success,
    format_timestamp,
    format_warning,
    log_to_row,
    status_to_row,
)

from .common import OUTPUT_HELP, current_owner_id, output_format, resolve_project
from .decorators import command_wrapper


@command_wrapper
async def punch(
    project: str = typer.Argument(..., help="Project name or ID"),
) -> None:
    """Start or stop the clock on a project."""
    target = await resolve_project(project)

    result = await get_punch_service().punch(target.id)
    row = log_to_row(result.log, target.name)
    if result.action is PunchAction.STARTED:
        format_success(
            f"Started {target.name} at {format_timestamp(result.log.start)} (log #{result.log.id})"
        )
    else:
        format_success(
            f"Stopped {target.name} at {format_timestamp(result.log.end)} after {row['duration']}"
        )

    if result.other_open_log_ids:
        ids = ", ".join(f"#{log_id}" for log_id in result.other_open_log_ids)
        format_warning(f"{target.name} still has open logs: {ids}")
        format_warning("Run 'punchclock check' for details.")


@command_wrapper
async def status(
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Show every project with its latest log and punch state."""
    entries = await get_project_service().list_projects_with_latest_log(current_owner_id())
    result = {"projects": [status_to_row(entry) for entry in entries]}
    format_output(result, output_format(output))


@command_wrapper
async def check(
    project: str | None = typer.Option(
        None, "--project", "-p", help="Only audit this project (name or ID)"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Audit stored logs for inconsistent intervals."""
    project_id = None
    if project is not None:
        project_id = (await resolve_project(project)).id

    issues = await get_log_service().check_integrity(project_id)
    if not issues:
        format_success("No integrity issues found")
        return

    fmt = output_format(output)
    if fmt == "pretty":
        for issue in issues:
            format_warning(f"{issue.detail} (logs: {', '.join(map(str, issue.log_ids))})")
    else:
        format_output([issue.model_dump() for issue in issues], fmt)
    raise typer.Exit(code=ERROR_DATA_INTEGRITY)
