"""Output formatters for different formats."""

import json
from datetime import datetime
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table

from punchclock.exceptions import DataIntegrityError
from punchclock.models import Log, ProjectWithLatestLog, PunchState
from punchclock.utils.duration import calculate_duration, format_duration

console = Console()

STATE_LABELS = {
    PunchState.OPEN_LOG: "[bold green]● running[/bold green]",
    PunchState.NO_OPEN_LOG: "[dim]○ stopped[/dim]",
}


def format_timestamp(value: datetime | None) -> str:
    """Render a stored timestamp for display; None renders as 'n/a'."""
    if value is None:
        return "n/a"
    return value.strftime("%Y-%m-%d %H:%M:%S")


def describe_duration(log: Log) -> str:
    """Duration text for a log, flagging logs that end before they start."""
    try:
        return format_duration(calculate_duration(log))
    except DataIntegrityError:
        return "invalid (end < start)"


def log_to_row(log: Log, project_name: str | None = None) -> dict:
    """Flatten a log into a display/serialization row."""
    row: dict[str, Any] = {"id": log.id}
    if project_name is not None:
        row["project"] = project_name
    else:
        row["project_id"] = log.project_id
    row["start"] = log.start.isoformat()
    row["end"] = log.end.isoformat() if log.end else None
    row["duration"] = describe_duration(log)
    return row


def status_to_row(entry: ProjectWithLatestLog) -> dict:
    """Flatten a project and its latest log into a status row."""
    latest = entry.latest_log
    return {
        "id": entry.project.id,
        "name": entry.project.name,
        "state": entry.punch_state.value,
        "latest_start": latest.start.isoformat() if latest else None,
        "latest_end": latest.end.isoformat() if latest and latest.end else None,
        "duration": describe_duration(latest) if latest else None,
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
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        if "projects" in data or "logs" in data:
            items = data.get("projects") or data.get("logs") or []
            format_dict_table(items)
        else:
            format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        row = []
        for col in columns:
            value = item.get(col, "")
            if value is None:
                value = "-"
            else:
                value = str(value)
            row.append(value)
        table.add_row(*row)

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        formatted_value = "-" if value is None else str(value)
        table.add_row(key.replace("_", " ").title(), formatted_value)

    console.print(table)


def format_pretty(data: Any) -> None:
    """Human-oriented rendering of projects (status) and logs."""
    if isinstance(data, dict) and "projects" in data:
        format_status_pretty(data["projects"])
    elif isinstance(data, dict) and "logs" in data:
        format_logs_pretty(data["logs"])
    elif isinstance(data, dict):
        for key, value in data.items():
            console.print(f"[cyan]{key.replace('_', ' ').title()}:[/cyan] {value}")
    else:
        console.print(data)


def format_status_pretty(projects: list[dict]) -> None:
    """Render one line per project with its punch state."""
    if not projects:
        console.print("[yellow]No projects yet. Create one with 'punchclock projects create NAME'.[/yellow]")
        return

    for project in projects:
        state = STATE_LABELS.get(PunchState(project["state"]), project["state"])
        line = f"  {state}  [bold]{project['name']}[/bold] [dim]#{project['id']}[/dim]"
        if project.get("latest_start"):
            if project["latest_end"] is None:
                start = format_timestamp(datetime.fromisoformat(project["latest_start"]))
                line += f"  [cyan]since {start}[/cyan]"
            line += f"  [dim]{project['duration']}[/dim]"
        console.print(line)


def format_logs_pretty(logs: list[dict]) -> None:
    """Render logs as a table with a duration column."""
    if not logs:
        console.print("[yellow]No logs found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim")
    table.add_column("Project")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Duration", justify="right")

    for log in logs:
        end = format_timestamp(datetime.fromisoformat(log["end"])) if log["end"] else "n/a"
        table.add_row(
            str(log["id"]),
            str(log.get("project", log.get("project_id", ""))),
            format_timestamp(datetime.fromisoformat(log["start"])),
            end,
            log["duration"],
        )

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")
