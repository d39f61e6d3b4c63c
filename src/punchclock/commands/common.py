"""Helpers shared by command modules."""

from punchclock.models import Project
from punchclock.services.config_service import get_config_service
from punchclock.services.project_service import get_project_service

DATETIME_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S%z",
]

OUTPUT_HELP = "Output format (pretty, table, json, yaml)"


def current_owner_id() -> str:
    """Owner that CLI commands act for."""
    return get_config_service().config.owner_id


def output_format(output: str | None) -> str:
    """Use the explicit --output value, else the configured default."""
    if output:
        return output
    return get_config_service().config.output.format


async def resolve_project(reference: str) -> Project:
    """Look up one of the current owner's projects by name or numeric ID."""
    return await get_project_service().resolve_project(current_owner_id(), reference)
