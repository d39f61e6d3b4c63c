"""punchclock domain models.

Pydantic models for the core domain entities (projects and their logs) and
for application configuration.
"""

from .config_models import AppConfig, OutputConfig
from .core import (
    DeleteOutcome,
    DurationState,
    IntegrityIssue,
    Log,
    LogUpdate,
    Project,
    ProjectCreate,
    ProjectWithLatestLog,
    PunchAction,
    PunchResult,
    PunchState,
)

__all__ = [
    # Project models
    "Project",
    "ProjectCreate",
    "ProjectWithLatestLog",
    # Log models
    "Log",
    "LogUpdate",
    "IntegrityIssue",
    # Punch state machine
    "PunchAction",
    "PunchResult",
    "PunchState",
    # Outcome markers
    "DeleteOutcome",
    "DurationState",
    # Config models
    "AppConfig",
    "OutputConfig",
]
