"""Service layer for punchclock business logic."""

from .log_service import LogService, get_log_service
from .project_service import ProjectService, get_project_service
from .punch_service import PunchService, get_punch_service

__all__ = [
    "LogService",
    "ProjectService",
    "PunchService",
    "get_log_service",
    "get_project_service",
    "get_punch_service",
]
