"""SQLite adapter module - Local database storage implementation."""

from punchclock.adapters.sqlite.connection import DatabaseConnection, get_connection
from punchclock.adapters.sqlite.log_repository import SqliteLogRepository
from punchclock.adapters.sqlite.project_repository import SqliteProjectRepository
from punchclock.adapters.sqlite.unit_of_work import SqliteUnitOfWork

__all__ = [
    "DatabaseConnection",
    "get_connection",
    "SqliteProjectRepository",
    "SqliteLogRepository",
    "SqliteUnitOfWork",
]
