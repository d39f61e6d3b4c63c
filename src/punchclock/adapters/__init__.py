"""Adapters module - Repository implementations for storage backends.

This package contains concrete implementations (adapters) for the repository interfaces:
- sqlite: Local SQLite database storage
"""

from .sqlite import (
    SqliteLogRepository,
    SqliteProjectRepository,
    SqliteUnitOfWork,
)

__all__ = [
    "SqliteProjectRepository",
    "SqliteLogRepository",
    "SqliteUnitOfWork",
]
