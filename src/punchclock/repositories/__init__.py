"""Repository interfaces for punchclock.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- punchclock.adapters.sqlite (local storage)
"""

from .repository import LogRepository, ProjectRepository, UnitOfWork

__all__ = [
    "ProjectRepository",
    "LogRepository",
    "UnitOfWork",
]
