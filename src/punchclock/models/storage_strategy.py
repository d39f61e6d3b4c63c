"""
Strategy Pattern: Storage Strategy

A StorageStrategy is chosen once at startup and injected into the services.
Services only ask it for units of work and never know which backend they use.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from punchclock.repositories import UnitOfWork


class StorageStrategy(ABC):
    """
    Abstract base class for storage strategies.

    A strategy encapsulates how a storage backend opens transactions over
    the project and log repositories.
    """

    @abstractmethod
    def unit_of_work(self) -> UnitOfWork:
        """Create a new, not yet started, unit of work."""

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Get storage type identifier (for logging/debugging)."""


class LocalStorageStrategy(StorageStrategy):
    """
    Local SQLite storage strategy.

    Each unit of work opens its own connection to the database file.
    """

    def __init__(self, db_path: str | Path | None = None):
        """
        Initialize local strategy.

        Args:
            db_path: Path to SQLite database file; None uses the data dir
        """
        self.db_path = db_path

    def unit_of_work(self) -> UnitOfWork:
        # Import here to avoid circular dependencies
        from punchclock.adapters.sqlite.unit_of_work import SqliteUnitOfWork

        return SqliteUnitOfWork(db_path=self.db_path)

    @property
    def storage_type(self) -> str:
        return "local"
