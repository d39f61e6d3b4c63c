"""Repository abstraction layer for punchclock.

This module defines the abstract base classes (interfaces) for the storage
port, following the hexagonal architecture (Ports & Adapters) pattern.

Services never hold a database handle. They open a ``UnitOfWork`` for each
operation, use the project and log repositories bound to it, and the unit of
work commits everything on success or rolls everything back on failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from types import TracebackType

from punchclock.models import (
    DeleteOutcome,
    Log,
    LogUpdate,
    Project,
    ProjectCreate,
    ProjectWithLatestLog,
)


class ProjectRepository(ABC):
    """Abstract base class for project persistence operations."""

    @abstractmethod
    async def create(self, project_data: ProjectCreate) -> Project:
        """Create a new project.

        Args:
            project_data: ProjectCreate object with name and owner

        Returns:
            Created Project object with generated ID

        Raises:
            DuplicateNameError: If the owner already has a project with this name
        """
        raise NotImplementedError(
            "ProjectRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, project_id: int) -> Project:
        """Get a specific project by ID.

        Raises:
            NotFoundError: If project does not exist
        """
        raise NotImplementedError(
            "ProjectRepository.get() must be implemented by adapter"
        )

    @abstractmethod
    async def get_by_name(self, owner_id: str, name: str) -> Project:
        """Get an owner's project by its exact name.

        Raises:
            NotFoundError: If the owner has no project with this name
        """
        raise NotImplementedError(
            "ProjectRepository.get_by_name() must be implemented by adapter"
        )

    @abstractmethod
    async def list_with_latest_log(self, owner_id: str) -> list[ProjectWithLatestLog]:
        """List an owner's projects, each with its most recent log preloaded.

        Args:
            owner_id: Owner whose projects are listed

        Returns:
            Entries ordered by project name; latest_log is None for a
            project without logs
        """
        raise NotImplementedError(
            "ProjectRepository.list_with_latest_log() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, project_id: int) -> DeleteOutcome:
        """Delete a project and, by cascade, all of its logs.

        Returns:
            DELETED if a row was removed, NOOP if the project did not exist
        """
        raise NotImplementedError(
            "ProjectRepository.delete() must be implemented by adapter"
        )


class LogRepository(ABC):
    """Abstract base class for log (interval) persistence operations.

    Ordering everywhere is ``start`` descending with ``id`` descending as the
    tie-break, so "most recent" is deterministic under clock collisions.
    """

    @abstractmethod
    async def get(self, log_id: int) -> Log:
        """Get a specific log by ID.

        Raises:
            NotFoundError: If log does not exist
        """
        raise NotImplementedError("LogRepository.get() must be implemented by adapter")

    @abstractmethod
    async def find_latest(self, project_id: int) -> Log | None:
        """Get the project's most recent log, or None if it has none."""
        raise NotImplementedError(
            "LogRepository.find_latest() must be implemented by adapter"
        )

    @abstractmethod
    async def insert(self, project_id: int, start: datetime) -> Log:
        """Create an open log starting at ``start``."""
        raise NotImplementedError(
            "LogRepository.insert() must be implemented by adapter"
        )

    @abstractmethod
    async def update(self, log_id: int, updates: LogUpdate) -> Log:
        """Replace a log's start and end in one write.

        Raises:
            NotFoundError: If log does not exist
        """
        raise NotImplementedError(
            "LogRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, log_id: int) -> DeleteOutcome:
        """Delete a log.

        Returns:
            DELETED if a row was removed, NOOP if the log did not exist
        """
        raise NotImplementedError(
            "LogRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def list_all(self) -> list[Log]:
        """List every log, most recent first."""
        raise NotImplementedError(
            "LogRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def list_for_project(self, project_id: int) -> list[Log]:
        """List one project's logs, most recent first."""
        raise NotImplementedError(
            "LogRepository.list_for_project() must be implemented by adapter"
        )

    @abstractmethod
    async def list_open(self, project_id: int | None = None) -> list[Log]:
        """List open logs, for one project or across all projects."""
        raise NotImplementedError(
            "LogRepository.list_open() must be implemented by adapter"
        )


class UnitOfWork(ABC):
    """One storage transaction spanning the project and log repositories.

    Used as an async context manager. Leaving the block normally commits;
    leaving it with an exception rolls back, so no operation is partially
    applied.
    """

    projects: ProjectRepository
    logs: LogRepository

    async def __aenter__(self) -> UnitOfWork:
        await self.begin()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            await self.close()

    @abstractmethod
    async def begin(self) -> None:
        """Open the transaction, taking the store's write lock."""

    @abstractmethod
    async def commit(self) -> None:
        """Commit the transaction."""

    @abstractmethod
    async def rollback(self) -> None:
        """Discard everything written in the transaction."""

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connection."""
