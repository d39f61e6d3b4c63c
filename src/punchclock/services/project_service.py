"""Project service - Business logic for project operations."""

from __future__ import annotations

from punchclock.exceptions import InvalidNameError, NotFoundError
from punchclock.models import DeleteOutcome, Project, ProjectCreate, ProjectWithLatestLog
from punchclock.models.storage_strategy import StorageStrategy
from punchclock.utils.logger import get_logger


class ProjectService:
    """Service for project business logic.

    Each method runs in its own unit of work obtained from the storage
    strategy.
    """

    def __init__(self, storage: StorageStrategy):
        """Initialize the project service.

        Args:
            storage: StorageStrategy that opens units of work
        """
        self.storage = storage
        self.logger = get_logger()

    async def create_project(self, owner_id: str, name: str) -> Project:
        """Create a new project.

        Args:
            owner_id: Opaque identifier of the owning user
            name: Project name, unique per owner (case-sensitive)

        Returns:
            Created Project object

        Raises:
            InvalidNameError: If the name is blank
            DuplicateNameError: If the owner already has a project with this name
        """
        project_data = ProjectCreate(name=name, owner_id=owner_id)
        if not project_data.name:
            raise InvalidNameError("Project name cannot be empty")

        async with self.storage.unit_of_work() as uow:
            project = await uow.projects.create(project_data)

        self.logger.info(
            "project created: %s (id=%s, owner=%s)", project.name, project.id, owner_id
        )
        return project

    async def get_project(self, project_id: int) -> Project:
        """Get a specific project by ID."""
        async with self.storage.unit_of_work() as uow:
            return await uow.projects.get(project_id)

    async def get_project_by_name(self, owner_id: str, name: str) -> Project:
        """Get an owner's project by name."""
        async with self.storage.unit_of_work() as uow:
            return await uow.projects.get_by_name(owner_id, name)

    async def resolve_project(self, owner_id: str, reference: str) -> Project:
        """Find an owner's project from a name or a numeric ID.

        Names win over IDs, so a project literally named "42" is still
        reachable by name.

        Raises:
            NotFoundError: If neither lookup matches a project of this owner
        """
        async with self.storage.unit_of_work() as uow:
            try:
                return await uow.projects.get_by_name(owner_id, reference)
            except NotFoundError:
                if not reference.strip().isdigit():
                    raise

            project = await uow.projects.get(int(reference))
            if project.owner_id != owner_id:
                raise NotFoundError("project", reference)
            return project

    async def list_projects_with_latest_log(
        self, owner_id: str
    ) -> list[ProjectWithLatestLog]:
        """List an owner's projects with the most recent log of each.

        Returns:
            Entries ordered by project name
        """
        async with self.storage.unit_of_work() as uow:
            return await uow.projects.list_with_latest_log(owner_id)

    async def delete_project(self, project_id: int) -> DeleteOutcome:
        """Delete a project and all of its logs.

        Returns:
            DELETED, or NOOP when the project did not exist
        """
        async with self.storage.unit_of_work() as uow:
            outcome = await uow.projects.delete(project_id)

        if outcome is DeleteOutcome.DELETED:
            self.logger.info("project deleted: id=%s (logs cascaded)", project_id)
        else:
            self.logger.info("project delete was a no-op: id=%s not found", project_id)
        return outcome


def get_project_service() -> ProjectService:
    """Factory function to get a ProjectService instance."""
    from punchclock.services.config_service import get_config_service

    return ProjectService(get_config_service().storage_strategy)
