"""SQLite implementation of ProjectRepository."""

from __future__ import annotations

import sqlite3
from typing import Any

from punchclock.adapters.sqlite.utils import (
    now_iso,
    parse_datetime,
    row_to_dict,
    storage_errors,
)
from punchclock.exceptions import DuplicateNameError, NotFoundError
from punchclock.models import (
    DeleteOutcome,
    Log,
    Project,
    ProjectCreate,
    ProjectWithLatestLog,
)
from punchclock.repositories import ProjectRepository

_LIST_WITH_LATEST_LOG = """
SELECT p.id, p.name, p.owner_id, p.created_at,
       l.id AS log_id, l.started_at, l.ended_at
FROM projects p
LEFT JOIN logs l ON l.id = (
    SELECT id FROM logs
    WHERE project_id = p.id
    ORDER BY started_at DESC, id DESC
    LIMIT 1
)
WHERE p.owner_id = ?
ORDER BY p.name COLLATE NOCASE, p.id
"""


def _row_to_project(row: Any) -> Project:
    data = row_to_dict(row)
    return Project(
        id=data["id"],
        name=data["name"],
        owner_id=data["owner_id"],
        created_at=parse_datetime(data["created_at"]),
    )


class SqliteProjectRepository(ProjectRepository):
    """SQLite implementation of project repository.

    Bound to the connection of the unit of work that created it; it never
    commits on its own.
    """

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection

    def _check_name_available(self, owner_id: str, name: str) -> None:
        """Enforce exact name uniqueness per owner."""
        cursor = self.connection.execute(
            "SELECT 1 FROM projects WHERE owner_id = ? AND name = ? LIMIT 1",
            (owner_id, name),
        )
        if cursor.fetchone():
            raise DuplicateNameError(f"A project named '{name}' already exists")

    async def create(self, project_data: ProjectCreate) -> Project:
        """Create a new project."""
        with storage_errors("project create"):
            self._check_name_available(project_data.owner_id, project_data.name)
            try:
                cursor = self.connection.execute(
                    "INSERT INTO projects (name, owner_id, created_at) VALUES (?, ?, ?)",
                    (project_data.name, project_data.owner_id, now_iso()),
                )
            except sqlite3.IntegrityError as e:
                # Lost a race with a concurrent create of the same name
                raise DuplicateNameError(
                    f"A project named '{project_data.name}' already exists"
                ) from e

        return await self.get(cursor.lastrowid)

    async def get(self, project_id: int) -> Project:
        """Get a specific project by ID."""
        with storage_errors("project lookup"):
            cursor = self.connection.execute(
                "SELECT * FROM projects WHERE id = ?",
                (project_id,),
            )
            row = cursor.fetchone()

        if not row:
            raise NotFoundError("project", project_id)

        return _row_to_project(row)

    async def get_by_name(self, owner_id: str, name: str) -> Project:
        """Get an owner's project by its exact name."""
        with storage_errors("project lookup"):
            cursor = self.connection.execute(
                "SELECT * FROM projects WHERE owner_id = ? AND name = ?",
                (owner_id, name.strip()),
            )
            row = cursor.fetchone()

        if not row:
            raise NotFoundError("project", name)

        return _row_to_project(row)

    async def list_with_latest_log(self, owner_id: str) -> list[ProjectWithLatestLog]:
        """List an owner's projects with their most recent log preloaded."""
        with storage_errors("project listing"):
            rows = self.connection.execute(_LIST_WITH_LATEST_LOG, (owner_id,)).fetchall()

        result = []
        for row in rows:
            latest_log = None
            if row["log_id"] is not None:
                latest_log = Log(
                    id=row["log_id"],
                    project_id=row["id"],
                    start=parse_datetime(row["started_at"]),
                    end=parse_datetime(row["ended_at"]),
                )
            result.append(
                ProjectWithLatestLog(project=_row_to_project(row), latest_log=latest_log)
            )
        return result

    async def delete(self, project_id: int) -> DeleteOutcome:
        """Delete a project; its logs go with it via ON DELETE CASCADE."""
        with storage_errors("project delete"):
            cursor = self.connection.execute(
                "DELETE FROM projects WHERE id = ?",
                (project_id,),
            )

        return DeleteOutcome.DELETED if cursor.rowcount > 0 else DeleteOutcome.NOOP
