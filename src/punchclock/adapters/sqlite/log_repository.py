"""SQLite implementation of LogRepository."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Any

from punchclock.adapters.sqlite.utils import (
    format_timestamp,
    parse_datetime,
    storage_errors,
)
from punchclock.exceptions import NotFoundError
from punchclock.models import DeleteOutcome, Log, LogUpdate
from punchclock.repositories import LogRepository

_COLUMNS = "id, project_id, started_at, ended_at"
_ORDER = "ORDER BY started_at DESC, id DESC"


def _row_to_log(row: Any) -> Log:
    return Log(
        id=row["id"],
        project_id=row["project_id"],
        start=parse_datetime(row["started_at"]),
        end=parse_datetime(row["ended_at"]),
    )


class SqliteLogRepository(LogRepository):
    """SQLite implementation of log repository."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection

    async def get(self, log_id: int) -> Log:
        """Get a specific log by ID."""
        with storage_errors("log lookup"):
            row = self.connection.execute(
                f"SELECT {_COLUMNS} FROM logs WHERE id = ?",
                (log_id,),
            ).fetchone()

        if not row:
            raise NotFoundError("log", log_id)

        return _row_to_log(row)

    async def find_latest(self, project_id: int) -> Log | None:
        """Get the project's most recent log."""
        with storage_errors("latest log lookup"):
            row = self.connection.execute(
                f"SELECT {_COLUMNS} FROM logs WHERE project_id = ? {_ORDER} LIMIT 1",
                (project_id,),
            ).fetchone()

        return _row_to_log(row) if row else None

    async def insert(self, project_id: int, start: datetime) -> Log:
        """Create an open log."""
        with storage_errors("log insert"):
            cursor = self.connection.execute(
                "INSERT INTO logs (project_id, started_at, ended_at) VALUES (?, ?, NULL)",
                (project_id, format_timestamp(start)),
            )

        return await self.get(cursor.lastrowid)

    async def update(self, log_id: int, updates: LogUpdate) -> Log:
        """Replace start and end in a single statement."""
        end = format_timestamp(updates.end) if updates.end is not None else None
        with storage_errors("log update"):
            cursor = self.connection.execute(
                "UPDATE logs SET started_at = ?, ended_at = ? WHERE id = ?",
                (format_timestamp(updates.start), end, log_id),
            )

        if cursor.rowcount == 0:
            raise NotFoundError("log", log_id)

        return await self.get(log_id)

    async def delete(self, log_id: int) -> DeleteOutcome:
        """Delete a log."""
        with storage_errors("log delete"):
            cursor = self.connection.execute("DELETE FROM logs WHERE id = ?", (log_id,))

        return DeleteOutcome.DELETED if cursor.rowcount > 0 else DeleteOutcome.NOOP

    async def list_all(self) -> list[Log]:
        """List every log, most recent first."""
        with storage_errors("log listing"):
            rows = self.connection.execute(f"SELECT {_COLUMNS} FROM logs {_ORDER}").fetchall()

        return [_row_to_log(row) for row in rows]

    async def list_for_project(self, project_id: int) -> list[Log]:
        """List one project's logs, most recent first."""
        with storage_errors("log listing"):
            rows = self.connection.execute(
                f"SELECT {_COLUMNS} FROM logs WHERE project_id = ? {_ORDER}",
                (project_id,),
            ).fetchall()

        return [_row_to_log(row) for row in rows]

    async def list_open(self, project_id: int | None = None) -> list[Log]:
        """List open logs."""
        query = f"SELECT {_COLUMNS} FROM logs WHERE ended_at IS NULL"
        params: list[Any] = []

        if project_id is not None:
            query += " AND project_id = ?"
            params.append(project_id)

        query += f" {_ORDER}"

        with storage_errors("open log listing"):
            rows = self.connection.execute(query, params).fetchall()

        return [_row_to_log(row) for row in rows]
