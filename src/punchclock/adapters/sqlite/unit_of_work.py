"""SQLite unit of work: one connection, one BEGIN IMMEDIATE transaction."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from punchclock.adapters.sqlite.connection import DatabaseConnection
from punchclock.adapters.sqlite.log_repository import SqliteLogRepository
from punchclock.adapters.sqlite.project_repository import SqliteProjectRepository
from punchclock.adapters.sqlite.utils import storage_errors
from punchclock.repositories import UnitOfWork


class SqliteUnitOfWork(UnitOfWork):
    """Transaction over a dedicated SQLite connection.

    BEGIN IMMEDIATE takes the database's reserved (write) lock up front, so a
    read-then-write sequence inside the block cannot interleave with another
    writer. Concurrent units of work wait up to the busy timeout.
    """

    def __init__(self, db_path: str | Path | None = None):
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise RuntimeError("Unit of work has not been started")
        return self._connection

    async def begin(self) -> None:
        with storage_errors("transaction begin"):
            self._connection = DatabaseConnection.connect(self.db_path)
            try:
                DatabaseConnection.execute_with_retry(self._connection, "BEGIN IMMEDIATE")
            except sqlite3.Error:
                self._connection.close()
                self._connection = None
                raise

        self.projects = SqliteProjectRepository(self._connection)
        self.logs = SqliteLogRepository(self._connection)

    async def commit(self) -> None:
        with storage_errors("transaction commit"):
            if self.connection.in_transaction:
                self.connection.execute("COMMIT")

    async def rollback(self) -> None:
        with storage_errors("transaction rollback"):
            if self.connection.in_transaction:
                self.connection.execute("ROLLBACK")

    async def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
