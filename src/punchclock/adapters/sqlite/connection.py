"""Database connection management for the punchclock SQLite store.

Every unit of work gets its own connection so that concurrent requests
(threads or processes) each run in a real SQLite transaction instead of
sharing one. Schema migrations run once per database path per process.
"""

from __future__ import annotations

import os
import sqlite3
import threading
import time
from pathlib import Path

from platformdirs import user_data_dir

from punchclock.adapters.sqlite.migrations.m001_initial_schema import initial_migration
from punchclock.adapters.sqlite.migrations.runner import MigrationRunner
from punchclock.utils.logger import get_logger

DEFAULT_DB_NAME = "punchclock.db"

# Seconds a connection waits on another writer's lock before failing
BUSY_TIMEOUT = 30.0


class DatabaseConnection:
    """Connection factory for the local SQLite store.

    Provides:
    - One fresh connection per unit of work
    - WAL mode for readers alongside a writer
    - Foreign key constraint enforcement (cascade deletes of logs)
    - Automatic directory creation
    - Proper file permissions (owner read/write only)
    - Migrations applied once per path per process
    """

    _initialized_paths: set[Path] = set()
    _init_lock = threading.Lock()

    @staticmethod
    def resolve_path(db_path: str | Path | None = None) -> Path:
        """Resolve the database file path, defaulting to the user data dir."""
        if db_path is None:
            return Path(user_data_dir("punchclock")) / DEFAULT_DB_NAME
        return Path(db_path).expanduser()

    @classmethod
    def connect(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Open a configured connection in manual transaction mode.

        The returned connection never opens transactions implicitly; the
        caller issues BEGIN/COMMIT/ROLLBACK itself.

        Args:
            db_path: Path to database file. If None, uses default location.

        Returns:
            sqlite3.Connection with Row factory and foreign keys enabled
        """
        path = cls.resolve_path(db_path)
        cls.initialize(path)

        connection = sqlite3.connect(
            str(path),
            timeout=BUSY_TIMEOUT,
            isolation_level=None,
            check_same_thread=False,
        )
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        return connection

    @classmethod
    def initialize(cls, db_path: str | Path | None = None) -> None:
        """Create the database file and bring its schema up to date."""
        path = cls.resolve_path(db_path)

        with cls._init_lock:
            if path in cls._initialized_paths:
                return

            path.parent.mkdir(parents=True, exist_ok=True)
            is_new_database = not path.exists()

            connection = sqlite3.connect(str(path), timeout=BUSY_TIMEOUT)
            try:
                connection.execute("PRAGMA journal_mode = WAL")
                if is_new_database:
                    os.chmod(path, 0o600)

                applied = cls._run_migrations(connection)
                if applied:
                    get_logger().info(
                        "applied %d migration(s) to %s", applied, path
                    )
            finally:
                connection.close()

            cls._initialized_paths.add(path)

    @classmethod
    def _run_migrations(cls, connection: sqlite3.Connection) -> int:
        """Run database migrations.

        Returns:
            Number of migrations applied
        """
        migrations = [
            initial_migration,
        ]

        runner = MigrationRunner(connection)
        return runner.run_migrations(migrations)

    @classmethod
    def reset(cls) -> None:
        """Forget which paths were initialized (used by tests)."""
        with cls._init_lock:
            cls._initialized_paths.clear()

    @classmethod
    def execute_with_retry(
        cls,
        connection: sqlite3.Connection,
        sql: str,
        params: tuple | dict | None = None,
        max_retries: int = 3,
    ) -> sqlite3.Cursor:
        """Execute SQL with retry logic for database locked errors.

        Args:
            connection: Database connection
            sql: SQL statement to execute
            params: Parameters for SQL statement
            max_retries: Maximum number of retry attempts

        Returns:
            Cursor after successful execution

        Raises:
            sqlite3.OperationalError: If database remains locked after retries
        """
        for attempt in range(max_retries):
            try:
                if params:
                    return connection.execute(sql, params)
                return connection.execute(sql)
            except sqlite3.OperationalError as e:
                if "database is locked" in str(e) and attempt < max_retries - 1:
                    # Exponential backoff: 0.1s, 0.2s, 0.4s
                    time.sleep(0.1 * (2**attempt))
                    continue
                raise

        raise sqlite3.OperationalError("Max retries exceeded")


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to open a configured database connection."""
    return DatabaseConnection.connect(db_path)
