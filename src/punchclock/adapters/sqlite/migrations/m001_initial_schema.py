"""Initial database schema migration: projects and logs."""

import sqlite3

from punchclock.adapters.sqlite import schema

from .runner import Migration


class InitialSchemaMigration(Migration):
    """Migration 001: Create projects and logs tables."""

    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Initial database schema"

    def up(self, connection: sqlite3.Connection) -> None:
        """Create all initial tables and indexes."""
        for table_sql in schema.ALL_TABLES:
            connection.execute(table_sql)

        for index_sql in schema.ALL_INDEXES:
            connection.execute(index_sql)


initial_migration = InitialSchemaMigration()
