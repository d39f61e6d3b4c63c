"""Tests for the migration runner and the initial schema migration."""

from __future__ import annotations

import sqlite3

import pytest

from punchclock.adapters.sqlite import schema
from punchclock.adapters.sqlite.migrations import Migration, MigrationRunner
from punchclock.adapters.sqlite.migrations.m001_initial_schema import (
    InitialSchemaMigration,
    initial_migration,
)


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    yield connection
    connection.close()


class _FailingMigration(Migration):
    @property
    def version(self) -> int:
        return 2

    @property
    def description(self) -> str:
        return "Always fails"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("CREATE TABLE half_done (id INTEGER)")
        raise sqlite3.OperationalError("boom")


def _tables(connection: sqlite3.Connection) -> set[str]:
    rows = connection.execute("SELECT name FROM sqlite_master WHERE type='table'")
    return {row[0] for row in rows}


class TestMigrationRunner:
    def test_fresh_database_is_version_zero(self, conn):
        assert MigrationRunner(conn).get_current_version() == 0

    def test_version_table_created(self, conn):
        MigrationRunner(conn)
        assert "schema_version" in _tables(conn)

    def test_run_initial_migration(self, conn):
        applied = MigrationRunner(conn).run_migrations([initial_migration])

        assert applied == 1
        assert MigrationRunner(conn).get_current_version() == schema.SCHEMA_VERSION
        assert {"projects", "logs"} <= _tables(conn)

    def test_rerun_applies_nothing(self, conn):
        MigrationRunner(conn).run_migrations([initial_migration])

        assert MigrationRunner(conn).run_migrations([initial_migration]) == 0

    def test_history_records_description(self, conn):
        runner = MigrationRunner(conn)
        runner.run_migrations([initial_migration])

        [(version, description, applied_at)] = conn.execute(
            "SELECT version, description, applied_at FROM schema_version"
        ).fetchall()

        assert version == 1
        assert description == "Initial database schema"
        assert applied_at

    def test_old_version_rejected(self, conn):
        runner = MigrationRunner(conn)
        runner.run_migrations([initial_migration])

        with pytest.raises(ValueError, match="not greater than"):
            runner.run_migration(InitialSchemaMigration())

    def test_failed_migration_rolls_back(self, conn):
        runner = MigrationRunner(conn)
        runner.run_migrations([initial_migration])

        with pytest.raises(RuntimeError, match="Migration 2 failed"):
            runner.run_migration(_FailingMigration())

        assert runner.get_current_version() == 1
        assert "half_done" not in _tables(conn)


class TestInitialSchema:
    def test_indexes_created(self, conn):
        MigrationRunner(conn).run_migrations([initial_migration])

        indexes = {
            row[0]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type='index'")
        }

        assert {
            "idx_projects_owner",
            "idx_projects_owner_name",
            "idx_logs_project_start",
            "idx_logs_start",
            "idx_logs_open",
        } <= indexes

    def test_owner_name_unique(self, conn):
        MigrationRunner(conn).run_migrations([initial_migration])
        conn.execute(
            "INSERT INTO projects (name, owner_id, created_at) VALUES ('A', 'o', 'x')"
        )

        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO projects (name, owner_id, created_at) VALUES ('A', 'o', 'x')"
            )

    def test_owner_name_unique_is_case_sensitive(self, conn):
        MigrationRunner(conn).run_migrations([initial_migration])
        conn.execute(
            "INSERT INTO projects (name, owner_id, created_at) VALUES ('A', 'o', 'x')"
        )
        conn.execute(
            "INSERT INTO projects (name, owner_id, created_at) VALUES ('a', 'o', 'x')"
        )

        assert conn.execute("SELECT COUNT(*) FROM projects").fetchone()[0] == 2

    def test_logs_reference_projects(self, conn):
        MigrationRunner(conn).run_migrations([initial_migration])
        conn.execute("PRAGMA foreign_keys = ON")

        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO logs (project_id, started_at) VALUES (42, '2024-01-01')"
            )
