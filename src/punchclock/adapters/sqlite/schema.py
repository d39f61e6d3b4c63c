"""Database schema definitions for the punchclock SQLite store."""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 1

# Projects table
CREATE_PROJECTS_TABLE = """
CREATE TABLE IF NOT EXISTS projects (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    owner_id TEXT NOT NULL,
    created_at DATETIME NOT NULL
)
"""

# Logs table - one row per work interval; ended_at NULL means open
CREATE_LOGS_TABLE = """
CREATE TABLE IF NOT EXISTS logs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id INTEGER NOT NULL,
    started_at DATETIME NOT NULL,
    ended_at DATETIME,
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
)
"""

CREATE_PROJECT_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_projects_owner ON projects(owner_id)",
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_projects_owner_name "
    "ON projects(owner_id, name)",
]

CREATE_LOG_INDEXES = [
    # Serves "latest log per project" (start desc, id desc tie-break)
    "CREATE INDEX IF NOT EXISTS idx_logs_project_start "
    "ON logs(project_id, started_at DESC, id DESC)",
    "CREATE INDEX IF NOT EXISTS idx_logs_start ON logs(started_at DESC, id DESC)",
    "CREATE INDEX IF NOT EXISTS idx_logs_open ON logs(project_id) WHERE ended_at IS NULL",
]

ALL_TABLES = [
    CREATE_PROJECTS_TABLE,
    CREATE_LOGS_TABLE,
]

ALL_INDEXES = CREATE_PROJECT_INDEXES + CREATE_LOG_INDEXES
