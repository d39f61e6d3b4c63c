"""Database migration system for the punchclock SQLite store."""

from .runner import Migration, MigrationRunner

__all__ = ["Migration", "MigrationRunner"]
