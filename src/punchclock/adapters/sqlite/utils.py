"""Utility functions for SQLite adapter."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from punchclock.exceptions import StorageError
from punchclock.utils.clock import to_utc, utc_now
from punchclock.utils.logger import get_logger


def format_timestamp(value: datetime) -> str:
    """Serialize a datetime for storage.

    Always UTC with microsecond precision, so that string order in SQL
    matches chronological order.
    """
    return to_utc(value).isoformat(timespec="microseconds")


def now_iso() -> str:
    """Get current timestamp in storage format."""
    return format_timestamp(utc_now())


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse datetime from various formats.

    Args:
        value: String, datetime object, or None

    Returns:
        Aware UTC datetime or None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, str):
        return to_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))

    return None


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary."""
    if row is None:
        return {}
    return dict(row)


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Translate sqlite3 errors raised inside the block into StorageError."""
    try:
        yield
    except sqlite3.Error as e:
        get_logger().error("storage failure during %s: %s", operation, e)
        raise StorageError(f"Storage failure during {operation}: {e}") from e
