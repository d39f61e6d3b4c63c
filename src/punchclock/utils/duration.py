"""Elapsed-time calculation for logs."""

from __future__ import annotations

from datetime import timedelta

from punchclock.exceptions import DataIntegrityError
from punchclock.models import DurationState, Log
from punchclock.utils.logger import get_logger

IN_PROGRESS = DurationState.IN_PROGRESS


def calculate_duration(log: Log) -> timedelta | DurationState:
    """Compute how long a log lasted.

    Args:
        log: The log to measure

    Returns:
        ``end - start`` for a closed log, or ``DurationState.IN_PROGRESS``
        for an open one; an open log never yields a number

    Raises:
        DataIntegrityError: If the stored end is before the start
    """
    if log.end is None:
        return IN_PROGRESS

    elapsed = log.end - log.start
    if elapsed < timedelta(0):
        get_logger().warning(
            "negative duration on log %s (project %s): start=%s end=%s",
            log.id,
            log.project_id,
            log.start.isoformat(),
            log.end.isoformat(),
        )
        raise DataIntegrityError(
            f"Log {log.id} ends before it starts ({log.end.isoformat()} < {log.start.isoformat()})"
        )
    return elapsed


def format_duration(value: timedelta | DurationState) -> str:
    """Render a duration as ``"1h 05m"``, or ``"In Progress"`` for open logs."""
    if value is IN_PROGRESS:
        return "In Progress"

    total_minutes = int(value.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}h {minutes:02d}m"
