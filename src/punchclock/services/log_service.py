"""Log service - manual log edits, listings and the integrity audit."""

from __future__ import annotations

from datetime import datetime, timedelta

from punchclock.exceptions import DataIntegrityError, InvalidRangeError
from punchclock.models import DeleteOutcome, IntegrityIssue, Log, LogUpdate
from punchclock.models.storage_strategy import StorageStrategy
from punchclock.utils.clock import to_utc
from punchclock.utils.logger import get_logger


class LogService:
    """Service for log business logic."""

    def __init__(self, storage: StorageStrategy):
        """Initialize the log service.

        Args:
            storage: StorageStrategy that opens units of work
        """
        self.storage = storage
        self.logger = get_logger()

    async def get_log(self, log_id: int) -> Log:
        """Get a specific log by ID."""
        async with self.storage.unit_of_work() as uow:
            return await uow.logs.get(log_id)

    async def edit_log(self, log_id: int, start: datetime, end: datetime | None) -> Log:
        """Replace a log's start and end.

        Both timestamps are written together. Passing ``end=None`` re-opens
        the log. Sibling logs are not checked, so an edit may leave a project
        with more than one open log; that case is logged and shows up in
        :meth:`check_integrity`.

        Args:
            log_id: Log to edit
            start: New start time
            end: New end time, or None to leave the log open

        Returns:
            The updated Log

        Raises:
            InvalidRangeError: If end is before start; nothing is written
            NotFoundError: If the log does not exist
        """
        start = to_utc(start)
        end = to_utc(end) if end is not None else None
        if end is not None and end < start:
            raise InvalidRangeError(
                f"End ({end.isoformat()}) cannot be before start ({start.isoformat()})"
            )

        async with self.storage.unit_of_work() as uow:
            log = await uow.logs.update(log_id, LogUpdate(start=start, end=end))
            open_logs = await uow.logs.list_open(log.project_id)

        self.logger.info(
            "log edited: id=%s start=%s end=%s",
            log.id,
            log.start.isoformat(),
            log.end.isoformat() if log.end else None,
        )
        if len(open_logs) > 1:
            self.logger.warning(
                "project %s now has %d open logs: %s",
                log.project_id,
                len(open_logs),
                [entry.id for entry in open_logs],
            )
        return log

    async def delete_log(self, log_id: int) -> DeleteOutcome:
        """Delete a log.

        Returns:
            DELETED, or NOOP when the log did not exist
        """
        async with self.storage.unit_of_work() as uow:
            outcome = await uow.logs.delete(log_id)

        if outcome is DeleteOutcome.DELETED:
            self.logger.info("log deleted: id=%s", log_id)
        else:
            self.logger.info("log delete was a no-op: id=%s not found", log_id)
        return outcome

    async def list_all_logs(self) -> list[Log]:
        """List every log, most recent start first."""
        async with self.storage.unit_of_work() as uow:
            return await uow.logs.list_all()

    async def list_project_logs(self, project_id: int) -> list[Log]:
        """List one project's logs, most recent start first.

        Raises:
            NotFoundError: If the project does not exist
        """
        async with self.storage.unit_of_work() as uow:
            await uow.projects.get(project_id)
            return await uow.logs.list_for_project(project_id)

    async def check_integrity(self, project_id: int | None = None) -> list[IntegrityIssue]:
        """Audit stored logs without repairing anything.

        Finds projects holding more than one open log and closed logs whose
        end precedes their start.

        Args:
            project_id: Restrict the audit to one project (None audits all)

        Raises:
            NotFoundError: If project_id is given and does not exist
        """
        async with self.storage.unit_of_work() as uow:
            if project_id is None:
                logs = await uow.logs.list_all()
            else:
                await uow.projects.get(project_id)
                logs = await uow.logs.list_for_project(project_id)

        issues: list[IntegrityIssue] = []

        open_by_project: dict[int, list[int]] = {}
        for log in logs:
            if log.is_open:
                open_by_project.setdefault(log.project_id, []).append(log.id)

        for pid, log_ids in sorted(open_by_project.items()):
            if len(log_ids) > 1:
                issues.append(
                    IntegrityIssue(
                        kind="multiple_open_logs",
                        project_id=pid,
                        log_ids=sorted(log_ids),
                        detail=f"Project {pid} has {len(log_ids)} open logs",
                    )
                )

        for log in sorted(logs, key=lambda entry: entry.id):
            if log.end is not None and log.end - log.start < timedelta(0):
                issues.append(
                    IntegrityIssue(
                        kind="negative_duration",
                        project_id=log.project_id,
                        log_ids=[log.id],
                        detail=f"Log {log.id} ends before it starts",
                    )
                )

        for issue in issues:
            self.logger.warning("integrity issue (%s): %s", issue.kind, issue.detail)
        return issues

    async def assert_integrity(self, project_id: int | None = None) -> None:
        """Raise DataIntegrityError when the audit finds any issue."""
        issues = await self.check_integrity(project_id)
        if issues:
            details = "; ".join(issue.detail for issue in issues)
            raise DataIntegrityError(f"{len(issues)} integrity issue(s): {details}")


def get_log_service() -> LogService:
    """Factory function to get a LogService instance."""
    from punchclock.services.config_service import get_config_service

    return LogService(get_config_service().storage_strategy)
