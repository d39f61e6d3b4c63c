"""Punch service - the per-project start/end state machine.

A project is either in NO_OPEN_LOG (initial) or OPEN_LOG. A punch in
NO_OPEN_LOG inserts a log with ``start = now`` and reports STARTED; a punch
in OPEN_LOG stamps ``end = now`` on the open log and reports ENDED.

The read of the latest log and the write that follows happen in one unit of
work. On SQLite that is a BEGIN IMMEDIATE transaction, which holds the write
lock from the read onward, so two simultaneous punches on a project cannot
both see NO_OPEN_LOG. A failed punch changes nothing and can be retried.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from punchclock.exceptions import DataIntegrityError
from punchclock.models import LogUpdate, PunchAction, PunchResult, PunchState
from punchclock.models.storage_strategy import StorageStrategy
from punchclock.utils.clock import to_utc, utc_now
from punchclock.utils.logger import get_logger


class PunchService:
    """Service implementing the punch toggle."""

    def __init__(
        self,
        storage: StorageStrategy,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the punch service.

        Args:
            storage: StorageStrategy that opens units of work
            clock: Source of the current time; read inside the transaction
        """
        self.storage = storage
        self.clock = clock
        self.logger = get_logger()

    async def punch(self, project_id: int) -> PunchResult:
        """Start a new log or end the open one for a project.

        Args:
            project_id: Project to punch

        Returns:
            PunchResult with the action taken, the log it created or closed,
            and the IDs of any other logs of the project left open

        Raises:
            NotFoundError: If the project does not exist
            StorageError: If the transaction fails; not retried here
            DataIntegrityError: If the open log starts after the current time
        """
        async with self.storage.unit_of_work() as uow:
            await uow.projects.get(project_id)
            latest = await uow.logs.find_latest(project_id)
            now = to_utc(self.clock())

            if latest is None or not latest.is_open:
                log = await uow.logs.insert(project_id, now)
                action = PunchAction.STARTED
            else:
                if now < latest.start:
                    self.logger.warning(
                        "refusing to end log %s of project %s: now=%s is before start=%s",
                        latest.id,
                        project_id,
                        now.isoformat(),
                        latest.start.isoformat(),
                    )
                    raise DataIntegrityError(
                        f"Open log {latest.id} starts in the future ({latest.start.isoformat()}); "
                        "edit it before punching"
                    )
                log = await uow.logs.update(latest.id, LogUpdate(start=latest.start, end=now))
                action = PunchAction.ENDED

            others = [
                entry.id for entry in await uow.logs.list_open(project_id) if entry.id != log.id
            ]

        result = PunchResult(action=action, log=log, other_open_log_ids=others)
        if others:
            self.logger.warning(
                "project %s has %d other open log(s) after punch: %s",
                project_id,
                len(others),
                others,
            )
        self.logger.info(
            "punch %s: project=%s log=%s", result.action.value, project_id, result.log.id
        )
        return result

    async def punch_state(self, project_id: int) -> PunchState:
        """Report whether the project currently has an open log.

        Raises:
            NotFoundError: If the project does not exist
        """
        async with self.storage.unit_of_work() as uow:
            await uow.projects.get(project_id)
            latest = await uow.logs.find_latest(project_id)

        if latest is not None and latest.is_open:
            return PunchState.OPEN_LOG
        return PunchState.NO_OPEN_LOG


def get_punch_service() -> PunchService:
    """Factory function to get a PunchService instance."""
    from punchclock.services.config_service import get_config_service

    return PunchService(get_config_service().storage_strategy)
