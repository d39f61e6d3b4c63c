"""Project and log data models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class PunchAction(StrEnum):
    """Outcome of a punch on a project."""

    STARTED = "started"
    ENDED = "ended"


class PunchState(StrEnum):
    """Per-project state of the punch toggle."""

    NO_OPEN_LOG = "no_open_log"
    OPEN_LOG = "open_log"


class DeleteOutcome(StrEnum):
    """Result of a delete call.

    Both values are successful outcomes; NOOP means nothing matched.
    """

    DELETED = "deleted"
    NOOP = "noop"


class DurationState(StrEnum):
    """Marker returned instead of a duration for an open log."""

    IN_PROGRESS = "in_progress"


class Project(BaseModel):
    """Project model representing a named work bucket.

    Attributes:
        id: Generated identifier
        name: Project name, unique per owner
        owner_id: Opaque identifier of the owning user
        created_at: Creation timestamp (UTC)
    """

    id: int
    name: str
    owner_id: str
    created_at: datetime


class ProjectCreate(BaseModel):
    """Model for creating a new project.

    Attributes:
        name: Project name (required, surrounding whitespace is stripped)
        owner_id: Opaque identifier of the owning user
    """

    name: str
    owner_id: str

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class Log(BaseModel):
    """A recorded work interval under a project.

    Attributes:
        id: Generated identifier
        project_id: Owning project
        start: When the interval started (UTC)
        end: When the interval ended, None while the log is open
    """

    id: int
    project_id: int
    start: datetime
    end: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.end is None


class LogUpdate(BaseModel):
    """Replacement timestamps for a manual log edit.

    Both fields are always written together; there is no partial update.
    """

    start: datetime
    end: datetime | None = None


class PunchResult(BaseModel):
    """What a punch did and the log it touched."""

    action: PunchAction
    log: Log
    # Other logs of the project still open after the punch; normally empty
    other_open_log_ids: list[int] = Field(default_factory=list)


class ProjectWithLatestLog(BaseModel):
    """A project paired with its most recent log, for punch-state display."""

    project: Project
    latest_log: Log | None = None

    @property
    def punch_state(self) -> PunchState:
        if self.latest_log is not None and self.latest_log.is_open:
            return PunchState.OPEN_LOG
        return PunchState.NO_OPEN_LOG


class IntegrityIssue(BaseModel):
    """A stored-data problem found by the integrity audit.

    Attributes:
        kind: "multiple_open_logs" or "negative_duration"
        project_id: Project the problem belongs to
        log_ids: Logs involved
        detail: Human-readable description
    """

    kind: str = Field(pattern="^(multiple_open_logs|negative_duration)$")
    project_id: int
    log_ids: list[int] = Field(default_factory=list)
    detail: str
