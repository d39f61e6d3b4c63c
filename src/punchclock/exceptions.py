"""Custom exceptions for punchclock."""


class PunchclockError(Exception):
    """Base exception for all punchclock errors."""


class NotFoundError(PunchclockError):
    """Raised when a referenced project or log does not exist."""

    def __init__(self, resource: str, identifier: object):
        super().__init__(f"{resource.capitalize()} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier


class InvalidRangeError(PunchclockError):
    """Raised when a log edit would put its end before its start."""


class InvalidNameError(PunchclockError):
    """Raised when a project name is blank."""


class DuplicateNameError(PunchclockError):
    """Raised when an owner already has a project with the same name."""


class StorageError(PunchclockError):
    """Raised when the underlying store fails (transaction or connectivity).

    Transient from the caller's point of view: the whole operation may be
    retried, since no operation applies a partial mutation.
    """


class DataIntegrityError(PunchclockError):
    """Raised when stored data breaks an interval invariant.

    Covers negative durations and projects with more than one open log.
    Never repaired automatically.
    """
