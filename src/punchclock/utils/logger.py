"""Application-wide logger writing to platformdirs user_log_dir.

The log file and level can be overridden with ``PUNCHCLOCK_LOG_FILE`` and
``PUNCHCLOCK_LOG_LEVEL``. The ``log_level`` config setting is applied
through :func:`set_log_level` when the config is loaded; the environment
variable still wins.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

LOG_FILE_ENV_VAR = "PUNCHCLOCK_LOG_FILE"
LOG_LEVEL_ENV_VAR = "PUNCHCLOCK_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_APP_NAME = "punchclock"
_LOG_FILE = "punchclock.log"
_DEFAULT_LEVEL = "DEBUG"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def resolve_level(name: str) -> int:
    """Turn a level name such as ``"info"`` into its logging constant."""
    level = name.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {name} (expected one of {', '.join(LOG_LEVELS)})")
    return logging.getLevelName(level)


def log_file_path() -> Path:
    """Log file in effect; the environment override wins."""
    override = os.environ.get(LOG_FILE_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def get_logger() -> logging.Logger:
    """Return the singleton application logger, initialising it on first call."""
    global _logger
    if _logger is not None:
        return _logger

    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(resolve_level(os.environ.get(LOG_LEVEL_ENV_VAR) or _DEFAULT_LEVEL))
    if not logger.handlers:
        logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger


def set_log_level(name: str) -> None:
    """Apply a configured level unless ``PUNCHCLOCK_LOG_LEVEL`` is set."""
    if os.environ.get(LOG_LEVEL_ENV_VAR):
        return
    get_logger().setLevel(resolve_level(name))
