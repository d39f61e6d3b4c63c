"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable

import typer

from punchclock.exceptions import (
    DataIntegrityError,
    DuplicateNameError,
    InvalidNameError,
    InvalidRangeError,
    NotFoundError,
    PunchclockError,
    StorageError,
)
from punchclock.utils.exit_codes import (
    ERROR_CONFLICT,
    ERROR_DATA_INTEGRITY,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
    get_exit_code_name,
)
from punchclock.utils.logger import get_logger
from punchclock.utils.ui.formatters import format_error

EXIT_CODES: dict[type[PunchclockError], int] = {
    NotFoundError: ERROR_NOT_FOUND,
    InvalidRangeError: ERROR_INVALID_ARGS,
    InvalidNameError: ERROR_INVALID_ARGS,
    DuplicateNameError: ERROR_CONFLICT,
    StorageError: ERROR_STORAGE,
    DataIntegrityError: ERROR_DATA_INTEGRITY,
}


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def exit_code_for(error: PunchclockError) -> int:
    """Map a domain error onto its semantic exit code."""
    for error_type, code in EXIT_CODES.items():
        if isinstance(error, error_type):
            return code
    return ERROR_GENERAL


def command_wrapper(func: Callable):
    """Decorator to wrap command functions with common functionality."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if asyncio.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except (AppError, PunchclockError) as e:
            elapsed = time.monotonic() - start
            code = e.exit_code if isinstance(e, AppError) else exit_code_for(e)
            logger.error(
                "command failed: %s (%.3fs) %s - %s", cmd, elapsed, get_exit_code_name(code), str(e)
            )
            format_error(str(e))
            raise typer.Exit(code=code) from e

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
