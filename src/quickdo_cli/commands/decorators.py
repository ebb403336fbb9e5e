"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable

import typer

from quickdo_cli.models.exceptions import (
    EmptyTaskInputError,
    QuickdoError,
    StorageError,
    TaskImportError,
    TaskNotFoundError,
)
from quickdo_cli.utils import exit_codes
from quickdo_cli.utils.logger import get_logger
from quickdo_cli.utils.ui.formatters import format_error

_EXIT_CODES: dict[type[QuickdoError], int] = {
    TaskNotFoundError: exit_codes.ERROR_NOT_FOUND,
    TaskImportError: exit_codes.ERROR_IMPORT,
    EmptyTaskInputError: exit_codes.ERROR_INVALID_ARGS,
    StorageError: exit_codes.ERROR_STORAGE,
}


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def exit_code_for(error: QuickdoError) -> int:
    for error_type, code in _EXIT_CODES.items():
        if isinstance(error, error_type):
            return code
    return exit_codes.ERROR_GENERAL


def command_wrapper(func: Callable):
    """Wrap a command with timing logs, async support and error reporting."""

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

        except (AppError, QuickdoError) as e:
            elapsed = time.monotonic() - start
            logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
            format_error(str(e))
            code = e.exit_code if isinstance(e, AppError) else exit_code_for(e)
            raise typer.Exit(code=code) from e

        except (typer.Exit, typer.Abort):
            # Re-raise Typer's own exits (like --help, Exit(0) or a declined confirm)
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
            raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

    return wrapper
