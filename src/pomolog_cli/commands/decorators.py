"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from pomolog_cli.utils.exit_codes import ERROR_GENERAL, ERROR_IO
from pomolog_cli.utils.logger import get_logger
from pomolog_cli.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def command_wrapper(func: Callable):
    """Log the command's lifetime and turn failures into clean CLI exits."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            logger.info(
                "command completed: %s (%.3fs)", cmd, time.monotonic() - start
            )
            return result

        except AppError as e:
            logger.error(
                "command failed: %s (%.3fs) - %s", cmd, time.monotonic() - start, e
            )
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except OSError as e:
            logger.error(
                "command failed: %s (%.3fs) - %s",
                cmd,
                time.monotonic() - start,
                e,
            )
            format_error(f"Could not access the session log: {e}")
            raise typer.Exit(code=ERROR_IO) from e

        except Exception as e:
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                time.monotonic() - start,
                e,
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {e}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
