"""Decorators for command functions."""

import asyncio
import functools
import inspect
import sqlite3
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError

from todorecur.utils import exit_codes
from todorecur.utils.logger import get_logger
from todorecur.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _describe(error: Exception) -> str:
    """User-facing message for an error."""
    if isinstance(error, ValidationError):
        return "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}"
            for err in error.errors()
        )
    if isinstance(error, KeyError) and error.args:
        return str(error.args[0])
    return str(error)


def command_wrapper(_func: Callable | None = None):
    """Decorator to wrap command functions with common functionality.

    Runs async commands with ``asyncio.run``, logs start/completion with the
    elapsed time and turns errors into a red message plus a semantic exit code.
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)

            def fail(e: Exception, message: str, exit_code: int, with_trace: bool = False):
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) [%s] - %s%s",
                    cmd,
                    elapsed,
                    exit_codes.get_exit_code_name(exit_code),
                    str(e),
                    "\n" + traceback.format_exc() if with_trace else "",
                )
                format_error(message)
                raise typer.Exit(code=exit_code) from e

            try:
                if inspect.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except AppError as e:
                fail(e, str(e), e.exit_code)

            except typer.Exit:
                # Re-raise Typer's own exits (like --help or explicit Exit(0))
                raise

            except LookupError as e:
                fail(e, _describe(e), exit_codes.ERROR_NOT_FOUND)

            except ValueError as e:
                # Includes pydantic.ValidationError
                fail(e, _describe(e), exit_codes.ERROR_INVALID_ARGS)

            except sqlite3.Error as e:
                fail(e, f"Storage error: {e}", exit_codes.ERROR_STORAGE, with_trace=True)

            except Exception as e:
                # Generic fallback for unexpected crashes
                fail(
                    e,
                    f"An unexpected error occurred: {str(e)}",
                    exit_codes.ERROR_GENERAL,
                    with_trace=True,
                )

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
