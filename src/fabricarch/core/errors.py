"""
Error types and exit codes for fabricarch commands.

Library code raises ``FabricArchError`` subclasses; the CLI turns them into
process exit codes through ``main_with_error_handling``.
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    SUCCESS = 0
    WARNING = 1  # --strict validation with warnings only
    CONFIG_ERROR = 10  # unreadable network file, unknown template, write failure
    VALIDATION_ERROR = 12
    UNKNOWN_ERROR = 127
    INTERRUPTED = 130


class FabricArchError(Exception):
    """Base error; ``details`` is logged as structured fields."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(FabricArchError):
    exit_code = ExitCode.CONFIG_ERROR


class NetworkLoadError(ConfigurationError):
    """A network definition file is missing, unparseable or invalid."""


class TemplateNotFoundError(ConfigurationError):
    """No network template is registered under the requested id."""


class ValidationFailedError(FabricArchError):
    """The network has at least one error-level issue."""

    exit_code = ExitCode.VALIDATION_ERROR


class WarningResult(FabricArchError):
    exit_code = ExitCode.WARNING


CommandFunc = TypeVar("CommandFunc", bound=Callable[..., int])


def main_with_error_handling(*, show_traceback: bool = False) -> Callable[[CommandFunc], CommandFunc]:
    """
    Wrap a ``*_command`` function so it always returns an exit code.

    ``FabricArchError`` maps to its ``exit_code``, Ctrl-C to 130 and anything
    else to 127. Every failure is logged as a ``command_error`` event.
    """

    def decorator(func: CommandFunc) -> CommandFunc:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except FabricArchError as e:
                logger.error(
                    "command_error",
                    command=func.__name__,
                    error_type=type(e).__name__,
                    message=e.message,
                    exit_code=int(e.exit_code),
                    **e.details,
                )
                return e.exit_code
            except KeyboardInterrupt:
                logger.info("command_interrupted", command=func.__name__)
                return ExitCode.INTERRUPTED
            except Exception as e:
                logger.error(
                    "command_error",
                    command=func.__name__,
                    error_type=type(e).__name__,
                    message=str(e),
                    exit_code=int(ExitCode.UNKNOWN_ERROR),
                )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: FabricArchError) -> str:
    """``message (key=value, ...)`` for console output."""
    if not error.details:
        return error.message
    fields = ", ".join(f"{key}={value}" for key, value in error.details.items())
    return f"{error.message} ({fields})"
