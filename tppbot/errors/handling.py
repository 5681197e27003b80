from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import ConfigError, InternalError, NetworkError, WindowInvariantError


def classify_error(error: BaseException) -> str:
    """Return the aggregation category used for an exception."""
    if isinstance(error, NetworkError | OSError | ConnectionError):
        return "network"
    if isinstance(error, ConfigError):
        return "config"
    if isinstance(error, WindowInvariantError):
        return "window"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(message: str, error: BaseException, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    This function formats and logs an error message along with the string
    representation of the exception using structured logging for better
    error tracking and aggregation.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    merged: dict = {}
    if isinstance(error, InternalError) and error.data:
        merged.update(error.data)
    if context:
        merged.update(context)

    log_structured_error(
        error_type=classify_error(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=merged or None,
    )
