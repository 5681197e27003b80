"""Centralized internal error hierarchy.

These exceptions provide semantic categories for the reconnect loop and
higher-level error handling. Only raise these inside application/network
boundaries; wrap raw socket errors instead of surfacing them directly.

Classes:
  InternalError         – Base for all internal errors.
  NetworkError          – Transport failures; fatal to the session, the runner reconnects.
  ConfigError           – Missing or invalid configuration values.
  WindowInvariantError  – Window bookkeeping went wrong (counter underflow).
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors.

    Connection resets, timeouts and server-side closes all end the current
    session. Nothing from the session is carried over to the next one.
    """


class ConfigError(InternalError):
    """Exception raised when the environment does not describe a usable bot."""


class WindowInvariantError(InternalError):
    """Exception raised when a window sum would drop below zero.

    This only happens when a bucket is subtracted from a sum that never
    contained it, so it is treated as a fatal programming error.
    """


__all__ = [
    "InternalError",
    "NetworkError",
    "ConfigError",
    "WindowInvariantError",
]
