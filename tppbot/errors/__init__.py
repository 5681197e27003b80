"""Error hierarchy and structured error reporting helpers."""

from .handling import log_error  # noqa: F401
from .internal import (  # noqa: F401
    ConfigError,
    InternalError,
    NetworkError,
    WindowInvariantError,
)

__all__ = [
    "InternalError",
    "NetworkError",
    "ConfigError",
    "WindowInvariantError",
    "log_error",
]
