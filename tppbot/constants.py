"""
Configuration constants for the Twitch Plays chat bot

This module contains all tunable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Attempts to parse the environment variable as a float. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Sampling windows
SAMPLE_DURATION_SECONDS = _get_env_float(
    "SAMPLE_DURATION_SECONDS", 0.1
)  # Duration of a single bucket
GLOBAL_SAMPLE_COUNT = _get_env_int(
    "GLOBAL_SAMPLE_COUNT", 100
)  # Buckets in the long (reporting) window
TPP_SAMPLE_COUNT = _get_env_int(
    "TPP_SAMPLE_COUNT", 20
)  # Buckets in the short (decision) window
SAMPLE_LOG_INTERVAL = _get_env_int(
    "SAMPLE_LOG_INTERVAL", 10
)  # Rotations between two statistics log lines

# Send policy
MESSAGES_RATE_LIMIT = _get_env_float(
    "MESSAGES_RATE_LIMIT", 20.0 / 30.0
)  # Chat rate limit (messages/s) for non-moderators
SEND_INTERVAL_MARGIN_SECONDS = _get_env_float(
    "SEND_INTERVAL_MARGIN_SECONDS", 0.3
)  # Added to the rate limited minimum interval
SEND_BASE_INTERVAL_SECONDS = _get_env_float(
    "SEND_BASE_INTERVAL_SECONDS", 8.0
)  # Interval before subtracting the observed commands/s
MIN_COMMAND_RATIO = _get_env_float(
    "MIN_COMMAND_RATIO", 0.60
)  # Minimum commands/messages ratio before sending
MIN_COMMANDS_PER_SECOND = _get_env_float(
    "MIN_COMMANDS_PER_SECOND", 2.0
)  # Minimum commands/s before sending

# Session loop / transport
LOOP_SLEEP_SECONDS = _get_env_float(
    "LOOP_SLEEP_SECONDS", 0.01
)  # Fixed end-of-iteration sleep
IRC_CONNECT_TIMEOUT_SECONDS = _get_env_float(
    "IRC_CONNECT_TIMEOUT_SECONDS", 2.0
)  # TCP connect timeout
IRC_RECV_CHUNK_SIZE = _get_env_int("IRC_RECV_CHUNK_SIZE", 4096)  # Bytes per read call
IRC_RECV_POLL_SECONDS = _get_env_float(
    "IRC_RECV_POLL_SECONDS", 0.001
)  # Read poll timeout, keeps the drain non-blocking

# Reconnect backoff
INITIAL_BACKOFF_SECONDS = _get_env_int(
    "INITIAL_BACKOFF_SECONDS", 1
)  # Initial backoff time in seconds
MAX_BACKOFF_SECONDS = _get_env_int(
    "MAX_BACKOFF_SECONDS", 30
)  # Maximum backoff time in seconds
