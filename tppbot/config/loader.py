"""Configuration loading from the process environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..errors.internal import ConfigError
from .model import DEFAULT_PORT, BotConfig

ENV_ADDR = "TPP_ADDR"
ENV_TOKEN = "TPP_TOKEN"
ENV_USER = "TPP_USER"
ENV_CHANNEL = "TPP_CHANNEL"
ENV_LOG_PATH = "TPP_LOG_PATH"
ENV_BOT = "TPP_BOT"

REQUIRED_VARIABLES = (ENV_ADDR, ENV_TOKEN, ENV_USER, ENV_CHANNEL, ENV_LOG_PATH)


def parse_address(raw: str) -> tuple[str, int]:
    """Split ``host:port`` (port optional, IPv6 in brackets)."""
    raw = raw.strip()
    if raw.startswith("["):
        host, sep, rest = raw[1:].partition("]")
        if not sep:
            raise ConfigError(f"Invalid address '{raw}'")
        port_part = rest[1:] if rest.startswith(":") else ""
    else:
        host, _, port_part = raw.rpartition(":") if ":" in raw else (raw, "", "")
    if not host:
        raise ConfigError(f"Invalid address '{raw}': missing host")
    if not port_part:
        return host, DEFAULT_PORT
    try:
        return host, int(port_part)
    except ValueError as e:
        raise ConfigError(f"Invalid port in address '{raw}'") from e


def load_config(environ: Mapping[str, str] | None = None) -> BotConfig:
    """Build a ``BotConfig`` from ``TPP_*`` variables.

    Args:
        environ: Mapping to read from, defaults to ``os.environ``.

    Raises:
        ConfigError: If a required variable is missing or a value is invalid.
    """
    env = os.environ if environ is None else environ
    missing = [name for name in REQUIRED_VARIABLES if not env.get(name)]
    if missing:
        raise ConfigError(
            f"Missing environment variables: {', '.join(missing)}",
            data={"missing": missing},
        )

    host, port = parse_address(env[ENV_ADDR])
    data: dict[str, Any] = {
        "host": host,
        "port": port,
        "token": env[ENV_TOKEN],
        "user": env[ENV_USER],
        "channel": env[ENV_CHANNEL],
        "log_path": env[ENV_LOG_PATH],
        "bot": env.get(ENV_BOT, "").strip() == "true",
    }
    try:
        return BotConfig.model_validate(data)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise ConfigError(
            f"Invalid configuration: {', '.join(fields) or 'unknown field'}",
            data={"fields": fields},
        ) from e
