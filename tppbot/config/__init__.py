"""Configuration package exports."""

from .loader import load_config, parse_address  # noqa: F401
from .model import BotConfig  # noqa: F401

__all__ = ["BotConfig", "load_config", "parse_address"]
