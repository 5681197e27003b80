#!/usr/bin/env python3
"""
Main entry point for the Twitch Plays chat bot
"""

import asyncio
import logging
import sys

from .bot.runner import run_forever
from .config import load_config
from .errors.handling import log_error
from .errors.internal import ConfigError
from .logging_config import LoggerConfigurator
from .logs.logger import logger


async def main() -> None:
    """Load the configuration from the environment and run sessions forever.

    Raises:
        SystemExit: If the configuration is unusable or a fatal error occurs.
    """
    try:
        logger.log_event("app", "start")
        config = load_config()
        logger.log_event("app", "config_loaded", bot=config.bot, log_path=str(config.log_path))
        await run_forever(config)
    except asyncio.CancelledError:
        raise
    except ConfigError as e:
        log_error("Configuration error", e)
        sys.exit(1)
    except Exception as e:
        log_error("Main application error", e)
        sys.exit(1)
    finally:
        logger.log_event("app", "shutdown")


def health_check() -> int:
    """Validate the configuration without connecting; returns an exit status."""
    try:
        config = load_config()
    except ConfigError as e:
        log_error("❌ Health check failed", e)
        return 1
    logger.log_event("app", "health_check_ok", channel=config.channel)
    return 0


def run(argv: list[str] | None = None) -> None:
    """Synchronous entry point for the application.

    Raises:
        SystemExit: If a critical error occurs during execution.
    """
    argv = sys.argv[1:] if argv is None else argv
    LoggerConfigurator().configure()

    if argv and argv[0] == "--health-check":
        sys.exit(health_check())

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
        sys.exit(0)
    except asyncio.CancelledError:
        sys.exit(0)


if __name__ == "__main__":
    run()
