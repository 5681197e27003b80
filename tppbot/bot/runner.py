"""Outer reconnect loop around ``ChatSession``."""

from __future__ import annotations

import logging
from collections.abc import Callable

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    wait_exponential,
)

from ..config.model import BotConfig
from ..constants import INITIAL_BACKOFF_SECONDS, MAX_BACKOFF_SECONDS
from ..errors.handling import log_error
from ..errors.internal import NetworkError
from ..irc.connection import ChatConnection
from ..logs.logger import logger
from ..stats.report import StatsLogWriter
from .session import ChatSession

ConnectionFactory = Callable[[BotConfig], ChatConnection]


def _default_connection(config: BotConfig) -> ChatConnection:
    return ChatConnection(config.host, config.port, username=config.user)


async def run_session(
    config: BotConfig,
    connection_factory: ConnectionFactory = _default_connection,
) -> None:
    """Connect and run one session until the transport fails.

    Session state is created here and dropped on exit, so a reconnect always
    starts from empty buckets, sums and buffers.
    """
    connection = connection_factory(config)
    stats_log = StatsLogWriter(config.log_path)
    try:
        await connection.connect()
        stats_log.open()
        await ChatSession(config, connection, stats_log).run()
    finally:
        stats_log.close()
        await connection.close()


def _before_reconnect(retry_state: RetryCallState) -> None:
    outcome = retry_state.outcome
    if outcome is not None and outcome.failed:
        log_error(
            "Session ended",
            outcome.exception(),
            context={"attempt": retry_state.attempt_number},
        )
    delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
    logger.log_event(
        "runner",
        "reconnect_wait",
        level=logging.WARNING,
        delay=delay,
        attempt=retry_state.attempt_number,
    )


async def run_forever(
    config: BotConfig,
    connection_factory: ConnectionFactory = _default_connection,
    max_backoff: float = MAX_BACKOFF_SECONDS,
) -> None:
    """Run sessions back to back, reconnecting after transport errors.

    Only ``NetworkError``/``OSError`` trigger a reconnect; anything else (for
    instance a ``WindowInvariantError``) propagates to the caller.
    """
    retrying = AsyncRetrying(
        retry=retry_if_exception_type((NetworkError, OSError)),
        wait=wait_exponential(multiplier=INITIAL_BACKOFF_SECONDS, max=max_backoff),
        before_sleep=_before_reconnect,
        reraise=True,
    )
    async for attempt in retrying:
        with attempt:
            await run_session(config, connection_factory)
