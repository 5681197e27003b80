"""One connected session: the cooperative polling loop of the bot."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ..config.model import BotConfig
from ..constants import LOOP_SLEEP_SECONDS, SAMPLE_LOG_INTERVAL
from ..irc.connection import ChatConnection
from ..irc.decoder import LineDecoder
from ..irc.models import Category, ProtocolRecord
from ..irc.parser import classify
from ..logs.logger import logger
from ..stats.policy import SendDecision, SendPolicy
from ..stats.report import StatsLogWriter, StatsReport
from ..stats.tally import match_command
from ..stats.window import WindowAggregator


@dataclass
class SessionState:
    """All mutable state of a session; discarded whole on reconnect."""

    decoder: LineDecoder
    window: WindowAggregator
    policy: SendPolicy
    welcomed: bool = False
    rotations_since_log: int = 0
    last_decision: SendDecision | None = None

    @classmethod
    def fresh(cls, clock: Callable[[], float] = time.monotonic) -> SessionState:
        return cls(
            decoder=LineDecoder(),
            window=WindowAggregator(clock=clock),
            policy=SendPolicy(clock=clock),
        )


class ChatSession:
    """Runs the loop: rotate window, maybe send, drain input, sleep.

    Every step receives its data through ``self.state``; nothing lives in
    module globals. Transport errors propagate untouched to the runner.
    """

    def __init__(
        self,
        config: BotConfig,
        connection: ChatConnection,
        stats_log: StatsLogWriter,
        state: SessionState | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        loop_sleep: float = LOOP_SLEEP_SECONDS,
        log_interval: int = SAMPLE_LOG_INTERVAL,
    ) -> None:
        self.config = config
        self.connection = connection
        self.stats_log = stats_log
        self.state = state or SessionState.fresh()
        self.sleep = sleep
        self.loop_sleep = loop_sleep
        self.log_interval = log_interval

    async def start(self) -> None:
        await self.connection.send_auth(self.config.user, self.config.token)
        logger.log_event("session", "start", user=self.config.user, channel=self.config.channel)

    async def run(self) -> None:
        await self.start()
        while True:
            await self.step()
            await self.sleep(self.loop_sleep)

    async def step(self) -> None:
        rotated = self.rotate_window()
        decision = await self.maybe_send()
        if rotated:
            self._log_status(decision)
        await self.receive()

    def rotate_window(self) -> bool:
        state = self.state
        if not state.window.rotate_if_due():
            return False
        state.rotations_since_log += 1
        if state.rotations_since_log >= self.log_interval:
            state.rotations_since_log = 0
            self.write_report()
        return True

    def write_report(self) -> StatsReport:
        window = self.state.window
        report = StatsReport.from_window(window.long_sum, window.long_window_seconds)
        self.stats_log.write(report)
        logger.log_event(
            "session",
            "stats_logged",
            level=logging.DEBUG,
            user=self.config.user,
            messages_per_second=report.messages_per_second,
        )
        return report

    async def maybe_send(self) -> SendDecision:
        state = self.state
        decision = state.policy.evaluate(state.window)
        state.last_decision = decision
        if not (self.config.bot and decision.eligible):
            return decision

        text = state.policy.next_text(decision.label)
        await self.connection.send_command("PRIVMSG", f"#{self.config.channel}", payload=text)
        state.policy.mark_sent(text, decision)
        logger.log_event(
            "session",
            "send",
            user=self.config.user,
            channel=self.config.channel,
            text=text,
            commands_per_second=decision.commands_per_second,
            commands_per_message=decision.commands_per_message,
            messages_sent=state.policy.messages_sent,
        )
        return decision

    async def receive(self) -> int:
        """Feed available bytes to the decoder and handle every complete line."""
        data = await self.connection.recv()
        self.state.decoder.feed(data)
        handled = 0
        for line in self.state.decoder.drain():
            await self.handle_record(classify(line))
            handled += 1
        return handled

    async def handle_record(self, record: ProtocolRecord) -> None:
        state = self.state
        if record.category is Category.WELCOME and not state.welcomed:
            state.welcomed = True
            logger.log_event("irc", "join", user=self.config.user, target=self.config.channel)
            await self.connection.send_command("JOIN", f"#{self.config.channel}")
        elif record.category is Category.PING:
            payload = record.payload() or ""
            logger.log_event("irc", "pong", level=logging.DEBUG, user=self.config.user, payload=payload)
            await self.connection.send_command("PONG", payload=payload)
        elif record.category is Category.CHAT_MESSAGE and state.welcomed:
            state.window.current.record_message(match_command(record.payload()))
        else:
            logger.log_event(
                "irc",
                "received",
                level=logging.DEBUG,
                user=self.config.user,
                record=record.describe(),
            )

    def _log_status(self, decision: SendDecision) -> None:
        logger.log_event(
            "session",
            "status",
            level=logging.DEBUG,
            user=self.config.user,
            label=decision.label,
            remaining=decision.remaining,
            commands_per_second=decision.commands_per_second,
            commands_per_message=decision.commands_per_message,
            messages_sent=self.state.policy.messages_sent,
        )
