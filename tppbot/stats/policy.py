"""Choice of the command to echo and when the bot may send it.

Selection rule: each tracked command gets a weighted count (democracy
doubled, anarchy quartered with integer division), the table is sorted
ascending with a stable sort so ties keep table order, and the label at
index ``len - 2`` wins. That is the second-highest entry, not the maximum.
Pending product review, the rule stays exactly as documented.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from ..constants import (
    MESSAGES_RATE_LIMIT,
    MIN_COMMAND_RATIO,
    MIN_COMMANDS_PER_SECOND,
    SEND_BASE_INTERVAL_SECONDS,
    SEND_INTERVAL_MARGIN_SECONDS,
)
from .bucket import Bucket
from .window import WindowAggregator

# (bucket field, multiplier, divisor, label sent to chat)
POLICY_TABLE: tuple[tuple[str, int, int, str], ...] = (
    ("up", 1, 1, "n"),
    ("left", 1, 1, "w"),
    ("down", 1, 1, "s"),
    ("right", 1, 1, "e"),
    ("a", 1, 1, "a"),
    ("b", 1, 1, "b"),
    ("x", 1, 1, "x"),
    ("y", 1, 1, "y"),
    ("democracy", 2, 1, "democratie"),
    ("anarchy", 1, 4, "anarchie"),
    ("start", 1, 1, "start"),
)
SELECTED_RANK = len(POLICY_TABLE) - 2


def weighted_counts(window_sum: Bucket) -> list[tuple[int, str]]:
    return [
        (getattr(window_sum, name) * multiplier // divisor, label)
        for name, multiplier, divisor, label in POLICY_TABLE
    ]


def most_used(window_sum: Bucket) -> str:
    """Label of the second-highest weighted command count."""
    ranked = sorted(weighted_counts(window_sum), key=lambda entry: entry[0])
    return ranked[SELECTED_RANK][1]


@dataclass(frozen=True, slots=True)
class SendDecision:
    label: str
    commands_per_second: float
    commands_per_message: float
    interval: float
    remaining: float
    eligible: bool


class SendPolicy:
    """Tracks send timing and decides whether the bot may speak.

    Chat drops bots that exceed the rate limit, so on top of the limit the
    interval grows when the crowd is quiet (``base - commands/s``).
    """

    def __init__(
        self,
        rate_limit: float = MESSAGES_RATE_LIMIT,
        margin: float = SEND_INTERVAL_MARGIN_SECONDS,
        base_interval: float = SEND_BASE_INTERVAL_SECONDS,
        min_ratio: float = MIN_COMMAND_RATIO,
        min_commands_per_second: float = MIN_COMMANDS_PER_SECOND,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if rate_limit <= 0:
            raise ValueError("rate_limit must be positive")
        self.rate_limit = rate_limit
        self.margin = margin
        self.base_interval = base_interval
        self.min_ratio = min_ratio
        self.min_commands_per_second = min_commands_per_second
        self.clock = clock

        self.last_text = ""
        self.next_send_time = clock()
        self.messages_sent = 0

    @property
    def min_interval(self) -> float:
        return 1.0 / self.rate_limit + self.margin

    def evaluate(self, window: WindowAggregator) -> SendDecision:
        short = window.short_sum
        commands_per_second = short.commands / window.short_window_seconds
        commands_per_message = short.commands / short.messages if short.messages else 0.0
        interval = max(self.base_interval - commands_per_second, self.min_interval)

        if window.is_full:
            remaining = max(self.next_send_time - self.clock(), 0.0)
        else:
            remaining = interval

        eligible = (
            remaining == 0.0
            and commands_per_message >= self.min_ratio
            and commands_per_second >= self.min_commands_per_second
        )
        return SendDecision(
            label=most_used(short),
            commands_per_second=commands_per_second,
            commands_per_message=commands_per_message,
            interval=interval,
            remaining=remaining,
            eligible=eligible,
        )

    def next_text(self, label: str) -> str:
        """Text to send for ``label``; a repeat is upper-cased so it differs."""
        if self.last_text == label:
            return self.last_text.upper()
        return label

    def mark_sent(self, text: str, decision: SendDecision) -> None:
        self.last_text = text
        self.messages_sent += 1
        self.next_send_time = self.clock() + decision.interval
