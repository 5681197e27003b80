"""Time-bucketed history with two incrementally maintained window sums."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable

from ..constants import GLOBAL_SAMPLE_COUNT, SAMPLE_DURATION_SECONDS, TPP_SAMPLE_COUNT
from .bucket import Bucket


class WindowAggregator:
    """Shared bucket history backing a long and a short trailing window.

    ``history`` holds up to ``long_count`` closed buckets followed by the open
    one. ``long_sum`` always equals the sum of the closed buckets in
    ``history`` and ``short_sum`` the sum of the last ``short_count`` of them.
    Both are only ever updated by adding the bucket that closes and
    subtracting the one that leaves the window.
    """

    def __init__(
        self,
        sample_duration: float = SAMPLE_DURATION_SECONDS,
        long_count: int = GLOBAL_SAMPLE_COUNT,
        short_count: int = TPP_SAMPLE_COUNT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if sample_duration <= 0:
            raise ValueError("sample_duration must be positive")
        if not 0 < short_count < long_count:
            raise ValueError(
                f"short window ({short_count}) must be positive and smaller "
                f"than the long window ({long_count})"
            )
        self.sample_duration = sample_duration
        self.long_count = long_count
        self.short_count = short_count
        self.clock = clock

        self.history: deque[Bucket] = deque([Bucket()])
        self.long_sum = Bucket()
        self.short_sum = Bucket()
        self.rotations = 0
        self._opened_at = clock()

    @property
    def current(self) -> Bucket:
        """The open bucket receiving tallies."""
        return self.history[-1]

    @property
    def is_full(self) -> bool:
        """True once the long window spans ``long_count`` closed buckets."""
        return len(self.history) > self.long_count

    @property
    def long_window_seconds(self) -> float:
        return self.sample_duration * self.long_count

    @property
    def short_window_seconds(self) -> float:
        return self.sample_duration * self.short_count

    def is_due(self) -> bool:
        return self.clock() - self._opened_at > self.sample_duration

    def rotate_if_due(self) -> bool:
        if not self.is_due():
            return False
        self.rotate()
        return True

    def rotate(self) -> None:
        """Close the open bucket, update both sums and open a new bucket."""
        was_full = self.is_full
        closing = self.current

        self.long_sum += closing
        self.short_sum += closing

        if was_full:
            self.long_sum -= self.history.popleft()

        # The open bucket is still the last entry, hence the extra 1.
        if len(self.history) > self.short_count:
            self.short_sum -= self.history[len(self.history) - 1 - self.short_count]

        self.history.append(Bucket())
        self._opened_at = self.clock()
        self.rotations += 1

    def closed_buckets(self) -> list[Bucket]:
        return list(self.history)[:-1]
