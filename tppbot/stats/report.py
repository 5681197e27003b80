"""Tab-separated statistics log written from the long window."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TextIO

from .bucket import COMMAND_FIELDS, Bucket


def _fmt(value: float) -> str:
    return format(value, "g")


@dataclass(frozen=True, slots=True)
class StatsReport:
    timestamp: int
    messages_per_second: float
    commands_per_second: float
    ratios: tuple[float, ...]

    @classmethod
    def from_window(
        cls, window_sum: Bucket, window_seconds: float, timestamp: int | None = None
    ) -> StatsReport:
        if timestamp is None:
            timestamp = int(datetime.now(UTC).timestamp())
        messages_per_second = window_sum.messages / window_seconds
        if window_sum.commands > 0:
            commands_per_second = window_sum.commands / window_seconds
            ratios = tuple(
                getattr(window_sum, name) / window_sum.commands for name in COMMAND_FIELDS
            )
        else:
            commands_per_second = 0.0
            ratios = (0.0,) * len(COMMAND_FIELDS)
        return cls(timestamp, messages_per_second, commands_per_second, ratios)

    def to_line(self) -> str:
        columns = [
            str(self.timestamp),
            _fmt(self.messages_per_second),
            _fmt(self.commands_per_second),
            *(_fmt(ratio) for ratio in self.ratios),
        ]
        return "\t".join(columns) + "\n"


class StatsLogWriter:
    """Append-only writer for ``StatsReport`` lines, flushed after each one."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._file: TextIO | None = None

    def open(self) -> StatsLogWriter:
        if self._file is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = self.path.open("a", encoding="utf-8")
        return self

    def write(self, report: StatsReport) -> None:
        if self._file is None:
            self.open()
        self._file.write(report.to_line())
        self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> StatsLogWriter:
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()
