"""Rolling chat statistics: buckets, windows, decision policy and report."""

from .bucket import COMMAND_FIELDS, Bucket  # noqa: F401
from .policy import SendDecision, SendPolicy, most_used  # noqa: F401
from .report import StatsLogWriter, StatsReport  # noqa: F401
from .tally import match_command  # noqa: F401
from .window import WindowAggregator  # noqa: F401

__all__ = [
    "Bucket",
    "COMMAND_FIELDS",
    "SendDecision",
    "SendPolicy",
    "StatsLogWriter",
    "StatsReport",
    "WindowAggregator",
    "match_command",
    "most_used",
]
