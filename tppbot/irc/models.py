"""Typed records produced by the IRC line classifier."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# (start, end) into ProtocolRecord.raw; start == end means absent.
Span = tuple[int, int]
NO_SPAN: Span = (0, 0)


class Category(Enum):
    WELCOME = "001"
    YOUR_HOST = "002"
    CREATED = "003"
    MY_INFO = "004"
    MOTD_START = "375"
    MOTD_LINE = "372"
    MOTD_END = "376"
    NAME_LISTING = "353"
    END_OF_NAMES = "366"
    CHAT_MESSAGE = "PRIVMSG"
    PING = "PING"
    CHANNEL_JOIN = "JOIN"
    UNRECOGNIZED = ""

    @classmethod
    def from_token(cls, token: str) -> Category:
        if not token:
            return cls.UNRECOGNIZED
        try:
            return cls(token)
        except ValueError:
            return cls.UNRECOGNIZED


@dataclass(frozen=True, slots=True)
class OriginIdentity:
    """Sender of a line: ``nick!account@host``, ``nick@host`` or ``host``."""

    host: str
    nickname: str | None = None
    account: str | None = None

    @classmethod
    def parse(cls, origin: str) -> OriginIdentity:
        rest, sep, host = origin.partition("@")
        if not sep:
            return cls(host=origin)
        nickname, sep, account = rest.partition("!")
        if not sep:
            return cls(host=host, nickname=rest)
        return cls(host=host, nickname=nickname, account=account)


@dataclass(frozen=True, slots=True)
class ProtocolRecord:
    """One classified line.

    The record owns ``raw``; every field is stored as a span into it and only
    materialized by the accessors.
    """

    raw: str
    category: Category
    token: str
    metadata_span: Span = NO_SPAN
    origin_span: Span = NO_SPAN
    target_span: Span = NO_SPAN
    payload_start: int = 0

    def _slice(self, span: Span) -> str | None:
        start, end = span
        if start >= end:
            return None
        return self.raw[start:end]

    def metadata(self) -> str | None:
        return self._slice(self.metadata_span)

    def origin(self) -> str | None:
        return self._slice(self.origin_span)

    def identity(self) -> OriginIdentity | None:
        origin = self.origin()
        if origin is None:
            return None
        return OriginIdentity.parse(origin)

    def target(self) -> str | None:
        return self._slice(self.target_span)

    def payload(self) -> str | None:
        # Offset 0 is always the command or a prefix marker, never a payload.
        if self.payload_start == 0:
            return None
        return self.raw[self.payload_start:]

    @property
    def is_recognized(self) -> bool:
        return self.category is not Category.UNRECOGNIZED

    def describe(self) -> str:
        """Compact single-line rendering used for trace logging."""
        name = self.category.name if self.is_recognized else f"UNRECOGNIZED({self.token})"
        parts = [name]
        identity = self.identity()
        if identity is not None:
            parts.append(f"origin={identity.nickname or identity.host}")
        for label, value in (("target", self.target()), ("payload", self.payload())):
            if value is not None:
                parts.append(f"{label}={value!r}")
        return " ".join(parts)
