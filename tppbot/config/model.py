from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_PORT = 6667


class BotConfig(BaseModel):
    """Everything a session needs to connect, log and (optionally) speak.

    Attributes:
        host: Chat server host name.
        port: Chat server TCP port.
        token: OAuth token, stored without its ``oauth:`` prefix.
        user: Login name, lowercased.
        channel: Channel to join, without ``#``, lowercased.
        log_path: Destination of the tab-separated statistics log.
        bot: Whether the send policy may post messages.
    """

    host: str = Field(min_length=1)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    token: str
    user: str = Field(min_length=1)
    channel: str
    log_path: Path
    bot: bool = False

    @field_validator("token")
    @classmethod
    def validate_token(cls, v: str) -> str:
        token = v.strip()
        if token.lower().startswith("oauth:"):
            token = token[len("oauth:"):]
        if not token:
            raise ValueError("token must not be empty")
        return token

    @field_validator("user")
    @classmethod
    def validate_user(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("channel")
    @classmethod
    def validate_channel(cls, v: str) -> str:
        channel = v.strip().lstrip("#").lower()
        if not channel:
            raise ValueError("channel must not be empty")
        return channel

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def to_summary(self) -> dict[str, object]:
        """Loggable view without the token."""
        return self.model_dump(exclude={"token"}, mode="json")
