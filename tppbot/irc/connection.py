"""Async TCP transport for the chat server."""

from __future__ import annotations

import asyncio
import logging

from ..constants import (
    IRC_CONNECT_TIMEOUT_SECONDS,
    IRC_RECV_CHUNK_SIZE,
    IRC_RECV_POLL_SECONDS,
)
from ..errors.internal import NetworkError
from ..logs.logger import logger
from .parser import format_line

LINE_TERMINATOR = b"\r\n"


class ChatConnection:
    """Owns the stream pair of one session.

    Every transport failure surfaces as ``NetworkError``; the connection is
    never reused after one.
    """

    def __init__(self, host: str, port: int, username: str | None = None) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None

    @property
    def connected(self) -> bool:
        return self.writer is not None and not self.writer.is_closing()

    async def connect(self, timeout: float = IRC_CONNECT_TIMEOUT_SECONDS) -> None:
        logger.log_event(
            "irc", "connect_start", user=self.username, host=self.host, port=self.port
        )
        try:
            self.reader, self.writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port), timeout=timeout
            )
        except TimeoutError as e:
            logger.log_event(
                "irc",
                "connect_timeout",
                level=logging.ERROR,
                user=self.username,
                host=self.host,
                port=self.port,
                timeout=timeout,
            )
            raise NetworkError(
                f"Timed out connecting to {self.host}:{self.port}",
                data={"timeout": timeout},
            ) from e
        except OSError as e:
            raise NetworkError(
                f"Could not connect to {self.host}:{self.port}: {e}",
                data={"host": self.host, "port": self.port},
            ) from e
        logger.log_event(
            "irc",
            "connection_established",
            level=logging.DEBUG,
            user=self.username,
            host=self.host,
            port=self.port,
        )

    async def send_line(self, line: str) -> None:
        if self.writer is None:
            raise NetworkError("Cannot send on a closed connection")
        try:
            self.writer.write(line.encode("utf-8") + LINE_TERMINATOR)
            await self.writer.drain()
        except OSError as e:
            raise NetworkError(f"Send failed: {e}") from e

    async def send_command(self, command: str, *params: str, payload: str | None = None) -> None:
        await self.send_line(format_line(command, *params, payload=payload))

    async def send_auth(self, user: str, token: str) -> None:
        await self.send_line(f"PASS oauth:{token}")
        await self.send_line(f"NICK {user}")
        logger.log_event("irc", "auth_sent", level=logging.DEBUG, user=user)

    async def recv(self) -> bytes:
        """Return every byte that is available right now (possibly none).

        Reads with a tiny timeout until the stream has nothing more to give,
        so a call never waits on a quiet connection.
        """
        if self.reader is None:
            raise NetworkError("Cannot read from a closed connection")
        received = bytearray()
        while True:
            try:
                data = await asyncio.wait_for(
                    self.reader.read(IRC_RECV_CHUNK_SIZE), timeout=IRC_RECV_POLL_SECONDS
                )
            except TimeoutError:
                break
            except OSError as e:
                raise NetworkError(f"Receive failed: {e}") from e
            if not data:
                if received:
                    # Hand over what arrived before EOF; the next call raises.
                    break
                logger.log_event(
                    "irc", "connection_lost", level=logging.ERROR, user=self.username
                )
                raise NetworkError("Connection closed by server")
            received.extend(data)
        return bytes(received)

    async def close(self) -> None:
        writer, self.writer, self.reader = self.writer, None, None
        if writer is None:
            return
        try:
            writer.close()
            await writer.wait_closed()
        except OSError as e:
            logger.log_event(
                "irc", "close_error", level=logging.DEBUG, user=self.username, error=str(e)
            )
        logger.log_event("irc", "disconnected", level=logging.DEBUG, user=self.username)
