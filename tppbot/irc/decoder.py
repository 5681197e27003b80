"""Incremental line decoder for the inbound byte stream."""

from __future__ import annotations

from collections.abc import Iterator

CR = 0x0D
LF = 0x0A


class LineDecoder:
    """Accumulates raw bytes and hands out complete lines.

    Lines end with ``\\r\\n``, a lone ``\\r`` or a lone ``\\n``. A ``\\r`` that
    is the last buffered byte is already a terminator; if the next read then
    starts with ``\\n`` that byte is dropped so the split never produces an
    extra line.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding
        self._buffer = bytearray()
        self._skip_lf = False

    @property
    def pending(self) -> int:
        """Number of buffered bytes not yet returned as a line."""
        return len(self._buffer)

    def feed(self, data: bytes) -> None:
        if not data:
            return
        self._buffer.extend(data)

    def next_line(self) -> str | None:
        """Return the next complete line, or ``None`` if only a partial line is left."""
        while True:
            if self._skip_lf and self._buffer:
                if self._buffer[0] == LF:
                    del self._buffer[0]
                self._skip_lf = False

            end = self._find_terminator()
            if end < 0:
                return None

            consumed = end + 1
            if self._buffer[end] == CR:
                if consumed < len(self._buffer):
                    if self._buffer[consumed] == LF:
                        consumed += 1
                else:
                    self._skip_lf = True

            raw = bytes(self._buffer[:end])
            del self._buffer[:consumed]
            if raw:
                return raw.decode(self.encoding, errors="ignore")

    def drain(self) -> Iterator[str]:
        """Yield every complete line currently buffered."""
        while (line := self.next_line()) is not None:
            yield line

    def clear(self) -> None:
        self._buffer.clear()
        self._skip_lf = False

    def _find_terminator(self) -> int:
        cr = self._buffer.find(CR)
        lf = self._buffer.find(LF)
        if cr < 0:
            return lf
        if lf < 0:
            return cr
        return min(cr, lf)
