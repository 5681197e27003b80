"""IRC line classification.

Only the handful of commands the bot reacts to are recognised. Everything
else is kept as an ``UNRECOGNIZED`` record carrying its command token, so a
line is never rejected.
"""

from __future__ import annotations

from .models import NO_SPAN, Category, ProtocolRecord, Span

METADATA_MARKER = "@"
ORIGIN_MARKER = ":"
PAYLOAD_MARKER = ":"

# command, target, payload plus the two optional prefixes
_MAX_TOKENS = 5

# Target in token 1, ":payload" in token 2.
_TARGET_AND_PAYLOAD = frozenset(
    {
        Category.WELCOME,
        Category.YOUR_HOST,
        Category.CREATED,
        Category.MOTD_START,
        Category.MOTD_LINE,
        Category.MOTD_END,
        Category.CHAT_MESSAGE,
    }
)


def classify(line: str) -> ProtocolRecord:
    """Classify one line (terminator already stripped) into a record."""
    category = Category.UNRECOGNIZED
    token = ""
    metadata: Span = NO_SPAN
    origin: Span = NO_SPAN
    target: Span = NO_SPAN
    payload_start = 0

    shift = 0
    offset = 0
    for position, part in enumerate(line.split(" ", _MAX_TOKENS - 1)):
        index = position - shift
        end = offset + len(part)

        if index == 0:
            if part.startswith(METADATA_MARKER) and metadata == NO_SPAN and origin == NO_SPAN:
                metadata = (offset + 1, end)
                shift += 1
            elif part.startswith(ORIGIN_MARKER) and origin == NO_SPAN:
                origin = (offset + 1, end)
                shift += 1
            else:
                token = part
                category = Category.from_token(part)
        elif category in _TARGET_AND_PAYLOAD:
            if index == 1:
                target = (offset, end)
            else:
                if part.startswith(PAYLOAD_MARKER):
                    payload_start = offset + 1
                break
        elif category is Category.CHANNEL_JOIN:
            target = (offset, end)
            break
        elif category is Category.PING:
            if part.startswith(PAYLOAD_MARKER):
                payload_start = offset + 1
            break
        else:
            break

        offset = end + 1

    return ProtocolRecord(
        raw=line,
        category=category,
        token=token,
        metadata_span=metadata,
        origin_span=origin,
        target_span=target,
        payload_start=payload_start,
    )


def format_line(command: str, *params: str, payload: str | None = None) -> str:
    """Build an outbound line (without terminator)."""
    parts = [command, *params]
    if payload is not None:
        parts.append(f"{PAYLOAD_MARKER}{payload}")
    return " ".join(parts)
