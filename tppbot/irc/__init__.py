"""IRC subsystem package.

Contains the byte-stream line decoder, the line classifier with its record
models, and the asyncio transport used by a session.
"""

from .connection import ChatConnection  # noqa: F401
from .decoder import LineDecoder  # noqa: F401
from .models import Category, OriginIdentity, ProtocolRecord  # noqa: F401
from .parser import classify, format_line  # noqa: F401

__all__ = [
    "Category",
    "ChatConnection",
    "LineDecoder",
    "OriginIdentity",
    "ProtocolRecord",
    "classify",
    "format_line",
]
