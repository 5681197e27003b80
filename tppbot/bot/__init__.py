"""Bot package: session loop and reconnect runner."""

from .runner import run_forever, run_session  # noqa: F401
from .session import ChatSession, SessionState  # noqa: F401

__all__ = ["ChatSession", "SessionState", "run_forever", "run_session"]
