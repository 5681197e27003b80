"""Event logger used by every module of the bot."""

from __future__ import annotations

import logging
import os

_EVENT_NAME_WIDTH = 28
_PREFIX_WIDTH = 20


class BotLogger:
    """Thin wrapper over a stdlib logger emitting named events.

    Handlers are installed once by ``LoggerConfigurator``; this class only
    turns ``(domain, action, **context)`` into a line of text.
    """

    def __init__(self, name: str = "tppbot") -> None:
        self.logger = logging.getLogger(name)

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        event_name = f"{domain}_{action}".lower()
        human_text = human
        derived = False
        if human_text is None:
            # Local import to avoid cyclic import issues during module init.
            from . import event_catalog

            template = event_catalog.EVENT_TEMPLATES.get((domain, action))
            if template:
                try:
                    human_text = template.format(**kwargs)
                except (KeyError, IndexError, ValueError):
                    human_text = template
            else:
                human_text = f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}"
                derived = True
        if derived:
            kwargs.setdefault("derived", True)
        self._log(level, event_name, human_text, exc_info=exc_info, **kwargs)

    def _log(
        self,
        level: int,
        event_name: str,
        human_text: str,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        kw: dict[str, object] = dict(kwargs)
        prefix = self._build_prefix(kw.pop("user", None), kw.pop("channel", None))
        if self._is_debug_enabled():
            msg = self._build_debug_message(event_name, prefix, human_text, kw)
        else:
            msg = f"{prefix} {human_text}"
        self.logger.log(level, msg, exc_info=exc_info)

    @staticmethod
    def _is_debug_enabled() -> bool:
        return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")

    @staticmethod
    def _build_prefix(user: object, channel: object) -> str:
        user_label = user if isinstance(user, str) and user else "system"
        core = f"{user_label}#{channel}" if isinstance(channel, str) and channel else user_label
        return f"[{core.ljust(_PREFIX_WIDTH)[:_PREFIX_WIDTH]}]"

    @staticmethod
    def _build_debug_message(
        event_name: str,
        prefix: str,
        human_text: str,
        kwargs: dict[str, object],
    ) -> str:
        if len(event_name) <= _EVENT_NAME_WIDTH:
            ev = event_name.ljust(_EVENT_NAME_WIDTH)
        else:  # truncate but keep rightmost indicator
            ev = event_name[: _EVENT_NAME_WIDTH - 1] + "…"
        base = f"{ev} {prefix} {human_text}"
        context = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        if context:
            base = f"{base} ({context})"
        return base


logger = BotLogger()
