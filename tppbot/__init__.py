"""Twitch Plays chat bot.

Decodes the chat stream, keeps rolling command statistics over two time
windows and, when enabled, echoes the command the crowd is typing.
"""

__version__ = "0.1.0"
