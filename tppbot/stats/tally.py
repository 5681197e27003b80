"""Mapping of chat payloads to game commands."""

from __future__ import annotations

# Single characters, matched case-insensitively.
SINGLE_CHAR_COMMANDS: dict[str, str] = {
    "u": "up",
    "n": "up",
    "l": "left",
    "w": "left",
    "d": "down",
    "s": "down",
    "r": "right",
    "e": "right",
    "a": "a",
    "b": "b",
    "x": "x",
    "y": "y",
}

# Whole words, matched exactly in lower or upper case.
WORD_COMMANDS: dict[str, str] = {
    "haut": "up",
    "HAUT": "up",
    "gauche": "left",
    "GAUCHE": "left",
    "bas": "down",
    "BAS": "down",
    "droite": "right",
    "DROITE": "right",
    "démocratie": "democracy",
    "DÉMOCRATIE": "democracy",
    "democratie": "democracy",
    "DEMOCRATIE": "democracy",
    "anarchie": "anarchy",
    "ANARCHIE": "anarchy",
    "start": "start",
    "START": "start",
}


def match_command(payload: str | None) -> str | None:
    """Return the bucket field counted for ``payload``, or ``None``."""
    if not payload:
        return None
    if len(payload) == 1:
        return SINGLE_CHAR_COMMANDS.get(payload.lower())
    return WORD_COMMANDS.get(payload)
