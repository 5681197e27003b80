"""Per-interval counters and the window sums built from them."""

from __future__ import annotations

from dataclasses import dataclass, fields

from ..errors.internal import WindowInvariantError

# Order is shared by the statistics log columns.
COMMAND_FIELDS = (
    "up",
    "left",
    "down",
    "right",
    "a",
    "b",
    "x",
    "y",
    "democracy",
    "anarchy",
    "start",
)


@dataclass(slots=True)
class Bucket:
    """Counts observed during one sample, or summed over a window."""

    messages: int = 0
    commands: int = 0
    up: int = 0
    left: int = 0
    down: int = 0
    right: int = 0
    a: int = 0
    b: int = 0
    x: int = 0
    y: int = 0
    democracy: int = 0
    anarchy: int = 0
    start: int = 0

    def __iadd__(self, other: Bucket) -> Bucket:
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(other, f.name))
        return self

    def __isub__(self, other: Bucket) -> Bucket:
        # Check everything first so a failed subtraction leaves the sum untouched.
        for f in fields(self):
            if getattr(other, f.name) > getattr(self, f.name):
                raise WindowInvariantError(
                    f"Window sum underflow on '{f.name}'",
                    data={
                        "field": f.name,
                        "sum": getattr(self, f.name),
                        "subtracted": getattr(other, f.name),
                    },
                )
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) - getattr(other, f.name))
        return self

    def record_message(self, command: str | None) -> None:
        """Count one chat message and, if recognised, the command it carried."""
        self.messages += 1
        if command is not None:
            setattr(self, command, getattr(self, command) + 1)
            self.commands += 1

    def command_counts(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in COMMAND_FIELDS}

    def copy(self) -> Bucket:
        clone = Bucket()
        clone += self
        return clone
