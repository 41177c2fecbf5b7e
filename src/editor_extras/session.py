"""Per-session interactive state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class EditorSession:
    """State that outlives a single command but not the process.

    ``window_direction`` is the direction the directional window cycler last
    moved in (+1 or -1). It starts at +1 and is only read or written by
    interactive invocations of that command.
    """

    window_direction: int = 1
    this_command: Optional[str] = None
    last_command: Optional[str] = None

    def begin_command(self, command_id: str) -> None:
        self.this_command = command_id

    def finish_command(self) -> None:
        self.last_command = self.this_command
        self.this_command = None

    def is_repeat(self) -> bool:
        return self.this_command is not None and self.this_command == self.last_command


__all__ = ["EditorSession"]
