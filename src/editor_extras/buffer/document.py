"""Core document data structures for editor_extras buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class BufferDocument:
    """Text storage built on a simple list-of-lines model.

    Lines never contain ``"\\n"``; the text is the lines joined by newlines, so
    a trailing newline shows up as a final empty line.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(_lines=text.split("\n"), version=0)

    def text(self) -> str:
        return "\n".join(self._lines)

    def replace(self, text: str) -> "BufferDocument":
        """Return a document holding ``text`` with a bumped version."""

        return BufferDocument(_lines=text.split("\n"), version=self.version + 1)

__all__ = ["BufferDocument"]
