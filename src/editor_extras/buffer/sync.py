"""Adapter boundary types for syncing buffers with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from editor_extras.errors import EditorError

from .state import Position, Restriction


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing what the user should see.

    ``text`` is only the accessible (narrowed) part; ``point`` is relative to
    the full buffer.
    """

    name: str
    text: str
    point: Position
    restriction: Optional[Restriction]
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def narrowed(self) -> bool:
        return self.restriction is not None


class BufferSync(Protocol):
    """Protocol describing how adapters exchange data with the buffer layer."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest buffer snapshot that the host should render."""
        ...


class BufferValidationError(EditorError):
    """Raised when a position lies outside the buffer."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position
