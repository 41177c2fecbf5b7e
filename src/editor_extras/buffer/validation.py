"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .state import Position
from .sync import BufferValidationError


def ensure_position(size: int, position: Position) -> Position:
    if not isinstance(position, int) or isinstance(position, bool):
        raise BufferValidationError(
            f"Wrong type argument: integer-or-marker-p, {position!r}"
        )
    if position < 0 or position > size:
        raise BufferValidationError("Args out of range", position=position)
    return position
