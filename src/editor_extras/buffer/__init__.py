"""Buffer abstractions: text, point, narrowing, search and undo."""

from .buffer import Buffer, BufferDelta, Transaction
from .document import BufferDocument
from .state import BufferState, MatchData, Marker, Position, Restriction
from .sync import BufferMirror, BufferSync, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_position

__all__ = [
    "Buffer",
    "BufferDelta",
    "Transaction",
    "BufferDocument",
    "BufferState",
    "MatchData",
    "Marker",
    "Position",
    "Restriction",
    "BufferMirror",
    "BufferSync",
    "BufferValidationError",
    "UndoEntry",
    "UndoTimeline",
    "ensure_position",
]
