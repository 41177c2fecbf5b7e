"""Cursor motion commands: safe sexp motion, longest line, forced column."""

from __future__ import annotations

from typing import Optional

from editor_extras.buffer import Buffer
from editor_extras.errors import ArgumentError
from editor_extras.runtime import telemetry
from editor_extras.syntax import ScanError, ScanErrorKind, forward_sexp


def forward_sexp_safe(buffer: Buffer, count: int = 1) -> Optional[int]:
    """Move across ``count`` sexps, treating the end of a list as an edge.

    Returns the signed distance moved. When the motion would leave the
    enclosing list, returns ``None`` instead of raising and point is left
    unchanged. Any other scan failure propagates untouched.
    """

    origin = buffer.point
    try:
        forward_sexp(buffer, count)
    except ScanError as exc:
        if exc.kind is not ScanErrorKind.CONTAINING_EXPRESSION_ENDS_PREMATURELY:
            raise
        telemetry.record_event(
            "motion.sexp_boundary",
            level="debug",
            data={"buffer": buffer.name, "point": buffer.point, "count": count},
        )
        return None
    return buffer.point - origin


def backward_sexp_safe(buffer: Buffer, count: int = 1) -> Optional[int]:
    return forward_sexp_safe(buffer, -count)


def goto_longest_line(buffer: Buffer) -> int:
    """Jump to the start of the longest line and return its 1-based number.

    Length is the display column at end of line. Ties keep the earliest line.
    """

    longest = -1
    winner = 0
    with buffer.save_excursion():
        buffer.goto_char(buffer.point_min())
        index = 0
        while True:
            buffer.end_of_line()
            column = buffer.current_column()
            if column > longest:
                longest, winner = column, index
            if buffer.eobp():
                break
            buffer.forward_line(1)
            index += 1

    buffer.goto_line(winner + 1)
    return winner + 1


def force_move_to_column(buffer: Buffer, column: int) -> int:
    """Move to ``column``, padding a short line with spaces to reach it."""

    if not isinstance(column, int) or isinstance(column, bool) or column < 0:
        raise ArgumentError(f"Wrong type argument: wholenump, {column!r}")
    reached = buffer.move_to_column(column)
    if reached < column:
        buffer.insert(" " * (column - reached))
    return column


__all__ = [
    "forward_sexp_safe",
    "backward_sexp_safe",
    "goto_longest_line",
    "force_move_to_column",
]
