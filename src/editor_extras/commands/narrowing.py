"""Commands that narrow a buffer to a piece of structure or a match."""

from __future__ import annotations

from editor_extras.buffer import Buffer, Restriction
from editor_extras.errors import EditorError
from editor_extras.runtime import telemetry
from editor_extras.syntax import (
    backward_sexp,
    beginning_of_defun,
    end_of_defun,
    forward_sexp,
)


def narrow_to_defun(buffer: Buffer) -> Restriction:
    """Narrow to the definition around point; point is preserved.

    The end is located first, then the beginning is searched backward from
    that end, so point between two definitions selects the following one.
    """

    with telemetry.span("commands::narrow_to_defun", metadata={"buffer": buffer.name}):
        with buffer.save_excursion():
            end = end_of_defun(buffer)
            beginning_of_defun(buffer)
            return buffer.narrow_to_region(buffer.point, end)


def narrow_to_regexp(buffer: Buffer, pattern: str) -> Restriction:
    """Narrow to the first match of ``pattern`` after point.

    The search ignores any current narrowing. Match data is restored on exit.
    If the search fails the previous narrowing is put back before the error
    propagates.
    """

    with telemetry.span(
        "commands::narrow_to_regexp",
        metadata={"buffer": buffer.name, "pattern": pattern},
    ):
        previous = buffer.restriction
        with buffer.save_match_data():
            buffer.widen()
            try:
                buffer.re_search_forward(pattern)
            except EditorError:
                buffer.restore_restriction(previous)
                raise
            start, end = buffer.match_beginning(0), buffer.match_end(0)
            assert start is not None and end is not None
            return buffer.narrow_to_region(start, end)


def narrow_to_sexp(buffer: Buffer) -> Restriction:
    """Narrow to the sexp after point (or around it); point is preserved.

    Probing forward first and then backward means point sitting right at the
    start of an expression selects that expression, not the previous one.
    """

    with telemetry.span("commands::narrow_to_sexp", metadata={"buffer": buffer.name}):
        with buffer.save_excursion():
            end = forward_sexp(buffer, 1)
            start = backward_sexp(buffer, 1)
            return buffer.narrow_to_region(start, end)


def widen(buffer: Buffer) -> None:
    buffer.widen()


__all__ = ["narrow_to_defun", "narrow_to_regexp", "narrow_to_sexp", "widen"]
