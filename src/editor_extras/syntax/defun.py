"""Locating top-level definitions ("defuns")."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from .scanner import scan_sexps

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from editor_extras.buffer import Buffer


def _defun_starts(buffer: "Buffer") -> List[int]:
    pattern = buffer.syntax_table.defun_pattern()
    return [
        match.start()
        for match in pattern.finditer(
            buffer.text, buffer.point_min(), buffer.point_max()
        )
    ]


def _defun_end(buffer: "Buffer", start: int) -> int:
    text = buffer.text
    upper = buffer.point_max()
    end = scan_sexps(
        text, start, 1, buffer.syntax_table, lower=buffer.point_min(), upper=upper
    )
    if end is None:
        return upper
    return _past_line_end(buffer, end)


def _past_line_end(buffer: "Buffer", pos: int) -> int:
    # Trailing blanks and a trailing comment belong to the defun's last line.
    text = buffer.text
    upper = buffer.point_max()
    while pos < upper and text[pos] in " \t":
        pos += 1
    comment = buffer.syntax_table.comment_start
    if comment and text.startswith(comment, pos):
        newline = text.find("\n", pos, upper)
        pos = upper if newline == -1 else newline
    if pos < upper and text[pos] == "\n":
        pos += 1
    return pos


def beginning_of_defun(buffer: "Buffer", count: int = 1) -> bool:
    """Move to the start of the ``count``-th defun before point.

    Negative ``count`` moves to following defun starts. Returns ``False`` and
    stops at the region edge when there are not enough defuns.
    """

    origin = buffer.point
    starts = _defun_starts(buffer)
    if count >= 0:
        candidates = [start for start in starts if start < origin]
        if count == 0:
            return True
        if len(candidates) < count:
            buffer.goto_char(buffer.point_min())
            return False
        buffer.goto_char(candidates[-count])
        return True

    candidates = [start for start in starts if start > origin]
    if len(candidates) < -count:
        buffer.goto_char(buffer.point_max())
        return False
    buffer.goto_char(candidates[-count - 1])
    return True


def end_of_defun(buffer: "Buffer") -> int:
    """Move past the end of the defun around point, or the next one.

    The end of a defun is the start of the line following its closing
    delimiter. Scan errors from an unbalanced defun propagate.
    """

    origin = buffer.point
    starts = _defun_starts(buffer)
    preceding = [start for start in starts if start <= origin]
    if preceding:
        end = _defun_end(buffer, preceding[-1])
        if end > origin:
            return buffer.goto_char(end)

    following = [start for start in starts if start > origin]
    if not following:
        return buffer.goto_char(buffer.point_max())
    return buffer.goto_char(_defun_end(buffer, following[0]))


__all__ = ["beginning_of_defun", "end_of_defun"]
