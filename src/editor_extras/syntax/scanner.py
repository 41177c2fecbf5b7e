"""Balanced-expression scanner.

The accessible region is classified once per scan into per-character syntax
classes (code, string, comment, ...). Forward and backward motion then only
consult those classes, so strings and comments never confuse delimiter
matching in either direction.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from editor_extras.errors import EditorError

from .table import LISP_SYNTAX, SyntaxTable

WHITESPACE = " "
COMMENT = ";"
OPEN = "("
CLOSE = ")"
STRING_OPEN = '"'
STRING_BODY = "s"
STRING_CLOSE = "e"
SYMBOL = "_"
PREFIX = "'"

_SKIPPED = (WHITESPACE, COMMENT)


class ScanErrorKind(Enum):
    """Distinguishable reasons a scan can stop short."""

    CONTAINING_EXPRESSION_ENDS_PREMATURELY = "Containing expression ends prematurely"
    UNBALANCED_PARENTHESES = "Unbalanced parentheses"


class ScanError(EditorError):
    """Raised when scanning runs into structure it cannot cross.

    ``start`` and ``end`` bound the construct that stopped the scan.
    """

    def __init__(self, kind: ScanErrorKind, start: int, end: int) -> None:
        super().__init__(kind.value)
        self.kind = kind
        self.start = start
        self.end = end


def classify(
    text: str, table: SyntaxTable, lower: int = 0, upper: Optional[int] = None
) -> List[str]:
    """Return one syntax class per character of ``text[lower:upper]``."""

    upper = len(text) if upper is None else upper
    classes: List[str] = []
    comment = table.comment_start
    escape = table.escape
    closers = table.closers
    i = lower
    while i < upper:
        char = text[i]
        if comment and text.startswith(comment, i):
            end = text.find("\n", i, upper)
            if end == -1:
                end = upper
            classes.extend(COMMENT * (end - i))
            i = end
            continue
        if char in table.string_quotes:
            classes.append(STRING_OPEN)
            j = i + 1
            while j < upper:
                current = text[j]
                if escape and current == escape and j + 1 < upper:
                    classes.extend((STRING_BODY, STRING_BODY))
                    j += 2
                    continue
                if current == char:
                    classes.append(STRING_CLOSE)
                    j += 1
                    break
                classes.append(STRING_BODY)
                j += 1
            i = j
            continue
        if escape and char == escape:
            width = 2 if i + 1 < upper else 1
            classes.extend(SYMBOL * width)
            i += width
            continue
        if char.isspace():
            classes.append(WHITESPACE)
        elif char in table.pairs:
            classes.append(OPEN)
        elif char in closers:
            classes.append(CLOSE)
        elif char in table.prefix_chars:
            classes.append(PREFIX)
        else:
            classes.append(SYMBOL)
        i += 1
    return classes


class _Scanner:
    def __init__(
        self, text: str, table: SyntaxTable, lower: int, upper: int
    ) -> None:
        self.lower = lower
        self.upper = upper
        self._classes = classify(text, table, lower, upper)

    def at(self, pos: int) -> str:
        return self._classes[pos - self.lower]

    def forward(self, pos: int) -> Optional[int]:
        upper = self.upper
        while pos < upper and self.at(pos) in _SKIPPED:
            pos += 1
        if pos >= upper:
            return None
        while pos < upper and self.at(pos) == PREFIX:
            pos += 1
        if pos >= upper:
            return pos

        kind = self.at(pos)
        if kind == CLOSE:
            raise ScanError(
                ScanErrorKind.CONTAINING_EXPRESSION_ENDS_PREMATURELY, pos, pos + 1
            )
        if kind == OPEN:
            depth = 0
            for cursor in range(pos, upper):
                current = self.at(cursor)
                if current == OPEN:
                    depth += 1
                elif current == CLOSE:
                    depth -= 1
                    if depth == 0:
                        return cursor + 1
            raise ScanError(ScanErrorKind.UNBALANCED_PARENTHESES, pos, upper)
        if kind == STRING_OPEN:
            cursor = pos + 1
            while cursor < upper and self.at(cursor) != STRING_CLOSE:
                cursor += 1
            if cursor >= upper:
                raise ScanError(ScanErrorKind.UNBALANCED_PARENTHESES, pos, upper)
            return cursor + 1

        cursor = pos
        while cursor < upper and self.at(cursor) == kind:
            cursor += 1
        return cursor

    def backward(self, pos: int) -> Optional[int]:
        lower = self.lower
        while pos > lower and self.at(pos - 1) in _SKIPPED:
            pos -= 1
        if pos <= lower:
            return None

        kind = self.at(pos - 1)
        if kind == OPEN:
            raise ScanError(
                ScanErrorKind.CONTAINING_EXPRESSION_ENDS_PREMATURELY, pos - 1, pos
            )
        if kind == CLOSE:
            depth = 0
            start = None
            for cursor in range(pos - 1, lower - 1, -1):
                current = self.at(cursor)
                if current == CLOSE:
                    depth += 1
                elif current == OPEN:
                    depth -= 1
                    if depth == 0:
                        start = cursor
                        break
            if start is None:
                raise ScanError(ScanErrorKind.UNBALANCED_PARENTHESES, lower, pos)
        elif kind == STRING_CLOSE:
            start = pos - 2
            while start >= lower and self.at(start) != STRING_OPEN:
                start -= 1
            if start < lower:
                raise ScanError(ScanErrorKind.UNBALANCED_PARENTHESES, lower, pos)
        else:
            start = pos - 1
            while start > lower and self.at(start - 1) == kind:
                start -= 1

        while start > lower and self.at(start - 1) == PREFIX:
            start -= 1
        return start


def scan_sexps(
    text: str,
    start: int,
    count: int,
    table: SyntaxTable = LISP_SYNTAX,
    *,
    lower: int = 0,
    upper: Optional[int] = None,
) -> Optional[int]:
    """Return the position ``count`` balanced expressions away from ``start``.

    Negative ``count`` scans backward. Returns ``None`` when the edge of
    ``[lower, upper]`` is reached at depth zero before ``count`` expressions
    were crossed. Raises ``ScanError`` when a delimiter blocks the scan.
    """

    upper = len(text) if upper is None else upper
    if not lower <= start <= upper:
        raise ValueError(f"start {start} outside [{lower}, {upper}]")

    scanner = _Scanner(text, table, lower, upper)
    step = scanner.forward if count > 0 else scanner.backward
    position = start
    for _ in range(abs(count)):
        moved = step(position)
        if moved is None:
            return None
        position = moved
    return position


__all__ = ["ScanError", "ScanErrorKind", "classify", "scan_sexps"]
