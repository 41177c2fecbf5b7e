"""Buffer façade combining document, point, narrowing, search and undo."""

from __future__ import annotations

import re
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from typing import ContextManager, Iterator, Optional

from wcwidth import wcwidth

from editor_extras.errors import InvalidRegexpError, SearchFailedError
from editor_extras.runtime import telemetry
from editor_extras.runtime.settings import EditorSettings
from editor_extras.syntax.table import LISP_SYNTAX, SyntaxTable, get_syntax_table

from .document import BufferDocument
from .state import BufferState, MatchData, Marker, Position, Restriction
from .sync import BufferMirror, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_position


@dataclass(slots=True)
class BufferDelta:
    version: int
    start: Position
    end: Position
    inserted: str
    point: Position
    label: str


class Buffer:
    def __init__(
        self,
        *,
        name: str = "scratch",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        undo: Optional[UndoTimeline] = None,
        syntax_table: Optional[SyntaxTable] = None,
        tab_width: int = 8,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.undo = undo or UndoTimeline()
        self.syntax_table = syntax_table or LISP_SYNTAX
        self.tab_width = tab_width
        self._text_cache: Optional[tuple[int, str]] = None

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "scratch",
        point: Position = 0,
        syntax_table: Optional[SyntaxTable] = None,
        settings: Optional[EditorSettings] = None,
    ) -> "Buffer":
        if settings is not None and syntax_table is None:
            syntax_table = get_syntax_table(settings.syntax)
        buffer = cls(
            name=name,
            document=BufferDocument.from_text(text),
            syntax_table=syntax_table,
            tab_width=settings.tab_width if settings else 8,
        )
        buffer.goto_char(point)
        return buffer

    # -- text -------------------------------------------------------------

    @property
    def text(self) -> str:
        """Full buffer contents, ignoring any narrowing."""

        cached = self._text_cache
        if cached is None or cached[0] != self.document.version:
            cached = (self.document.version, self.document.text())
            self._text_cache = cached
        return cached[1]

    @property
    def size(self) -> int:
        return len(self.text)

    def substring(self, start: Position, end: Position) -> str:
        start, end = self._ordered_region(start, end)
        return self.text[start:end]

    def accessible_text(self) -> str:
        return self.text[self.point_min() : self.point_max()]

    def char_after(self, position: Optional[Position] = None) -> Optional[str]:
        pos = self.point if position is None else position
        if pos < self.point_min() or pos >= self.point_max():
            return None
        return self.text[pos]

    def char_before(self, position: Optional[Position] = None) -> Optional[str]:
        pos = self.point if position is None else position
        if pos <= self.point_min() or pos > self.point_max():
            return None
        return self.text[pos - 1]

    # -- point and narrowing ---------------------------------------------

    @property
    def point(self) -> Position:
        return self.state.point

    def goto_char(self, position: Position) -> Position:
        """Move point, clamping into the accessible region."""

        target = max(self.point_min(), min(position, self.point_max()))
        self.state.set_point(target)
        return target

    def point_min(self) -> Position:
        restriction = self.state.restriction
        return restriction[0] if restriction else 0

    def point_max(self) -> Position:
        restriction = self.state.restriction
        return restriction[1] if restriction else self.size

    def bobp(self) -> bool:
        return self.point == self.point_min()

    def eobp(self) -> bool:
        return self.point == self.point_max()

    @property
    def narrowed(self) -> bool:
        return self.state.restriction is not None

    @property
    def restriction(self) -> Optional[Restriction]:
        return self.state.restriction

    def narrow_to_region(self, start: Position, end: Position) -> Restriction:
        """Restrict editing and motion to ``[start, end]`` of the full text."""

        start, end = self._ordered_region(start, end)
        self.state.set_restriction(start, end)
        self.goto_char(self.point)
        telemetry.record_event(
            "buffer.narrow",
            level="debug",
            data={"buffer": self.name, "start": start, "end": end},
        )
        return (start, end)

    def widen(self) -> None:
        self.state.clear_restriction()

    def restore_restriction(self, restriction: Optional[Restriction]) -> None:
        if restriction is None:
            self.widen()
        else:
            self.narrow_to_region(*restriction)

    @contextmanager
    def save_excursion(self) -> Iterator[Marker]:
        """Restore point after the block, tracking edits made inside it."""

        marker = self.make_marker(self.point)
        try:
            yield marker
        finally:
            self.state.markers.remove(marker)
            self.goto_char(marker.position)

    @contextmanager
    def save_restriction(self) -> Iterator[None]:
        saved = self.state.restriction
        try:
            yield
        finally:
            self.restore_restriction(saved)

    def make_marker(self, position: Position, *, advance: bool = False) -> Marker:
        marker = Marker(ensure_position(self.size, position), advance_on_insert=advance)
        self.state.markers.append(marker)
        return marker

    # -- lines and columns ------------------------------------------------

    def line_beginning_position(self, position: Optional[Position] = None) -> Position:
        pos = self.point if position is None else position
        lower = self.point_min()
        newline = self.text.rfind("\n", lower, pos)
        return lower if newline == -1 else newline + 1

    def line_end_position(self, position: Optional[Position] = None) -> Position:
        pos = self.point if position is None else position
        upper = self.point_max()
        newline = self.text.find("\n", pos, upper)
        return upper if newline == -1 else newline

    def beginning_of_line(self) -> Position:
        return self.goto_char(self.line_beginning_position())

    def end_of_line(self) -> Position:
        return self.goto_char(self.line_end_position())

    def forward_line(self, count: int = 1) -> int:
        """Move to the start of a line ``count`` lines away.

        Returns how many lines could not be moved because the region edge was
        reached first.
        """

        text = self.text
        pos = self.line_beginning_position()
        if count > 0:
            upper = self.point_max()
            remaining = count
            while remaining:
                newline = text.find("\n", pos, upper)
                if newline == -1:
                    self.goto_char(upper)
                    return remaining
                pos = newline + 1
                remaining -= 1
            self.goto_char(pos)
            return 0

        lower = self.point_min()
        remaining = -count
        while remaining:
            if pos <= lower:
                break
            pos = self.line_beginning_position(pos - 1)
            remaining -= 1
        self.goto_char(pos)
        return remaining

    def goto_line(self, line: int) -> Position:
        """Move to the start of 1-based ``line`` within the accessible region."""

        self.goto_char(self.point_min())
        self.forward_line(line - 1)
        return self.point

    def line_number_at_pos(self, position: Optional[Position] = None) -> int:
        pos = self.point if position is None else position
        return self.text.count("\n", self.point_min(), pos) + 1

    def current_column(self) -> int:
        bol = self.line_beginning_position()
        return self._columns(self.text[bol : self.point])

    def move_to_column(self, column: int) -> int:
        """Move toward display ``column`` on the current line.

        Stops at the end of the line when it is too short and returns the
        column actually reached, which can exceed ``column`` when a tab or a
        wide character straddles it.
        """

        text = self.text
        pos = self.line_beginning_position()
        eol = self.line_end_position()
        current = 0
        while pos < eol and current < column:
            current = self._advance_column(current, text[pos])
            pos += 1
        self.goto_char(pos)
        return current

    def _columns(self, segment: str) -> int:
        column = 0
        for char in segment:
            column = self._advance_column(column, char)
        return column

    def _advance_column(self, column: int, char: str) -> int:
        if char == "\t":
            return (column // self.tab_width + 1) * self.tab_width
        width = wcwidth(char)
        # Control characters display in caret notation.
        return column + (width if width >= 0 else 2)

    # -- editing ----------------------------------------------------------

    def replace_region(
        self, start: Position, end: Position, text: str, *, label: str
    ) -> BufferDelta:
        start, end = self._ordered_region(start, end)
        if start < self.point_min() or end > self.point_max():
            raise BufferValidationError("Args out of range", position=start)
        with Transaction(self, label) as tx:
            before_text = self.text
            point_before = self.point
            after_text = before_text[:start] + text + before_text[end:]
            self.document = self.document.replace(after_text)
            inserted = len(text)
            for marker in self.state.markers:
                marker.adjust(start, end, inserted)
            restriction = self.state.restriction
            if restriction is not None:
                self.state.set_restriction(
                    restriction[0], restriction[1] + inserted - (end - start)
                )
            self.state.set_point(start + inserted)
            tx.commit(
                before_text,
                after_text,
                point_before,
                self.point,
                span=(start, end, inserted),
            )

        return BufferDelta(
            version=self.document.version,
            start=start,
            end=end,
            inserted=text,
            point=self.point,
            label=label,
        )

    def insert(self, text: str) -> BufferDelta:
        """Insert ``text`` at point, leaving point after it."""

        return self.replace_region(self.point, self.point, text, label="insert")

    def delete_region(self, start: Position, end: Position) -> BufferDelta:
        return self.replace_region(start, end, "", label="delete_region")

    def undo_last(self) -> bool:
        entry = self.undo.undo()
        if entry is None:
            return False
        self.document = self.document.replace(entry.before_text)
        # Inverse edit: [start, start + inserted) shrinks back to end - start chars.
        removed = entry.end - entry.start
        for marker in self.state.markers:
            marker.adjust(entry.start, entry.start + entry.inserted, removed)
        restriction = self.state.restriction
        if restriction is not None:
            size = len(entry.before_text)
            lower = min(restriction[0], size)
            upper = restriction[1] + removed - entry.inserted
            self.state.set_restriction(lower, max(lower, min(upper, size)))
        self.goto_char(entry.point_before)
        return True

    # -- search -----------------------------------------------------------

    def re_search_forward(
        self,
        pattern: str,
        bound: Optional[Position] = None,
        *,
        noerror: bool = False,
    ) -> Optional[Position]:
        """Search forward from point for ``pattern`` (Python ``re`` syntax).

        On success point moves to the end of the match, match data is set and
        the end position is returned. Without a match point stays put; the
        call raises ``SearchFailedError`` unless ``noerror`` is set.
        """

        try:
            compiled = re.compile(pattern, re.MULTILINE)
        except re.error as exc:
            raise InvalidRegexpError(pattern, str(exc)) from exc

        upper = self.point_max() if bound is None else min(bound, self.point_max())
        match = compiled.search(self.text, self.point, max(upper, self.point))
        if match is None:
            if noerror:
                return None
            raise SearchFailedError(pattern)

        self.state.match_data = MatchData(
            spans=tuple(
                (None, None) if match.start(i) == -1 else match.span(i)
                for i in range(compiled.groups + 1)
            )
        )
        return self.goto_char(match.end())

    @property
    def match_data(self) -> Optional[MatchData]:
        return self.state.match_data

    def match_beginning(self, group: int = 0) -> Optional[Position]:
        return self._require_match().beginning(group)

    def match_end(self, group: int = 0) -> Optional[Position]:
        return self._require_match().end(group)

    def match_string(self, group: int = 0) -> Optional[str]:
        start, end = self.match_beginning(group), self.match_end(group)
        if start is None or end is None:
            return None
        return self.text[start:end]

    @contextmanager
    def save_match_data(self) -> Iterator[None]:
        saved = self.state.match_data
        try:
            yield
        finally:
            self.state.match_data = saved

    def _require_match(self) -> MatchData:
        if self.state.match_data is None:
            raise LookupError("No search has matched yet")
        return self.state.match_data

    # -- snapshots --------------------------------------------------------

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            name=self.name,
            text=self.accessible_text(),
            point=self.point,
            restriction=self.state.restriction,
            attributes=dict(attributes or {}),
        )

    def _ordered_region(self, start: Position, end: Position) -> Restriction:
        size = self.size
        start = ensure_position(size, start)
        end = ensure_position(size, end)
        if start > end:
            start, end = end, start
        return (start, end)


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(
        self,
        before_text: str,
        after_text: str,
        point_before: Position,
        point_after: Position,
        *,
        span: tuple[Position, Position, int] = (0, 0, 0),
    ) -> None:
        start, end, inserted = span
        self.buffer.undo.push(
            UndoEntry(
                label=self.label,
                before_text=before_text,
                after_text=after_text,
                point_before=point_before,
                point_after=point_after,
                start=start,
                end=end,
                inserted=inserted,
            )
        )

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
