"""Point, narrowing, marker and match-data state for buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Position = int
Restriction = Tuple[Position, Position]


@dataclass(eq=False, slots=True)
class Marker:
    """A position that follows text edits made before it. Identity-compared."""

    position: Position
    advance_on_insert: bool = False

    def adjust(self, start: Position, end: Position, inserted: int) -> None:
        if self.position > end or (
            self.position == end and end > start and self.advance_on_insert
        ):
            self.position += inserted - (end - start)
        elif self.position > start:
            self.position = start + (inserted if self.advance_on_insert else 0)
        elif self.position == start and self.advance_on_insert:
            self.position += inserted


@dataclass(frozen=True, slots=True)
class MatchData:
    """Group spans recorded by the last successful search."""

    spans: Tuple[Tuple[Optional[Position], Optional[Position]], ...]

    def beginning(self, group: int = 0) -> Optional[Position]:
        return self._span(group)[0]

    def end(self, group: int = 0) -> Optional[Position]:
        return self._span(group)[1]

    def _span(self, group: int) -> Tuple[Optional[Position], Optional[Position]]:
        if group < 0 or group >= len(self.spans):
            raise IndexError(f"No match group {group}")
        return self.spans[group]


@dataclass(slots=True)
class BufferState:
    """Mutable point + narrowing info tied to a BufferDocument version."""

    point: Position = 0
    restriction: Optional[Restriction] = None
    match_data: Optional[MatchData] = None
    markers: List[Marker] = field(default_factory=list)

    def set_point(self, position: Position) -> None:
        self.point = position

    def set_restriction(self, start: Position, end: Position) -> None:
        self.restriction = (start, end)

    def clear_restriction(self) -> None:
        self.restriction = None
