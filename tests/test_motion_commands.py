from __future__ import annotations

import pytest

from editor_extras.buffer import Buffer
from editor_extras.commands import (
    backward_sexp_safe,
    force_move_to_column,
    forward_sexp_safe,
    goto_longest_line,
)
from editor_extras.errors import ArgumentError
from editor_extras.syntax import ScanError, ScanErrorKind


def make_buffer(text: str, *, point: int = 0, tab_width: int = 8) -> Buffer:
    buffer = Buffer.from_text(text, point=point)
    buffer.tab_width = tab_width
    return buffer


def test_forward_sexp_safe_returns_distance() -> None:
    buffer = make_buffer("(a b) c")

    assert forward_sexp_safe(buffer) == 5
    assert buffer.point == 5


def test_forward_sexp_safe_at_list_end_is_silent() -> None:
    buffer = make_buffer("(a b)", point=4)

    assert forward_sexp_safe(buffer) is None
    assert buffer.point == 4


def test_forward_sexp_safe_count_past_list_end_does_not_move() -> None:
    buffer = make_buffer("(a b)", point=1)

    assert forward_sexp_safe(buffer, 3) is None
    assert buffer.point == 1


def test_forward_sexp_safe_reraises_unbalanced() -> None:
    buffer = make_buffer("(a")

    with pytest.raises(ScanError) as excinfo:
        forward_sexp_safe(buffer)

    assert excinfo.value.kind is ScanErrorKind.UNBALANCED_PARENTHESES
    assert str(excinfo.value) == "Unbalanced parentheses"
    assert buffer.point == 0


def test_backward_sexp_safe_at_list_start() -> None:
    buffer = make_buffer("(a b)", point=1)

    assert backward_sexp_safe(buffer) is None
    assert buffer.point == 1


def test_backward_sexp_safe_moves_back() -> None:
    buffer = make_buffer("(a b) c", point=7)

    assert backward_sexp_safe(buffer, 2) == -7
    assert buffer.point == 0


def test_forward_sexp_safe_at_buffer_end_moves_to_edge() -> None:
    buffer = make_buffer("a  ", point=1)

    assert forward_sexp_safe(buffer) == 2
    assert buffer.point == 3


def test_goto_longest_line_prefers_first_tie() -> None:
    buffer = make_buffer("abc\nabcdefg\nabcdefg\nab", point=20)

    assert goto_longest_line(buffer) == 2
    assert buffer.point == 4


def test_goto_longest_line_measures_display_columns() -> None:
    buffer = make_buffer("abcdefghi\n\tx\nabc", tab_width=8)

    assert goto_longest_line(buffer) == 1

    buffer.tab_width = 16
    assert goto_longest_line(buffer) == 2


def test_goto_longest_line_within_narrowing() -> None:
    buffer = make_buffer("a\nabcdefgh\nabc\nab")
    buffer.narrow_to_region(11, 17)

    assert goto_longest_line(buffer) == 1
    assert buffer.point == 11


def test_force_move_to_column_pads_short_line() -> None:
    buffer = make_buffer("abcd\nnext")

    assert force_move_to_column(buffer, 10) == 10
    assert buffer.text == "abcd      \nnext"
    assert buffer.current_column() == 10


def test_force_move_to_column_inside_line_inserts_nothing() -> None:
    buffer = make_buffer("abcd")

    force_move_to_column(buffer, 2)

    assert buffer.text == "abcd"
    assert buffer.point == 2


def test_force_move_to_column_rejects_negative() -> None:
    buffer = make_buffer("abcd")

    with pytest.raises(ArgumentError, match="wholenump"):
        force_move_to_column(buffer, -1)
