from __future__ import annotations

import pytest

from editor_extras.syntax import (
    C_SYNTAX,
    LISP_SYNTAX,
    ScanError,
    ScanErrorKind,
    classify,
    get_syntax_table,
    scan_sexps,
)


def test_forward_over_symbols_and_lists() -> None:
    text = "foo (bar baz) qux"

    assert scan_sexps(text, 0, 1) == 3
    assert scan_sexps(text, 3, 1) == 13
    assert scan_sexps(text, 0, 3) == 17


def test_backward_over_lists() -> None:
    text = "foo (bar baz) qux"

    assert scan_sexps(text, 13, -1) == 4
    assert scan_sexps(text, 17, -2) == 4


def test_edge_at_top_level_returns_none() -> None:
    assert scan_sexps("foo  ", 3, 1) is None
    assert scan_sexps("  foo", 2, -1) is None


def test_close_paren_ahead_is_containing_error() -> None:
    with pytest.raises(ScanError) as excinfo:
        scan_sexps("(a b)", 4, 1)

    assert excinfo.value.kind is ScanErrorKind.CONTAINING_EXPRESSION_ENDS_PREMATURELY
    assert str(excinfo.value) == "Containing expression ends prematurely"


def test_open_paren_behind_is_containing_error() -> None:
    with pytest.raises(ScanError) as excinfo:
        scan_sexps("(a b)", 1, -1)

    assert excinfo.value.kind is ScanErrorKind.CONTAINING_EXPRESSION_ENDS_PREMATURELY


def test_unclosed_list_is_unbalanced() -> None:
    with pytest.raises(ScanError) as excinfo:
        scan_sexps("(a", 0, 1)

    assert excinfo.value.kind is ScanErrorKind.UNBALANCED_PARENTHESES
    assert str(excinfo.value) == "Unbalanced parentheses"
    assert (excinfo.value.start, excinfo.value.end) == (0, 2)


def test_strings_and_comments_hide_delimiters() -> None:
    text = '(a ")" ; ) not a close\n b)'

    assert scan_sexps(text, 0, 1) == len(text)
    assert scan_sexps(text, len(text), -1) == 0


def test_escaped_quote_stays_in_string() -> None:
    text = r'"a\"b" c'

    assert scan_sexps(text, 0, 1) == 6


def test_prefix_characters_attach_to_expression() -> None:
    text = "'(a b) c"

    assert scan_sexps(text, 0, 1) == 6
    assert scan_sexps(text, 6, -1) == 0


def test_scan_stays_inside_bounds() -> None:
    text = "(a) (b) (c)"

    assert scan_sexps(text, 4, 1, lower=4, upper=7) == 7
    assert scan_sexps(text, 7, 1, lower=4, upper=7) is None


def test_start_outside_bounds_is_rejected() -> None:
    with pytest.raises(ValueError):
        scan_sexps("abc", 5, 1)


def test_c_syntax_uses_line_comments_and_single_quotes() -> None:
    text = "f(')' // )\n)"

    assert scan_sexps(text, 1, 1, C_SYNTAX) == len(text)


def test_classify_marks_each_character() -> None:
    classes = classify('(a "b") ;c', LISP_SYNTAX)

    assert "".join(classes) == '(_ "se) ;;'


def test_get_syntax_table_unknown_name() -> None:
    assert get_syntax_table("lisp") is LISP_SYNTAX
    with pytest.raises(KeyError):
        get_syntax_table("cobol")
