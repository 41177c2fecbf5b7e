from __future__ import annotations

import pytest

from editor_extras.prefix import (
    NEGATIVE,
    PrefixArgumentState,
    UniversalArgument,
    prefix_numeric_value,
)
from editor_extras.session import EditorSession


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, 1),
        (NEGATIVE, -1),
        (UniversalArgument(16), 16),
        (7, 7),
        (-3, -3),
    ],
)
def test_prefix_numeric_value(raw: object, expected: int) -> None:
    assert prefix_numeric_value(raw) == expected  # type: ignore[arg-type]


def test_prefix_numeric_value_rejects_other_shapes() -> None:
    with pytest.raises(TypeError):
        prefix_numeric_value(1.5)  # type: ignore[arg-type]


def test_repeated_universal_multiplies() -> None:
    state = PrefixArgumentState()

    state.universal()

    assert state.universal() == UniversalArgument(16)
    assert state.active is True


def test_negative_then_digits() -> None:
    state = PrefixArgumentState()

    assert state.negative() == NEGATIVE
    assert state.digit("4") == -4
    assert state.digit("2") == -42


def test_negative_twice_cancels() -> None:
    state = PrefixArgumentState()
    state.negative()

    assert state.negative() is None


def test_consume_resets_state() -> None:
    state = PrefixArgumentState()
    state.universal()
    state.digit("5")

    assert state.consume() == 5
    assert state.value() is None
    assert state.active is False


def test_digit_must_be_a_digit() -> None:
    with pytest.raises(ValueError):
        PrefixArgumentState().digit("x")


def test_session_repeat_detection() -> None:
    session = EditorSession()

    session.begin_command("window.other_directional")
    assert session.is_repeat() is False
    session.finish_command()

    session.begin_command("window.other_directional")
    assert session.is_repeat() is True
    session.finish_command()

    session.begin_command("core.self_insert")
    assert session.is_repeat() is False
    assert session.last_command == "window.other_directional"
