from __future__ import annotations

import pytest

from editor_extras.buffer import Buffer
from editor_extras.commands import other_window_directional
from editor_extras.errors import ArgumentError, WindowSelectionError
from editor_extras.prefix import NEGATIVE, UniversalArgument
from editor_extras.session import EditorSession
from editor_extras.windows import Window, WindowLayout


def make_layout(count: int) -> tuple[WindowLayout, list[Window]]:
    layout = WindowLayout(Buffer.from_text("text"))
    for _ in range(count - 1):
        layout.split_window()
    return layout, layout.window_list()


def test_split_inserts_after_selected() -> None:
    layout = WindowLayout()
    first = layout.selected_window

    second = layout.split_window()

    assert layout.window_list() == [first, second]
    assert layout.selected_window is first


def test_other_window_wraps_both_ways() -> None:
    layout, windows = make_layout(3)

    assert layout.other_window(4) is windows[1]
    assert layout.other_window(-2) is windows[2]


def test_other_window_requires_integer() -> None:
    layout, _ = make_layout(2)

    with pytest.raises(ArgumentError):
        layout.other_window("2")  # type: ignore[arg-type]


def test_delete_sole_window_is_an_error() -> None:
    layout = WindowLayout()

    with pytest.raises(WindowSelectionError):
        layout.delete_window()


def test_delete_selected_window_selects_next() -> None:
    layout, windows = make_layout(3)

    layout.delete_window()

    assert layout.selected_window is windows[1]
    assert layout.count_windows() == 2


def test_negative_then_repeat_then_universal() -> None:
    layout, windows = make_layout(4)
    session = EditorSession()

    other_window_directional(layout, NEGATIVE, session=session)
    assert layout.selected_window is windows[3]
    assert session.window_direction == -1

    other_window_directional(layout, None, session=session, repeated=True)
    assert layout.selected_window is windows[2]

    other_window_directional(layout, UniversalArgument(4), session=session)
    assert layout.selected_window is windows[0]
    assert session.window_direction == 1


def test_fresh_invocation_resets_direction() -> None:
    layout, windows = make_layout(3)
    session = EditorSession(window_direction=-1)

    other_window_directional(layout, None, session=session, repeated=False)

    assert layout.selected_window is windows[1]
    assert session.window_direction == 1


def test_integer_argument_sets_direction_from_sign() -> None:
    layout, windows = make_layout(5)
    session = EditorSession()

    other_window_directional(layout, -2, session=session)
    assert layout.selected_window is windows[3]
    assert session.window_direction == -1

    other_window_directional(layout, 0, session=session)
    assert layout.selected_window is windows[3]
    assert session.window_direction == 1


def test_explicit_count_sets_direction_for_later_repeats() -> None:
    layout, windows = make_layout(4)
    session = EditorSession()

    other_window_directional(layout, NEGATIVE, session=session)
    other_window_directional(layout, None, session=session, repeated=True)
    assert layout.selected_window is windows[2]

    other_window_directional(layout, 2, session=session, repeated=True)
    assert layout.selected_window is windows[0]
    assert session.window_direction == 1

    other_window_directional(layout, None, session=session, repeated=True)
    assert layout.selected_window is windows[1]
    assert session.window_direction == 1


def test_programmatic_call_delegates_without_touching_direction() -> None:
    layout, windows = make_layout(3)
    session = EditorSession(window_direction=-1)

    other_window_directional(layout, 2)
    assert layout.selected_window is windows[2]

    other_window_directional(layout, NEGATIVE)
    assert layout.selected_window is windows[1]
    assert session.window_direction == -1


def test_single_window_stays_selected() -> None:
    layout, windows = make_layout(1)

    other_window_directional(layout, None, session=EditorSession())

    assert layout.selected_window is windows[0]


def test_all_frames_cycles_across_frames() -> None:
    layout, windows = make_layout(2)
    frame = layout.make_frame()
    session = EditorSession()

    other_window_directional(layout, -1, True, session=session)

    assert layout.selected_window is frame.windows[0]
    assert layout.count_windows(all_frames=True) == 3
    assert layout.selected_frame is frame


def test_unknown_prefix_shape_is_rejected() -> None:
    layout, _ = make_layout(2)

    with pytest.raises(ArgumentError):
        other_window_directional(layout, 2.5, session=EditorSession())  # type: ignore[arg-type]
