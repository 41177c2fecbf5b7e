"""Directional window cycling that remembers which way the user was going."""

from __future__ import annotations

from typing import Optional

from editor_extras.errors import ArgumentError
from editor_extras.prefix import (
    NEGATIVE,
    PrefixArg,
    UniversalArgument,
    prefix_numeric_value,
)
from editor_extras.runtime import telemetry
from editor_extras.session import EditorSession
from editor_extras.windows import Window, WindowLayout


def other_window_directional(
    layout: WindowLayout,
    arg: PrefixArg = None,
    all_frames: bool = False,
    *,
    session: Optional[EditorSession] = None,
    repeated: bool = False,
) -> Window:
    """Select another window, continuing in the last direction on repeats.

    Passing ``session`` marks an interactive invocation:

    * ``NEGATIVE`` cycles backward and remembers -1.
    * An integer cycles that many windows and remembers its sign.
    * A ``UniversalArgument`` jumps half the windows of the current frame
      forward and remembers +1.
    * No argument with ``repeated`` reuses the remembered direction.
    * No argument otherwise moves forward and remembers +1.

    Without a session the call is a plain ``other_window`` by the numeric
    value of ``arg`` and the remembered direction is left alone.
    """

    if session is None:
        return layout.other_window(_numeric(arg), all_frames)

    if arg == NEGATIVE:
        direction, steps = -1, -1
    elif isinstance(arg, int) and not isinstance(arg, bool):
        direction, steps = (-1 if arg < 0 else 1), arg
    elif isinstance(arg, UniversalArgument):
        direction, steps = 1, layout.count_windows() // 2
    elif arg is None and repeated:
        direction = session.window_direction
        steps = direction
    elif arg is None:
        direction, steps = 1, 1
    else:
        raise ArgumentError(f"Wrong type argument: prefix-arg, {arg!r}")

    session.window_direction = direction
    telemetry.record_event(
        "window.cycle",
        level="debug",
        data={"direction": direction, "steps": steps, "repeated": repeated},
    )
    return layout.other_window(steps, all_frames)


def _numeric(arg: PrefixArg) -> int:
    try:
        return prefix_numeric_value(arg)
    except TypeError as exc:
        raise ArgumentError(str(exc)) from exc


__all__ = ["other_window_directional"]
