"""Interactive window actions."""

from __future__ import annotations

from editor_extras import commands
from editor_extras.keymaps import ResolutionMatch
from editor_extras.modes.base_mode import ModeContext, ModeResult

from .core import current_prefix_arg


def other_window_directional(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    all_frames = bool(match.action.metadata.get("all_frames", False))
    window = commands.other_window_directional(
        context.layout,
        current_prefix_arg(context),
        all_frames,
        session=context.session,
        repeated=context.session.is_repeat(),
    )
    context.bus.emit(
        "window.select",
        {"window": window.id, "direction": context.session.window_direction},
    )
    return ModeResult(consumed=True, status="window", message=window.buffer.name)


def split_window(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    window = context.layout.split_window()
    context.bus.emit("window.split", {"window": window.id})
    return ModeResult(consumed=True, status="window_split")


def delete_window(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.layout.delete_window()
    context.bus.emit("window.delete", {"window": context.layout.selected_window.id})
    return ModeResult(consumed=True, status="window_delete")


__all__ = ["other_window_directional", "split_window", "delete_window"]
