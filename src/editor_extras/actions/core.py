"""Core actions: prefix arguments, quitting and undo."""

from __future__ import annotations

from editor_extras.keymaps import ResolutionMatch
from editor_extras.modes.base_mode import ModeContext, ModeResult
from editor_extras.modes.keymap_helpers import update_flag
from editor_extras.prefix import PrefixArg


def current_prefix_arg(context: ModeContext) -> PrefixArg:
    """Raw prefix argument the running command was invoked with."""

    return context.extras.get("prefix_arg")  # type: ignore[return-value]


def _prefix_result(context: ModeContext, raw: PrefixArg) -> ModeResult:
    update_flag(context, "prefix_active", context.prefix.active)
    context.bus.emit("prefix.update", raw)
    return ModeResult(consumed=True, status="prefix", message=_describe(raw))


def _describe(raw: PrefixArg) -> str:
    if raw is None:
        return ""
    return f"C-u {getattr(raw, 'value', raw)}-"


def universal_argument(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _prefix_result(context, context.prefix.universal())


def negative_argument(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _prefix_result(context, context.prefix.negative())


def digit_argument(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    digit = match.binding.sequence.strokes[-1].key
    return _prefix_result(context, context.prefix.digit(digit))


def keyboard_quit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.prefix.reset()
    update_flag(context, "prefix_active", False)
    return ModeResult(consumed=True, switch_to="global", status="quit", message="Quit")


def undo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if not context.buffer.undo_last():
        return ModeResult(consumed=True, status="error", message="No further undo information")
    return ModeResult(consumed=True, status="undo")


__all__ = [
    "current_prefix_arg",
    "universal_argument",
    "negative_argument",
    "digit_argument",
    "keyboard_quit",
    "undo",
]
