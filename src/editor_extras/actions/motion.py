"""Interactive wrappers for the motion commands."""

from __future__ import annotations

from editor_extras import commands
from editor_extras.errors import ArgumentError
from editor_extras.keymaps import ResolutionMatch
from editor_extras.modes.base_mode import ModeContext, ModeResult
from editor_extras.prefix import prefix_numeric_value

from .core import current_prefix_arg
from .minibuffer import read_from_minibuffer


def forward_sexp_safe(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    count = prefix_numeric_value(current_prefix_arg(context))
    moved = commands.forward_sexp_safe(context.buffer, count)
    if moved is None:
        return ModeResult(consumed=True, status="boundary")
    return ModeResult(consumed=True, status="moved", message=str(moved))


def backward_sexp_safe(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    count = prefix_numeric_value(current_prefix_arg(context))
    moved = commands.backward_sexp_safe(context.buffer, count)
    if moved is None:
        return ModeResult(consumed=True, status="boundary")
    return ModeResult(consumed=True, status="moved", message=str(moved))


def goto_longest_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    line = commands.goto_longest_line(context.buffer)
    return ModeResult(consumed=True, status="moved", message=f"Line {line}")


def force_move_to_column(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    raw = current_prefix_arg(context)
    if raw is not None:
        return _force_column(context, prefix_numeric_value(raw))

    def _submit(ctx: ModeContext, text: str) -> ModeResult:
        try:
            column = int(text.strip())
        except ValueError as exc:
            raise ArgumentError(f"Not a number: {text!r}") from exc
        return _force_column(ctx, column)

    return read_from_minibuffer(
        context, "Move to column: ", _submit, command_id=match.action.id
    )


def _force_column(context: ModeContext, column: int) -> ModeResult:
    reached = commands.force_move_to_column(context.buffer, column)
    return ModeResult(consumed=True, status="moved", message=f"Column {reached}")


__all__ = [
    "forward_sexp_safe",
    "backward_sexp_safe",
    "goto_longest_line",
    "force_move_to_column",
]
