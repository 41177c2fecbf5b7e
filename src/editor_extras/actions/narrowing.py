"""Interactive wrappers for the narrowing commands."""

from __future__ import annotations

from editor_extras import commands
from editor_extras.buffer import Restriction
from editor_extras.keymaps import ResolutionMatch
from editor_extras.modes.base_mode import ModeContext, ModeResult

from .minibuffer import read_from_minibuffer


def _narrowed(context: ModeContext, region: Restriction) -> ModeResult:
    context.bus.emit("buffer.narrow", {"buffer": context.buffer.name, "region": region})
    return ModeResult(consumed=True, status="narrowed", message=f"{region[0]}-{region[1]}")


def narrow_to_defun(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _narrowed(context, commands.narrow_to_defun(context.buffer))


def narrow_to_sexp(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _narrowed(context, commands.narrow_to_sexp(context.buffer))


def narrow_to_regexp(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    def _submit(ctx: ModeContext, pattern: str) -> ModeResult:
        return _narrowed(ctx, commands.narrow_to_regexp(ctx.buffer, pattern))

    return read_from_minibuffer(
        context, "Narrow to regexp: ", _submit, command_id=match.action.id
    )


def widen(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    commands.widen(context.buffer)
    context.bus.emit("buffer.widen", {"buffer": context.buffer.name})
    return ModeResult(consumed=True, status="widened")


__all__ = ["narrow_to_defun", "narrow_to_sexp", "narrow_to_regexp", "widen"]
