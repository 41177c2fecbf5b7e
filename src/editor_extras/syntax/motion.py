"""Cursor motion over balanced expressions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .scanner import scan_sexps

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from editor_extras.buffer import Buffer


def forward_sexp(buffer: "Buffer", count: int = 1) -> int:
    """Move point across ``count`` sexps and return the new point.

    The move is all-or-nothing: a ``ScanError`` leaves point untouched.
    Running out of expressions at top level moves to the region edge.
    """

    target = scan_sexps(
        buffer.text,
        buffer.point,
        count,
        buffer.syntax_table,
        lower=buffer.point_min(),
        upper=buffer.point_max(),
    )
    if target is None:
        target = buffer.point_max() if count > 0 else buffer.point_min()
    return buffer.goto_char(target)


def backward_sexp(buffer: "Buffer", count: int = 1) -> int:
    return forward_sexp(buffer, -count)


__all__ = ["forward_sexp", "backward_sexp"]
