"""Editing commands callable as plain subroutines."""

from .motion import (
    backward_sexp_safe,
    force_move_to_column,
    forward_sexp_safe,
    goto_longest_line,
)
from .narrowing import narrow_to_defun, narrow_to_regexp, narrow_to_sexp, widen
from .windows import other_window_directional

__all__ = [
    "narrow_to_defun",
    "narrow_to_regexp",
    "narrow_to_sexp",
    "widen",
    "forward_sexp_safe",
    "backward_sexp_safe",
    "goto_longest_line",
    "force_move_to_column",
    "other_window_directional",
]
