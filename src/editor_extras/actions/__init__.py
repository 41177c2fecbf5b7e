"""Keymap-bound actions wrapping the editing commands."""

from .core import (
    current_prefix_arg,
    digit_argument,
    keyboard_quit,
    negative_argument,
    undo,
    universal_argument,
)
from .minibuffer import (
    abort_minibuffer,
    minibuffer_state,
    read_from_minibuffer,
    submit_minibuffer,
)
from .motion import (
    backward_sexp_safe,
    force_move_to_column,
    forward_sexp_safe,
    goto_longest_line,
)
from .narrowing import narrow_to_defun, narrow_to_regexp, narrow_to_sexp, widen
from .windows import delete_window, other_window_directional, split_window

__all__ = [
    "current_prefix_arg",
    "universal_argument",
    "negative_argument",
    "digit_argument",
    "keyboard_quit",
    "undo",
    "minibuffer_state",
    "read_from_minibuffer",
    "submit_minibuffer",
    "abort_minibuffer",
    "narrow_to_defun",
    "narrow_to_sexp",
    "narrow_to_regexp",
    "widen",
    "forward_sexp_safe",
    "backward_sexp_safe",
    "goto_longest_line",
    "force_move_to_column",
    "other_window_directional",
    "split_window",
    "delete_window",
]
