"""Built-in actions and the Emacs-style bindings that reach them."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from editor_extras.actions import core as core_actions
from editor_extras.actions import minibuffer as minibuffer_actions
from editor_extras.actions import motion as motion_actions
from editor_extras.actions import narrowing as narrowing_actions
from editor_extras.actions import windows as window_actions

from .models import ActionRef, Binding, KeySequence, WhenClause
from .registry import KeymapRegistry

PREFIX_ACTIVE = WhenClause("prefix_active")

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="core.universal_argument",
        handler=core_actions.universal_argument,
        description="Begin or multiply a universal prefix argument",
        prefix_command=True,
    ),
    ActionRef(
        id="core.negative_argument",
        handler=core_actions.negative_argument,
        description="Negate the prefix argument",
        prefix_command=True,
    ),
    ActionRef(
        id="core.digit_argument",
        handler=core_actions.digit_argument,
        description="Append a digit to the prefix argument",
        prefix_command=True,
    ),
    ActionRef(
        id="core.keyboard_quit",
        handler=core_actions.keyboard_quit,
        description="Cancel the pending prefix or prompt",
    ),
    ActionRef(
        id="core.undo",
        handler=core_actions.undo,
        description="Undo the last buffer edit",
    ),
    ActionRef(
        id="narrow.defun",
        handler=narrowing_actions.narrow_to_defun,
        description="Narrow to the defun around point",
    ),
    ActionRef(
        id="narrow.regexp",
        handler=narrowing_actions.narrow_to_regexp,
        description="Narrow to the next match of a regexp",
    ),
    ActionRef(
        id="narrow.sexp",
        handler=narrowing_actions.narrow_to_sexp,
        description="Narrow to the expression after point",
    ),
    ActionRef(
        id="narrow.widen",
        handler=narrowing_actions.widen,
        description="Remove any narrowing",
    ),
    ActionRef(
        id="motion.forward_sexp_safe",
        handler=motion_actions.forward_sexp_safe,
        description="Move forward over expressions, stopping at list ends",
    ),
    ActionRef(
        id="motion.backward_sexp_safe",
        handler=motion_actions.backward_sexp_safe,
        description="Move backward over expressions, stopping at list starts",
    ),
    ActionRef(
        id="motion.goto_longest_line",
        handler=motion_actions.goto_longest_line,
        description="Jump to the longest line",
    ),
    ActionRef(
        id="motion.force_move_to_column",
        handler=motion_actions.force_move_to_column,
        description="Move to a column, padding with spaces",
    ),
    ActionRef(
        id="window.other_directional",
        handler=window_actions.other_window_directional,
        description="Cycle windows, remembering the direction",
    ),
    ActionRef(
        id="window.other_directional_all_frames",
        handler=window_actions.other_window_directional,
        description="Cycle windows across all frames",
        metadata={"all_frames": True},
    ),
    ActionRef(
        id="window.split",
        handler=window_actions.split_window,
        description="Split the selected window",
    ),
    ActionRef(
        id="window.delete",
        handler=window_actions.delete_window,
        description="Delete the selected window",
    ),
    ActionRef(
        id="minibuffer.submit",
        handler=minibuffer_actions.submit_minibuffer,
        description="Submit the minibuffer contents",
    ),
    ActionRef(
        id="minibuffer.abort",
        handler=minibuffer_actions.abort_minibuffer,
        description="Abandon the minibuffer prompt",
    ),
)


def _global(binding_id: str, keys: str, action_id: str, **kwargs: object) -> Binding:
    return Binding(
        id=f"global.{binding_id}",
        mode="global",
        sequence=KeySequence.parse(keys),
        action_id=action_id,
        **kwargs,  # type: ignore[arg-type]
    )


def _digit_bindings() -> tuple[Binding, ...]:
    bindings: list[Binding] = []
    for digit in "0123456789":
        bindings.append(
            _global(f"meta_digit_{digit}", f"M-{digit}", "core.digit_argument")
        )
        bindings.append(
            _global(
                f"prefix_digit_{digit}",
                digit,
                "core.digit_argument",
                when=(PREFIX_ACTIVE,),
                description="Digit while a prefix argument is being read",
            )
        )
    return tuple(bindings)


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _global("universal_argument", "C-u", "core.universal_argument"),
    _global("negative_argument", "M--", "core.negative_argument"),
    _global(
        "prefix_minus",
        "-",
        "core.negative_argument",
        when=(PREFIX_ACTIVE,),
        description="Minus sign while a prefix argument is being read",
    ),
    *_digit_bindings(),
    _global("keyboard_quit", "C-g", "core.keyboard_quit"),
    _global("undo", "C-/", "core.undo"),
    _global("undo_alt", "C-x u", "core.undo"),
    _global("narrow_to_defun", "C-x n d", "narrow.defun"),
    _global("narrow_to_regexp", "C-x n x", "narrow.regexp"),
    _global("narrow_to_sexp", "C-x n e", "narrow.sexp"),
    _global("widen", "C-x n w", "narrow.widen"),
    _global("forward_sexp", "C-M-f", "motion.forward_sexp_safe"),
    _global("backward_sexp", "C-M-b", "motion.backward_sexp_safe"),
    _global("goto_longest_line", "M-g l", "motion.goto_longest_line"),
    _global("force_move_to_column", "M-g c", "motion.force_move_to_column"),
    _global("other_window", "C-x o", "window.other_directional"),
    _global("other_window_frames", "C-x 5 o", "window.other_directional_all_frames"),
    _global("split_window", "C-x 2", "window.split"),
    _global("delete_window", "C-x 0", "window.delete"),
    Binding(
        id="minibuffer.submit_enter",
        mode="minibuffer",
        sequence=KeySequence.parse("RET"),
        action_id="minibuffer.submit",
        description="Submit the minibuffer",
    ),
    Binding(
        id="minibuffer.abort_escape",
        mode="minibuffer",
        sequence=KeySequence.parse("ESC"),
        action_id="minibuffer.abort",
        description="Abandon the prompt",
    ),
    Binding(
        id="minibuffer.abort_quit",
        mode="minibuffer",
        sequence=KeySequence.parse("C-g"),
        action_id="minibuffer.abort",
        description="Abandon the prompt",
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    registered: set[str] = set()
    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)
        registered.add(action.id)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        if binding.action_id not in registered:
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = [
    "load_default_keymaps",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "PREFIX_ACTIVE",
]
