"""Reading interactive arguments through the minibuffer."""

from __future__ import annotations

from typing import Callable, MutableMapping, cast

from editor_extras.errors import EditorError
from editor_extras.modes.base_mode import ModeContext, ModeResult, report_command_error

SubmitHandler = Callable[[ModeContext, str], ModeResult]


def minibuffer_state(context: ModeContext) -> MutableMapping[str, object]:
    state = cast(
        MutableMapping[str, object], context.extras.setdefault("minibuffer_state", {})
    )
    state.setdefault("prompt", "")
    state.setdefault("text", "")
    state.setdefault("history", [])
    return state


def read_from_minibuffer(
    context: ModeContext, prompt: str, on_submit: SubmitHandler, *, command_id: str
) -> ModeResult:
    """Ask the user for a string; ``on_submit`` runs once it is entered."""

    state = minibuffer_state(context)
    state["prompt"] = prompt
    state["text"] = ""
    state["on_submit"] = on_submit
    state["command_id"] = command_id
    context.bus.emit("minibuffer.prompt", prompt)
    return ModeResult(consumed=True, switch_to="minibuffer", status="prompt", message=prompt)


def submit_minibuffer(context: ModeContext, match) -> ModeResult:
    del match
    state = minibuffer_state(context)
    text = str(state.get("text", ""))
    handler = cast("SubmitHandler | None", state.pop("on_submit", None))
    command_id = str(state.pop("command_id", "minibuffer"))
    history = state.get("history")
    if isinstance(history, list):
        history.append(text)
    state["prompt"] = ""
    state["text"] = ""
    context.bus.emit("minibuffer.submit", text)
    if handler is None:
        return ModeResult(consumed=True, switch_to="global", status="minibuffer_empty")

    try:
        outcome = handler(context, text)
    except EditorError as exc:
        outcome = report_command_error(context, command_id, exc)
    outcome.switch_to = "global"
    return outcome


def abort_minibuffer(context: ModeContext, match) -> ModeResult:
    del match
    state = minibuffer_state(context)
    state.pop("on_submit", None)
    state.pop("command_id", None)
    state["prompt"] = ""
    state["text"] = ""
    context.bus.emit("minibuffer.abort", None)
    return ModeResult(consumed=True, switch_to="global", status="quit", message="Quit")


__all__ = [
    "minibuffer_state",
    "read_from_minibuffer",
    "submit_minibuffer",
    "abort_minibuffer",
]
