"""Textual adapter that feeds key events to the ModeManager and reports back."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from editor_extras.buffer import BufferMirror
from editor_extras.modes import KeyInput, ModeResult
from editor_extras.modes.mode_manager import ModeManager

_TEXTUAL_KEY_NAMES = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "tab": "TAB",
    "space": " ",
    "minus": "-",
    "slash": "/",
}

_FORWARDED_EVENTS = (
    "command.error",
    "prefix.update",
    "minibuffer.prompt",
    "minibuffer.update",
    "minibuffer.submit",
    "minibuffer.abort",
    "buffer.narrow",
    "buffer.widen",
    "window.select",
    "window.split",
    "window.delete",
    "mode.switch",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def translate_key(
    key: str, character: Optional[str] = None
) -> Tuple[str, Optional[str], Tuple[str, ...]]:
    """Turn a Textual key name such as ``ctrl+x`` into ``(key, text, modifiers)``."""

    *modifiers, name = key.split("+") if key != "+" else ("+",)
    name = _TEXTUAL_KEY_NAMES.get(name, name)
    text: Optional[str] = None
    if character and len(character) == 1 and character.isprintable():
        text = character
        if not modifiers or modifiers == ["shift"]:
            name, modifiers = character, []
    return name, text, tuple(mod.lower() for mod in modifiers)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_minibuffer: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges ModeManager + bus events to a Textual-friendly surface.

    Implements ``BufferSync`` for the selected window. Terminals deliver Meta
    as an ESC prefix. With ``escape_as_meta`` a lone
    ESC in the global mode is held and applied as ``alt`` to the next key.
    """

    def __init__(
        self,
        manager: ModeManager,
        hooks: TextualUIHooks,
        *,
        escape_as_meta: bool = True,
    ) -> None:
        self.manager = manager
        self.hooks = hooks
        self.escape_as_meta = escape_as_meta
        self._meta_pending = False
        self._subscribe_events()
        self._refresh_buffer()
        self._refresh_minibuffer()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Dispatch one key that has already been translated."""

        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        active = self.manager.active_mode
        if (
            self.escape_as_meta
            and key == "ESC"
            and not self._meta_pending
            and active is not None
            and active.name == "global"
        ):
            self._meta_pending = True
            self.hooks.update_status("ESC-")
            return ModeResult(consumed=True, status="pending", message="ESC-")

        if self._meta_pending:
            self._meta_pending = False
            normalized_modifiers = tuple(sorted({*normalized_modifiers, "alt"}))
            text = None

        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.manager.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    def pull_buffer(self) -> BufferMirror:
        layout = self.manager.context.layout
        window = layout.selected_window
        return window.buffer.mirror(
            attributes={
                "window": str(window.id),
                "windows": str(layout.count_windows()),
            }
        )

    def _after_mode_result(self, result: ModeResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_buffer()
        self._refresh_minibuffer()

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in _FORWARDED_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "command.error" and isinstance(payload, dict):
            self.hooks.update_status(str(payload.get("message", "")))
        if name.startswith("minibuffer"):
            self._refresh_minibuffer()
        if name.startswith(("buffer", "window")):
            self._refresh_buffer()

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.pull_buffer())

    def _refresh_minibuffer(self) -> None:
        state = self.manager.context.extras.get("minibuffer_state")
        if isinstance(state, dict):
            text = f"{state.get('prompt', '')}{state.get('text', '')}"
        else:
            text = ""
        self.hooks.show_minibuffer(text)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        context = self.manager.context
        buffer = context.buffer
        active_mode = self.manager.active_mode
        return {
            "mode": active_mode.name if active_mode else "?",
            "point": buffer.point,
            "restriction": buffer.restriction,
            "window": context.layout.selected_window.id,
            "direction": context.session.window_direction,
            "prefix": context.prefix.value(),
            "buffer": buffer.name,
            "buffer_version": buffer.document.version,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "translate_key"]
