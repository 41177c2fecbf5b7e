"""Minibuffer mode: line editing for interactive command arguments."""

from __future__ import annotations

from typing import List, MutableMapping, cast

from editor_extras.errors import EditorError
from editor_extras.keymaps import ResolutionMatch
from editor_extras.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult, report_command_error
from .keymap_helpers import (
    key_to_token,
    keymap_flag_context,
    require_keymap_resolver,
    update_flag,
)


class MinibufferMode(Mode):
    name = "minibuffer"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("editor_extras.modes.minibuffer")
        self._resolver = require_keymap_resolver(context)
        self._flags = keymap_flag_context(context)
        self._pending: List[str] = []
        self._typed: List[str] = []

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._typed.clear()
        update_flag(self.context, "minibuffer_active", True)
        self.context.bus.emit("minibuffer.start", self._state().get("prompt", ""))
        self._sync_state()

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        update_flag(self.context, "minibuffer_active", False)
        self._pending.clear()
        self.context.bus.emit("minibuffer.end", self.current_text)
        self._typed.clear()

    @property
    def current_text(self) -> str:
        return "".join(self._typed)

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key_to_token(key)
        self._pending.append(token)
        result = self._resolver.resolve(
            self.name, tuple(self._pending), context=self._flags
        )

        if result.status == "match" and result.match:
            self._pending.clear()
            self._sync_state()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(
                consumed=True, status="pending", message=" ".join(self._pending)
            )

        self._pending.clear()
        return self._handle_text_input(key)

    def _handle_text_input(self, key: KeyInput) -> ModeResult:
        if key.key == "BACKSPACE":
            if self._typed:
                self._typed.pop()
                self._sync_state()
            return ModeResult(consumed=True, status="editing")

        if key.text and not set(key.modifiers) - {"shift"}:
            self._typed.append(key.text)
            self._sync_state()
            return ModeResult(consumed=True, status="editing")

        return ModeResult(consumed=False, status="miss", message="unhandled")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            try:
                outcome = match.action(self.context, match)
            except EditorError as exc:
                return report_command_error(self.context, match.action.id, exc)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)

    def _state(self) -> MutableMapping[str, object]:
        return cast(
            MutableMapping[str, object],
            self.context.extras.setdefault("minibuffer_state", {}),
        )

    def _sync_state(self) -> None:
        self._state()["text"] = self.current_text
        self.context.bus.emit("minibuffer.update", self.current_text)


__all__ = ["MinibufferMode"]
