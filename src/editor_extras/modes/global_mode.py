"""The command loop mode: key sequences, prefix arguments, self-insertion."""

from __future__ import annotations

from typing import Callable, List

from editor_extras.errors import EditorError
from editor_extras.keymaps import ResolutionMatch
from editor_extras.prefix import prefix_numeric_value
from editor_extras.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult, report_command_error
from .keymap_helpers import (
    key_to_token,
    keymap_flag_context,
    require_keymap_resolver,
    update_flag,
)

SELF_INSERT_COMMAND = "core.self_insert"
UNDEFINED_COMMAND = "undefined"


class GlobalMode(Mode):
    """Resolves key sequences and runs the bound command.

    Prefix commands (``C-u``, ``M--``, digits) only accumulate state. Any
    other command consumes the accumulated prefix, which it reads back via
    ``context.extras["prefix_arg"]``, and becomes the session's last command.
    """

    name = "global"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("editor_extras.modes.global")
        self._resolver = require_keymap_resolver(context)
        self._flags = keymap_flag_context(context)
        self._pending: List[str] = []

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key_to_token(key)
        self._pending.append(token)
        result = self._resolver.resolve(
            self.name, tuple(self._pending), context=self._flags
        )

        if result.status == "match" and result.match:
            self._pending.clear()
            if result.match.action.prefix_command:
                return self._execute_match(result.match)
            match = result.match
            return self._run_command(match.action.id, lambda: self._execute_match(match))

        if result.status == "pending":
            return ModeResult(
                consumed=True, status="pending", message=" ".join(self._pending)
            )

        tokens = tuple(self._pending)
        self._pending.clear()
        keys = " ".join(tokens)

        if len(tokens) == 1 and self._is_printable(key):
            text = key.text or key.key
            return self._run_command(
                SELF_INSERT_COMMAND, lambda: self._self_insert(text)
            )

        self.context.prefix.reset()
        update_flag(self.context, "prefix_active", False)
        # An unbound key still counts as a command, which breaks repeat chains.
        self.context.session.begin_command(UNDEFINED_COMMAND)
        self.context.session.finish_command()
        return ModeResult(
            consumed=False, status="miss", message=f"{keys} is undefined"
        )

    def _run_command(
        self, command_id: str, invoke: Callable[[], ModeResult]
    ) -> ModeResult:
        session = self.context.session
        self.context.extras["prefix_arg"] = self.context.prefix.consume()
        update_flag(self.context, "prefix_active", False)
        session.begin_command(command_id)
        try:
            return invoke()
        except EditorError as exc:
            return report_command_error(self.context, command_id, exc)
        finally:
            session.finish_command()
            self.context.extras.pop("prefix_arg", None)

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)

    def _self_insert(self, text: str) -> ModeResult:
        raw = self.context.extras.get("prefix_arg")
        count = prefix_numeric_value(raw)  # type: ignore[arg-type]
        if count > 0:
            self.context.buffer.insert(text * count)
        return ModeResult(consumed=True, status="insert")

    @staticmethod
    def _is_printable(key: KeyInput) -> bool:
        if set(key.modifiers) - {"shift"}:
            return False
        text = key.text if key.text is not None else key.key
        return len(text) == 1 and text.isprintable()


__all__ = ["GlobalMode", "SELF_INSERT_COMMAND", "UNDEFINED_COMMAND"]
