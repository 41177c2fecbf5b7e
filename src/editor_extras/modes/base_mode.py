"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from editor_extras.buffer import Buffer
from editor_extras.prefix import PrefixArgumentState
from editor_extras.runtime import telemetry
from editor_extras.session import EditorSession
from editor_extras.windows import WindowLayout


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode and action can access."""

    layout: WindowLayout
    session: EditorSession
    bus: "ModeBus"
    prefix: PrefixArgumentState = field(default_factory=PrefixArgumentState)
    extras: Dict[str, object] = field(default_factory=dict)

    @property
    def buffer(self) -> Buffer:
        return self.layout.current_buffer


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError


def report_command_error(
    context: ModeContext, command_id: str, exc: Exception
) -> ModeResult:
    """Turn an editor error into the status a host displays to the user."""

    message = str(exc)
    telemetry.record_event(
        "command.error",
        level="info",
        data={"command": command_id, "message": message},
    )
    context.bus.emit("command.error", {"command": command_id, "message": message})
    return ModeResult(consumed=True, status="error", message=message)
