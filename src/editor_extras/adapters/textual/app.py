"""Executable Textual app that hosts the editor command loop."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use editor_extras.adapters.textual.app"
    ) from exc

from editor_extras.buffer import Buffer, BufferMirror
from editor_extras.modes.mode_manager import ModeManager, create_default_manager
from editor_extras.runtime.settings import EditorSettings
from editor_extras.runtime.telemetry import ENV_PREFIX

from .controller import TextualEditorAdapter, TextualUIHooks, translate_key
from .log_stream import NetworkLogStreamer

# Textual reserves these for leaving the app.
_APP_KEYS = {"ctrl+q"}


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""
    minibuffer_text: str = ""


class EditorExtrasApp(App[None]):
    """Single-pane Textual UI around a ModeManager."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #buffer-view {
        height: 1fr;
        border: round $accent;
        padding: 1 1;
        content-align: left top;
        overflow: auto;
    }

    #mode-line {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }

    #minibuffer {
        height: 1;
        background: $surface-darken-2;
        padding: 0 1;
    }
    """

    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(
        self,
        buffer: Buffer,
        *,
        log_host: str = "127.0.0.1",
        log_port: int | None = 8765,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._initial_buffer = buffer
        self.manager: ModeManager | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._minibuffer_widget: Static | None = None
        self._log_streamer: NetworkLogStreamer | None = None
        self._log_host = log_host
        self._requested_log_port = log_port

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
        self._status_widget = Static("", id="mode-line", markup=False)
        self._minibuffer_widget = Static("", id="minibuffer", markup=False)
        yield self._status_widget
        yield self._minibuffer_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.manager = create_default_manager(self._initial_buffer)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_minibuffer=self._show_minibuffer,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.manager, hooks)
        await self._maybe_start_log_stream()

    async def on_unmount(self) -> None:
        if self._log_streamer:
            await self._log_streamer.stop()
            self._log_streamer = None

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in _APP_KEYS:
            return
        key, text, modifiers = translate_key(event.key, event.character)
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        offset = mirror.restriction[0] if mirror.restriction else 0
        cursor = mirror.point - offset
        text = mirror.text
        self._state.buffer_text = f"{text[:cursor]}█{text[cursor:]}"
        if self._buffer_widget:
            self._buffer_widget.update(self._state.buffer_text)
        label = f"{mirror.name}  win {mirror.attributes.get('window', '?')}"
        label += f"/{mirror.attributes.get('windows', '?')}"
        if mirror.narrowed:
            label += "  Narrow"
        self.sub_title = label

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_minibuffer(self, text: str) -> None:
        self._state.minibuffer_text = text
        if self._minibuffer_widget:
            self._minibuffer_widget.update(text)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "mode.switch" and isinstance(payload, str):
            self._update_status(f"mode:{payload}")
        elif name == "prefix.update" and payload is not None:
            self._update_status(f"C-u {getattr(payload, 'value', payload)}-")

    def _log_line(self, line: str) -> None:
        if self._log_streamer:
            self._log_streamer.log(line)

    async def _maybe_start_log_stream(self) -> None:
        if self._requested_log_port is None:
            return
        self._log_streamer = NetworkLogStreamer(
            self._log_host, self._requested_log_port
        )
        await self._log_streamer.start()
        bound = self._log_streamer.port
        self._update_status(f"Log stream @ {self._log_host}:{bound}")
        self._log_line("log stream ready")


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the editor extras Textual demo."
    )
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="File to load into the initial buffer (default: empty scratch buffer)",
    )
    parser.add_argument(
        "--log-host",
        default=os.environ.get(f"{ENV_PREFIX}LOG_HOST", "127.0.0.1"),
        help="Host interface for the TCP log stream (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--log-port",
        type=int,
        default=_env_int(f"{ENV_PREFIX}LOG_PORT", 8765),
        help="TCP port for the log stream (0 for ephemeral, default: 8765)",
    )
    parser.add_argument(
        "--no-log-server",
        action="store_true",
        help="Disable the external log server",
    )
    return parser.parse_args(argv)


def load_buffer(path: Path | None, settings: EditorSettings) -> Buffer:
    if path is None:
        return Buffer.from_text("", settings=settings)
    return Buffer.from_text(
        path.read_text(encoding="utf-8"), name=path.name, settings=settings
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    settings = EditorSettings.from_env()
    buffer = load_buffer(args.file, settings)
    log_port: int | None = None if args.no_log_server else args.log_port
    app = EditorExtrasApp(buffer, log_host=args.log_host, log_port=log_port)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
