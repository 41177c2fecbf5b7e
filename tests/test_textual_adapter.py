from __future__ import annotations

from typing import Any, Dict, List

from editor_extras.adapters.textual import (
    TextualEditorAdapter,
    TextualUIHooks,
    translate_key,
)
from editor_extras.buffer import Buffer, BufferMirror, BufferSync
from editor_extras.modes.mode_manager import ModeManager, create_default_manager


def make_manager(text: str = "", *, point: int = 0) -> ModeManager:
    return create_default_manager(Buffer.from_text(text, point=point))


def test_translate_key_names() -> None:
    assert translate_key("ctrl+x", "\x18") == ("x", None, ("ctrl",))
    assert translate_key("a", "a") == ("a", "a", ())
    assert translate_key("A", "A") == ("A", "A", ())
    assert translate_key("minus", "-") == ("-", "-", ())
    assert translate_key("escape", "\x1b") == ("ESC", None, ())
    assert translate_key("enter", "\r") == ("ENTER", None, ())
    assert translate_key("ctrl+alt+f") == ("f", None, ("ctrl", "alt"))


def test_adapter_updates_buffer_and_status() -> None:
    manager = make_manager()
    mirrors: List[BufferMirror] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=mirrors.append,
        update_status=statuses.append,
    )
    adapter = TextualEditorAdapter(manager, hooks)

    adapter.handle_textual_key("h", text="h")
    adapter.handle_textual_key("i", text="i")

    assert mirrors[-1].text == "hi"
    assert mirrors[-1].attributes["windows"] == "1"
    assert statuses[-1] == "insert"


def test_escape_prefix_acts_as_meta() -> None:
    manager = make_manager()
    adapter = TextualEditorAdapter(manager, TextualUIHooks(update_buffer=lambda m: None))

    pending = adapter.handle_textual_key("ESC")
    adapter.handle_textual_key("3", text="3")
    adapter.handle_textual_key("x", text="x")

    assert pending.status == "pending"
    assert manager.context.buffer.text == "xxx"


def test_escape_aborts_minibuffer() -> None:
    manager = make_manager("ab")
    prompts: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda m: None, show_minibuffer=prompts.append)
    adapter = TextualEditorAdapter(manager, hooks)

    adapter.handle_textual_key("x", modifiers=("ctrl",))
    adapter.handle_textual_key("n", text="n")
    adapter.handle_textual_key("x", text="x")
    assert prompts[-1] == "Narrow to regexp: "

    adapter.handle_textual_key("b", text="b")
    assert prompts[-1] == "Narrow to regexp: b"

    result = adapter.handle_textual_key("ESC")

    assert result.status == "quit"
    assert prompts[-1] == ""
    assert manager.active_mode is not None
    assert manager.active_mode.name == "global"


def test_adapter_relays_narrowing_and_errors() -> None:
    manager = make_manager("one two")
    events: List[Dict[str, Any]] = []
    mirrors: List[BufferMirror] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=mirrors.append,
        update_status=statuses.append,
        handle_event=lambda name, payload: events.append(
            {"name": name, "payload": payload}
        ),
    )
    adapter = TextualEditorAdapter(manager, hooks)

    adapter.handle_textual_key("x", modifiers=("ctrl",))
    adapter.handle_textual_key("n", text="n")
    adapter.handle_textual_key("x", text="x")
    for char in "t.o":
        adapter.handle_textual_key(char, text=char)
    adapter.handle_textual_key("ENTER")

    names = [event["name"] for event in events]
    assert "buffer.narrow" in names
    assert mirrors[-1].narrowed is True
    assert mirrors[-1].text == "two"

    adapter.handle_textual_key("x", modifiers=("ctrl",))
    adapter.handle_textual_key("n", text="n")
    adapter.handle_textual_key("x", text="x")
    for char in "zzz":
        adapter.handle_textual_key(char, text=char)
    adapter.handle_textual_key("ENTER")

    errors = [event["payload"] for event in events if event["name"] == "command.error"]
    assert errors == [{"command": "narrow.regexp", "message": 'Search failed: "zzz"'}]
    assert statuses[-1] == 'Search failed: "zzz"'


def test_adapter_emits_log_lines() -> None:
    manager = make_manager()
    logs: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda mirror: None, log=logs.append)
    adapter = TextualEditorAdapter(manager, hooks)

    adapter.handle_textual_key("a", text="a")

    assert any(line.startswith("key ->") for line in logs)
    assert any("result <-" in line for line in logs)


def test_pull_buffer_follows_selected_window() -> None:
    manager = make_manager("shared")
    adapter = TextualEditorAdapter(manager, TextualUIHooks(update_buffer=lambda m: None))
    layout = manager.context.layout
    other = layout.split_window(Buffer.from_text("other", name="other"))
    sync: BufferSync = adapter

    layout.select_window(other)
    mirror = sync.pull_buffer()

    assert mirror.name == "other"
    assert mirror.text == "other"
    assert mirror.attributes == {"window": str(other.id), "windows": "2"}
