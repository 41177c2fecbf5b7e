from __future__ import annotations

import pytest

from editor_extras.runtime import telemetry
from editor_extras.runtime.settings import DEFAULT_TAB_WIDTH, EditorSettings


def test_settings_defaults_without_env() -> None:
    settings = EditorSettings.from_env({})

    assert settings.tab_width == DEFAULT_TAB_WIDTH
    assert settings.syntax == "lisp"


def test_settings_read_prefixed_env() -> None:
    settings = EditorSettings.from_env(
        {"EDITOR_EXTRAS_TAB_WIDTH": "4", "EDITOR_EXTRAS_SYNTAX": " C "}
    )

    assert settings.tab_width == 4
    assert settings.syntax == "c"


def test_settings_reject_bad_tab_width() -> None:
    with pytest.raises(ValueError):
        EditorSettings.from_env({"EDITOR_EXTRAS_TAB_WIDTH": "wide"})
    with pytest.raises(ValueError):
        EditorSettings(tab_width=0)


def test_span_reraises_and_records_failure() -> None:
    with pytest.raises(KeyError):
        with telemetry.span("tests::span", metadata={"case": "failure"}) as handle:
            handle.add_metadata("step", 1)
            raise KeyError("boom")


def test_record_event_accepts_payload() -> None:
    telemetry.record_event("tests.event", level="debug", data={"answer": 42})
