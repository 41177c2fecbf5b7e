"""Editor settings read from ``EDITOR_EXTRAS_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX

DEFAULT_TAB_WIDTH = 8


@dataclass(frozen=True, slots=True)
class EditorSettings:
    tab_width: int = DEFAULT_TAB_WIDTH
    syntax: str = "lisp"

    def __post_init__(self) -> None:
        if self.tab_width <= 0:
            raise ValueError("tab_width must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        env = os.environ if environ is None else environ
        raw_width = env.get(f"{ENV_PREFIX}TAB_WIDTH")
        try:
            tab_width = int(raw_width) if raw_width else DEFAULT_TAB_WIDTH
        except ValueError as exc:
            raise ValueError(
                f"{ENV_PREFIX}TAB_WIDTH must be an integer, got {raw_width!r}"
            ) from exc
        syntax = env.get(f"{ENV_PREFIX}SYNTAX", "lisp").strip().lower() or "lisp"
        return cls(tab_width=tab_width, syntax=syntax)


__all__ = ["EditorSettings", "DEFAULT_TAB_WIDTH"]
