"""Editor modes and the key dispatch shared between them.

The manager lives in :mod:`editor_extras.modes.mode_manager`.
"""

from .base_mode import (
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    report_command_error,
)
from .global_mode import GlobalMode
from .minibuffer_mode import MinibufferMode

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "report_command_error",
    "GlobalMode",
    "MinibufferMode",
]
