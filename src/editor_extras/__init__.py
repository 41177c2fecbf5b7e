"""UI-agnostic editing engine with narrowing, sexp and window commands."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "commands",
    "errors",
    "keymaps",
    "modes",
    "runtime",
    "session",
    "syntax",
    "windows",
]

__version__ = "0.1.0"
