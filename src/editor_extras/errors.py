"""Error types signalled by editor primitives.

Commands never invent their own categories; they either let these propagate
or, in one documented place, reclassify a scan error as a benign edge case.
"""

from __future__ import annotations


class EditorError(RuntimeError):
    """Base class for errors a host should report to the user verbatim."""


class ArgumentError(EditorError):
    """Raised when a command receives an argument of the wrong shape."""


class SearchFailedError(EditorError):
    """Raised when a regexp search finds no match in the accessible region."""

    def __init__(self, pattern: str) -> None:
        super().__init__(f'Search failed: "{pattern}"')
        self.pattern = pattern


class InvalidRegexpError(EditorError):
    """Raised when a search pattern does not compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid regexp: {reason}")
        self.pattern = pattern
        self.reason = reason


class WindowSelectionError(EditorError):
    """Raised when a window cannot be selected."""


__all__ = [
    "EditorError",
    "ArgumentError",
    "SearchFailedError",
    "InvalidRegexpError",
    "WindowSelectionError",
]
