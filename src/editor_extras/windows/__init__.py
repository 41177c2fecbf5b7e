"""Window and frame layout."""

from .layout import Frame, Window, WindowLayout

__all__ = ["Frame", "Window", "WindowLayout"]
