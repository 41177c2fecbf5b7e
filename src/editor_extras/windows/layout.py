"""Frames and windows with a cyclic selection order."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from typing import List, Optional

from editor_extras.buffer import Buffer
from editor_extras.errors import ArgumentError, WindowSelectionError
from editor_extras.runtime import telemetry

_WINDOW_IDS = count(1)


@dataclass(eq=False, slots=True)
class Window:
    """A view onto a buffer. Identity-compared."""

    buffer: Buffer
    id: int = field(default_factory=lambda: next(_WINDOW_IDS))

    def __repr__(self) -> str:
        return f"Window(id={self.id}, buffer={self.buffer.name!r})"


@dataclass(eq=False, slots=True)
class Frame:
    """A top-level container holding windows in cyclic order."""

    name: str
    windows: List[Window] = field(default_factory=list)


class WindowLayout:
    """Owns frames and tracks the selected window."""

    def __init__(self, buffer: Optional[Buffer] = None, *, frame_name: str = "F1") -> None:
        first = Window(buffer or Buffer())
        self.frames: List[Frame] = [Frame(frame_name, [first])]
        self._selected: Window = first

    @property
    def selected_window(self) -> Window:
        return self._selected

    @property
    def selected_frame(self) -> Frame:
        return self.frame_of(self._selected)

    @property
    def current_buffer(self) -> Buffer:
        return self._selected.buffer

    def frame_of(self, window: Window) -> Frame:
        for frame in self.frames:
            if any(candidate is window for candidate in frame.windows):
                return frame
        raise WindowSelectionError(f"{window!r} is not a live window")

    def make_frame(self, buffer: Optional[Buffer] = None, *, name: Optional[str] = None) -> Frame:
        frame = Frame(
            name or f"F{len(self.frames) + 1}",
            [Window(buffer or self.current_buffer)],
        )
        self.frames.append(frame)
        return frame

    def split_window(self, buffer: Optional[Buffer] = None) -> Window:
        """Add a window after the selected one, showing ``buffer``."""

        frame = self.selected_frame
        window = Window(buffer or self.current_buffer)
        index = self._index_in(frame.windows, self._selected)
        frame.windows.insert(index + 1, window)
        return window

    def delete_window(self, window: Optional[Window] = None) -> None:
        target = window or self._selected
        frame = self.frame_of(target)
        if len(frame.windows) == 1:
            raise WindowSelectionError("Attempt to delete minibuffer or sole ordinary window")
        index = self._index_in(frame.windows, target)
        frame.windows.pop(index)
        if target is self._selected:
            self._selected = frame.windows[index % len(frame.windows)]

    def select_window(self, window: Window) -> Window:
        self.frame_of(window)
        self._selected = window
        return window

    def window_list(self, all_frames: bool = False) -> List[Window]:
        """Windows in cyclic order: the selected frame, or every frame."""

        if not all_frames:
            return list(self.selected_frame.windows)
        return [window for frame in self.frames for window in frame.windows]

    def count_windows(self, all_frames: bool = False) -> int:
        return len(self.window_list(all_frames))

    def other_window(self, count: int = 1, all_frames: bool = False) -> Window:
        """Select the window ``count`` steps away in cyclic order."""

        if not isinstance(count, int) or isinstance(count, bool):
            raise ArgumentError(f"Wrong type argument: integerp, {count!r}")
        windows = self.window_list(all_frames)
        if not windows:
            raise WindowSelectionError("No window available for selection")
        index = self._index_in(windows, self._selected)
        target = windows[(index + count) % len(windows)]
        self._selected = target
        telemetry.record_event(
            "window.select",
            level="debug",
            data={"window": target.id, "count": count, "all_frames": all_frames},
        )
        return target

    @staticmethod
    def _index_in(windows: List[Window], window: Window) -> int:
        for index, candidate in enumerate(windows):
            if candidate is window:
                return index
        raise WindowSelectionError(f"{window!r} is not a live window")


__all__ = ["Window", "Frame", "WindowLayout"]
