"""Raw prefix arguments and their accumulation from key presses.

A raw prefix argument is one of:

``None`` -- no prefix was typed
``int`` -- an explicit count (``M-5``, ``C-u 1 2``, ``M-- 3``)
``NEGATIVE`` -- a bare minus sign (``M--`` or ``C-u -``)
``UniversalArgument`` -- one or more ``C-u`` presses without digits
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

NEGATIVE = "-"


@dataclass(frozen=True, slots=True)
class UniversalArgument:
    value: int = 4


PrefixArg = Union[None, int, str, UniversalArgument]


def prefix_numeric_value(raw: PrefixArg) -> int:
    """Collapse a raw prefix argument into the count it stands for."""

    if raw is None:
        return 1
    if raw == NEGATIVE:
        return -1
    if isinstance(raw, UniversalArgument):
        return raw.value
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    raise TypeError(f"Not a prefix argument: {raw!r}")


class PrefixArgumentState:
    """Accumulates ``C-u``, ``M--`` and digit keys into a raw prefix value."""

    def __init__(self) -> None:
        self._universal: Optional[int] = None
        self._negative = False
        self._digits: List[str] = []
        self.active = False

    def universal(self) -> PrefixArg:
        if self._digits or self._negative:
            return self.value()
        self._universal = 4 if self._universal is None else self._universal * 4
        self.active = True
        return self.value()

    def negative(self) -> PrefixArg:
        if not self._digits:
            self._negative = not self._negative
        self.active = True
        return self.value()

    def digit(self, digit: str) -> PrefixArg:
        if len(digit) != 1 or not digit.isdigit():
            raise ValueError(f"Not a digit: {digit!r}")
        self._digits.append(digit)
        self.active = True
        return self.value()

    def value(self) -> PrefixArg:
        if self._digits:
            number = int("".join(self._digits))
            return -number if self._negative else number
        if self._negative:
            return NEGATIVE
        if self._universal is not None:
            return UniversalArgument(self._universal)
        return None

    def consume(self) -> PrefixArg:
        """Return the accumulated value and reset for the next command."""

        raw = self.value()
        self.reset()
        return raw

    def reset(self) -> None:
        self._universal = None
        self._negative = False
        self._digits.clear()
        self.active = False


__all__ = [
    "NEGATIVE",
    "UniversalArgument",
    "PrefixArg",
    "prefix_numeric_value",
    "PrefixArgumentState",
]
