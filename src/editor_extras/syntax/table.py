"""Syntax tables describing how text splits into balanced expressions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Pattern


@dataclass(frozen=True, slots=True)
class SyntaxTable:
    """Character classes consulted by the sexp scanner and defun finder.

    ``pairs`` maps each opening delimiter to its closing partner. A defun starts
    on any line matching ``defun_start`` (by default an open paren in column 0).
    """

    name: str
    pairs: Mapping[str, str] = field(
        default_factory=lambda: {"(": ")", "[": "]", "{": "}"}
    )
    string_quotes: str = '"'
    escape: str = "\\"
    comment_start: str = ";"
    prefix_chars: str = "'`,@"
    defun_start: str = r"^\("

    def __post_init__(self) -> None:
        object.__setattr__(self, "pairs", MappingProxyType(dict(self.pairs)))
        if len(self.escape) > 1:
            raise ValueError("escape must be a single character or empty")

    @property
    def closers(self) -> frozenset[str]:
        return frozenset(self.pairs.values())

    def defun_pattern(self) -> Pattern[str]:
        return _compile_defun(self.defun_start)


_DEFUN_CACHE: dict[str, Pattern[str]] = {}


def _compile_defun(expression: str) -> Pattern[str]:
    compiled = _DEFUN_CACHE.get(expression)
    if compiled is None:
        compiled = re.compile(expression, re.MULTILINE)
        _DEFUN_CACHE[expression] = compiled
    return compiled


LISP_SYNTAX = SyntaxTable(name="lisp")

C_SYNTAX = SyntaxTable(
    name="c",
    string_quotes="\"'",
    comment_start="//",
    prefix_chars="",
    defun_start=r"^\{",
)

SYNTAX_TABLES: Mapping[str, SyntaxTable] = MappingProxyType(
    {LISP_SYNTAX.name: LISP_SYNTAX, C_SYNTAX.name: C_SYNTAX}
)


def get_syntax_table(name: str) -> SyntaxTable:
    try:
        return SYNTAX_TABLES[name]
    except KeyError as exc:
        raise KeyError(f"Unknown syntax table '{name}'") from exc


__all__ = [
    "SyntaxTable",
    "LISP_SYNTAX",
    "C_SYNTAX",
    "SYNTAX_TABLES",
    "get_syntax_table",
]
