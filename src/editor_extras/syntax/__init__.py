"""Syntax tables, the sexp scanner and structure-aware motion."""

from .defun import beginning_of_defun, end_of_defun
from .motion import backward_sexp, forward_sexp
from .scanner import ScanError, ScanErrorKind, classify, scan_sexps
from .table import (
    C_SYNTAX,
    LISP_SYNTAX,
    SYNTAX_TABLES,
    SyntaxTable,
    get_syntax_table,
)

__all__ = [
    "SyntaxTable",
    "LISP_SYNTAX",
    "C_SYNTAX",
    "SYNTAX_TABLES",
    "get_syntax_table",
    "ScanError",
    "ScanErrorKind",
    "classify",
    "scan_sexps",
    "forward_sexp",
    "backward_sexp",
    "beginning_of_defun",
    "end_of_defun",
]
