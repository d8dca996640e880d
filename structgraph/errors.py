# structgraph/errors.py
from __future__ import annotations

from typing import Optional

__all__ = ["UsageError", "ParseError"]


class UsageError(ValueError):
    """Raised when the command is invoked without any source files."""


class ParseError(Exception):
    """
    A source unit could not be turned into a syntax tree.

    `line` and `column` are 1-based and point at the first syntax error when
    the failure comes from the parser; they are None for I/O failures.
    """

    def __init__(
        self,
        filename: str,
        reason: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        self.filename = filename
        self.reason = reason
        self.line = line
        self.column = column
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.filename}: {self.reason}"
        return f"{self.filename}:{self.line}:{self.column}: {self.reason}"
