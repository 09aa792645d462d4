"""springs.errors
=================

Exception types raised by the parser and the capacity guards. Infeasible
records are not errors: they simply count zero arrangements.
"""

from __future__ import annotations

from typing import Optional


class RecordParseError(ValueError):
    """A single input line could not be parsed into a condition record."""

    def __init__(self, message: str, line_no: Optional[int] = None, line: Optional[str] = None) -> None:
        location = f"line {line_no}: " if line_no is not None else ""
        content = f" ({line!r})" if line is not None else ""
        super().__init__(f"{location}{message}{content}")
        self.reason = message
        self.line_no = line_no
        self.line = line

    def __reduce__(self):
        return (self.__class__, (self.reason, self.line_no, self.line))


class InputTooLargeError(RuntimeError):
    """Raised when a record would exceed the configured capacity bounds."""

    def __init__(self, what: str, requested: int, limit: int) -> None:
        super().__init__(f"input too large: {what} {requested} exceeds limit {limit}")
        self.what = what
        self.requested = requested
        self.limit = limit

    def __reduce__(self):
        return (self.__class__, (self.what, self.requested, self.limit))


__all__ = ["RecordParseError", "InputTooLargeError"]
