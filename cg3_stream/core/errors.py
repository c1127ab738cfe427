"""Typed parse errors for the CG stream parser.

WHY: Malformed lines must reach the caller as concrete, typed values so a
pass can either abort or report-and-continue. A placeholder value or a
silently coerced reading would hide broken analyser output.

HOW: ParseError is an Exception subclass so strict callers can raise it,
but the lazy block sequence yields instances as plain values. Each error
records its kind, the offending line and its 1-based line number.

RULES:
- InvalidLineError: word-form header lacking the "< opener or >" closer
- InvalidReadingError: reading line without a cohort, without a tab
  depth, or whose first token is not a quote-delimited base form
- Errors are never fatal to the process; the caller decides
"""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    """Closed set of parse error kinds."""

    INVALID_LINE = "invalid_line"
    INVALID_READING = "invalid_reading"


class ParseError(Exception):
    """A malformed line found while assembling blocks.

    Attributes:
        kind: Which grammar rule the line broke.
        line: The offending physical line, without its terminator.
        line_number: 1-based position of the line in the buffer.
    """

    kind: ErrorKind

    def __init__(self, line: str, line_number: int = 0) -> None:
        self.line = line
        self.line_number = line_number
        super().__init__(self._describe())

    def _describe(self) -> str:
        label = self.kind.value.replace("_", " ").capitalize()
        if self.line_number:
            return "{} at line {}: {!r}".format(label, self.line_number, self.line)
        return "{}: {!r}".format(label, self.line)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseError):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.line == other.line
            and self.line_number == other.line_number
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.line, self.line_number))


class InvalidLineError(ParseError):
    kind = ErrorKind.INVALID_LINE


class InvalidReadingError(ParseError):
    kind = ErrorKind.INVALID_READING
