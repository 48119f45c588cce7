"""Line and token scanning shared by every instance format parser."""

from __future__ import annotations

import re
from collections.abc import Sequence

from .exceptions import IndexOutOfRangeError, InvalidTokenError, UnexpectedEndOfInputError

_INTEGER = re.compile(r"[+-]?[0-9]+")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    """Split raw text into trimmed lines, keeping order and blank lines.

    Only ``\\n``, ``\\r\\n`` and ``\\r`` end a line; form feeds and Unicode
    separators stay inside the line they appear in. A leading byte-order
    mark is dropped.

    Example:
        >>> split_lines("  2 3\\n\\n 5 6 7 \\n")
        ['2 3', '', '5 6 7']
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    pieces = _LINE_BREAK.split(text)
    if pieces[-1] == "":
        pieces.pop()
    return [line.strip() for line in pieces]


def tokenize(line: str) -> list[str]:
    """Split a line into its non-empty whitespace-delimited fields."""
    return line.split()


def parse_int(token: str, context: str, line_number: int | None = None) -> int:
    """Parse a signed decimal integer, rejecting floats and underscores."""
    if _INTEGER.fullmatch(token) is None:
        raise InvalidTokenError(context, token, line_number)
    return int(token)


class LineCursor:
    """Forward-only reader over an in-memory sequence of trimmed lines.

    The cursor never looks ahead: each call consumes lines strictly left to
    right, and every error carries the 1-based number of the offending line.
    """

    def __init__(self, lines: Sequence[str], start: int = 0):
        self._lines = lines
        self._position = start

    @property
    def line_number(self) -> int | None:
        """1-based number of the line most recently consumed."""
        return self._position if self._position > 0 else None

    @property
    def at_end(self) -> bool:
        return self._position >= len(self._lines)

    def next_line(self, context: str) -> str:
        if self.at_end:
            raise UnexpectedEndOfInputError(context, self.line_number)
        line = self._lines[self._position]
        self._position += 1
        return line

    def next_fields(self, context: str, skip_blank: bool = False) -> list[str]:
        fields = tokenize(self.next_line(context))
        while skip_blank and not fields:
            fields = tokenize(self.next_line(context))
        return fields

    def field_int(self, fields: Sequence[str], index: int, context: str) -> int:
        """Parse ``fields[index]`` of the current line as an integer."""
        if index >= len(fields):
            raise UnexpectedEndOfInputError(context, self.line_number)
        return parse_int(fields[index], context, self.line_number)

    def reject_extra_fields(self, fields: Sequence[str], width: int, context: str) -> None:
        if len(fields) > width:
            raise InvalidTokenError(
                context, fields[width], self.line_number, reason=f"is unexpected after {width} field(s)"
            )

    def read_ints(
        self, count: int, context: str, kind: str | None = None, bound: int | None = None
    ) -> list[int]:
        """Collect exactly ``count`` integers, flattening across lines.

        Blank lines contribute nothing. The line that completes the count must
        not carry further tokens. When ``bound`` is given every value must lie
        in ``[1, bound]`` and is reported as a ``kind`` index otherwise.
        """
        values: list[int] = []
        while len(values) < count:
            fields = self.next_fields(context)
            for token in fields:
                if len(values) == count:
                    raise InvalidTokenError(
                        context, token, self.line_number, reason=f"exceeds the expected {count} values"
                    )
                value = parse_int(token, context, self.line_number)
                if bound is not None and not 1 <= value <= bound:
                    raise IndexOutOfRangeError(kind or context, value, bound, self.line_number)
                values.append(value)
        return values
