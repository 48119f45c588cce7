"""Custom exceptions for the instance reader library."""

from __future__ import annotations


def _located(message: str, line_number: int | None) -> str:
    if line_number is None:
        return message
    return f"Line {line_number}: {message}"


class InstanceReaderError(Exception):
    """Base exception for all instance reader errors.

    Every error raised while reading or building an instance inherits from this
    class, so callers can handle any malformed or unreadable input with a single
    except clause.

    Example:
        try:
            instance = read_steiner_instance("b01.stp", directed=False)
        except InstanceReaderError as e:
            print(f"Cannot load instance: {e}")
    """


class IoFailureError(InstanceReaderError):
    """Raised when an input source cannot be read.

    This includes missing files, permission problems, paths that point at a
    directory, and content that cannot be decoded with the configured encoding.
    The underlying ``OSError`` or ``UnicodeDecodeError`` is chained as
    ``__cause__``.
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class SectionNotFoundError(InstanceReaderError):
    """Raised when a required section marker never appears in the input.

    Example:
        SectionNotFoundError("section terminals")
    """

    def __init__(self, marker: str):
        super().__init__(
            f"Required section marker '{marker}' not found. "
            f"The marker must appear alone on its own line (case-insensitive)."
        )
        self.marker = marker


class UnexpectedEndOfInputError(InstanceReaderError):
    """Raised when fewer lines or fields remain than the grammar requires.

    Attributes:
        context: What the parser was reading when input ran out.
        line_number: Last line consumed, or None when nothing was read.
    """

    def __init__(self, context: str, line_number: int | None = None):
        super().__init__(_located(f"Unexpected end of input while reading {context}.", line_number))
        self.context = context
        self.line_number = line_number


class InvalidTokenError(InstanceReaderError):
    """Raised when a token expected to be an integer is not, or is not expected at all.

    Example:
        InvalidTokenError("variable cost", "3.5", line_number=2)
    """

    def __init__(
        self,
        context: str,
        token: str,
        line_number: int | None = None,
        reason: str = "is not a valid integer",
    ):
        super().__init__(_located(f"Token '{token}' in {context} {reason}.", line_number))
        self.context = context
        self.token = token
        self.line_number = line_number


class IndexOutOfRangeError(InstanceReaderError):
    """Raised when a 1-based vertex, variable or constraint id falls outside [1, bound].

    Example:
        IndexOutOfRangeError("vertex", 7, 5, line_number=12)
    """

    def __init__(self, kind: str, value: int, bound: int, line_number: int | None = None):
        message = f"{kind.capitalize()} index {value} is outside the valid range [1, {bound}]."
        super().__init__(_located(message, line_number))
        self.kind = kind
        self.value = value
        self.bound = bound
        self.line_number = line_number


class InvalidInstanceError(InstanceReaderError):
    """Raised when parsed or caller-supplied data violates an instance invariant.

    This includes:
    - Negative declared counts (vertices, edges, variables, terminals)
    - Negative link weights
    - Self-loops when they are disabled in ReaderOptions
    - Weight mappings that do not match the link sequence
    - Cost sequences whose length differs from the declared variable count
    """

    def __init__(self, message: str, line_number: int | None = None):
        super().__init__(_located(message, line_number))
        self.line_number = line_number


class ReaderConfigurationError(InstanceReaderError):
    """Raised when ReaderOptions are invalid.

    Example:
        ReaderConfigurationError("Unknown encoding 'utf-9'")
    """
