"""File I/O helpers for instance readers."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .exceptions import IoFailureError
from .scanner import split_lines

logger = logging.getLogger(__name__)


def read_source_lines(path: str | os.PathLike[str], encoding: str = "utf-8") -> list[str]:
    """Read a whole instance file and return its trimmed lines.

    The file handle is released before returning, on success and on error.

    Raises:
        IoFailureError: If the file is missing, unreadable, or not valid ``encoding``.
    """
    source = Path(path)
    try:
        with source.open("r", encoding=encoding, newline="") as fh:
            text = fh.read()
    except UnicodeDecodeError as exc:
        raise IoFailureError(
            f"Cannot decode instance file {source} as {encoding}: {exc.reason}", path=str(source)
        ) from exc
    except OSError as exc:
        raise IoFailureError(
            f"Cannot read instance file {source}: {exc.strerror or exc}", path=str(source)
        ) from exc
    logger.debug(f"Read {len(text)} characters from {source}")
    return split_lines(text)


def decode_source(content: str | bytes, encoding: str = "utf-8") -> list[str]:
    """Return the trimmed lines of in-memory instance content."""
    if isinstance(content, bytes):
        try:
            content = content.decode(encoding)
        except UnicodeDecodeError as exc:
            raise IoFailureError(f"Cannot decode instance content as {encoding}: {exc.reason}") from exc
    return split_lines(content)
