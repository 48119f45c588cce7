"""Locating marker lines in sectioned instance formats."""

from __future__ import annotations

from collections.abc import Sequence

from .exceptions import SectionNotFoundError

SECTION_GRAPH = "section graph"
SECTION_TERMINALS = "section terminals"


def locate_section(lines: Sequence[str], marker: str) -> int:
    """Return the index of the line following the first ``marker`` line.

    The comparison is case-insensitive on the whole trimmed line, so
    ``"SECTION Graph"`` matches ``"section graph"`` while
    ``"section graph extras"`` does not. Every call scans from the start.

    Raises:
        SectionNotFoundError: If no line matches the marker.

    Example:
        >>> locate_section(["33D32945 STP File", "SECTION Graph", "Nodes 4"], "section graph")
        2
    """
    wanted = marker.strip().casefold()
    for index, line in enumerate(lines):
        if line.strip().casefold() == wanted:
            return index + 1
    raise SectionNotFoundError(marker)
