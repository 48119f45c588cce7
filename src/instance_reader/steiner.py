"""Steiner tree problem parser for undirected and directed SteinLib-style files.

Both variants share one grammar and differ only in link orientation and the
root line. Only the two sections below are read; everything else in the file
(comments, coordinates, ``EOF``) is ignored::

    SECTION Graph
    Nodes <num_vertices>
    Edges <num_links>            (Arcs for directed files)
    E <u> <v> <weight>           (A <tail> <head> <weight> for directed files)
    ...
    END

    SECTION Terminals
    Terminals <num_terminals>
    Root <root>                  (directed files only)
    T <vertex>
    ...
    END

The leading label of every line is not checked. Each section is located by
its own scan from the start of the file, so the order of the two sections
does not matter.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence

from .data import Link, ReaderOptions, SteinerData, SteinerInstance, build_steiner_instance, canonical_edge
from .exceptions import IndexOutOfRangeError, InvalidInstanceError
from .io import decode_source, read_source_lines
from .scanner import LineCursor
from .sections import SECTION_GRAPH, SECTION_TERMINALS, locate_section

logger = logging.getLogger(__name__)


def _check_vertex(cursor: LineCursor, kind: str, value: int, num_vertices: int) -> None:
    if not 1 <= value <= num_vertices:
        raise IndexOutOfRangeError(kind, value, num_vertices, cursor.line_number)


def _read_count(cursor: LineCursor, context: str) -> int:
    fields = cursor.next_fields(context)
    value = cursor.field_int(fields, 1, context)
    if value < 0:
        raise InvalidInstanceError(f"The {context} cannot be negative, got {value}.", cursor.line_number)
    return value


def _read_graph_section(
    lines: Sequence[str], directed: bool, options: ReaderOptions
) -> tuple[int, int, list[Link], dict[Link, int]]:
    start = locate_section(lines, SECTION_GRAPH)
    logger.debug(f"Found '{SECTION_GRAPH}' at line {start}")
    cursor = LineCursor(lines, start)
    kind = "arc" if directed else "edge"

    num_vertices = _read_count(cursor, "number of vertices")
    num_links = _read_count(cursor, f"number of {kind}s")

    links: list[Link] = []
    weights: dict[Link, int] = {}
    for index in range(1, num_links + 1):
        context = f"{kind} {index}"
        fields = cursor.next_fields(context)
        u = cursor.field_int(fields, 1, context)
        v = cursor.field_int(fields, 2, context)
        weight = cursor.field_int(fields, 3, context)
        _check_vertex(cursor, "vertex", u, num_vertices)
        _check_vertex(cursor, "vertex", v, num_vertices)
        if u == v and not options.allow_self_loops:
            raise InvalidInstanceError(f"Self-loop on vertex {u} is not allowed.", cursor.line_number)
        if weight < 0:
            raise InvalidInstanceError(
                f"{kind.capitalize()} ({u}, {v}) has negative weight {weight}.", cursor.line_number
            )

        link = (u, v) if directed else canonical_edge(u, v)
        if link in weights and options.warn_on_duplicate_links:
            logger.warning(
                f"Line {cursor.line_number}: {kind} {link} repeated; weight "
                f"{weights[link]} replaced by {weight}"
            )
        links.append(link)
        weights[link] = weight

    return num_vertices, num_links, links, weights


def _read_terminals_section(
    lines: Sequence[str], directed: bool, num_vertices: int
) -> tuple[list[int], int | None]:
    start = locate_section(lines, SECTION_TERMINALS)
    logger.debug(f"Found '{SECTION_TERMINALS}' at line {start}")
    cursor = LineCursor(lines, start)

    num_terminals = _read_count(cursor, "number of terminals")

    root = None
    if directed:
        fields = cursor.next_fields("root")
        root = cursor.field_int(fields, 1, "root")
        _check_vertex(cursor, "root", root, num_vertices)

    terminals = []
    for index in range(1, num_terminals + 1):
        context = f"terminal {index}"
        fields = cursor.next_fields(context)
        terminal = cursor.field_int(fields, 1, context)
        _check_vertex(cursor, "terminal", terminal, num_vertices)
        terminals.append(terminal)

    return terminals, root


def parse_steiner_lines(
    lines: Sequence[str], directed: bool, options: ReaderOptions | None = None
) -> SteinerData:
    """Parse the graph and terminals sections of trimmed Steiner tree lines.

    Raises:
        SectionNotFoundError: If either section marker is missing.
        UnexpectedEndOfInputError: If a section ends before its declared content.
        InvalidTokenError: If a count, endpoint, weight or terminal is not an integer.
        IndexOutOfRangeError: If a vertex, terminal or root lies outside [1, num_vertices].
        InvalidInstanceError: On negative counts or weights, or disallowed self-loops.
    """
    options = options or ReaderOptions()
    num_vertices, num_links, links, weights = _read_graph_section(lines, directed, options)
    terminals, root = _read_terminals_section(lines, directed, num_vertices)
    return SteinerData(
        num_vertices=num_vertices,
        num_links=num_links,
        links=links,
        weights=weights,
        terminals=terminals,
        root=root,
        directed=directed,
    )


def _build(data: SteinerData, options: ReaderOptions) -> SteinerInstance:
    return build_steiner_instance(
        num_vertices=data.num_vertices,
        links=data.links,
        weights=data.weights,
        terminals=data.terminals,
        directed=data.directed,
        root=data.root,
        num_links=data.num_links,
        allow_self_loops=options.allow_self_loops,
    )


def parse_steiner_string(
    content: str | bytes, directed: bool, options: ReaderOptions | None = None
) -> SteinerInstance:
    """Parse a Steiner tree instance held in memory."""
    options = options or ReaderOptions()
    lines = decode_source(content, options.encoding)
    return _build(parse_steiner_lines(lines, directed, options), options)


def read_steiner_data(
    path: str | os.PathLike[str], directed: bool, options: ReaderOptions | None = None
) -> SteinerData:
    """Read raw Steiner tree data (links and terminals in file order) from a file."""
    options = options or ReaderOptions()
    return parse_steiner_lines(read_source_lines(path, options.encoding), directed, options)


def read_steiner_instance(
    path: str | os.PathLike[str], directed: bool, options: ReaderOptions | None = None
) -> SteinerInstance:
    """Read a directed or undirected Steiner tree instance from a file.

    Args:
        path: Path to the instance file.
        directed: True for arc-based files with a ``Root`` line, False for edge-based files.
        options: Reader options; defaults to ReaderOptions().

    Returns:
        Validated, immutable SteinerInstance. Undirected links are stored as
        ``(min, max)`` pairs; directed links keep their (tail, head) order.

    Example:
        >>> instance = read_steiner_instance("b01.stp", directed=False)
        >>> instance.num_vertices, instance.num_links, instance.num_terminals
        (50, 63, 9)
    """
    options = options or ReaderOptions()
    instance = _build(read_steiner_data(path, directed, options), options)
    logger.info(
        f"Parsed {'directed' if directed else 'undirected'} Steiner instance {path}: "
        f"{instance.num_vertices} vertices, {instance.num_links} links, "
        f"{instance.num_terminals} terminals"
    )
    return instance
