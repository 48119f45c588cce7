"""Sparse-matrix edge-list graph parser (``.mtx`` style files).

Format::

    %%MatrixMarket matrix coordinate pattern symmetric     (ignored)
    <ignored> <num_vertices> <num_edges>
    <u> <v>
    ...

Each of the ``num_edges`` lines names two 1-based vertices; any further
fields on an edge line (a stored matrix value, for instance) are ignored.
"""

from __future__ import annotations

import logging
import os

import networkx as nx

from .data import (
    Graph,
    GraphMatrixData,
    ReaderOptions,
    build_graph,
    canonical_edge,
)
from .exceptions import IndexOutOfRangeError, InvalidInstanceError
from .io import decode_source, read_source_lines
from .scanner import LineCursor

logger = logging.getLogger(__name__)


def parse_graph_matrix_lines(
    lines: list[str], options: ReaderOptions | None = None
) -> GraphMatrixData:
    """Parse trimmed matrix edge-list lines into raw data with canonical edges."""
    options = options or ReaderOptions()
    cursor = LineCursor(lines)
    cursor.next_line("header line")

    sizes = cursor.next_fields("size line")
    num_vertices = cursor.field_int(sizes, 1, "number of vertices")
    num_edges = cursor.field_int(sizes, 2, "number of edges")
    if num_vertices < 0 or num_edges < 0:
        raise InvalidInstanceError(
            f"Counts cannot be negative, got {num_vertices} vertices and {num_edges} edges.",
            cursor.line_number,
        )

    edges = []
    for index in range(1, num_edges + 1):
        context = f"edge {index}"
        fields = cursor.next_fields(context)
        u = cursor.field_int(fields, 0, context)
        v = cursor.field_int(fields, 1, context)
        for vertex in (u, v):
            if not 1 <= vertex <= num_vertices:
                raise IndexOutOfRangeError("vertex", vertex, num_vertices, cursor.line_number)
        if u == v and not options.allow_self_loops:
            raise InvalidInstanceError(f"Self-loop on vertex {u} is not allowed.", cursor.line_number)
        edges.append(canonical_edge(u, v))

    return GraphMatrixData(num_vertices=num_vertices, num_edges=num_edges, edges=edges)


def _build(data: GraphMatrixData, options: ReaderOptions) -> Graph:
    return build_graph(data.num_vertices, data.edges, allow_self_loops=options.allow_self_loops)


def parse_graph_matrix_string(content: str | bytes, options: ReaderOptions | None = None) -> Graph:
    """Parse a matrix edge-list graph held in memory."""
    options = options or ReaderOptions()
    lines = decode_source(content, options.encoding)
    return _build(parse_graph_matrix_lines(lines, options), options)


def read_graph_matrix_data(
    path: str | os.PathLike[str], options: ReaderOptions | None = None
) -> GraphMatrixData:
    """Read declared counts and the canonical edge list (file order, duplicates kept)."""
    options = options or ReaderOptions()
    lines = read_source_lines(path, options.encoding)
    return parse_graph_matrix_lines(lines, options)


def read_graph_matrix(path: str | os.PathLike[str], options: ReaderOptions | None = None) -> Graph:
    """Read an undirected graph stored in matrix edge-list format.

    Raises:
        IoFailureError: If the file cannot be read.
        UnexpectedEndOfInputError: If fewer edge lines exist than declared.
        InvalidTokenError: If a count or endpoint is not an integer.
        IndexOutOfRangeError: If an endpoint lies outside [1, num_vertices].
    """
    options = options or ReaderOptions()
    data = read_graph_matrix_data(path, options)
    graph = _build(data, options)
    if graph.num_edges != data.num_edges:
        logger.debug(f"Collapsed {data.num_edges - graph.num_edges} duplicate edges in {path}")
    logger.info(
        f"Parsed graph {path}: {graph.num_vertices} vertices, {graph.num_edges} edges"
    )
    return graph


def read_networkx_graph(
    path: str | os.PathLike[str], options: ReaderOptions | None = None
) -> nx.Graph:
    """Read a matrix edge-list file straight into a networkx.Graph."""
    return read_graph_matrix(path, options).to_networkx()
