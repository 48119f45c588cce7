"""High-level entrypoints for the instance file reader library."""

from .data import (
    Graph,
    GraphMatrixData,
    ReaderOptions,
    SetCoverData,
    SetCoverInstance,
    SteinerData,
    SteinerInstance,
    build_graph,
    build_set_cover_instance,
    build_steiner_instance,
    canonical_edge,
    create_graph,
)
from .exceptions import (
    IndexOutOfRangeError,
    InstanceReaderError,
    InvalidInstanceError,
    InvalidTokenError,
    IoFailureError,
    ReaderConfigurationError,
    SectionNotFoundError,
    UnexpectedEndOfInputError,
)
from .graph_matrix import (
    parse_graph_matrix_string,
    read_graph_matrix,
    read_graph_matrix_data,
    read_networkx_graph,
)
from .scanner import split_lines, tokenize
from .sections import SECTION_GRAPH, SECTION_TERMINALS, locate_section
from .set_cover import parse_set_cover_string, read_set_cover_data, read_set_cover_instance
from .steiner import parse_steiner_string, read_steiner_data, read_steiner_instance

__version__ = "0.1.0"

__all__ = [
    # Main API
    "read_set_cover_instance",
    "read_graph_matrix",
    "read_steiner_instance",
    "read_networkx_graph",
    # In-memory sources
    "parse_set_cover_string",
    "parse_graph_matrix_string",
    "parse_steiner_string",
    # Raw data
    "read_set_cover_data",
    "read_graph_matrix_data",
    "read_steiner_data",
    "SetCoverData",
    "GraphMatrixData",
    "SteinerData",
    # Instances and builders
    "Graph",
    "SetCoverInstance",
    "SteinerInstance",
    "build_graph",
    "build_set_cover_instance",
    "build_steiner_instance",
    "canonical_edge",
    "create_graph",
    # Configuration
    "ReaderOptions",
    # Scanning
    "split_lines",
    "tokenize",
    "locate_section",
    "SECTION_GRAPH",
    "SECTION_TERMINALS",
    # Exceptions
    "InstanceReaderError",
    "IoFailureError",
    "SectionNotFoundError",
    "UnexpectedEndOfInputError",
    "InvalidTokenError",
    "IndexOutOfRangeError",
    "InvalidInstanceError",
    "ReaderConfigurationError",
    # Version
    "__version__",
]
