"""Core data structures for combinatorial optimization instances."""

from __future__ import annotations

import codecs
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

import networkx as nx
import numpy as np
from scipy.sparse import csr_matrix

from .exceptions import (
    IndexOutOfRangeError,
    InvalidInstanceError,
    ReaderConfigurationError,
)

Link = tuple[int, int]


def canonical_edge(u: int, v: int) -> Link:
    """Return the undirected pair ``(u, v)`` in ``(min, max)`` order."""
    return (u, v) if u <= v else (v, u)


def _check_count(name: str, value: int) -> None:
    if value < 0:
        raise InvalidInstanceError(f"Number of {name} cannot be negative, got {value}.")


def _check_index(kind: str, value: int, bound: int, line_number: int | None = None) -> None:
    if not 1 <= value <= bound:
        raise IndexOutOfRangeError(kind, value, bound, line_number)


@dataclass(frozen=True)
class ReaderOptions:
    """Options controlling how instance files are read.

    Attributes:
        encoding: Text encoding used to decode files and byte sources (default: "utf-8").
        allow_self_loops: Accept edges/links whose endpoints coincide (default: True).
                          When False, a self-loop raises InvalidInstanceError.
        warn_on_duplicate_links: Log a warning when a Steiner link repeats and its
                                 weight is overwritten (default: True).

    Examples:
        >>> options = ReaderOptions()
        >>> options = ReaderOptions(encoding="latin-1", allow_self_loops=False)
    """

    encoding: str = "utf-8"
    allow_self_loops: bool = True
    warn_on_duplicate_links: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.encoding, str) or not self.encoding:
            raise ReaderConfigurationError(
                f"Encoding must be a non-empty string, got {self.encoding!r}."
            )
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise ReaderConfigurationError(
                f"Unknown encoding '{self.encoding}'. Use a codec name accepted by codecs.lookup()."
            ) from exc


@dataclass
class SetCoverData:
    """Raw set cover data exactly as read from a file.

    ``variable_to_constraints`` is grown by appends while scanning and is
    frozen by build_set_cover_instance().
    """

    num_constraints: int
    num_variables: int
    variable_costs: list[int]
    variable_to_constraints: dict[int, list[int]] = field(default_factory=dict)


@dataclass
class GraphMatrixData:
    """Raw matrix edge-list data: declared counts and canonical edges in file order."""

    num_vertices: int
    num_edges: int
    edges: list[Link]


@dataclass
class SteinerData:
    """Raw Steiner tree data as read from both file sections.

    Attributes:
        num_vertices: Declared number of vertices.
        num_links: Declared number of edges (undirected) or arcs (directed).
        links: Links in file order; canonical pairs for undirected instances,
               (tail, head) pairs for directed ones.
        weights: Weight per link; a repeated link keeps its last weight.
        terminals: Terminal vertices in file order.
        root: Root vertex for directed instances, None otherwise.
        directed: Whether links are arcs.
    """

    num_vertices: int
    num_links: int
    links: list[Link]
    weights: dict[Link, int]
    terminals: list[int]
    root: int | None = None
    directed: bool = False


@dataclass(frozen=True)
class Graph:
    """Simple undirected graph on vertices ``1..num_vertices``.

    Attributes:
        num_vertices: Number of vertices.
        edges: Canonical ``(min, max)`` vertex pairs.

    Use build_graph() to construct a validated instance.
    """

    num_vertices: int
    edges: frozenset[Link]

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    def has_edge(self, u: int, v: int) -> bool:
        return canonical_edge(u, v) in self.edges

    def to_networkx(self) -> nx.Graph:
        """Return a networkx.Graph with every vertex, isolated ones included."""
        return create_graph(self.num_vertices, sorted(self.edges))


@dataclass(frozen=True)
class SetCoverInstance:
    """A weighted set cover instance with 1-based variables and constraints.

    Attributes:
        num_constraints: Number of constraints (elements to cover).
        num_variables: Number of variables (covering sets).
        variable_costs: Cost of variable ``v`` at position ``v - 1``.
        variable_to_constraints: Read-only mapping from every variable to the
                                 constraints it covers, in file order.

    Examples:
        >>> instance = parse_set_cover_string("2 3\\n5 6 7\\n2\\n1 2\\n1\\n3\\n")
        >>> instance.cost_of(2)
        6
        >>> instance.constraints_of(3)
        (2,)
    """

    num_constraints: int
    num_variables: int
    variable_costs: tuple[int, ...]
    variable_to_constraints: Mapping[int, tuple[int, ...]] = field(hash=False)

    def cost_of(self, variable: int) -> int:
        _check_index("variable", variable, self.num_variables)
        return self.variable_costs[variable - 1]

    def constraints_of(self, variable: int) -> tuple[int, ...]:
        _check_index("variable", variable, self.num_variables)
        return self.variable_to_constraints[variable]

    @property
    def num_incidences(self) -> int:
        """Total number of (variable, constraint) pairs, duplicates included."""
        return sum(len(rows) for rows in self.variable_to_constraints.values())

    def constraint_to_variables(self) -> dict[int, tuple[int, ...]]:
        """Invert the incidence mapping: constraint -> covering variables in ascending order."""
        covering: dict[int, list[int]] = {c: [] for c in range(1, self.num_constraints + 1)}
        for variable in range(1, self.num_variables + 1):
            for constraint in self.variable_to_constraints[variable]:
                covering[constraint].append(variable)
        return {c: tuple(vs) for c, vs in covering.items()}

    def uncovered_constraints(self) -> list[int]:
        """Constraints that no variable covers; a non-empty result means infeasible."""
        return [c for c, vs in self.constraint_to_variables().items() if not vs]

    def cost_vector(self) -> np.ndarray:
        return np.asarray(self.variable_costs, dtype=np.int64)

    def incidence_matrix(self) -> csr_matrix:
        """Return the constraint x variable 0/1 matrix used by IP formulations.

        Row ``c - 1`` and column ``v - 1`` hold the number of times ``v`` was
        listed for ``c`` (normally 1).
        """
        rows: list[int] = []
        cols: list[int] = []
        for variable, constraints in self.variable_to_constraints.items():
            for constraint in constraints:
                rows.append(constraint - 1)
                cols.append(variable - 1)
        data = np.ones(len(rows), dtype=np.int64)
        return csr_matrix(
            (data, (rows, cols)), shape=(self.num_constraints, self.num_variables), dtype=np.int64
        )


@dataclass(frozen=True)
class SteinerInstance:
    """A directed or undirected Steiner tree instance.

    Attributes:
        num_vertices: Number of vertices, numbered from 1.
        num_links: Number of edges or arcs listed in the file.
        directed: True when links are arcs (tail, head).
        links: Links in file order; canonical ``(min, max)`` pairs when undirected.
        weights: Read-only mapping with one non-negative weight per distinct link.
        terminals: Vertices the tree must connect.
        root: Source vertex for directed instances, None for undirected ones.
    """

    num_vertices: int
    num_links: int
    directed: bool
    links: tuple[Link, ...]
    weights: Mapping[Link, int] = field(hash=False)
    terminals: frozenset[int]
    root: int | None = None

    @property
    def num_terminals(self) -> int:
        return len(self.terminals)

    def weight_of(self, u: int, v: int) -> int:
        """Return the weight of link ``u -> v`` (either orientation when undirected).

        Raises:
            KeyError: If the link is not in the instance. This is a lookup
                miss, like ``weights[...]``, so it is not an ``InstanceReaderError``.
        """
        key = (u, v) if self.directed else canonical_edge(u, v)
        if key not in self.weights:
            kind = "arc" if self.directed else "edge"
            raise KeyError(f"No {kind} {u} -> {v} in instance")
        return self.weights[key]

    def to_networkx(self) -> nx.Graph:
        """Return a weighted networkx.Graph (or DiGraph when directed).

        Nodes carry a boolean ``terminal`` attribute; the root, when set, is
        stored as the graph attribute ``root``.
        """
        graph = nx.DiGraph() if self.directed else nx.Graph()
        graph.graph["root"] = self.root
        graph.add_nodes_from(
            (vertex, {"terminal": vertex in self.terminals})
            for vertex in range(1, self.num_vertices + 1)
        )
        for (u, v), weight in self.weights.items():
            graph.add_edge(u, v, weight=weight)
        return graph


def create_graph(num_vertices: int, edges: Iterable[Link]) -> nx.Graph:
    """Create a networkx.Graph on vertices ``1..num_vertices`` with the given edges."""
    graph = nx.Graph()
    graph.add_nodes_from(range(1, num_vertices + 1))
    graph.add_edges_from(edges)
    return graph


def build_graph(
    num_vertices: int,
    edges: Iterable[Link],
    allow_self_loops: bool = True,
) -> Graph:
    """Factory helper used by the parsers to assemble a validated Graph.

    Edges are canonicalized and deduplicated; every endpoint must lie in
    ``[1, num_vertices]``.
    """
    _check_count("vertices", num_vertices)
    canonical: set[Link] = set()
    for u, v in edges:
        _check_index("vertex", u, num_vertices)
        _check_index("vertex", v, num_vertices)
        if u == v and not allow_self_loops:
            raise InvalidInstanceError(f"Self-loop on vertex {u} is not allowed.")
        canonical.add(canonical_edge(u, v))
    return Graph(num_vertices=num_vertices, edges=frozenset(canonical))


def build_set_cover_instance(
    num_constraints: int,
    num_variables: int,
    variable_costs: Sequence[int],
    variable_to_constraints: Mapping[int, Sequence[int]],
) -> SetCoverInstance:
    """Validate raw set cover data and freeze it into a SetCoverInstance.

    Variables missing from ``variable_to_constraints`` cover nothing.

    Raises:
        InvalidInstanceError: If counts are negative or the cost count is wrong.
        IndexOutOfRangeError: If a variable or constraint index is out of range.
    """
    _check_count("constraints", num_constraints)
    _check_count("variables", num_variables)
    if len(variable_costs) != num_variables:
        raise InvalidInstanceError(
            f"Expected {num_variables} variable costs, got {len(variable_costs)}."
        )
    for variable, constraints in variable_to_constraints.items():
        _check_index("variable", variable, num_variables)
        for constraint in constraints:
            _check_index("constraint", constraint, num_constraints)

    frozen = {
        variable: tuple(variable_to_constraints.get(variable, ()))
        for variable in range(1, num_variables + 1)
    }
    return SetCoverInstance(
        num_constraints=num_constraints,
        num_variables=num_variables,
        variable_costs=tuple(variable_costs),
        variable_to_constraints=MappingProxyType(frozen),
    )


def build_steiner_instance(
    num_vertices: int,
    links: Sequence[Link],
    weights: Mapping[Link, int],
    terminals: Iterable[int],
    directed: bool,
    root: int | None = None,
    num_links: int | None = None,
    allow_self_loops: bool = True,
) -> SteinerInstance:
    """Validate raw Steiner tree data and freeze it into a SteinerInstance.

    Undirected links and weight keys are canonicalized here as well, so data
    assembled by hand gets the same guarantees as parsed files.

    Raises:
        InvalidInstanceError: On count mismatches, negative weights, weights that
                              do not match the links, or a root on the wrong variant.
        IndexOutOfRangeError: If a link endpoint, terminal or root is out of range.
    """
    _check_count("vertices", num_vertices)
    if num_links is None:
        num_links = len(links)
    if num_links != len(links):
        raise InvalidInstanceError(
            f"Declared {num_links} links but {len(links)} were provided."
        )

    stored: list[Link] = []
    for u, v in links:
        _check_index("vertex", u, num_vertices)
        _check_index("vertex", v, num_vertices)
        if u == v and not allow_self_loops:
            raise InvalidInstanceError(f"Self-loop on vertex {u} is not allowed.")
        stored.append((u, v) if directed else canonical_edge(u, v))

    weight_map: dict[Link, int] = {}
    for (u, v), weight in weights.items():
        if weight < 0:
            raise InvalidInstanceError(f"Link ({u}, {v}) has negative weight {weight}.")
        weight_map[(u, v) if directed else canonical_edge(u, v)] = int(weight)
    if set(weight_map) != set(stored):
        missing = sorted(set(stored) - set(weight_map))
        extra = sorted(set(weight_map) - set(stored))
        raise InvalidInstanceError(
            f"Weights must have exactly one entry per link. "
            f"Links without weight: {missing}; weights without link: {extra}."
        )

    terminal_set = frozenset(terminals)
    for terminal in sorted(terminal_set):
        _check_index("terminal", terminal, num_vertices)

    if directed:
        if root is None:
            raise InvalidInstanceError("Directed Steiner instances require a root vertex.")
        _check_index("root", root, num_vertices)
    elif root is not None:
        raise InvalidInstanceError("Undirected Steiner instances do not have a root vertex.")

    return SteinerInstance(
        num_vertices=num_vertices,
        num_links=num_links,
        directed=directed,
        links=tuple(stored),
        weights=MappingProxyType(weight_map),
        terminals=terminal_set,
        root=root,
    )
