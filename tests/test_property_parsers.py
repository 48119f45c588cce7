import sys
from pathlib import Path
from typing import List, Tuple

import pytest

hypothesis = pytest.importorskip("hypothesis")
from hypothesis import given, settings  # type: ignore  # noqa: E402
from hypothesis import strategies as st  # type: ignore  # noqa: E402

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from instance_reader.graph_matrix import parse_graph_matrix_string  # noqa: E402
from instance_reader.set_cover import parse_set_cover_string  # noqa: E402
from instance_reader.steiner import parse_steiner_string  # noqa: E402


def _wrap(values: List[int], width: int) -> List[str]:
    return [" ".join(str(v) for v in values[i : i + width]) for i in range(0, len(values), width)]


@st.composite
def _set_cover_inputs(draw) -> Tuple[str, List[int], List[List[int]]]:
    num_variables = draw(st.integers(min_value=1, max_value=8))
    num_constraints = draw(st.integers(min_value=1, max_value=6))
    width = draw(st.integers(min_value=1, max_value=4))
    cost = st.integers(min_value=0, max_value=100)
    costs = draw(st.lists(cost, min_size=num_variables, max_size=num_variables))
    rows = draw(
        st.lists(
            st.lists(st.integers(min_value=1, max_value=num_variables), max_size=5),
            min_size=num_constraints,
            max_size=num_constraints,
        )
    )
    lines = [f"{num_constraints} {num_variables}"] + _wrap(costs, width)
    for row in rows:
        lines.append(str(len(row)))
        lines.extend(_wrap(row, width))
    return "\n".join(lines) + "\n", costs, rows


@st.composite
def _steiner_inputs(draw):
    directed = draw(st.booleans())
    num_vertices = draw(st.integers(min_value=2, max_value=8))
    vertex = st.integers(min_value=1, max_value=num_vertices)
    links = draw(st.lists(st.tuples(vertex, vertex, st.integers(min_value=0, max_value=50)), max_size=10))
    terminals = draw(st.lists(vertex, max_size=5))
    root = draw(vertex)
    gap = st.sampled_from([" ", "  ", "\t", " \t "])

    kind = "Arcs" if directed else "Edges"
    graph_block = ["SECTION Graph", f"Nodes {num_vertices}", f"{kind} {len(links)}"]
    for u, v, w in links:
        graph_block.append(f"E{draw(gap)}{u}{draw(gap)}{v}{draw(gap)}{w}")
    graph_block.append("END")

    terminal_block = ["SECTION Terminals", f"Terminals {len(terminals)}"]
    if directed:
        terminal_block.append(f"Root {root}")
    terminal_block.extend(f"T{draw(gap)}{t}" for t in terminals)
    terminal_block.append("END")

    return directed, num_vertices, links, terminals, root, graph_block, terminal_block


@settings(max_examples=75, deadline=None)
@given(_set_cover_inputs())
def test_set_cover_costs_and_incidence_transpose(case):
    text, costs, rows = case
    instance = parse_set_cover_string(text)

    assert len(instance.variable_costs) == instance.num_variables
    assert list(instance.variable_costs) == costs
    for variable in range(1, instance.num_variables + 1):
        expected = [c for c, row in enumerate(rows, start=1) for v in row if v == variable]
        assert list(instance.variable_to_constraints[variable]) == expected
    assert instance.num_incidences == sum(len(row) for row in rows)
    assert parse_set_cover_string(text) == instance


@settings(max_examples=75, deadline=None)
@given(st.lists(st.tuples(st.integers(1, 6), st.integers(1, 6)), max_size=12))
def test_graph_edges_are_canonical(edges):
    text = "% random\nX 6 {}\n{}\n".format(len(edges), "\n".join(f"{u} {v}" for u, v in edges))
    graph = parse_graph_matrix_string(text)

    assert graph.edges == frozenset((min(u, v), max(u, v)) for u, v in edges)
    assert all(u <= v for u, v in graph.edges)


@settings(max_examples=75, deadline=None)
@given(_steiner_inputs())
def test_steiner_links_and_section_independence(case):
    directed, num_vertices, links, terminals, root, graph_block, terminal_block = case
    forward = parse_steiner_string("\n".join(graph_block + terminal_block), directed=directed)
    backward = parse_steiner_string("\n".join(terminal_block + graph_block), directed=directed)

    assert forward == backward

    expected_links = [(u, v) if directed else (min(u, v), max(u, v)) for u, v, _ in links]
    assert list(forward.links) == expected_links
    expected_weights = {}
    for link, (_, _, w) in zip(expected_links, links):
        expected_weights[link] = w
    assert dict(forward.weights) == expected_weights
    assert forward.terminals == frozenset(terminals)
    assert forward.root == (root if directed else None)
