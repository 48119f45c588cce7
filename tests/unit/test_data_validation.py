import dataclasses
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from instance_reader.data import (  # noqa: E402
    build_graph,
    build_set_cover_instance,
    build_steiner_instance,
    canonical_edge,
    create_graph,
)
from instance_reader.exceptions import IndexOutOfRangeError, InvalidInstanceError  # noqa: E402

# These tests exercise the builders directly, the path taken by callers that
# assemble instances from data they did not read from a file.


def test_canonical_edge_orders_endpoints():
    assert canonical_edge(4, 2) == (2, 4)
    assert canonical_edge(2, 4) == (2, 4)
    assert canonical_edge(3, 3) == (3, 3)


def test_build_graph_canonicalizes_and_deduplicates():
    graph = build_graph(4, [(2, 1), (1, 2), (4, 3)])
    assert graph.edges == frozenset({(1, 2), (3, 4)})


def test_build_graph_rejects_out_of_range_endpoint():
    with pytest.raises(IndexOutOfRangeError) as excinfo:
        build_graph(3, [(1, 4)])
    assert excinfo.value.line_number is None
    assert "Vertex index 4" in str(excinfo.value)


def test_build_graph_rejects_negative_vertex_count():
    with pytest.raises(InvalidInstanceError, match="cannot be negative"):
        build_graph(-1, [])


def test_build_graph_rejects_self_loops_when_disallowed():
    with pytest.raises(InvalidInstanceError, match="Self-loop"):
        build_graph(2, [(1, 1)], allow_self_loops=False)


def test_graph_is_immutable():
    graph = build_graph(2, [(1, 2)])
    with pytest.raises(dataclasses.FrozenInstanceError):
        graph.num_vertices = 3


def test_create_graph_includes_every_vertex():
    graph = create_graph(3, [(1, 2)])
    assert sorted(graph.nodes) == [1, 2, 3]


def test_build_set_cover_fills_missing_variables():
    instance = build_set_cover_instance(2, 3, [1, 2, 3], {2: [1, 2]})
    assert dict(instance.variable_to_constraints) == {1: (), 2: (1, 2), 3: ()}


def test_build_set_cover_rejects_wrong_cost_count():
    with pytest.raises(InvalidInstanceError, match="Expected 3 variable costs, got 2"):
        build_set_cover_instance(1, 3, [1, 2], {})


def test_build_set_cover_rejects_constraint_out_of_range():
    with pytest.raises(IndexOutOfRangeError) as excinfo:
        build_set_cover_instance(2, 1, [1], {1: [3]})
    assert excinfo.value.kind == "constraint"


def test_build_set_cover_rejects_variable_out_of_range():
    with pytest.raises(IndexOutOfRangeError) as excinfo:
        build_set_cover_instance(2, 1, [1], {2: [1]})
    assert excinfo.value.kind == "variable"


def test_set_cover_mapping_is_read_only():
    source = {1: [1]}
    instance = build_set_cover_instance(1, 1, [4], source)
    with pytest.raises(TypeError):
        instance.variable_to_constraints[1] = (2,)

    # Later changes to the caller's lists do not leak into the instance.
    source[1].append(1)
    assert instance.variable_to_constraints[1] == (1,)


def test_build_steiner_canonicalizes_undirected_weights():
    instance = build_steiner_instance(3, [(3, 1)], {(3, 1): 4}, [1, 3], directed=False)
    assert instance.links == ((1, 3),)
    assert dict(instance.weights) == {(1, 3): 4}
    assert instance.num_links == 1


def test_build_steiner_requires_root_for_directed():
    with pytest.raises(InvalidInstanceError, match="require a root"):
        build_steiner_instance(2, [(1, 2)], {(1, 2): 1}, [2], directed=True)


def test_build_steiner_rejects_root_for_undirected():
    with pytest.raises(InvalidInstanceError, match="do not have a root"):
        build_steiner_instance(2, [(1, 2)], {(1, 2): 1}, [2], directed=False, root=1)


def test_build_steiner_rejects_weight_mismatch():
    with pytest.raises(InvalidInstanceError, match="exactly one entry per link"):
        build_steiner_instance(3, [(1, 2)], {(1, 2): 1, (2, 3): 1}, [], directed=False)
    with pytest.raises(InvalidInstanceError, match="exactly one entry per link"):
        build_steiner_instance(3, [(1, 2)], {(2, 1): 1}, [], directed=True, root=1)


def test_build_steiner_rejects_link_count_mismatch():
    with pytest.raises(InvalidInstanceError, match="Declared 2 links"):
        build_steiner_instance(2, [(1, 2)], {(1, 2): 1}, [], directed=False, num_links=2)


def test_build_steiner_rejects_negative_weight():
    with pytest.raises(InvalidInstanceError, match="negative weight"):
        build_steiner_instance(2, [(1, 2)], {(1, 2): -1}, [], directed=False)


def test_build_steiner_validates_terminals_and_root():
    with pytest.raises(IndexOutOfRangeError) as excinfo:
        build_steiner_instance(2, [(1, 2)], {(1, 2): 1}, [3], directed=False)
    assert excinfo.value.kind == "terminal"

    with pytest.raises(IndexOutOfRangeError) as excinfo:
        build_steiner_instance(2, [(1, 2)], {(1, 2): 1}, [2], directed=True, root=0)
    assert excinfo.value.kind == "root"


def test_build_steiner_deduplicates_terminals():
    instance = build_steiner_instance(2, [(1, 2)], {(1, 2): 1}, [2, 2, 1], directed=False)
    assert instance.terminals == frozenset({1, 2})
    assert instance.num_terminals == 2


def test_instances_are_hashable():
    scp = build_set_cover_instance(2, 2, [3, 4], {1: [1], 2: [2]})
    same_scp = build_set_cover_instance(2, 2, [3, 4], {1: [1], 2: [2]})
    stp = build_steiner_instance(3, [(2, 1), (2, 3)], {(1, 2): 4, (2, 3): 1}, [1, 3], directed=False)

    assert hash(scp) == hash(same_scp)
    assert len({scp, same_scp, stp}) == 2

    # Mappings are left out of the hash but still compared for equality.
    other_incidence = build_set_cover_instance(2, 2, [3, 4], {1: [2], 2: [1]})
    assert other_incidence != scp
    assert len({scp, other_incidence}) == 2
