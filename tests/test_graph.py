from decimal import Decimal

import pytest

from lazysssp import GraphFormatError, InputError
from lazysssp.graph import Graph


def test_nodes_get_dense_indices_in_insertion_order():
    g = Graph()
    a = g.add_node("a")
    b = g.add_node("b", weight={"label": "B"})

    assert (a.index, b.index) == (0, 1)
    assert g.node("b").weight == {"label": "B"}
    assert g.index_of("b") == 1
    assert g.node("zzz") is None
    assert "a" in g and "zzz" not in g


def test_duplicate_node_rejected():
    g = Graph()
    g.add_node(1)
    with pytest.raises(InputError):
        g.add_node(1)


def test_edge_requires_known_endpoints():
    g = Graph()
    g.add_node(0)
    with pytest.raises(InputError):
        g.add_edge(0, 1, 1.0)


def test_negative_weight_rejected():
    g = Graph.from_edges([], nodes=[0, 1])
    with pytest.raises(GraphFormatError, match="negative weight"):
        g.add_edge(0, 1, -1)


def test_negative_decimal_weight_rejected():
    g = Graph.from_edges([], nodes=[0, 1])
    with pytest.raises(GraphFormatError, match="negative weight"):
        g.add_edge(0, 1, Decimal("-1"))


@pytest.mark.parametrize(
    "w", [float("nan"), float("inf"), float("-inf"), Decimal("NaN"), Decimal("Infinity")]
)
def test_non_finite_weight_rejected(w):
    g = Graph.from_edges([], nodes=[0, 1])
    with pytest.raises(GraphFormatError, match="non-finite weight"):
        g.add_edge(0, 1, w)


def test_decimal_weight_accepted():
    g = Graph.from_edges([(0, 1, Decimal("2.5"))])
    assert [e.weight for e in g.edges()] == [Decimal("2.5")]


def test_directed_adjacency():
    g = Graph.from_edges([(0, 1, 1), (2, 1, 1), (1, 1, 4)])

    assert [e.endpoints() for e in g.outgoing(1)] == [(1, 1)]
    assert [e.endpoints() for e in g.incoming(1)] == [(0, 1), (2, 1), (1, 1)]
    # the self-loop is listed once
    assert len(g.incident(1)) == 3
    assert g.out_degree(0) == 1


def test_undirected_adjacency_uses_incident_edges():
    g = Graph.from_edges([(0, 1, 1), (2, 0, 1)], directed=False)
    assert g.outgoing(0) == g.incoming(0) == g.incident(0)
    assert len(g.outgoing(0)) == 2


def test_index_of_unknown_node():
    with pytest.raises(InputError):
        Graph().index_of("nope")


def test_counts_and_repr():
    g = Graph.from_edges([("x", "y", 2)], nodes=["z"])
    assert g.num_nodes() == 3
    assert g.num_edges() == 1
    assert [n.id for n in g.nodes()] == ["z", "x", "y"]
    assert repr(g) == "Graph(directed, nodes=3, edges=1)"
