"""Tests for the lazy Dijkstra iterator."""

from __future__ import annotations

import io
import operator
import random
from fractions import Fraction
from functools import total_ordering

import pytest

from lazysssp import (
    DijkstraIter,
    FunctionCost,
    Graph,
    Intermediates,
    NodeNotFound,
    NodeNotFoundError,
    StdLogger,
    WeightCost,
)
from lazysssp.connections import both, outgoing


def _search(graph, source, mode=Intermediates.RECORD, **kwargs):
    connections = outgoing(graph) if graph.directed else both(graph)
    return DijkstraIter(graph, WeightCost(), connections, source, intermediates=mode, **kwargs)


def _bellman_ford(graph, source):
    dist = {source: 0}
    for _ in range(graph.num_nodes()):
        changed = False
        for e in graph.edges():
            if e.source in dist and dist[e.source] + e.weight < dist.get(e.target, float("inf")):
                dist[e.target] = dist[e.source] + e.weight
                changed = True
        if not changed:
            break
    return dist


def _random_graph(seed, n=12, m=30):
    rnd = random.Random(seed)
    edges = [(rnd.randrange(n), rnd.randrange(n), rnd.randint(0, 9)) for _ in range(m)]
    return Graph.from_edges(edges, nodes=range(n))


def test_scenario_emission_order_and_costs(diamond):
    routes = list(_search(diamond, "A"))

    assert [(r.target.id, r.cost) for r in routes] == [("A", 0), ("B", 1), ("C", 3), ("D", 4)]
    assert [n.id for n in routes[-1].path.intermediates] == ["B", "C"]
    assert routes[-1].path.ids() == ["A", "B", "C", "D"]


def test_isolated_node_is_never_emitted(diamond):
    routes = list(_search(diamond, "A"))
    assert len(routes) == 4
    assert "E" not in {r.target.id for r in routes}


def test_isolated_source_yields_only_itself(diamond):
    routes = list(_search(diamond, "E"))
    assert [(r.target.id, r.cost) for r in routes] == [("E", 0)]


def test_missing_source_raises(diamond):
    with pytest.raises(NodeNotFoundError, match="'Z'"):
        _search(diamond, "Z")
    assert NodeNotFound is NodeNotFoundError


def test_first_route_is_source_without_exploring(diamond):
    it = _search(diamond, "A")
    first = next(it)

    assert first.source.id == first.target.id == "A"
    assert first.cost == 0
    assert first.path.intermediates == []
    assert it.summary()["edges_scanned"] == 0


def test_target_edges_are_not_scanned_before_target_is_returned(diamond):
    it = _search(diamond, "A")
    next(it)
    route = next(it)

    assert route.target.id == "B"
    # only the two edges of A have been looked at; B's edges wait for the next pull
    assert it.summary()["edges_scanned"] == 2

    next(it)
    assert it.summary()["edges_scanned"] == 2 + 2


def test_discard_mode_matches_costs_without_intermediates(diamond):
    recorded = list(_search(diamond, "A", Intermediates.RECORD))
    discarded_it = _search(diamond, "A", Intermediates.DISCARD)
    discarded = list(discarded_it)

    assert [(r.target.id, r.cost) for r in discarded] == [(r.target.id, r.cost) for r in recorded]
    assert all(r.path.intermediates == [] for r in discarded)
    assert discarded_it.previous == {}


def test_size_hint_is_bounded_by_node_count(diamond):
    it = _search(diamond, "A")
    assert it.size_hint() == (0, 5)
    assert operator.length_hint(it) == 5
    next(it)
    assert operator.length_hint(it) == 4


def test_exhausted_iterator_stays_exhausted(chain):
    it = _search(chain, "A")
    list(it)
    with pytest.raises(StopIteration):
        next(it)
    with pytest.raises(StopIteration):
        next(it)


def test_stale_entries_are_skipped(chain):
    it = _search(chain, "A")
    routes = list(it)

    assert [(r.target.id, r.cost) for r in routes] == [("A", 0), ("B", 1), ("C", 2)]
    summary = it.summary()
    assert summary["stale_pops"] == 1
    assert summary["nodes_finalized"] == 3
    assert summary["relaxations"] == 3


def test_directed_search_does_not_walk_edges_backwards(chain):
    assert [r.target.id for r in _search(chain, "C")] == ["C"]


def test_equal_costs_come_out_in_discovery_order():
    g = Graph.from_edges([("hub", "x", 1), ("hub", "y", 1), ("hub", "z", 1)])
    assert [r.target.id for r in _search(g, "hub")] == ["hub", "x", "y", "z"]


def test_zero_weight_edges_and_self_loops():
    g = Graph.from_edges([(0, 0, 3), (0, 1, 0), (1, 0, 0), (1, 2, 0)])
    routes = list(_search(g, 0))
    assert [(r.target.id, r.cost) for r in routes] == [(0, 0), (1, 0), (2, 0)]


@pytest.mark.parametrize("seed", range(8))
def test_distances_match_exhaustive_relaxation(seed):
    g = _random_graph(seed)
    expected = _bellman_ford(g, 0)

    routes = list(_search(g, 0))
    costs = [r.cost for r in routes]

    assert {r.target.id: r.cost for r in routes} == expected
    assert len(routes) == len(expected)
    assert costs == sorted(costs)


@pytest.mark.parametrize("seed", range(4))
def test_recorded_paths_add_up_to_route_cost(seed):
    g = _random_graph(seed)
    weights = {}
    for e in g.edges():
        key = (e.source, e.target)
        weights[key] = min(weights.get(key, e.weight), e.weight)

    for route in _search(g, 0):
        ids = route.path.ids()
        assert ids[0] == 0 and ids[-1] == route.target.id
        assert sum(weights[(u, v)] for u, v in zip(ids, ids[1:])) == route.cost


def test_independent_searches_are_identical():
    g = _random_graph(42)
    first = [(r.target.id, r.cost, r.path.ids()) for r in _search(g, 0)]
    second = [(r.target.id, r.cost, r.path.ids()) for r in _search(g, 0)]
    assert first == second


def test_fraction_costs():
    g = Graph.from_edges([("a", "b", Fraction(1, 3)), ("b", "c", Fraction(1, 6)), ("a", "c", Fraction(2, 3))])
    cost = WeightCost(zero=Fraction(0))
    routes = list(DijkstraIter(g, cost, outgoing(g), "a"))
    assert routes[-1].cost == Fraction(1, 2)
    assert routes[-1].path.ids() == ["a", "b", "c"]


@total_ordering
class Capped:
    """Saturating cost that never exceeds ``limit``."""

    limit = 10

    def __init__(self, value):
        self.value = min(value, self.limit)

    def __add__(self, other):
        return Capped(self.value + other.value)

    def __eq__(self, other):
        return isinstance(other, Capped) and self.value == other.value

    def __lt__(self, other):
        return self.value < other.value

    def __repr__(self):
        return f"Capped({self.value})"


def test_custom_cost_type():
    g = Graph.from_edges([(0, 1, 8), (1, 2, 8), (0, 3, 1)])
    cost = FunctionCost(lambda e: Capped(e.weight), zero=Capped(0))
    routes = list(DijkstraIter(g, cost, outgoing(g), 0))

    assert [(r.target.id, r.cost) for r in routes] == [
        (0, Capped(0)),
        (3, Capped(1)),
        (1, Capped(8)),
        (2, Capped(10)),
    ]


def test_debug_logging_reports_start_and_exhaustion(chain):
    stream = io.StringIO()
    it = _search(chain, "A", logger=StdLogger(level="debug", stream=stream))
    list(it)

    lines = stream.getvalue().splitlines()
    assert lines[0].startswith("debug dijkstra.start source=A")
    assert lines[-1].startswith("debug dijkstra.exhausted source=A")
    assert "stale_pops=1" in lines[-1]


def test_metrics_snapshot(chain):
    it = _search(chain, "A")
    list(it)
    m = it.metrics(wall_ms=1.5)
    assert (m.n, m.m, m.source, m.intermediates, m.wall_ms) == (3, 3, "A", "record", 1.5)
    assert m.counters["routes_emitted"] == 3
