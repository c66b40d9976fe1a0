import json

from lazysssp import Dijkstra
from lazysssp.export import export_tree_graphml, export_tree_json, shortest_path_tree


def test_tree_edges_follow_last_hop(diamond):
    routes = list(Dijkstra.undirected().path_from(diamond, "A"))
    assert shortest_path_tree(routes) == [("A", "B"), ("B", "C"), ("C", "D")]


def test_tree_uses_cheapest_parent_not_direct_edge(chain):
    routes = list(Dijkstra.directed().path_from(chain, "A"))
    assert shortest_path_tree(routes) == [("A", "B"), ("B", "C")]


def test_export_json_marks_unreached_nodes(diamond):
    routes = list(Dijkstra.undirected().path_from(diamond, "A"))
    data = json.loads(export_tree_json(diamond, routes))

    assert data["directed"] is False
    assert {n["id"]: n["distance"] for n in data["nodes"]} == {
        "A": 0,
        "B": 1,
        "C": 3,
        "D": 4,
        "E": None,
    }
    assert len(data["edges"]) == 3


def test_export_graphml(diamond):
    routes = list(Dijkstra.undirected().path_from(diamond, "A"))
    text = export_tree_graphml(diamond, routes)

    assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert '<edge source="nC" target="nD"/>' in text
    assert '<node id="nE"/>' in text
