"""Export utilities for shortest-path trees."""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Tuple

from .graph import Graph
from .route import Route


def shortest_path_tree(routes: Iterable[Route[Any]]) -> List[Tuple[Any, Any]]:
    """Return the tree edges ``(parent, child)`` spanned by ``routes``.

    Only the last hop of each route is used, so the routes must have been
    produced with :attr:`Intermediates.RECORD`. Routes from a ``DISCARD``
    search look like direct edges from the source and give a wrong tree.
    Zero-length routes contribute nothing.
    """
    tree: List[Tuple[Any, Any]] = []
    for route in routes:
        nodes = route.path.nodes()
        if len(nodes) < 2:
            continue
        tree.append((nodes[-2].id, nodes[-1].id))
    return tree


def export_tree_json(G: Graph, routes: Iterable[Route[Any]]) -> str:
    """Return a JSON string with every node, its distance and the tree edges.

    Nodes not reached by ``routes`` carry a ``null`` distance.
    """
    routes = list(routes)
    dist = {r.target.id: r.cost for r in routes}
    data = {
        "directed": G.directed,
        "nodes": [{"id": n.id, "distance": dist.get(n.id)} for n in G.nodes()],
        "edges": [{"source": u, "target": v} for (u, v) in shortest_path_tree(routes)],
    }
    return json.dumps(data, default=str)


def export_tree_graphml(G: Graph, routes: Iterable[Route[Any]]) -> str:
    """Return a minimal GraphML document for the shortest-path tree."""
    routes = list(routes)
    dist = {r.target.id: r.cost for r in routes}
    lines: List[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append('<graphml xmlns="http://graphml.graphdrawing.org/xmlns">')
    lines.append('  <key id="d" for="node" attr.name="distance" attr.type="double"/>')
    lines.append('  <graph id="T" edgedefault="directed">')
    for node in G.nodes():
        if node.id in dist:
            lines.append(f'    <node id="n{node.id}"><data key="d">{dist[node.id]}</data></node>')
        else:
            lines.append(f'    <node id="n{node.id}"/>')
    for u, v in shortest_path_tree(routes):
        lines.append(f'    <edge source="n{u}" target="n{v}"/>')
    lines.append("  </graph>")
    lines.append("</graphml>")
    return "\n".join(lines)


__all__ = ["export_tree_graphml", "export_tree_json", "shortest_path_tree"]
