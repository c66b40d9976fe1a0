"""In-memory graph storage consumed by the shortest-path search."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from numbers import Real
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Optional, Tuple

from .exceptions import GraphFormatError, InputError

NodeId = Hashable
EdgeTuple = Tuple[NodeId, NodeId, Any]


def _check_weight(u: NodeId, v: NodeId, w: Any) -> None:
    """Reject numeric weights that break the ordering the search relies on."""
    if isinstance(w, Decimal):
        finite = w.is_finite()
    elif isinstance(w, Real):
        finite = math.isfinite(w)
    else:
        return
    if not finite:
        raise GraphFormatError(f"non-finite weight {w} on edge ({u!r}, {v!r})")
    if w < 0:
        raise GraphFormatError(f"negative weight {w} on edge ({u!r}, {v!r})")


@dataclass(frozen=True)
class Node:
    """Handle to a stored node.

    Attributes:
        id: Caller-supplied identifier.
        index: Dense index in ``0 .. n-1`` assigned in insertion order.
        weight: Optional payload attached to the node.
    """

    id: NodeId
    index: int
    weight: Any = None


@dataclass(frozen=True)
class Edge:
    """Weighted edge between two stored nodes."""

    id: int
    source: NodeId
    target: NodeId
    weight: Any

    def endpoints(self) -> Tuple[NodeId, NodeId]:
        return self.source, self.target


class Graph:
    """Graph with hashable node ids and arbitrary edge weights.

    Node ids are mapped to dense indices so per-search state can live in flat
    arrays. Negative or non-finite numeric weights are rejected with
    :class:`~lazysssp.exceptions.GraphFormatError`; other weight types are
    stored as given.

    Args:
        directed: If ``False``, every edge is reachable from both endpoints
            and :meth:`outgoing` / :meth:`incoming` both return incident edges.
    """

    def __init__(self, directed: bool = True) -> None:
        self.directed = directed
        self._nodes: List[Node] = []
        self._index: Dict[NodeId, int] = {}
        self._edges: List[Edge] = []
        self._out: List[List[Edge]] = []
        self._in: List[List[Edge]] = []

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"Graph({kind}, nodes={self.num_nodes()}, edges={self.num_edges()})"

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    # ---- construction -------------------------------------------------

    def add_node(self, node_id: NodeId, weight: Any = None) -> Node:
        """Add a node and return its handle.

        Raises:
            InputError: If ``node_id`` is already present.
        """
        if node_id in self._index:
            raise InputError(f"duplicate node id {node_id!r}")
        node = Node(id=node_id, index=len(self._nodes), weight=weight)
        self._index[node_id] = node.index
        self._nodes.append(node)
        self._out.append([])
        self._in.append([])
        return node

    def add_edge(self, u: NodeId, v: NodeId, w: Any = 1) -> Edge:
        """Add an edge from ``u`` to ``v`` with weight ``w``.

        Args:
            u: Tail node id.
            v: Head node id.
            w: Edge weight. Numeric weights must be non-negative.

        Returns:
            The stored edge.

        Raises:
            InputError: If ``u`` or ``v`` are not in the graph.
            GraphFormatError: If ``w`` is a negative or non-finite number.

        Examples:
            ```python
            >>> g = Graph.from_edges([("a", "b", 2)])
            >>> [e.endpoints() for e in g.outgoing("a")]
            [('a', 'b')]
            ```
        """
        if u not in self._index or v not in self._index:
            raise InputError(f"both endpoints of ({u!r}, {v!r}) must be nodes of the graph")
        _check_weight(u, v, w)
        edge = Edge(id=len(self._edges), source=u, target=v, weight=w)
        self._edges.append(edge)
        self._out[self._index[u]].append(edge)
        self._in[self._index[v]].append(edge)
        return edge

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[EdgeTuple],
        nodes: Iterable[NodeId] = (),
        directed: bool = True,
    ) -> "Graph":
        """Create a graph from ``(u, v, w)`` tuples.

        Nodes listed in ``nodes`` are added first, in order; endpoints seen
        only in ``edges`` are added as they appear.
        """
        g = cls(directed=directed)
        for node_id in nodes:
            if node_id not in g:
                g.add_node(node_id)
        for u, v, w in edges:
            for node_id in (u, v):
                if node_id not in g:
                    g.add_node(node_id)
            g.add_edge(u, v, w)
        return g

    # ---- lookup -------------------------------------------------------

    def node(self, node_id: NodeId) -> Optional[Node]:
        """Return the handle for ``node_id`` or ``None`` if absent."""
        idx = self._index.get(node_id)
        return None if idx is None else self._nodes[idx]

    def index_of(self, node_id: NodeId) -> int:
        """Return the dense index of ``node_id``.

        Raises:
            InputError: If ``node_id`` is not in the graph.
        """
        try:
            return self._index[node_id]
        except KeyError:
            raise InputError(f"unknown node id {node_id!r}") from None

    def nodes(self) -> Iterator[Node]:
        return iter(self._nodes)

    def edges(self) -> Iterator[Edge]:
        return iter(self._edges)

    def num_nodes(self) -> int:
        return len(self._nodes)

    def num_edges(self) -> int:
        return len(self._edges)

    # ---- adjacency ----------------------------------------------------

    def outgoing(self, node_id: NodeId) -> List[Edge]:
        """Edges leaving ``node_id`` (all incident edges if undirected)."""
        if not self.directed:
            return self.incident(node_id)
        return list(self._out[self.index_of(node_id)])

    def incoming(self, node_id: NodeId) -> List[Edge]:
        """Edges entering ``node_id`` (all incident edges if undirected)."""
        if not self.directed:
            return self.incident(node_id)
        return list(self._in[self.index_of(node_id)])

    def incident(self, node_id: NodeId) -> List[Edge]:
        """Every edge touching ``node_id``; self-loops are listed once."""
        idx = self.index_of(node_id)
        out = self._out[idx]
        return out + [e for e in self._in[idx] if e.source != e.target]

    def out_degree(self, node_id: NodeId) -> int:
        return len(self.outgoing(node_id))


__all__ = ["Edge", "EdgeTuple", "Graph", "Node", "NodeId"]
