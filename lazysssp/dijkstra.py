"""Lazily evaluated single-source Dijkstra search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from .connections import Connections
from .cost import GraphCost, as_graph_cost
from .exceptions import NodeNotFoundError
from .graph import Graph, Node, NodeId
from .intermediates import Intermediates, reconstruct_intermediates
from .logger import Logger, NoopLogger
from .queue import PriorityQueue
from .route import Path, Route

T = TypeVar("T")


@dataclass(frozen=True)
class SearchMetrics:
    """Counters and timing collected from one traversal."""

    n: int
    m: int
    source: Any
    intermediates: str
    counters: Dict[str, int]
    wall_ms: float


class DijkstraIter(Generic[T]):
    """Iterator over the shortest routes from one source.

    Routes come out in nondecreasing cost order, one per node reachable from
    ``source``, starting with the zero-cost route from the source to itself.
    Nothing is computed ahead of the caller: each ``next()`` finishes the
    work left over from the previous one and stops as soon as the next node
    is settled.

    The edges of a node are expanded on the pull *after* the node was
    returned, not before. A caller looking for one target therefore stops
    without ever scanning that target's own edges.

    Edge costs must be non-negative and adding them must never decrease a
    total. This is not checked.

    Args:
        graph: Graph storage.
        edge_cost: Cost function for edges; ``None`` uses the edge weight.
        connections: Provider of the edges considered for a node. The search
            treats whichever endpoint is not the current node as its
            neighbour, so direction is entirely up to the provider.
        source: Id of the start node.
        intermediates: Whether to record predecessors and rebuild paths.
        logger: Optional structured logger.

    Raises:
        NodeNotFoundError: If ``source`` is not in ``graph``.
    """

    def __init__(
        self,
        graph: Graph,
        edge_cost: GraphCost[T] | None,
        connections: Connections,
        source: NodeId,
        intermediates: Intermediates = Intermediates.RECORD,
        logger: Logger | None = None,
    ) -> None:
        source_node = graph.node(source)
        if source_node is None:
            raise NodeNotFoundError(source)

        self.graph = graph
        self.edge_cost = as_graph_cost(edge_cost)
        self.connections = connections
        self.source = source_node
        self.intermediates = intermediates
        self.logger = logger or NoopLogger()

        self._num_nodes = graph.num_nodes()
        self._queue: PriorityQueue[T] = PriorityQueue(graph)
        self._zero: T = self.edge_cost.zero()

        self.distances: Dict[NodeId, T] = {source_node.id: self._zero}
        self.previous: Dict[NodeId, Optional[Node]] = {}
        if intermediates is Intermediates.RECORD:
            self.previous[source_node.id] = None

        self.counters: Dict[str, int] = {
            "edges_scanned": 0,
            "relaxations": 0,
            "routes_emitted": 0,
        }
        self._routes = self._run()
        self.logger.debug(
            "dijkstra.start",
            source=source_node.id,
            nodes=self._num_nodes,
            intermediates=intermediates.value,
        )

    def __iter__(self) -> "DijkstraIter[T]":
        return self

    def __next__(self) -> Route[T]:
        return next(self._routes)

    def size_hint(self) -> Tuple[int, Optional[int]]:
        """Return lower and upper bounds on the total number of routes."""
        return 0, self._num_nodes

    def __length_hint__(self) -> int:
        return max(0, self._num_nodes - self.counters["routes_emitted"])

    # ---- traversal ----------------------------------------------------

    def _run(self) -> Iterator[Route[T]]:
        self._queue.visit(self.source.id)
        self.counters["routes_emitted"] += 1
        yield Route(path=Path(self.source, self.source, []), cost=self._zero)

        node = self.source
        while True:
            # Resuming here means the caller wants another route, so the
            # node handed out last time is worth expanding now.
            self._expand(node)

            item = self._queue.pop_min()
            if item is None:
                self.logger.debug("dijkstra.exhausted", source=self.source.id, **self.summary())
                return
            node = item.node

            # Popped in cost order from non-negative edges: the distance is final.
            if self.intermediates is Intermediates.RECORD:
                between = reconstruct_intermediates(self.previous, node.id)
            else:
                between = []
            self.counters["routes_emitted"] += 1
            yield Route(
                path=Path(self.source, node, between),
                cost=self.distances[node.id],
            )

    def _expand(self, node: Node) -> None:
        """Relax every connection of ``node``."""
        base = self.distances[node.id]
        for edge in self.connections(node):
            self.counters["edges_scanned"] += 1
            u, v = edge.endpoints()
            other_id = u if v == node.id else v

            alternative = base + self.edge_cost.cost(edge)
            known = self.distances.get(other_id)
            if known is not None and alternative >= known:
                continue

            other = self.graph.node(other_id)
            if other is None:  # pragma: no cover - storage returned a dangling edge
                raise NodeNotFoundError(other_id)
            self.distances[other_id] = alternative
            if self.intermediates is Intermediates.RECORD:
                self.previous[other_id] = node
            self.counters["relaxations"] += 1
            self._queue.decrease_priority(other, alternative)

    # ---- diagnostics --------------------------------------------------

    def summary(self) -> Dict[str, int]:
        """Return a copy of the traversal counters."""
        out = dict(self.counters)
        out["nodes_finalized"] = self._queue.finalized()
        out["stale_pops"] = self._queue.stale_pops
        return out

    def metrics(self, wall_ms: float) -> SearchMetrics:
        """Return counters for this traversal together with ``wall_ms``."""
        return SearchMetrics(
            n=self._num_nodes,
            m=self.graph.num_edges(),
            source=self.source.id,
            intermediates=self.intermediates.value,
            counters=self.summary(),
            wall_ms=wall_ms,
        )

    def collect(self) -> List[Route[T]]:
        """Drain the remaining routes into a list."""
        return list(self)


__all__ = ["DijkstraIter", "SearchMetrics"]
