"""High-level shortest-path queries built on :class:`DijkstraIter`."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from .connections import DIRECTIONS, connections_for, reverse_direction
from .cost import GraphCost, as_graph_cost
from .dijkstra import DijkstraIter
from .exceptions import ConfigError, NodeNotFoundError
from .graph import Graph, NodeId
from .intermediates import Intermediates
from .logger import Logger, NoopLogger
from .route import DirectRoute, Route


@dataclass(frozen=True)
class DijkstraConfig:
    """Configuration knobs for the search.

    Attributes:
        direction: ``"outgoing"`` follows edges forwards, ``"incoming"``
            backwards and ``"both"`` ignores direction.
        intermediates: Whether path queries record full paths.
    """

    direction: str = "outgoing"
    intermediates: Intermediates = Intermediates.RECORD

    def __post_init__(self) -> None:
        if self.direction not in DIRECTIONS:
            raise ConfigError(
                f"unknown direction '{self.direction}'; expected one of {', '.join(DIRECTIONS)}"
            )
        if not isinstance(self.intermediates, Intermediates):
            raise ConfigError(f"intermediates must be an Intermediates member, got {self.intermediates!r}")


class Dijkstra:
    """Shortest paths and distances over graphs with non-negative costs.

    Every query starts an independent :class:`DijkstraIter`; the instance
    itself holds only configuration and can be reused across graphs.

    Examples:
        ```python
        >>> g = Graph.from_edges([("a", "b", 1), ("b", "c", 2), ("a", "c", 5)])
        >>> Dijkstra.directed().distance_between(g, "a", "c")
        3
        ```
    """

    def __init__(
        self,
        config: Optional[DijkstraConfig] = None,
        edge_cost: Any = None,
        logger: Logger | None = None,
    ) -> None:
        self.cfg = config or DijkstraConfig()
        self.edge_cost: GraphCost[Any] = as_graph_cost(edge_cost)
        self.logger = logger or NoopLogger()

    def __repr__(self) -> str:
        return f"Dijkstra(direction={self.cfg.direction!r}, edge_cost={self.edge_cost!r})"

    @classmethod
    def directed(cls, logger: Logger | None = None) -> "Dijkstra":
        return cls(DijkstraConfig(direction="outgoing"), logger=logger)

    @classmethod
    def undirected(cls, logger: Logger | None = None) -> "Dijkstra":
        return cls(DijkstraConfig(direction="both"), logger=logger)

    def with_edge_cost(self, edge_cost: Any) -> "Dijkstra":
        """Return a copy that prices edges with ``edge_cost``."""
        return Dijkstra(self.cfg, edge_cost=edge_cost, logger=self.logger)

    def with_config(self, **changes: Any) -> "Dijkstra":
        """Return a copy with ``changes`` applied to the configuration."""
        cfg = dataclasses.replace(self.cfg, **changes)
        return Dijkstra(cfg, edge_cost=self.edge_cost, logger=self.logger)

    # ---- internals ----------------------------------------------------

    def _search(
        self,
        graph: Graph,
        source: NodeId,
        intermediates: Intermediates,
        reverse: bool = False,
    ) -> DijkstraIter[Any]:
        direction = reverse_direction(self.cfg.direction) if reverse else self.cfg.direction
        return DijkstraIter(
            graph,
            self.edge_cost,
            connections_for(graph, direction),
            source,
            intermediates=intermediates,
            logger=self.logger,
        )

    @staticmethod
    def _require(graph: Graph, node_id: NodeId) -> None:
        if graph.node(node_id) is None:
            raise NodeNotFoundError(node_id)

    # ---- paths --------------------------------------------------------

    def path_from(self, graph: Graph, source: NodeId) -> DijkstraIter[Any]:
        """Return the lazy sequence of shortest routes starting at ``source``.

        Raises:
            NodeNotFoundError: If ``source`` is not in ``graph``.
        """
        return self._search(graph, source, self.cfg.intermediates)

    def path_to(self, graph: Graph, target: NodeId) -> Iterator[Route[Any]]:
        """Yield the shortest route from every node that can reach ``target``.

        The search runs from ``target`` along reversed connections; each
        route is flipped so that it ends at ``target``.
        """
        routes = self._search(graph, target, self.cfg.intermediates, reverse=True)
        return (route.reversed() for route in routes)

    def path_between(self, graph: Graph, source: NodeId, target: NodeId) -> Optional[Route[Any]]:
        """Return the shortest route from ``source`` to ``target``.

        The search stops as soon as ``target`` is settled, before any of the
        target's own edges are looked at.

        Returns:
            The route, or ``None`` if ``target`` is unreachable.

        Raises:
            NodeNotFoundError: If either end is not in ``graph``.
        """
        self._require(graph, target)
        for route in self.path_from(graph, source):
            if route.target.id == target:
                return route
        return None

    def every_path(self, graph: Graph) -> Iterator[Route[Any]]:
        """Yield the shortest routes between every ordered pair of nodes.

        Sources are processed one after the other in node insertion order.
        """
        for node in list(graph.nodes()):
            yield from self.path_from(graph, node.id)

    # ---- distances ----------------------------------------------------

    def distance_from(self, graph: Graph, source: NodeId) -> Iterator[DirectRoute[Any]]:
        """Yield the distance from ``source`` to every reachable node."""
        routes = self._search(graph, source, Intermediates.DISCARD)
        return (DirectRoute(r.source, r.target, r.cost) for r in routes)

    def distance_to(self, graph: Graph, target: NodeId) -> Iterator[DirectRoute[Any]]:
        """Yield the distance to ``target`` from every node that reaches it."""
        routes = self._search(graph, target, Intermediates.DISCARD, reverse=True)
        return (DirectRoute(r.target, r.source, r.cost) for r in routes)

    def distance_between(self, graph: Graph, source: NodeId, target: NodeId) -> Optional[Any]:
        """Return the shortest distance from ``source`` to ``target`` or ``None``."""
        self._require(graph, target)
        for route in self.distance_from(graph, source):
            if route.target.id == target:
                return route.cost
        return None

    def every_distance(self, graph: Graph) -> Iterator[DirectRoute[Any]]:
        """Yield the distances between every ordered pair of connected nodes."""
        for node in list(graph.nodes()):
            yield from self.distance_from(graph, node.id)


__all__ = ["Dijkstra", "DijkstraConfig"]
