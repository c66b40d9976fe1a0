"""Public package exports for :mod:`lazysssp`."""

from __future__ import annotations

from .connections import both, connections_for, incoming, outgoing
from .cost import FunctionCost, GraphCost, UnitCost, WeightCost, as_graph_cost
from .dijkstra import DijkstraIter, SearchMetrics
from .exceptions import (
    ConfigError,
    GraphFormatError,
    InputError,
    LazySSSPError,
    NodeNotFound,
    NodeNotFoundError,
)
from .graph import Edge, Graph, Node
from .intermediates import Intermediates, reconstruct_intermediates
from .io import read_graph, write_graph
from .logger import Logger, NoopLogger, StdLogger
from .queue import PriorityQueue, PriorityQueueItem
from .route import DirectRoute, Path, Route
from .shortest_paths import Dijkstra, DijkstraConfig

__version__ = "0.1.0"

__all__ = [
    "Dijkstra",
    "DijkstraConfig",
    "DijkstraIter",
    "SearchMetrics",
    "Graph",
    "Node",
    "Edge",
    "Path",
    "Route",
    "DirectRoute",
    "Intermediates",
    "reconstruct_intermediates",
    "PriorityQueue",
    "PriorityQueueItem",
    "GraphCost",
    "WeightCost",
    "UnitCost",
    "FunctionCost",
    "as_graph_cost",
    "outgoing",
    "incoming",
    "both",
    "connections_for",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "read_graph",
    "write_graph",
    "LazySSSPError",
    "InputError",
    "GraphFormatError",
    "NodeNotFoundError",
    "NodeNotFound",
    "ConfigError",
]
