"""Dense boolean flag storage keyed by node id."""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from .graph import Graph, NodeId


class FlagSet:
    """Fixed-size set of boolean flags, one per node of ``graph``.

    Lookups go through :meth:`Graph.index_of`, so the graph must not gain
    nodes while the flag set is in use.
    """

    def __init__(self, graph: Graph) -> None:
        self._graph = graph
        self._flags: npt.NDArray[np.bool_] = np.zeros(graph.num_nodes(), dtype=np.bool_)

    def __len__(self) -> int:
        return int(self._flags.shape[0])

    def set(self, node_id: NodeId, value: bool = True) -> None:
        self._flags[self._graph.index_of(node_id)] = value

    def get(self, node_id: NodeId) -> bool:
        return bool(self._flags[self._graph.index_of(node_id)])

    def count(self) -> int:
        """Return the number of flags currently set."""
        return int(np.count_nonzero(self._flags))


__all__ = ["FlagSet"]
