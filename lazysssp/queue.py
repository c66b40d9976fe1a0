"""Priority queue with lazy deletion used as the search frontier."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from typing import Generic, List, Optional, Tuple, TypeVar

from .flags import FlagSet
from .graph import Graph, Node, NodeId

T = TypeVar("T")


@dataclass(frozen=True)
class PriorityQueueItem(Generic[T]):
    """A node together with the tentative distance it was queued with."""

    node: Node
    priority: T


class PriorityQueue(Generic[T]):
    """Min-priority queue that emulates decrease-key by lazy deletion.

    Instead of updating an entry in place, :meth:`decrease_priority` pushes a
    fresh entry. Every node is handed out by :meth:`pop_min` at most once;
    later entries for the same node are stale and skipped. Entries with equal
    priority come out in insertion order.

    Args:
        graph: Graph whose nodes will be queued. Sizes the finalized flags.
    """

    def __init__(self, graph: Graph) -> None:
        self._heap: List[Tuple[T, int, PriorityQueueItem[T]]] = []
        self._flags = FlagSet(graph)
        self._sequence = itertools.count()
        self.stale_pops = 0

    def __len__(self) -> int:
        return len(self._heap)

    def push(self, node: Node, priority: T) -> None:
        """Insert ``node`` unconditionally."""
        item = PriorityQueueItem(node=node, priority=priority)
        heapq.heappush(self._heap, (priority, next(self._sequence), item))

    def visit(self, node_id: NodeId) -> None:
        """Mark ``node_id`` as finalized."""
        self._flags.set(node_id)

    def has_been_visited(self, node_id: NodeId) -> bool:
        return self._flags.get(node_id)

    def decrease_priority(self, node: Node, priority: T) -> None:
        """Queue ``node`` with a lower priority unless it is already finalized.

        Older entries for ``node`` stay in the heap and are discarded when
        popped.
        """
        if self.has_been_visited(node.id):
            return
        self.push(node, priority)

    def pop_min(self) -> Optional[PriorityQueueItem[T]]:
        """Remove and return the smallest entry whose node is not finalized.

        The returned node is marked finalized. Returns ``None`` when no live
        entry remains.
        """
        while self._heap:
            _, _, item = heapq.heappop(self._heap)
            if self.has_been_visited(item.node.id):
                self.stale_pops += 1
                continue
            self.visit(item.node.id)
            return item
        return None

    def finalized(self) -> int:
        """Return how many nodes have been finalized so far."""
        return self._flags.count()


__all__ = ["PriorityQueue", "PriorityQueueItem"]
