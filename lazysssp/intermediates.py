"""Predecessor bookkeeping and path reconstruction."""

from __future__ import annotations

import enum
from typing import List, Mapping, Optional

from .graph import Node, NodeId


class Intermediates(enum.Enum):
    """Whether the search keeps predecessors to rebuild full paths.

    ``DISCARD`` saves memory and the reconstruction work; distances are the
    same in both modes.
    """

    RECORD = "record"
    DISCARD = "discard"


Predecessors = Mapping[NodeId, Optional[Node]]


def reconstruct_intermediates(previous: Predecessors, target: NodeId) -> List[Node]:
    """Return the nodes strictly between the source and ``target``.

    Args:
        previous: Predecessor of every reached node. The source maps to
            ``None``.
        target: Node id whose path is requested. Must be a key of
            ``previous``.

    Returns:
        Intermediate nodes in source-to-target order. Empty if ``target`` is
        the source or one of its direct neighbours.

    Examples:
        ```python
        >>> a, b, c = Node("a", 0), Node("b", 1), Node("c", 2)
        >>> [n.id for n in reconstruct_intermediates({"a": None, "b": a, "c": b}, "c")]
        ['b']
        ```
    """
    chain: List[Node] = []
    cur = previous[target]
    while cur is not None:
        pred = previous[cur.id]
        if pred is None:
            # ``cur`` is the source
            break
        chain.append(cur)
        cur = pred
    chain.reverse()
    return chain


__all__ = ["Intermediates", "Predecessors", "reconstruct_intermediates"]
