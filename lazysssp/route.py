"""Result types produced by the shortest-path search."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, TypeVar

from .graph import Node

T = TypeVar("T")


@dataclass(frozen=True)
class Path:
    """Path from ``source`` to ``target``.

    ``intermediates`` holds the nodes strictly between the two ends. It is
    empty when ``source`` is ``target`` or when intermediates were not
    recorded.
    """

    source: Node
    target: Node
    intermediates: List[Node] = field(default_factory=list)

    def nodes(self) -> List[Node]:
        """Return every node on the path, ends included."""
        if self.source == self.target and not self.intermediates:
            return [self.source]
        return [self.source, *self.intermediates, self.target]

    def ids(self) -> List[Any]:
        return [n.id for n in self.nodes()]

    def reversed(self) -> "Path":
        return Path(
            source=self.target,
            target=self.source,
            intermediates=list(reversed(self.intermediates)),
        )


@dataclass(frozen=True)
class Route(Generic[T]):
    """A path together with its total cost."""

    path: Path
    cost: T

    @property
    def source(self) -> Node:
        return self.path.source

    @property
    def target(self) -> Node:
        return self.path.target

    def reversed(self) -> "Route[T]":
        return Route(path=self.path.reversed(), cost=self.cost)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.path.source.id,
            "target": self.path.target.id,
            "cost": self.cost,
            "path": self.path.ids(),
        }


@dataclass(frozen=True)
class DirectRoute(Generic[T]):
    """Distance between two nodes without the nodes in between."""

    source: Node
    target: Node
    cost: T

    def reversed(self) -> "DirectRoute[T]":
        return DirectRoute(source=self.target, target=self.source, cost=self.cost)

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source.id, "target": self.target.id, "cost": self.cost}


__all__ = ["DirectRoute", "Path", "Route"]
