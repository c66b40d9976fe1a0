"""Strategies selecting which edges count as a node's connections."""

from __future__ import annotations

from typing import Callable, Dict, Iterable

from .exceptions import ConfigError
from .graph import Edge, Graph, Node

Connections = Callable[[Node], Iterable[Edge]]

DIRECTIONS = ("outgoing", "incoming", "both")


def outgoing(graph: Graph) -> Connections:
    """Connections follow edges from tail to head."""
    return lambda node: graph.outgoing(node.id)


def incoming(graph: Graph) -> Connections:
    """Connections follow edges from head to tail."""
    return lambda node: graph.incoming(node.id)


def both(graph: Graph) -> Connections:
    """Connections ignore edge direction."""
    return lambda node: graph.incident(node.id)


_PROVIDERS: Dict[str, Callable[[Graph], Connections]] = {
    "outgoing": outgoing,
    "incoming": incoming,
    "both": both,
}


def connections_for(graph: Graph, direction: str) -> Connections:
    """Return the connections provider for ``direction``.

    Raises:
        ConfigError: If ``direction`` is not one of :data:`DIRECTIONS`.
    """
    try:
        factory = _PROVIDERS[direction]
    except KeyError:
        raise ConfigError(f"unknown direction '{direction}'") from None
    return factory(graph)


def reverse_direction(direction: str) -> str:
    """Return the direction that walks edges the other way."""
    return {"outgoing": "incoming", "incoming": "outgoing", "both": "both"}[direction]


__all__ = [
    "DIRECTIONS",
    "Connections",
    "both",
    "connections_for",
    "incoming",
    "outgoing",
    "reverse_direction",
]
