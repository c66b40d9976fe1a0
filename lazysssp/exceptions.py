"""Custom exception types used across :mod:`lazysssp`."""

from __future__ import annotations


class LazySSSPError(Exception):
    """Base class for all package-specific errors."""


class InputError(LazySSSPError, ValueError):
    """Raised for invalid user input such as malformed edges."""


class GraphFormatError(InputError):
    """Raised when parsing a graph file fails or an edge weight is invalid."""


class NodeNotFoundError(InputError, KeyError):
    """Raised when a node id is not present in the graph.

    The search raises it once, while being constructed; a running traversal
    never fails.
    """

    def __init__(self, node_id: object) -> None:
        super().__init__(f"node {node_id!r} not found in graph")
        self.node_id = node_id

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0])


NodeNotFound = NodeNotFoundError


class ConfigError(LazySSSPError, ValueError):
    """Raised for invalid configuration options."""


__all__ = [
    "LazySSSPError",
    "InputError",
    "GraphFormatError",
    "NodeNotFoundError",
    "NodeNotFound",
    "ConfigError",
]
