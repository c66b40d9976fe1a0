"""Edge cost functions.

The search needs three things from a cost value: ``+`` with another cost, a
total order, and an additive identity. The identity is supplied by the cost
function through :meth:`GraphCost.zero`, so any value type works, not only
built-in numbers.

Adding a cost must never make a path cheaper. This is not checked; a cost
function that breaks it gives wrong distances without raising.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Protocol, TypeVar, runtime_checkable

from .exceptions import ConfigError
from .graph import Edge

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class GraphCost(Protocol[T_co]):
    """Protocol for cost functions consumed by the search."""

    def cost(self, edge: Edge) -> T_co:
        """Return the cost of traversing ``edge``."""
        ...

    def zero(self) -> T_co:
        """Return the additive identity for the cost type."""
        ...


class WeightCost:
    """Use the stored edge weight as the cost."""

    def __init__(self, zero: Any = 0) -> None:
        self._zero = zero

    def cost(self, edge: Edge) -> Any:
        return edge.weight

    def zero(self) -> Any:
        return self._zero

    def __repr__(self) -> str:
        return f"WeightCost(zero={self._zero!r})"


class UnitCost:
    """Every edge costs ``1``; distances become hop counts."""

    def cost(self, edge: Edge) -> int:
        return 1

    def zero(self) -> int:
        return 0

    def __repr__(self) -> str:
        return "UnitCost()"


class FunctionCost(Generic[T]):
    """Wrap a plain ``edge -> cost`` callable.

    Args:
        func: Cost callable.
        zero: Additive identity matching the values ``func`` returns.
    """

    def __init__(self, func: Callable[[Edge], T], zero: T = 0) -> None:  # type: ignore[assignment]
        self.func = func
        self._zero = zero

    def cost(self, edge: Edge) -> T:
        return self.func(edge)

    def zero(self) -> T:
        return self._zero

    def __repr__(self) -> str:
        return f"FunctionCost({self.func!r}, zero={self._zero!r})"


def as_graph_cost(obj: Any) -> GraphCost[Any]:
    """Return ``obj`` as a :class:`GraphCost`.

    ``None`` selects :class:`WeightCost`; a bare callable is wrapped in
    :class:`FunctionCost` with a zero of ``0``.

    Raises:
        ConfigError: If ``obj`` is neither a cost function nor callable.
    """
    if obj is None:
        return WeightCost()
    if isinstance(obj, GraphCost):
        return obj
    if callable(obj):
        return FunctionCost(obj)
    raise ConfigError(f"expected a cost function, got {type(obj).__name__}")


__all__ = ["FunctionCost", "GraphCost", "UnitCost", "WeightCost", "as_graph_cost"]
