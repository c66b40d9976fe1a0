"""Shared fixtures for the test-suite."""

from __future__ import annotations

import pytest

from lazysssp import Graph


@pytest.fixture
def diamond() -> Graph:
    """Undirected A-B(1), B-C(2), A-C(5), C-D(1) plus an isolated node E."""
    return Graph.from_edges(
        [("A", "B", 1), ("B", "C", 2), ("A", "C", 5), ("C", "D", 1)],
        nodes=["A", "B", "C", "D", "E"],
        directed=False,
    )


@pytest.fixture
def chain() -> Graph:
    """Directed A -> B -> C with a costly shortcut A -> C."""
    return Graph.from_edges([("A", "B", 1), ("B", "C", 1), ("A", "C", 5)])
