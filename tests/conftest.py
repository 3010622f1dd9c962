"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

from __future__ import annotations

import threading
import time

import pytest

from wiki_path.errors import FetchError
from wiki_path.wikipedia.link_source import LinkSource


class GraphLinkSource(LinkSource):
    """
    In-memory link source backed by an adjacency dict.

    Identifiers listed in failures raise FetchError for that many calls
    (or forever when the count is None). Every call is recorded.
    """

    def __init__(
        self,
        graph: dict[str, list[str]],
        failures: dict[str, int | None] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.graph = graph
        self.failures = dict(failures or {})
        self.delay = delay
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def fetch(self, identifier: str) -> list[str]:
        with self._lock:
            self.calls.append(identifier)
            remaining = self.failures.get(identifier, 0)
            if remaining is None or remaining > 0:
                if remaining is not None:
                    self.failures[identifier] = remaining - 1
                raise FetchError(identifier, "503 Service Unavailable")
        if self.delay:
            time.sleep(self.delay)
        return list(self.graph.get(identifier, []))

    def has_link(self, source: str, target: str) -> bool:
        return target in self.graph.get(source, [])


@pytest.fixture
def graph_source():
    """Factory for GraphLinkSource instances."""
    return GraphLinkSource


@pytest.fixture
def chain_graph() -> dict[str, list[str]]:
    """A -> B -> C -> D."""
    return {"A": ["B"], "B": ["C"], "C": ["D"]}


@pytest.fixture
def cycle_graph() -> dict[str, list[str]]:
    """A -> B, B -> A and C, C -> D."""
    return {"A": ["B"], "B": ["A", "C"], "C": ["D"]}


@pytest.fixture
def sample_problem() -> tuple[str, str]:
    """Return a sample start/target pair for testing."""
    return ("Albert_Einstein", "Pizza")
