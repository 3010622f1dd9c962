"""
Search state dataclasses: path nodes, outcomes and results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from wiki_path.config import DEFAULT_FETCH_RETRIES, DEFAULT_MAX_WORKERS

if TYPE_CHECKING:
    from wiki_path.errors import WikiPathError


@dataclass(frozen=True)
class PathNode:
    """
    One discovered article, linked back to the article it was found on.

    Attributes:
        identifier: Article identifier
        parent: Node this article was linked from (None for the start)
        depth: Number of clicks from the start article
    """

    identifier: str
    parent: PathNode | None = field(default=None, compare=False, repr=False)
    depth: int = 0

    def child(self, identifier: str) -> PathNode:
        """Create the node for a link found on this article."""
        return PathNode(identifier=identifier, parent=self, depth=self.depth + 1)

    def path(self) -> list[str]:
        """Identifiers from the start article to this one."""
        path = []
        node: PathNode | None = self
        while node is not None:
            path.append(node.identifier)
            node = node.parent
        return list(reversed(path))


@dataclass(frozen=True)
class Outcome:
    """
    Terminal outcome of a search, delivered once through the result channel.

    Exactly one of node or error is set, or neither when the frontier
    ran out without reaching the target.
    """

    node: PathNode | None = None
    error: WikiPathError | None = None

    @property
    def exhausted(self) -> bool:
        return self.node is None and self.error is None


@dataclass
class SearchConfig:
    """
    Tunable search parameters.

    Attributes:
        request_interval: Minimum seconds between two fetch starts
        max_workers: Worker threads exploring concurrently
        max_depth: Deepest article (in clicks) whose links are fetched
        fetch_retries: Extra attempts for a failed fetch
        timeout: Seconds to wait for an outcome (None waits forever)
        on_explore: Called with every node right before it is fetched
    """

    request_interval: float = 0.0
    max_workers: int = DEFAULT_MAX_WORKERS
    max_depth: int | None = None
    fetch_retries: int = DEFAULT_FETCH_RETRIES
    timeout: float | None = None
    on_explore: Callable[[PathNode], None] | None = None

    def __post_init__(self) -> None:
        if self.request_interval < 0:
            raise ValueError("request_interval must be >= 0")
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        if self.fetch_retries < 0:
            raise ValueError("fetch_retries must be >= 0")


@dataclass
class SearchResult:
    """
    A found path.

    Attributes:
        path: Identifiers from start to target (both included)
        length: Number of articles on the path
        elapsed: Wall-clock seconds the search took
        explored: Number of pages fetched
        visited: Number of identifiers claimed during the search
    """

    path: list[str]
    length: int
    elapsed: float = 0.0
    explored: int = 0
    visited: int = 0

    @property
    def clicks(self) -> int:
        """Number of links followed (len(path) - 1)."""
        return self.length - 1

    @classmethod
    def from_node(cls, node: PathNode, **stats) -> SearchResult:
        path = node.path()
        return cls(path=path, length=len(path), **stats)
