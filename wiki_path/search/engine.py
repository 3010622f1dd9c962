"""
Concurrent path search over a live link graph.

Each newly discovered article gets its own exploration task on a shared
worker pool. Tasks share one visited set, pass every fetch through one
rate gate, and race to deliver the first outcome through a single-slot
result channel. Once an outcome is delivered the remaining tasks stop at
their next check and queued tasks are cancelled.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from wiki_path.errors import FetchError, WikiPathError
from wiki_path.search.channel import ResultChannel
from wiki_path.search.rate_gate import RateGate
from wiki_path.search.state import Outcome, PathNode, SearchConfig, SearchResult
from wiki_path.search.visited import Claim, VisitedSet
from wiki_path.wikipedia.link_source import LinkSource

logger = logging.getLogger(__name__)


class Explorer:
    """
    Shared state and task body for one search.

    explore() handles a single node: fetch its links, then either deliver
    the target or claim each unvisited link and submit a task for it.
    An outstanding-task counter detects a fully explored frontier.
    """

    def __init__(
        self,
        target: str,
        link_source: LinkSource,
        config: SearchConfig,
        gate: RateGate,
        visited: VisitedSet,
        channel: ResultChannel,
        executor: ThreadPoolExecutor,
    ) -> None:
        self._target = target
        self._link_source = link_source
        self._config = config
        self._gate = gate
        self._visited = visited
        self._channel = channel
        self._executor = executor

        self._counter_lock = threading.Lock()
        self._pending = 0
        self._explored = 0

    @property
    def explored(self) -> int:
        """Number of fetch attempts made so far."""
        with self._counter_lock:
            return self._explored

    def submit(self, node: PathNode) -> bool:
        """Schedule explore(node) on the worker pool."""
        with self._counter_lock:
            self._pending += 1
        try:
            self._executor.submit(self._run, node)
        except RuntimeError:
            # Pool already shut down: the search is over
            self._task_done()
            return False
        return True

    def _run(self, node: PathNode) -> None:
        try:
            self.explore(node)
        except Exception as e:
            logger.exception(f"Explorer failed on '{node.identifier}'")
            self._deliver(Outcome(error=WikiPathError(f"Explorer failed on '{node.identifier}': {e}")))
        finally:
            self._task_done()

    def _task_done(self) -> None:
        with self._counter_lock:
            self._pending -= 1
            exhausted = self._pending == 0
        if exhausted and self._channel.offer(Outcome()):
            logger.info("Frontier exhausted without reaching the target")

    def _deliver(self, outcome: Outcome) -> None:
        if self._channel.offer(outcome):
            self._executor.shutdown(wait=False, cancel_futures=True)

    def explore(self, node: PathNode) -> None:
        if self._channel.is_set():
            return

        max_depth = self._config.max_depth
        if max_depth is not None and node.depth > max_depth:
            return

        if self._config.on_explore is not None:
            self._config.on_explore(node)

        try:
            links = self._fetch(node.identifier)
        except WikiPathError as e:
            self._deliver(Outcome(error=e))
            return

        if links is None:
            return

        for link in links:
            if self._channel.is_set():
                return

            claim = self._visited.resolve(link, self._target)
            if claim is Claim.TARGET:
                self._deliver(Outcome(node=node.child(link)))
                return
            if claim is Claim.CLAIMED:
                self.submit(node.child(link))

    def _fetch(self, identifier: str) -> list[str] | None:
        """
        Fetch links through the rate gate, retrying on failure.

        Returns None if the search finished while waiting on the gate.
        """
        attempts = self._config.fetch_retries + 1
        for attempt in range(1, attempts + 1):
            if self._gate.acquire(cancel=self._channel.done) is None:
                return None

            with self._counter_lock:
                self._explored += 1

            try:
                return self._link_source.fetch(identifier)
            except WikiPathError as e:
                error = e
            except Exception as e:
                error = FetchError(identifier, repr(e))

            if attempt < attempts:
                logger.warning(f"Retrying '{identifier}' ({attempt}/{attempts - 1}): {error}")

        raise error


class PathFinder:
    """
    Finds a chain of links from one article to another.

    The rate gate is owned by the finder, so consecutive searches run by
    the same finder share one request budget.
    """

    def __init__(
        self,
        link_source: LinkSource,
        config: SearchConfig | None = None,
        gate: RateGate | None = None,
    ) -> None:
        """
        Initialize the path finder.

        Args:
            link_source: Where outbound links come from
            config: Search parameters (defaults if None)
            gate: Rate gate to share (built from config.request_interval if None)
        """
        self._link_source = link_source
        self._config = config or SearchConfig()
        self._gate = gate or RateGate(self._config.request_interval)

    @property
    def gate(self) -> RateGate:
        return self._gate

    def find(self, start: str, target: str) -> SearchResult | None:
        """
        Search for a path from start to target.

        Returns:
            SearchResult for the first path found, or None if every
            reachable article was explored without finding the target

        Raises:
            WikiPathError: First fetch/parse error hit by any explorer
            SearchTimeoutError: If config.timeout elapsed first
        """
        started = time.perf_counter()
        if start == target:
            return SearchResult(path=[start], length=1)

        logger.info(f"Searching for a path from '{start}' to '{target}'")

        visited = VisitedSet([start])
        channel = ResultChannel()
        executor = ThreadPoolExecutor(
            max_workers=self._config.max_workers,
            thread_name_prefix="explorer",
        )
        explorer = Explorer(
            target=target,
            link_source=self._link_source,
            config=self._config,
            gate=self._gate,
            visited=visited,
            channel=channel,
            executor=executor,
        )

        try:
            explorer.submit(PathNode(start))
            outcome = channel.wait(self._config.timeout)
        finally:
            channel.close()
            executor.shutdown(wait=False, cancel_futures=True)

        elapsed = time.perf_counter() - started

        if outcome.error is not None:
            logger.info(f"Search aborted after {elapsed:.2f}s: {outcome.error}")
            raise outcome.error

        if outcome.exhausted:
            logger.info(f"No path from '{start}' to '{target}' ({explorer.explored} pages fetched)")
            return None

        result = SearchResult.from_node(
            outcome.node,
            elapsed=elapsed,
            explored=explorer.explored,
            visited=len(visited),
        )
        logger.info(f"Found path ({result.clicks} clicks): {' -> '.join(result.path)}")
        return result


def find_path(
    start: str,
    target: str,
    link_source: LinkSource,
    config: SearchConfig | None = None,
) -> SearchResult | None:
    """Convenience wrapper: run one search with a fresh PathFinder."""
    return PathFinder(link_source, config).find(start, target)
