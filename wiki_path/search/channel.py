"""
Single-slot handoff of the search outcome.
"""

from __future__ import annotations

import logging
import threading

from wiki_path.errors import SearchTimeoutError
from wiki_path.search.state import Outcome

logger = logging.getLogger(__name__)


class ResultChannel:
    """
    Accepts exactly one outcome; later offers are dropped without blocking.

    The internal event doubles as the search's done signal: explorers
    check is_set() before doing further work.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._outcome: Outcome | None = None

    def offer(self, outcome: Outcome) -> bool:
        """
        Deliver an outcome.

        Returns:
            True if this call won the slot, False if it was already taken
        """
        with self._lock:
            if self._outcome is not None:
                logger.debug("Discarding late outcome")
                return False
            self._outcome = outcome
        self._done.set()
        return True

    def close(self) -> None:
        """Mark the channel done without delivering an outcome."""
        self._done.set()

    @property
    def done(self) -> threading.Event:
        """Event set once the channel is filled or closed."""
        return self._done

    def is_set(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: float | None = None) -> Outcome | None:
        """
        Block until an outcome has been delivered (None if closed empty).

        Raises:
            SearchTimeoutError: If nothing arrives within timeout seconds
        """
        if not self._done.wait(timeout):
            raise SearchTimeoutError(f"No result within {timeout} seconds")
        return self._outcome
