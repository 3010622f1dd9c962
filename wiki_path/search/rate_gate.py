"""
Process-wide request throttle.
"""

from __future__ import annotations

import logging
import threading
import time

from wiki_path.config import HOUR_SECS

logger = logging.getLogger(__name__)


class RateGate:
    """
    Spaces out request starts by a fixed interval.

    Every caller of acquire() is serialized through one lock, so no two
    granted starts are ever closer together than the interval, however
    many threads are waiting. The lock is held while sleeping.
    """

    def __init__(self, interval: float) -> None:
        """
        Initialize the gate.

        Args:
            interval: Minimum seconds between two granted starts
        """
        if interval < 0:
            raise ValueError("interval must be >= 0")
        self._interval = interval
        self._lock = threading.Lock()
        self._next_start: float | None = None
        self._granted = 0

    @classmethod
    def from_budget(cls, requests_per_hour: int) -> RateGate:
        """Build a gate allowing at most requests_per_hour starts per hour."""
        if requests_per_hour <= 0:
            raise ValueError("requests_per_hour must be positive")
        return cls(HOUR_SECS / requests_per_hour)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def granted(self) -> int:
        """Number of acquisitions granted so far."""
        return self._granted

    def acquire(self, cancel: threading.Event | None = None) -> float | None:
        """
        Block until the next start is allowed, then claim it.

        Args:
            cancel: Stop waiting as soon as this event is set

        Returns:
            The granted start time (time.monotonic() clock), or None if
            cancelled before a start was granted
        """
        with self._lock:
            now = time.monotonic()
            if self._next_start is not None:
                while now < self._next_start:
                    remaining = self._next_start - now
                    if cancel is None:
                        time.sleep(remaining)
                    elif cancel.wait(remaining):
                        return None
                    now = time.monotonic()
            if cancel is not None and cancel.is_set():
                return None
            self._next_start = now + self._interval
            self._granted += 1
            return now

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(interval={self._interval!r})"
