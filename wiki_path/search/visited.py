"""
Shared visited set for the concurrent search.
"""

from __future__ import annotations

import threading
from enum import Enum


class Claim(Enum):
    """Result of resolving a discovered link."""

    TARGET = "target"
    CLAIMED = "claimed"
    SEEN = "seen"


class VisitedSet:
    """
    Identifiers already claimed by some explorer.

    Entries are only ever added. All reads and writes go through a single
    lock, so a claim is an atomic check-then-insert and at most one caller
    ever wins a given identifier.
    """

    def __init__(self, initial: list[str] | None = None) -> None:
        self._lock = threading.Lock()
        self._seen: set[str] = set(initial or [])

    def claim(self, identifier: str) -> bool:
        """Mark identifier visited. Returns False if it already was."""
        with self._lock:
            return self._claim(identifier)

    def resolve(self, identifier: str, target: str) -> Claim:
        """
        Decide what to do with a discovered link.

        The target check and the claim happen in one critical section;
        the target is never inserted so it can never be claimed away.
        """
        with self._lock:
            if identifier == target:
                return Claim.TARGET
            return Claim.CLAIMED if self._claim(identifier) else Claim.SEEN

    def _claim(self, identifier: str) -> bool:
        if identifier in self._seen:
            return False
        self._seen.add(identifier)
        return True

    def snapshot(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._seen)

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)
