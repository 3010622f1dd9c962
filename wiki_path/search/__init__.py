"""
Search module.

Provides the concurrent path search and its building blocks:
- RateGate: process-wide spacing of fetch starts
- VisitedSet: atomic claim of discovered articles
- ResultChannel: single-slot delivery of the outcome
- Explorer / PathFinder: task body and orchestration
"""

from wiki_path.search.channel import ResultChannel
from wiki_path.search.engine import Explorer, PathFinder, find_path
from wiki_path.search.rate_gate import RateGate
from wiki_path.search.state import Outcome, PathNode, SearchConfig, SearchResult
from wiki_path.search.visited import Claim, VisitedSet

__all__ = [
    "Claim",
    "Explorer",
    "Outcome",
    "PathFinder",
    "PathNode",
    "RateGate",
    "ResultChannel",
    "SearchConfig",
    "SearchResult",
    "VisitedSet",
    "find_path",
]
