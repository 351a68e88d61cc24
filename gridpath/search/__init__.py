"""A* path search: resumable stepper, blocking/animated runner and results."""

from .results import (
    SearchEvent,
    SearchEventKind,
    SearchResult,
    SearchState,
    SearchStats,
    SearchStatus,
)
from .astar import AStarStepper
from .runner import PathSearch, SearchListener

__all__ = [
    "AStarStepper",
    "PathSearch",
    "SearchListener",
    "SearchEvent",
    "SearchEventKind",
    "SearchResult",
    "SearchState",
    "SearchStats",
    "SearchStatus",
]
