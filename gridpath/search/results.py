"""Search outcomes, run states and the events emitted while a search runs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..grid.cell import Cell, Coord


class SearchState(str, Enum):
    """Lifecycle of a PathSearch instance."""

    IDLE = "idle"
    RUNNING = "running"
    FOUND = "found"
    NOT_FOUND = "not_found"
    CANCELLED = "cancelled"


class SearchStatus(str, Enum):
    """How a single run ended.

    None of these are errors: "no path" and "already running" are ordinary
    outcomes that a UI turns into a message.
    """

    FOUND = "found"
    NOT_FOUND = "not_found"
    CANCELLED = "cancelled"
    MISSING_ENDPOINT = "missing_endpoint"
    ALREADY_RUNNING = "already_running"


class SearchEventKind(str, Enum):
    NODE_VISITED = "node_visited"
    PATH_REVEALED = "path_revealed"
    FINISHED = "finished"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SearchResult:
    """Immutable outcome of one run.

    ``path`` runs from start to goal inclusive and is empty unless a path was
    found. ``visited_order`` lists the cells finalized by the search in order,
    never including the start or goal.
    """

    status: SearchStatus
    path: Tuple[Cell, ...] = ()
    visited_order: Tuple[Cell, ...] = ()
    elapsed: float = 0.0
    cost: Optional[float] = None

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    @property
    def nodes_explored(self) -> int:
        return len(self.visited_order)

    @property
    def path_length(self) -> int:
        return len(self.path)

    @property
    def path_coords(self) -> List[Coord]:
        return [cell.coord for cell in self.path]

    @property
    def visited_coords(self) -> List[Coord]:
        return [cell.coord for cell in self.visited_order]

    def to_summary(self) -> Dict[str, Any]:
        """Plain dict for stats panels and logs."""
        return {
            "status": self.status.value,
            "found": self.found,
            "path_length": self.path_length,
            "nodes_explored": self.nodes_explored,
            "elapsed": self.elapsed,
            "cost": self.cost,
        }

    @classmethod
    def empty(cls, status: SearchStatus) -> "SearchResult":
        return cls(status=status)


@dataclass(frozen=True)
class SearchEvent:
    """One observable step of a run.

    ``cell`` is set for NODE_VISITED and PATH_REVEALED; ``result`` for
    FINISHED and CANCELLED.
    """

    kind: SearchEventKind
    cell: Optional[Cell] = None
    result: Optional[SearchResult] = None

    @property
    def is_terminal(self) -> bool:
        return self.kind in (SearchEventKind.FINISHED, SearchEventKind.CANCELLED)


@dataclass
class SearchStats:
    """Counters describing the most recent run (open/closed sizes at the end)."""

    path_length: int = 0
    nodes_explored: int = 0
    open_set_size: int = 0
    closed_set_size: int = 0
