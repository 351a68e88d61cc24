"""
Pathfinder session: one grid, one search, and the stats a UI displays.

The session is the single coordinating object a front end talks to. It holds
the application state (grid, search, last stats) instead of module globals,
and refuses layout edits while a search is running so the board cannot
change underneath an animation.

Usage pattern:
    session = PathfinderSession(rows=10, cols=10)
    session.toggle_obstacle(3, 4)
    result = session.find_path()                          # blocking
    result = await session.find_path_animated(on_event)   # paced, cancellable
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import Config
from .grid.grid import Grid, LayoutPayload
from .grid.helpers import PATTERNS, format_duration, generate_obstacles
from .grid.schemas import GridLayoutState
from .logging_utils import log_error, log_info, log_success, log_warning
from .search.results import SearchResult, SearchStatus
from .search.runner import PathSearch, SearchListener


@dataclass
class SessionStats:
    """Numbers shown next to the grid after a run.

    ``elapsed`` is wall-clock time for the whole run, animation included.
    """

    path_length: int = 0
    nodes_explored: int = 0
    elapsed: float = 0.0
    status: Optional[SearchStatus] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path_length": self.path_length,
            "nodes_explored": self.nodes_explored,
            "elapsed": self.elapsed,
            "time_taken": format_duration(self.elapsed),
            "status": self.status.value if self.status else None,
        }


class PathfinderSession:
    """Owns one Grid and one PathSearch and mediates every edit."""

    def __init__(
        self,
        rows: Optional[int] = None,
        cols: Optional[int] = None,
        *,
        delay_ms: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        self.grid = Grid(rows, cols)
        self.search = PathSearch(self.grid, delay_ms=delay_ms)
        self.stats = SessionStats()
        self.rng = rng or random.Random()

    @property
    def is_running(self) -> bool:
        return self.search.is_running

    def _guard(self, action: str) -> bool:
        """True when edits are allowed; logs and returns False mid-run."""
        if self.is_running:
            log_warning(f"[Session] Cannot {action} while a search is running")
            return False
        return True

    def _invalidate(self) -> None:
        # Any layout edit makes the last result meaningless
        self.search.reset()
        self.stats = SessionStats()

    # -------------------- edits --------------------

    def toggle_obstacle(self, row: int, col: int) -> bool:
        if not self._guard("edit obstacles"):
            return False
        changed = self.grid.toggle_obstacle(row, col)
        if changed:
            self._invalidate()
        return changed

    def set_start(self, row: int, col: int) -> bool:
        if not self._guard("move the start"):
            return False
        moved = self.grid.set_start(row, col)
        if moved:
            self._invalidate()
        return moved

    def set_goal(self, row: int, col: int) -> bool:
        if not self._guard("move the goal"):
            return False
        moved = self.grid.set_goal(row, col)
        if moved:
            self._invalidate()
        return moved

    def set_weight(self, row: int, col: int, weight: float) -> bool:
        if not self._guard("change weights"):
            return False
        changed = self.grid.set_weight(row, col, weight)
        if changed:
            self._invalidate()
        return changed

    def clear_obstacles(self) -> bool:
        if not self._guard("clear obstacles"):
            return False
        self.grid.clear_obstacles()
        self._invalidate()
        return True

    def clear_path(self) -> bool:
        """Wipe visited/path marks but keep the layout."""
        if not self._guard("clear the path"):
            return False
        self._invalidate()
        return True

    def reset(self) -> bool:
        """Back to an empty grid with default endpoints at the current size."""
        if not self._guard("reset the grid"):
            return False
        self.grid.reset()
        self._invalidate()
        return True

    def resize(self, rows: int, cols: int) -> bool:
        """Reinitialize at a new size.

        Raises:
            InvalidDimensionsError: If the dimensions are unusable
        """
        if not self._guard("resize the grid"):
            return False
        self.grid.resize(rows, cols)
        self._invalidate()
        log_info(f"[Session] Grid resized to {rows}x{cols}")
        return True

    def generate_obstacles(self, density: Optional[float] = None, *, seed: Optional[int] = None) -> bool:
        """Fill the grid with random obstacles, keeping the endpoints connected."""
        if not self._guard("generate obstacles"):
            return False
        rng = random.Random(seed) if seed is not None else self.rng
        count = generate_obstacles(self.grid, density, rng=rng)
        self._invalidate()
        log_info(f"[Session] Generated {count} obstacles")
        return True

    def apply_pattern(self, name: str) -> bool:
        """Replace the obstacles with a preset pattern (see ``PATTERNS``).

        Raises:
            ValueError: If the pattern name is unknown
        """
        if name not in PATTERNS:
            raise ValueError(f"Unknown pattern {name!r}; choose from {', '.join(sorted(PATTERNS))}")
        if not self._guard("apply a pattern"):
            return False
        count = PATTERNS[name](self.grid)
        self._invalidate()
        log_info(f"[Session] Pattern '{name}' placed {count} obstacles")
        return True

    # -------------------- layout exchange --------------------

    def export_state(self) -> GridLayoutState:
        return self.grid.export_state()

    def import_state(self, data: LayoutPayload) -> bool:
        """Load a layout.

        Raises:
            GridImportError: If the payload is malformed; the grid is unchanged
        """
        if not self._guard("load a layout"):
            return False
        self.grid.import_state(data)
        self._invalidate()
        log_info(f"[Session] Layout loaded ({self.grid.rows}x{self.grid.cols})")
        return True

    # -------------------- search --------------------

    def set_speed(self, delay_ms: float) -> float:
        return self.search.set_speed(delay_ms)

    def stop(self) -> bool:
        return self.search.stop()

    def find_path(self) -> SearchResult:
        """Blocking search; records stats and returns the result."""
        started = time.perf_counter()
        result = self.search.run()
        return self._record(result, time.perf_counter() - started)

    async def find_path_animated(self, on_event: Optional[SearchListener] = None) -> SearchResult:
        """Animated search; ``on_event`` receives every step for repainting."""
        started = time.perf_counter()
        result = await self.search.run_animated(on_event)
        return self._record(result, time.perf_counter() - started)

    def _record(self, result: SearchResult, elapsed: float) -> SearchResult:
        if result.status is SearchStatus.ALREADY_RUNNING:
            # The active run owns the stats
            return result

        self.stats = SessionStats(
            path_length=result.path_length,
            nodes_explored=result.nodes_explored,
            elapsed=elapsed,
            status=result.status,
        )
        if result.found:
            log_success(
                f"[Session] Path found! Length: {result.path_length}, "
                f"Time: {format_duration(elapsed)}"
            )
        elif result.status is SearchStatus.CANCELLED:
            log_warning(f"[Session] Search stopped after exploring {result.nodes_explored} cells")
        elif result.status is SearchStatus.MISSING_ENDPOINT:
            log_error("[Session] Set both start and goal before searching")
        else:
            log_error("[Session] No path exists between start and goal")
        return result

    def describe(self) -> str:
        """One-line summary of the grid and last run."""
        stats = self.stats.to_dict()
        return (
            f"{self.grid.rows}x{self.grid.cols} grid, start={self.grid.start}, goal={self.grid.goal}, "
            f"obstacles={len(self.grid.obstacle_coords())}, delay={self.search.delay_ms:g}ms, "
            f"last run: {stats['status'] or 'none'} "
            f"(path {stats['path_length']}, explored {stats['nodes_explored']}, {stats['time_taken']})"
        )


def default_session() -> PathfinderSession:
    """Session sized and paced from Config."""
    return PathfinderSession(Config.DEFAULT_ROWS, Config.DEFAULT_COLS, delay_ms=Config.ANIMATION_DELAY_MS)
