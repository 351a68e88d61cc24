"""
PathSearch: drives the A* stepper in blocking or animated mode.

State machine:
    IDLE -> RUNNING -> FOUND | NOT_FOUND
    RUNNING -> CANCELLED (stop() observed at the next suspension point)

A new run from any terminal state starts over from a reset grid. Only one
run may be RUNNING per instance; a second request gets an ALREADY_RUNNING
result and the active run carries on untouched.

Animated runs are cooperative: after each NODE_VISITED event the run sleeps
``delay_ms``, after each PATH_REVEALED event ``delay_ms * path multiplier``,
using ``asyncio.sleep``. Nothing is suspended mid-expansion.
"""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional

from ..config import Config
from ..grid.grid import Grid
from ..logging_utils import log_error, log_step, log_warning
from .astar import AStarStepper
from .results import (
    SearchEvent,
    SearchEventKind,
    SearchResult,
    SearchState,
    SearchStats,
    SearchStatus,
)

SearchListener = Callable[[SearchEvent], None]

_TERMINAL_STATES = {
    SearchStatus.FOUND: SearchState.FOUND,
    SearchStatus.NOT_FOUND: SearchState.NOT_FOUND,
    SearchStatus.CANCELLED: SearchState.CANCELLED,
}


class PathSearch:
    """A* search bound to one grid, with pacing, cancellation and listeners."""

    def __init__(
        self,
        grid: Grid,
        *,
        delay_ms: Optional[float] = None,
        path_delay_multiplier: Optional[float] = None,
        listeners: Optional[List[SearchListener]] = None,
    ):
        """Create a search over ``grid``.

        Args:
            grid: Grid to search; read at the start of every run
            delay_ms: Pause after each visited cell in animated runs, clamped
                to the configured range. Defaults to Config.ANIMATION_DELAY_MS.
            path_delay_multiplier: Path reveal pause as a multiple of
                ``delay_ms``. Defaults to Config.PATH_DELAY_MULTIPLIER.
            listeners: Callables receiving every SearchEvent of animated runs.
                A failing listener is logged and does not stop the run.
        """
        self.grid = grid
        self.state: SearchState = SearchState.IDLE
        self.last_result: Optional[SearchResult] = None
        self.listeners: List[SearchListener] = list(listeners or [])
        self.path_delay_multiplier = (
            Config.PATH_DELAY_MULTIPLIER if path_delay_multiplier is None else path_delay_multiplier
        )
        self._delay_ms = Config.clamp_delay(Config.ANIMATION_DELAY_MS if delay_ms is None else delay_ms)
        self._stop_requested = False
        self._stepper = AStarStepper(grid)

    # -------------------- controls --------------------

    @property
    def is_running(self) -> bool:
        return self.state is SearchState.RUNNING

    @property
    def delay_ms(self) -> float:
        return self._delay_ms

    def set_speed(self, delay_ms: float) -> float:
        """Change the per-step delay. Takes effect at the next suspension.

        Returns the clamped delay actually applied.
        """
        self._delay_ms = Config.clamp_delay(delay_ms)
        return self._delay_ms

    def stop(self) -> bool:
        """Request cancellation of the active run. False if nothing is running."""
        if not self.is_running:
            return False
        self._stop_requested = True
        return True

    def reset(self) -> bool:
        """Clear search scratch and return to IDLE. Refused while running."""
        if self.is_running:
            return False
        self.grid.reset_search_state()
        self._stepper = AStarStepper(self.grid)
        self.state = SearchState.IDLE
        self.last_result = None
        return True

    def add_listener(self, listener: SearchListener) -> None:
        self.listeners.append(listener)

    def remove_listener(self, listener: SearchListener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def get_stats(self) -> SearchStats:
        """Counters of the most recent run."""
        return self._stepper.stats()

    # -------------------- runs --------------------

    def run(self) -> SearchResult:
        """Search to completion without pausing or notifying listeners."""
        rejected = self._begin()
        if rejected is not None:
            return rejected
        try:
            result = self._stepper.run_to_completion()
        except Exception:
            self.state = SearchState.IDLE
            raise
        return self._finish(result)

    async def run_animated(self, on_event: Optional[SearchListener] = None) -> SearchResult:
        """Search with a pause after every visited and every revealed path cell.

        Args:
            on_event: Optional callable for this run only, invoked after the
                registered listeners for every event

        Returns:
            The final SearchResult. A run stopped via ``stop()`` returns a
            CANCELLED result with the cells visited so far.
        """
        rejected = self._begin()
        if rejected is not None:
            return rejected

        steps = self._stepper.steps()
        try:
            for event in steps:
                if event.kind is SearchEventKind.FINISHED:
                    result = self._finish(event.result)
                    self._notify(event, on_event)
                    return result

                self._notify(event, on_event)
                delay_ms = self._delay_ms
                if event.kind is SearchEventKind.PATH_REVEALED:
                    delay_ms *= self.path_delay_multiplier
                await asyncio.sleep(delay_ms / 1000.0)

                if self._stop_requested:
                    result = self._finish(self._stepper.cancel())
                    self._notify(SearchEvent(SearchEventKind.CANCELLED, result=result), on_event)
                    return result
        except asyncio.CancelledError:
            # Task cancelled from outside: record the partial run, then propagate
            self._finish(self._stepper.cancel())
            raise
        except Exception:
            self.state = SearchState.IDLE
            raise
        finally:
            steps.close()

        # steps() always ends with FINISHED
        raise RuntimeError("A* stepper exited without a result")

    # -------------------- internals --------------------

    def _begin(self) -> Optional[SearchResult]:
        if self.is_running:
            log_warning("[Search] A search is already running; request ignored")
            return SearchResult.empty(SearchStatus.ALREADY_RUNNING)
        if self.grid.start_cell is None or self.grid.goal_cell is None:
            log_error("[Search] Grid has no start or goal; search not started")
            self.state = SearchState.IDLE
            result = SearchResult.empty(SearchStatus.MISSING_ENDPOINT)
            self.last_result = result
            return result
        self._stop_requested = False
        self.state = SearchState.RUNNING
        return None

    def _finish(self, result: SearchResult) -> SearchResult:
        self.state = _TERMINAL_STATES.get(result.status, SearchState.IDLE)
        self._stop_requested = False
        self.last_result = result
        if result.status is SearchStatus.FOUND:
            log_step(
                f"[Search] Path found: {result.path_length} cells, "
                f"{result.nodes_explored} explored"
            )
        elif result.status is SearchStatus.CANCELLED:
            log_step(f"[Search] Cancelled after {result.nodes_explored} cells")
        else:
            log_step(f"[Search] No path after exploring {result.nodes_explored} cells")
        return result

    def _notify(self, event: SearchEvent, on_event: Optional[SearchListener]) -> None:
        if event.cell is not None:
            log_step(f"[Search] {event.kind.value} {event.cell.coord}")
        callbacks = list(self.listeners)
        if on_event is not None:
            callbacks.append(on_event)
        for callback in callbacks:
            try:
                callback(event)
            except Exception as exc:
                log_error(f"[Search] Listener failed: {exc}")


__all__ = ["PathSearch", "SearchListener"]
