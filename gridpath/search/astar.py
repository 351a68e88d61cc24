"""
A* over a grid, one observable step at a time.

``AStarStepper.steps()`` is a generator: it yields a ``SearchEvent`` after
every interior cell it finalizes and after every interior path cell it
reveals, then a final FINISHED event carrying the ``SearchResult``. It never
sleeps; pacing belongs to whoever drives it (see ``runner.PathSearch``).

Heuristic:
- Manhattan distance to the goal, 4-connected moves only.
- Edge cost is the weight of the cell being entered (1 by default).

Open set ordering (deterministic, reproducible in tests):
- (f, h, first-insertion sequence): lower f, then lower h, then the cell
  that entered the open set first. A cell keeps its original sequence number
  when its f improves, so lazily re-pushed heap entries do not jump the queue.

Closed cells are never reopened.
"""

from __future__ import annotations

import heapq
import time
from typing import Dict, Iterator, List, Optional, Set, Tuple

from ..grid.cell import Cell
from ..grid.grid import Grid, orthogonal_neighbors
from ..grid.helpers import manhattan_distance
from .results import SearchEvent, SearchEventKind, SearchResult, SearchStats, SearchStatus

HeapEntry = Tuple[float, float, int, int]  # (f, h, seq, cell index)


class AStarStepper:
    """Resumable A* state: open heap, closed set and the cells seen so far.

    The stepper captures the grid's cell list, dimensions and endpoints when a
    run starts. Edits made to the grid mid-run are tolerated: obstacle flags
    and weights are read live, while a resize swaps in a new cell list the
    running search never sees.
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        self._cells: List[Cell] = []
        self._cols = 0
        self._start_index = -1
        self._goal_index = -1
        self._started_at: Optional[float] = None
        self._clear()

    def _clear(self) -> None:
        self.open_heap: List[HeapEntry] = []
        # cell index -> sequence number of its first insertion into the open set
        self.open_order: Dict[int, int] = {}
        self.closed: Set[int] = set()
        self.visited_order: List[Cell] = []
        self.path: List[Cell] = []
        self.result: Optional[SearchResult] = None
        self.seq = 0

    # -------------------- open set --------------------

    def _push(self, index: int, cell: Cell) -> None:
        seq = self.open_order.get(index)
        if seq is None:
            self.seq += 1
            seq = self.seq
            self.open_order[index] = seq
        heapq.heappush(self.open_heap, (cell.f, cell.h, seq, index))

    def _pop(self) -> Optional[int]:
        """Pop the best live entry, skipping closed cells and stale costs."""
        while self.open_heap:
            f, _, _, index = heapq.heappop(self.open_heap)
            if index in self.closed:
                continue
            if f != self._cells[index].f:
                continue
            return index
        return None

    @property
    def open_set_size(self) -> int:
        return len(self.open_order) - len(self.closed)

    # -------------------- run --------------------

    def steps(self) -> Iterator[SearchEvent]:
        """Run the search, yielding one event per suspension point."""
        self._clear()
        grid = self.grid
        start_cell = grid.start_cell
        goal_cell = grid.goal_cell
        if start_cell is None or goal_cell is None:
            self.result = SearchResult.empty(SearchStatus.MISSING_ENDPOINT)
            yield SearchEvent(SearchEventKind.FINISHED, result=self.result)
            return

        grid.reset_search_state()
        self._cells = cells = grid.cells
        rows, self._cols = grid.rows, grid.cols
        self._start_index = grid.index_of(*start_cell.coord)
        self._goal_index = grid.index_of(*goal_cell.coord)
        goal = goal_cell.coord
        self._started_at = time.perf_counter()

        start_cell.g = 0.0
        start_cell.h = manhattan_distance(start_cell.coord, goal)
        start_cell.f = start_cell.h
        self._push(self._start_index, start_cell)

        while True:
            index = self._pop()
            if index is None:
                break
            current = cells[index]

            if index == self._goal_index:
                elapsed = time.perf_counter() - self._started_at
                self.path = self._reconstruct_path(index)
                for path_cell in self.path:
                    if path_cell is start_cell or path_cell is goal_cell:
                        continue
                    path_cell.on_path = True
                    yield SearchEvent(SearchEventKind.PATH_REVEALED, cell=path_cell)
                self.result = SearchResult(
                    status=SearchStatus.FOUND,
                    path=tuple(self.path),
                    visited_order=tuple(self.visited_order),
                    elapsed=elapsed,
                    cost=current.g,
                )
                yield SearchEvent(SearchEventKind.FINISHED, result=self.result)
                return

            self.closed.add(index)
            if index != self._start_index:
                current.visited = True
                self.visited_order.append(current)
                yield SearchEvent(SearchEventKind.NODE_VISITED, cell=current)

            for nr, nc in orthogonal_neighbors(current.row, current.col, rows, self._cols):
                n_index = nr * self._cols + nc
                neighbor = cells[n_index]
                if n_index in self.closed or neighbor.is_obstacle:
                    continue
                tentative_g = current.g + neighbor.weight
                if tentative_g < neighbor.g:
                    neighbor.came_from = current.coord
                    neighbor.g = tentative_g
                    neighbor.h = manhattan_distance(neighbor.coord, goal)
                    neighbor.f = neighbor.g + neighbor.h
                    self._push(n_index, neighbor)

        self.result = SearchResult(
            status=SearchStatus.NOT_FOUND,
            visited_order=tuple(self.visited_order),
            elapsed=time.perf_counter() - self._started_at,
        )
        yield SearchEvent(SearchEventKind.FINISHED, result=self.result)

    def cancel(self) -> SearchResult:
        """Freeze the partial run into a CANCELLED result."""
        elapsed = 0.0
        if self._started_at is not None:
            elapsed = time.perf_counter() - self._started_at
        self.result = SearchResult(
            status=SearchStatus.CANCELLED,
            visited_order=tuple(self.visited_order),
            elapsed=elapsed,
        )
        return self.result

    def run_to_completion(self) -> SearchResult:
        """Drain ``steps()`` and return the final result."""
        for event in self.steps():
            if event.kind is SearchEventKind.FINISHED:
                return event.result
        # steps() always ends with FINISHED
        raise RuntimeError("A* stepper exited without a result")

    def _reconstruct_path(self, end_index: int) -> List[Cell]:
        path: List[Cell] = []
        current: Optional[int] = end_index
        # Bounded walk; links can be stale if the grid was edited mid-run
        for _ in range(len(self._cells)):
            if current is None:
                break
            cell = self._cells[current]
            path.append(cell)
            if current == self._start_index or cell.came_from is None:
                break
            row, col = cell.came_from
            current = row * self._cols + col
        path.reverse()
        return path

    def stats(self) -> SearchStats:
        return SearchStats(
            path_length=len(self.path),
            nodes_explored=len(self.visited_order),
            open_set_size=self.open_set_size,
            closed_set_size=len(self.closed),
        )
