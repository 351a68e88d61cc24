"""Utilities for grids: distances, a BFS oracle, obstacle generation and rendering."""

from __future__ import annotations

import random
from collections import deque
from typing import Callable, Dict, List, Optional, Tuple

from ..config import Config
from .cell import Coord
from .grid import Grid, orthogonal_neighbors


def manhattan_distance(a: Coord, b: Coord) -> int:
    """|Δrow| + |Δcol| between two (row, col) coordinates."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def breadth_first_path(grid: Grid, start: Optional[Coord] = None, goal: Optional[Coord] = None) -> Optional[List[Coord]]:
    """Return a shortest list of (row, col) coordinates avoiding obstacles.

    Uses BFS, so path length is counted in steps and cell weights are ignored.
    Defaults to the grid's own endpoints. Returns None if goal unreachable.
    Path includes start and goal.
    """

    start = grid.start if start is None else start
    goal = grid.goal if goal is None else goal
    if start is None or goal is None:
        return None

    # Trivial case: already at goal
    if start == goal:
        return [start]

    visited = {start}
    queue: deque[Tuple[Coord, List[Coord]]] = deque([(start, [start])])

    while queue:
        # FIFO order: first path to reach goal is shortest
        coord, path = queue.popleft()
        for nb in orthogonal_neighbors(coord[0], coord[1], grid.rows, grid.cols):
            if nb in visited or grid.cells[grid.index_of(*nb)].is_obstacle:
                continue
            visited.add(nb)
            new_path = path + [nb]
            if nb == goal:
                return new_path
            queue.append((nb, new_path))
    # Goal blocked or disconnected
    return None


def carve_corridor(grid: Grid) -> int:
    """Clear obstacles along the start row, then down the goal column.

    Produces an L-shaped corridor that always connects the endpoints.
    Returns the number of obstacles removed.
    """
    if grid.start is None or grid.goal is None:
        return 0
    (start_row, start_col), (goal_row, goal_col) = grid.start, grid.goal
    removed = 0

    for col in range(min(start_col, goal_col), max(start_col, goal_col) + 1):
        cell = grid.get_cell(start_row, col)
        if cell is not None and cell.is_obstacle:
            cell.is_obstacle = False
            removed += 1

    for row in range(min(start_row, goal_row), max(start_row, goal_row) + 1):
        cell = grid.get_cell(row, goal_col)
        if cell is not None and cell.is_obstacle:
            cell.is_obstacle = False
            removed += 1

    return removed


def generate_obstacles(
    grid: Grid,
    density: Optional[float] = None,
    *,
    rng: Optional[random.Random] = None,
    ensure_path: bool = True,
) -> int:
    """Replace the grid's obstacles with random ones.

    Each non-endpoint cell becomes an obstacle with probability ``density``.
    When ``ensure_path`` is set and the endpoints end up disconnected, a
    corridor is carved between them.

    Returns:
        Number of obstacle cells after generation
    """
    density = Config.OBSTACLE_DENSITY if density is None else density
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"Obstacle density must be within [0, 1], got {density!r}")
    rng = rng or random.Random()

    grid.clear_obstacles()
    for cell in grid.iter_cells():
        if cell.is_endpoint:
            continue
        if rng.random() < density:
            cell.is_obstacle = True

    if ensure_path and breadth_first_path(grid) is None:
        carve_corridor(grid)

    return len(grid.obstacle_coords())


def _wall(grid: Grid, row: int, col: int) -> None:
    cell = grid.get_cell(row, col)
    if cell is not None and not cell.is_endpoint:
        cell.is_obstacle = True


def spiral_pattern(grid: Grid) -> int:
    """Square spiral of walls winding out from the center.

    Arms grow by two cells every second turn, leaving a one-cell corridor
    between rings. Stops once the walk leaves the grid.
    """
    grid.clear_obstacles()
    row, col = grid.rows // 2, grid.cols // 2
    directions = ((0, 1), (1, 0), (0, -1), (-1, 0))  # right, down, left, up
    direction = 0
    arm = 2
    walked = 0
    turns = 0
    limit = 2 * max(grid.rows, grid.cols)

    while grid.in_bounds(row, col) and arm <= limit:
        _wall(grid, row, col)
        row += directions[direction][0]
        col += directions[direction][1]
        walked += 1
        if walked == arm:
            walked = 0
            direction = (direction + 1) % 4
            turns += 1
            if turns == 2:
                turns = 0
                arm += 2

    return len(grid.obstacle_coords())


def diagonal_pattern(grid: Grid) -> int:
    """Crossing diagonals from the top edge, one pair every third column."""
    grid.clear_obstacles()
    span = min(grid.rows, grid.cols)
    for offset in range(0, max(grid.rows, grid.cols), 3):
        for step in range(span):
            _wall(grid, step, offset + step)
            _wall(grid, step, grid.cols - 1 - offset - step)
    return len(grid.obstacle_coords())


def simple_walls(grid: Grid) -> int:
    """Vertical walls every fourth column from column 2, open at the middle two rows."""
    grid.clear_obstacles()
    gap = {grid.rows // 2, grid.rows // 2 - 1}
    for col in range(2, grid.cols, 4):
        for row in range(grid.rows):
            if row not in gap:
                _wall(grid, row, col)
    return len(grid.obstacle_coords())


PATTERNS: Dict[str, Callable[[Grid], int]] = {
    "spiral": spiral_pattern,
    "diagonal": diagonal_pattern,
    "simple_walls": simple_walls,
}


_DEFAULT_CELL_SYMBOLS: Dict[str, str] = {
    "start": "S",
    "goal": "G",
    "obstacle": "#",
    "path": "*",
    "visited": ".",
    "empty": " ",
}


def render_ascii(grid: Grid, symbols: Optional[Dict[str, str]] = None, *, border: bool = True) -> str:
    """Render the grid one character per cell.

    Precedence follows what a renderer shows: endpoint, obstacle, path,
    visited, empty. Unknown keys in ``symbols`` are ignored.
    """

    mapping = {**_DEFAULT_CELL_SYMBOLS}
    if symbols:
        mapping.update({key: value for key, value in symbols.items() if key in mapping})

    lines: List[str] = []
    if border:
        lines.append("+" + "-" * grid.cols + "+")
    for row in range(grid.rows):
        row_chars: List[str] = []
        for col in range(grid.cols):
            cell = grid.cells[grid.index_of(row, col)]
            if cell.is_start:
                key = "start"
            elif cell.is_goal:
                key = "goal"
            elif cell.is_obstacle:
                key = "obstacle"
            elif cell.on_path:
                key = "path"
            elif cell.visited:
                key = "visited"
            else:
                key = "empty"
            row_chars.append(mapping[key])
        line = "".join(row_chars)
        lines.append(f"|{line}|" if border else line)
    if border:
        lines.append("+" + "-" * grid.cols + "+")

    return "\n".join(lines)


def format_duration(seconds: float) -> str:
    """``"12ms"`` below one second, ``"1.23s"`` from one second up."""
    milliseconds = round(seconds * 1000)
    if milliseconds < 1000:
        return f"{milliseconds}ms"
    return f"{seconds:.2f}s"
