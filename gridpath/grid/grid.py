"""Grid board: cells, endpoints, edit operations and layout import/export."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterator, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from ..config import Config
from ..errors import GridImportError, InvalidDimensionsError
from .cell import Cell, Coord
from .schemas import CellCoord, GridLayoutState, ObstacleState, WeightedCellState

# Up, right, down, left. The order is part of the search's tie-breaking.
NEIGHBOR_OFFSETS: Tuple[Coord, ...] = ((-1, 0), (0, 1), (1, 0), (0, -1))

LayoutPayload = Union[GridLayoutState, Mapping[str, Any], str, bytes]


def orthogonal_neighbors(row: int, col: int, rows: int, cols: int) -> Iterator[Coord]:
    """Yield in-bounds 4-connected neighbor coordinates of (row, col)."""
    for dr, dc in NEIGHBOR_OFFSETS:
        nr, nc = row + dr, col + dc
        if 0 <= nr < rows and 0 <= nc < cols:
            yield nr, nc


def default_endpoints(rows: int, cols: int) -> Tuple[Coord, Coord]:
    """Start near the quarter point, goal near the three-quarter point."""
    return (rows // 4, cols // 4), ((3 * rows) // 4, (3 * cols) // 4)


class Grid:
    """Rectangular board of ``rows * cols`` cells stored row-major in a flat list.

    The grid owns the start/goal designation and keeps the role flags
    exclusive: a cell is at most one of start, goal or obstacle. Edits that
    would break that (toggling an obstacle onto an endpoint, moving the start
    onto the goal) are ignored and reported with a ``False`` return.
    """

    def __init__(self, rows: Optional[int] = None, cols: Optional[int] = None):
        rows = Config.DEFAULT_ROWS if rows is None else rows
        cols = Config.DEFAULT_COLS if cols is None else cols
        self._check_dimensions(rows, cols)
        self.rows: int = rows
        self.cols: int = cols
        self.cells: List[Cell] = []
        self.start: Optional[Coord] = None
        self.goal: Optional[Coord] = None
        self._initialize()

    # -------------------- construction --------------------

    @staticmethod
    def _check_dimensions(rows: Any, cols: Any) -> None:
        for value in (rows, cols):
            # bool is an int subclass but never a meaningful size
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidDimensionsError(rows, cols, "dimensions must be integers")
        if rows < 1 or cols < 1:
            raise InvalidDimensionsError(rows, cols)
        if rows * cols < 2:
            raise InvalidDimensionsError(rows, cols, "a grid needs room for distinct start and goal cells")

    def _initialize(self) -> None:
        self.cells = [Cell(row, col) for row in range(self.rows) for col in range(self.cols)]
        self.start = None
        self.goal = None
        start, goal = default_endpoints(self.rows, self.cols)
        self.set_start(*start)
        self.set_goal(*goal)

    def resize(self, rows: int, cols: int) -> None:
        """Reinitialize at new dimensions. Destroys the current layout."""
        self._check_dimensions(rows, cols)
        self.rows = rows
        self.cols = cols
        self._initialize()

    def reset(self) -> None:
        """Reinitialize at the current dimensions with default endpoints."""
        self._initialize()

    def copy(self) -> "Grid":
        """Independent copy including search scratch."""
        clone = Grid.__new__(Grid)
        clone.rows = self.rows
        clone.cols = self.cols
        clone.cells = [replace(cell) for cell in self.cells]
        clone.start = self.start
        clone.goal = self.goal
        return clone

    # -------------------- lookup --------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def index_of(self, row: int, col: int) -> int:
        return row * self.cols + col

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Return the cell at (row, col), or None when out of bounds."""
        if not self.in_bounds(row, col):
            return None
        return self.cells[self.index_of(row, col)]

    def neighbors(self, row: int, col: int) -> List[Cell]:
        """In-bounds orthogonal neighbors, obstacles included."""
        return [self.cells[self.index_of(r, c)] for r, c in orthogonal_neighbors(row, col, self.rows, self.cols)]

    def iter_cells(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def start_cell(self) -> Optional[Cell]:
        return self.get_cell(*self.start) if self.start is not None else None

    @property
    def goal_cell(self) -> Optional[Cell]:
        return self.get_cell(*self.goal) if self.goal is not None else None

    def obstacle_coords(self) -> List[Coord]:
        return [cell.coord for cell in self.cells if cell.is_obstacle]

    # -------------------- edits --------------------

    def set_start(self, row: int, col: int) -> bool:
        """Move the start role to (row, col).

        Returns False and changes nothing when the target is out of bounds or
        is the goal. Any obstacle on the target is cleared.
        """
        cell = self.get_cell(row, col)
        if cell is None or cell.is_goal:
            return False
        previous = self.start_cell
        if previous is not None and previous is not cell:
            previous.is_start = False
        cell.is_start = True
        cell.is_obstacle = False
        self.start = cell.coord
        return True

    def set_goal(self, row: int, col: int) -> bool:
        """Move the goal role to (row, col). Mirror image of ``set_start``."""
        cell = self.get_cell(row, col)
        if cell is None or cell.is_start:
            return False
        previous = self.goal_cell
        if previous is not None and previous is not cell:
            previous.is_goal = False
        cell.is_goal = True
        cell.is_obstacle = False
        self.goal = cell.coord
        return True

    def toggle_obstacle(self, row: int, col: int) -> bool:
        """Flip the obstacle flag. Endpoints and out-of-bounds targets are ignored."""
        cell = self.get_cell(row, col)
        if cell is None or cell.is_endpoint:
            return False
        cell.is_obstacle = not cell.is_obstacle
        return True

    def set_obstacle(self, row: int, col: int, value: bool = True) -> bool:
        """Set the obstacle flag explicitly, with the same guards as ``toggle_obstacle``."""
        cell = self.get_cell(row, col)
        if cell is None or cell.is_endpoint:
            return False
        cell.is_obstacle = bool(value)
        return True

    def set_weight(self, row: int, col: int, weight: float) -> bool:
        """Set the traversal cost multiplier of a cell.

        Raises:
            ValueError: If weight is not a positive number
        """
        if isinstance(weight, bool) or not isinstance(weight, (int, float)) or not weight > 0:
            raise ValueError(f"Cell weight must be positive, got {weight!r}")
        cell = self.get_cell(row, col)
        if cell is None:
            return False
        cell.weight = float(weight)
        return True

    def clear_obstacles(self) -> None:
        for cell in self.cells:
            cell.is_obstacle = False

    def reset_search_state(self) -> None:
        """Clear visited/path/cost scratch on every cell. Layout is untouched."""
        for cell in self.cells:
            cell.reset_search()

    # -------------------- import / export --------------------

    def export_state(self) -> GridLayoutState:
        """Snapshot the layout. Only obstacle and weighted cells are listed."""
        obstacles: List[ObstacleState] = []
        weights: List[WeightedCellState] = []
        for cell in self.cells:
            if cell.is_obstacle:
                obstacles.append(
                    ObstacleState(
                        row=cell.row,
                        col=cell.col,
                        weight=cell.weight if cell.weight != 1 else None,
                    )
                )
            elif cell.weight != 1:
                weights.append(WeightedCellState(row=cell.row, col=cell.col, weight=cell.weight))
        return GridLayoutState(
            rows=self.rows,
            cols=self.cols,
            obstacles=obstacles,
            start=CellCoord(row=self.start[0], col=self.start[1]) if self.start else None,
            goal=CellCoord(row=self.goal[0], col=self.goal[1]) if self.goal else None,
            weights=weights,
        )

    def export_json(self, indent: Optional[int] = 2) -> str:
        return self.export_state().model_dump_json(indent=indent)

    def import_state(self, data: LayoutPayload) -> None:
        """Replace the layout with ``data``.

        The payload is validated completely and applied to a staged copy; this
        grid only changes once everything succeeded.

        Raises:
            GridImportError: If the payload is malformed or inconsistent
        """
        layout = self._coerce_layout(data)
        if layout.rows != self.rows or layout.cols != self.cols:
            staged = Grid(layout.rows, layout.cols)
        else:
            staged = self.copy()
            staged.reset_search_state()
        staged._apply_layout(layout)

        self.rows = staged.rows
        self.cols = staged.cols
        self.cells = staged.cells
        self.start = staged.start
        self.goal = staged.goal

    def import_json(self, text: Union[str, bytes]) -> None:
        self.import_state(text)

    @staticmethod
    def _coerce_layout(data: LayoutPayload) -> GridLayoutState:
        try:
            if isinstance(data, GridLayoutState):
                # Models are mutable; re-run validation on the current contents
                return GridLayoutState.model_validate(data.model_dump())
            if isinstance(data, (str, bytes)):
                return GridLayoutState.model_validate_json(data)
            if isinstance(data, Mapping):
                return GridLayoutState.model_validate(dict(data))
        except ValidationError as exc:
            issues = []
            for error in exc.errors():
                location = ".".join(str(part) for part in error.get("loc", ())) or "payload"
                issues.append(f"{location}: {error.get('msg', 'invalid value')}")
            raise GridImportError(issues, underlying=exc) from exc
        raise GridImportError([f"unsupported payload type {type(data).__name__}"])

    def _apply_layout(self, layout: GridLayoutState) -> None:
        start = layout.start.as_tuple() if layout.start else self.start
        goal = layout.goal.as_tuple() if layout.goal else self.goal
        if start == goal:
            raise GridImportError(
                [f"start and goal would both be at {start}; supply both endpoints"]
            )

        for cell in self.cells:
            cell.is_obstacle = False
            cell.is_start = False
            cell.is_goal = False
            cell.weight = 1.0
        self.start = None
        self.goal = None

        for obstacle in layout.obstacles:
            coord = obstacle.as_tuple()
            cell = self.cells[self.index_of(*coord)]
            if obstacle.weight is not None:
                cell.weight = obstacle.weight
            # Endpoints win over obstacles
            if coord != start and coord != goal:
                cell.is_obstacle = True
        for weighted in layout.weights:
            self.cells[self.index_of(weighted.row, weighted.col)].weight = weighted.weight

        self.set_start(*start)
        self.set_goal(*goal)
