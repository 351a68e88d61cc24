"""
Gridpath - A* shortest-path search on an editable grid.

Toggle obstacles, move the endpoints, and watch the search explore the grid
one cell at a time.

The core has no UI: a front end edits a Grid (or a PathfinderSession), runs a
PathSearch in blocking or animated mode, and repaints from the cell flags
after each emitted SearchEvent.
"""

__version__ = "0.1.0"

from .config import Config
from .errors import GridError, GridImportError, InvalidDimensionsError

# Grid model
from .grid import (
    Cell,
    CellCoord,
    Grid,
    GridLayoutState,
    ObstacleState,
    WeightedCellState,
    PATTERNS,
    breadth_first_path,
    carve_corridor,
    diagonal_pattern,
    format_duration,
    generate_obstacles,
    manhattan_distance,
    render_ascii,
    simple_walls,
    spiral_pattern,
)

# Search
from .search import (
    AStarStepper,
    PathSearch,
    SearchEvent,
    SearchEventKind,
    SearchResult,
    SearchState,
    SearchStats,
    SearchStatus,
)

# Coordinator
from .session import PathfinderSession, SessionStats, default_session

__all__ = [
    "Config",
    # Errors
    "GridError",
    "GridImportError",
    "InvalidDimensionsError",
    # Grid model
    "Cell",
    "CellCoord",
    "Grid",
    "GridLayoutState",
    "ObstacleState",
    "WeightedCellState",
    # Grid helpers
    "PATTERNS",
    "breadth_first_path",
    "carve_corridor",
    "diagonal_pattern",
    "format_duration",
    "generate_obstacles",
    "manhattan_distance",
    "render_ascii",
    "simple_walls",
    "spiral_pattern",
    # Search
    "AStarStepper",
    "PathSearch",
    "SearchEvent",
    "SearchEventKind",
    "SearchResult",
    "SearchState",
    "SearchStats",
    "SearchStatus",
    # Coordinator
    "PathfinderSession",
    "SessionStats",
    "default_session",
]
