"""Grid model: cells, the board, its exchanged layout schema and helpers."""

from .cell import Cell, Coord
from .grid import Grid, NEIGHBOR_OFFSETS, default_endpoints, orthogonal_neighbors
from .schemas import (
    CellCoord,
    GridLayoutState,
    ObstacleState,
    WeightedCellState,
)
from .helpers import (
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

__all__ = [
    "Cell",
    "Coord",
    "Grid",
    "NEIGHBOR_OFFSETS",
    "default_endpoints",
    "orthogonal_neighbors",
    "CellCoord",
    "GridLayoutState",
    "ObstacleState",
    "WeightedCellState",
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
]
