"""Pydantic schemas for the exchanged grid layout.

These models mirror the runtime ``Grid``/``Cell`` objects but only carry the
layout (dimensions, obstacles, weights, endpoints). Search scratch is never
serialized. ``GridLayoutState.model_dump()`` yields the plain JSON-compatible
shape used for save/load.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator


class CellCoord(BaseModel):
    """A (row, col) position on the grid."""

    row: int = Field(..., ge=0, description="0-based row index")
    col: int = Field(..., ge=0, description="0-based column index")

    def as_tuple(self) -> Tuple[int, int]:
        return (self.row, self.col)


class ObstacleState(CellCoord):
    """An obstacle cell. ``weight`` is only present for non-default weights."""

    weight: Optional[float] = Field(None, gt=0, description="Traversal cost multiplier")


class WeightedCellState(CellCoord):
    """A traversable cell whose cost multiplier differs from 1."""

    weight: float = Field(..., gt=0, description="Traversal cost multiplier")


class GridLayoutState(BaseModel):
    """Sparse representation of a grid layout.

    Only obstacle cells (and cells with a non-default weight) are listed.
    ``start``/``goal`` may be omitted on import, in which case the grid keeps
    its current (or default) placement for that endpoint.
    """

    rows: int = Field(..., gt=0)
    cols: int = Field(..., gt=0)
    obstacles: List[ObstacleState] = Field(
        default_factory=list,
        description="Sparse list of obstacle cells",
    )
    start: Optional[CellCoord] = None
    goal: Optional[CellCoord] = None
    weights: List[WeightedCellState] = Field(
        default_factory=list,
        description="Non-obstacle cells whose weight is not 1",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "GridLayoutState":
        # Collect every problem so the caller sees them all at once
        problems: List[str] = []
        if self.rows * self.cols < 2:
            problems.append("grid must hold at least two cells (start and goal)")

        def out_of_bounds(label: str, coord: CellCoord) -> None:
            if coord.row >= self.rows or coord.col >= self.cols:
                problems.append(
                    f"{label} ({coord.row}, {coord.col}) is outside a "
                    f"{self.rows}x{self.cols} grid"
                )

        for index, obstacle in enumerate(self.obstacles):
            out_of_bounds(f"obstacles[{index}]", obstacle)
        for index, weighted in enumerate(self.weights):
            out_of_bounds(f"weights[{index}]", weighted)
        if self.start is not None:
            out_of_bounds("start", self.start)
        if self.goal is not None:
            out_of_bounds("goal", self.goal)
        if self.start is not None and self.goal is not None and self.start.as_tuple() == self.goal.as_tuple():
            problems.append("start and goal must be different cells")

        if problems:
            raise ValueError("; ".join(problems))
        return self

    def obstacle_coords(self) -> List[Tuple[int, int]]:
        return [obstacle.as_tuple() for obstacle in self.obstacles]
