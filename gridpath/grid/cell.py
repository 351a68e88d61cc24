"""Single grid cell: role flags plus the scratch fields A* writes during a run."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

Coord = Tuple[int, int]  # (row, col)


@dataclass(eq=False)
class Cell:
    """One grid position.

    ``is_start``, ``is_goal`` and ``is_obstacle`` are mutually exclusive; the
    owning ``Grid`` enforces that. Everything below ``weight`` is search
    scratch, owned and reset by the grid/search between runs.

    Cells compare by identity: two cells at the same coordinate on different
    grids are different cells.
    """

    row: int
    col: int
    is_obstacle: bool = False
    is_start: bool = False
    is_goal: bool = False
    weight: float = 1.0

    g: float = math.inf
    h: float = 0.0
    f: float = math.inf
    visited: bool = False
    on_path: bool = False
    # Index of the predecessor as (row, col), never a live reference
    came_from: Optional[Coord] = None

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    @property
    def is_endpoint(self) -> bool:
        return self.is_start or self.is_goal

    def reset_search(self) -> None:
        """Restore scratch fields to their pre-search defaults."""
        self.g = math.inf
        self.h = 0.0
        self.f = math.inf
        self.visited = False
        self.on_path = False
        self.came_from = None

    def __repr__(self) -> str:
        flags = []
        if self.is_start:
            flags.append("start")
        if self.is_goal:
            flags.append("goal")
        if self.is_obstacle:
            flags.append("obstacle")
        suffix = f" {'/'.join(flags)}" if flags else ""
        return f"Cell({self.row}, {self.col}{suffix})"
