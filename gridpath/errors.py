"""Typed errors raised by grid edits and layout imports.

Search outcomes (no path, cancelled, already running) are never errors; they
are reported as ``SearchStatus`` values on a ``SearchResult``. Only malformed
input from the caller ends up here, and the grid is left unchanged whenever
one of these is raised.
"""

from typing import List, Optional


class GridError(Exception):
    """Base class for grid validation failures."""


class InvalidDimensionsError(GridError, ValueError):
    """Raised when a grid is created or resized with unusable dimensions."""

    def __init__(self, rows: object, cols: object, reason: Optional[str] = None) -> None:
        self.rows = rows
        self.cols = cols
        self.reason = reason or "rows and cols must both be positive integers"
        super().__init__(f"Invalid grid dimensions {rows}x{cols}: {self.reason}")


class GridImportError(GridError):
    """Raised when a layout payload cannot be applied to a grid.

    ``issues`` holds one human-readable line per problem so a UI can list them
    without parsing the message.
    """

    def __init__(self, issues: List[str], *, underlying: Optional[Exception] = None) -> None:
        self.issues = list(issues)
        self.underlying = underlying
        message_lines = ["Grid layout could not be imported:"]
        for issue in self.issues:
            message_lines.append(f"  - {issue}")
        message_lines.extend(
            [
                "\nExpected shape:",
                "  {rows, cols, obstacles: [{row, col}], start: {row, col}, goal: {row, col}}",
            ]
        )
        super().__init__("\n".join(message_lines))
