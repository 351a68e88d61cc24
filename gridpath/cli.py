"""
Command-line front end.

Plays the part of the UI layer: builds a session, applies edits from the
command line, runs the search and repaints the grid as text.

Run: python -m gridpath --rows 12 --cols 20 --density 0.3 --seed 7 --animate
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional, Sequence

from .config import Config
from .errors import GridError
from .grid.helpers import PATTERNS, render_ascii
from .logging_utils import log_error, log_info
from .search.results import SearchEvent, SearchEventKind
from .session import PathfinderSession

LEGEND = "S start, G goal, # obstacle, * path, . visited"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridpath",
        description="Visualize A* shortest-path search on a grid.",
    )
    parser.add_argument("--rows", type=int, default=Config.DEFAULT_ROWS, help="Grid rows")
    parser.add_argument("--cols", type=int, default=Config.DEFAULT_COLS, help="Grid columns")
    parser.add_argument("--start", type=int, nargs=2, metavar=("ROW", "COL"), help="Start cell")
    parser.add_argument("--goal", type=int, nargs=2, metavar=("ROW", "COL"), help="Goal cell")
    parser.add_argument(
        "--obstacle",
        type=int,
        nargs=2,
        action="append",
        default=[],
        metavar=("ROW", "COL"),
        help="Toggle an obstacle (repeatable)",
    )
    parser.add_argument("--density", type=float, default=None, help="Generate random obstacles at this density")
    parser.add_argument("--seed", type=int, default=None, help="Seed for obstacle generation")
    parser.add_argument("--pattern", choices=sorted(PATTERNS), default=None, help="Place a preset obstacle pattern")
    parser.add_argument("--layout", type=Path, default=None, help="Load a JSON layout before other edits")
    parser.add_argument("--export", action="store_true", help="Print the layout as JSON and exit")
    parser.add_argument("--animate", action="store_true", help="Run the paced search and repaint every step")
    parser.add_argument("--delay", type=float, default=Config.ANIMATION_DELAY_MS, help="Step delay in ms")
    return parser


def apply_edits(session: PathfinderSession, args: argparse.Namespace) -> None:
    """Apply layout options in the order a user would: load, move, generate, toggle.

    Endpoints move before generation so patterns and the carved corridor
    respect them.
    """
    if args.layout is not None:
        session.import_state(args.layout.read_text())
    if args.start is not None and not session.set_start(*args.start):
        log_error(f"Start {tuple(args.start)} rejected (out of bounds or on the goal)")
    if args.goal is not None and not session.set_goal(*args.goal):
        log_error(f"Goal {tuple(args.goal)} rejected (out of bounds or on the start)")
    if args.pattern is not None:
        session.apply_pattern(args.pattern)
    if args.density is not None:
        session.generate_obstacles(args.density, seed=args.seed)
    for row, col in args.obstacle:
        session.toggle_obstacle(row, col)


async def _run_animated(session: PathfinderSession) -> None:
    def repaint(event: SearchEvent) -> None:
        if event.kind in (SearchEventKind.NODE_VISITED, SearchEventKind.PATH_REVEALED):
            print(render_ascii(session.grid))
            print()

    await session.find_path_animated(repaint)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point. Returns 0 when a path was found, 1 when not, 2 on bad input."""
    args = build_parser().parse_args(list(argv) if argv is not None else None)

    try:
        Config.validate()
        session = PathfinderSession(args.rows, args.cols, delay_ms=args.delay)
        apply_edits(session, args)
    except (GridError, ValueError, OSError) as exc:
        log_error(str(exc))
        return 2

    if args.export:
        print(session.grid.export_json())
        return 0

    if args.animate:
        asyncio.run(_run_animated(session))
    else:
        session.find_path()

    print(render_ascii(session.grid))
    log_info(session.describe())
    log_info(f"Legend: {LEGEND}")
    return 0 if session.stats.path_length else 1


__all__ = ["build_parser", "apply_edits", "main"]
