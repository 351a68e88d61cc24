"""
Maze Race

Generates a random maze, then runs the animated search twice: once at full
length, and once stopped halfway through to show cancellation. The grid is
repainted as text after every step.

Run: python examples/maze_race/run.py [seed]
"""

import asyncio
import sys

from gridpath import Config, PathfinderSession, SearchEventKind, render_ascii
from gridpath.logging_utils import log_info

ROWS = 12
COLS = 24
DENSITY = 0.32


async def race(session: PathfinderSession, stop_after: int | None = None) -> None:
    visits = 0

    def repaint(event):
        nonlocal visits
        if event.kind is SearchEventKind.NODE_VISITED:
            visits += 1
            # Slow down once the search is well underway
            if visits == 40:
                session.set_speed(session.search.delay_ms * 2)
            if stop_after is not None and visits == stop_after:
                session.stop()
        if event.cell is not None:
            print("\033[H\033[J" + render_ascii(session.grid))

    await session.find_path_animated(repaint)
    print(render_ascii(session.grid))
    log_info(session.describe())


async def main() -> None:
    Config.validate()
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else 7
    session = PathfinderSession(ROWS, COLS, delay_ms=15)
    session.set_start(0, 0)
    session.set_goal(ROWS - 1, COLS - 1)
    session.generate_obstacles(DENSITY, seed=seed)

    log_info("Full run")
    await race(session)

    session.clear_path()
    log_info("Stopped after 25 cells")
    await race(session, stop_after=25)


if __name__ == "__main__":
    asyncio.run(main())
