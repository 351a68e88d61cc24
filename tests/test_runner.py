import asyncio

import pytest

from gridpath import Config, Grid, PathSearch, SearchEventKind, SearchState, SearchStatus


def open_grid_5x5() -> Grid:
    grid = Grid(5, 5)
    grid.set_start(0, 0)
    grid.set_goal(4, 4)
    return grid


@pytest.fixture
def recorded_sleeps(monkeypatch):
    """Replace asyncio.sleep with a recorder that only yields to the loop."""
    delays = []
    real_sleep = asyncio.sleep

    async def fake_sleep(seconds, *args, **kwargs):
        delays.append(seconds)
        await real_sleep(0)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    return delays


def test_blocking_run_sets_terminal_state():
    grid = open_grid_5x5()
    search = PathSearch(grid)

    result = search.run()

    assert result.found
    assert search.state is SearchState.FOUND
    assert search.last_result is result
    assert not search.is_running


def test_blocking_run_not_found_state():
    grid = Grid(3, 3)
    for coord in [(0, 1), (1, 0), (1, 1), (1, 2), (2, 1)]:
        grid.toggle_obstacle(*coord)
    search = PathSearch(grid)

    result = search.run()

    assert result.status is SearchStatus.NOT_FOUND
    assert search.state is SearchState.NOT_FOUND


@pytest.mark.asyncio
async def test_animated_run_matches_blocking_run():
    blocking = PathSearch(open_grid_5x5()).run()
    grid = open_grid_5x5()
    events = []

    result = await PathSearch(grid, delay_ms=1).run_animated(events.append)

    assert result.found
    assert result.path_coords == blocking.path_coords
    assert result.visited_coords == blocking.visited_coords
    kinds = [event.kind for event in events]
    assert kinds == [SearchEventKind.NODE_VISITED] * 7 + [SearchEventKind.PATH_REVEALED] * 7 + [
        SearchEventKind.FINISHED
    ]
    assert events[-1].result is result


@pytest.mark.asyncio
async def test_animated_pacing_uses_path_multiplier(recorded_sleeps):
    grid = open_grid_5x5()
    search = PathSearch(grid, delay_ms=10, path_delay_multiplier=2)

    await search.run_animated()

    assert recorded_sleeps == [pytest.approx(0.01)] * 7 + [pytest.approx(0.02)] * 7


@pytest.mark.asyncio
async def test_set_speed_applies_at_next_step(recorded_sleeps):
    grid = open_grid_5x5()
    search = PathSearch(grid, delay_ms=10, path_delay_multiplier=2)
    visits = []

    def speed_up(event):
        if event.kind is SearchEventKind.NODE_VISITED:
            visits.append(event.cell.coord)
            if len(visits) == 2:
                search.set_speed(100)

    await search.run_animated(speed_up)

    expected = [0.01] + [0.1] * 6 + [0.2] * 7
    assert recorded_sleeps == [pytest.approx(value) for value in expected]


def test_set_speed_clamps_to_configured_range():
    search = PathSearch(open_grid_5x5())

    assert search.set_speed(0) == Config.MIN_DELAY_MS
    assert search.set_speed(10_000_000) == Config.MAX_DELAY_MS
    assert search.set_speed(75) == 75
    assert search.delay_ms == 75


@pytest.mark.asyncio
async def test_stop_cancels_at_next_suspension():
    grid = open_grid_5x5()
    search = PathSearch(grid, delay_ms=1)
    events = []

    def stop_on_third_visit(event):
        events.append(event)
        visits = [e for e in events if e.kind is SearchEventKind.NODE_VISITED]
        if event.kind is SearchEventKind.NODE_VISITED and len(visits) == 3:
            assert search.stop() is True

    result = await search.run_animated(stop_on_third_visit)

    assert result.status is SearchStatus.CANCELLED
    assert result.nodes_explored == 3
    assert result.path == ()
    assert events[-1].kind is SearchEventKind.CANCELLED
    assert events[-1].result is result
    assert search.state is SearchState.CANCELLED
    assert not any(cell.on_path for cell in grid.iter_cells())


@pytest.mark.asyncio
async def test_rerun_after_cancel_completes():
    grid = open_grid_5x5()
    search = PathSearch(grid, delay_ms=1)

    def stop_immediately(event):
        search.stop()

    cancelled = await search.run_animated(stop_immediately)
    assert cancelled.status is SearchStatus.CANCELLED

    result = await search.run_animated()

    assert result.found
    assert result.nodes_explored == 7
    assert search.state is SearchState.FOUND


@pytest.mark.asyncio
async def test_second_start_while_running_is_rejected():
    grid = open_grid_5x5()
    search = PathSearch(grid, delay_ms=1)

    task = asyncio.create_task(search.run_animated())
    await asyncio.sleep(0)
    assert search.is_running

    rejected = await search.run_animated()
    assert rejected.status is SearchStatus.ALREADY_RUNNING
    assert search.run().status is SearchStatus.ALREADY_RUNNING
    assert search.is_running

    result = await task
    assert result.found
    assert result.nodes_explored == 7


@pytest.mark.asyncio
async def test_task_cancellation_records_partial_run():
    grid = open_grid_5x5()
    search = PathSearch(grid, delay_ms=500)

    task = asyncio.create_task(search.run_animated())
    await asyncio.sleep(0)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert search.state is SearchState.CANCELLED
    assert search.last_result.status is SearchStatus.CANCELLED
    assert search.last_result.nodes_explored == 1


@pytest.mark.asyncio
async def test_failing_listener_does_not_abort_run(monkeypatch, capsys):
    monkeypatch.setenv("GRIDPATH_NO_COLOR", "1")
    grid = open_grid_5x5()
    seen = []

    def broken(event):
        raise RuntimeError("repaint failed")

    search = PathSearch(grid, delay_ms=1, listeners=[broken])
    search.add_listener(seen.append)

    result = await search.run_animated()

    assert result.found
    assert len(seen) == 15
    assert "[!] [Search] Listener failed: repaint failed" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_removed_listener_is_not_called():
    seen = []
    search = PathSearch(open_grid_5x5(), delay_ms=1, listeners=[seen.append])
    search.remove_listener(seen.append)

    await search.run_animated()

    assert seen == []


def test_stop_when_idle_returns_false():
    search = PathSearch(open_grid_5x5())
    assert search.stop() is False
    search.run()
    assert search.stop() is False


def test_reset_clears_marks_and_state():
    grid = open_grid_5x5()
    search = PathSearch(grid)
    search.run()

    assert search.reset() is True

    assert search.state is SearchState.IDLE
    assert search.last_result is None
    assert not any(cell.visited or cell.on_path for cell in grid.iter_cells())
    assert search.get_stats().nodes_explored == 0


def test_missing_endpoint_leaves_search_idle():
    grid = Grid(4, 4)
    grid.get_cell(*grid.start).is_start = False
    grid.start = None
    search = PathSearch(grid)

    result = search.run()

    assert result.status is SearchStatus.MISSING_ENDPOINT
    assert search.state is SearchState.IDLE
    assert search.last_result is result


@pytest.mark.asyncio
async def test_grid_edits_during_run_do_not_break_it():
    grid = open_grid_5x5()
    search = PathSearch(grid, delay_ms=1)
    visits = []

    def edit_underneath(event):
        if event.kind is not SearchEventKind.NODE_VISITED:
            return
        visits.append(event.cell.coord)
        if len(visits) == 2:
            grid.toggle_obstacle(1, 4)
            grid.set_goal(4, 0)
        elif len(visits) == 4:
            grid.resize(7, 7)

    result = await search.run_animated(edit_underneath)

    assert result.status in (SearchStatus.FOUND, SearchStatus.NOT_FOUND)
    assert search.state in (SearchState.FOUND, SearchState.NOT_FOUND)
    assert not search.is_running
    assert (grid.rows, grid.cols) == (7, 7)

    # The resized grid searches cleanly afterwards
    search.reset()
    assert search.run().found
