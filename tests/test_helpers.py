import random

import pytest

from gridpath import (
    PATTERNS,
    Grid,
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


def test_manhattan_distance():
    assert manhattan_distance((0, 0), (4, 4)) == 8
    assert manhattan_distance((3, 1), (1, 3)) == 4
    assert manhattan_distance((2, 2), (2, 2)) == 0


def test_breadth_first_path_finds_shortest_route():
    grid = Grid(5, 5)
    grid.set_start(0, 0)
    grid.set_goal(0, 4)
    for row in range(4):
        grid.toggle_obstacle(row, 2)

    path = breadth_first_path(grid)

    assert path is not None
    assert path[0] == (0, 0)
    assert path[-1] == (0, 4)
    assert len(path) == 13
    assert (4, 2) in path


def test_breadth_first_path_none_when_blocked():
    grid = Grid(3, 3)
    for coord in [(0, 1), (1, 0), (1, 1), (1, 2), (2, 1)]:
        grid.toggle_obstacle(*coord)

    assert breadth_first_path(grid) is None


def test_breadth_first_path_explicit_endpoints():
    grid = Grid(4, 4)
    assert breadth_first_path(grid, (0, 0), (0, 0)) == [(0, 0)]
    assert breadth_first_path(grid, (0, 0), (0, 3)) == [(0, 0), (0, 1), (0, 2), (0, 3)]


def test_generate_obstacles_is_seeded_and_keeps_endpoints_connected():
    first = Grid(12, 12)
    second = Grid(12, 12)

    count = generate_obstacles(first, 0.35, rng=random.Random(11))
    generate_obstacles(second, 0.35, rng=random.Random(11))

    assert count == len(first.obstacle_coords())
    assert first.obstacle_coords() == second.obstacle_coords()
    assert not first.start_cell.is_obstacle
    assert not first.goal_cell.is_obstacle
    assert breadth_first_path(first) is not None


@pytest.mark.parametrize("seed", range(8))
def test_dense_generation_still_connects_endpoints(seed):
    grid = Grid(10, 10)
    generate_obstacles(grid, 0.6, rng=random.Random(seed))
    assert breadth_first_path(grid) is not None


def test_generate_obstacles_density_bounds():
    grid = Grid(6, 6)

    assert generate_obstacles(grid, 0.0, rng=random.Random(1)) == 0

    generate_obstacles(grid, 1.0, rng=random.Random(1), ensure_path=False)
    non_endpoints = len(grid) - 2
    assert len(grid.obstacle_coords()) == non_endpoints

    with pytest.raises(ValueError):
        generate_obstacles(grid, 1.5)
    with pytest.raises(ValueError):
        generate_obstacles(grid, -0.1)


def test_carve_corridor_connects_walled_grid():
    grid = Grid(6, 6)
    generate_obstacles(grid, 1.0, rng=random.Random(3), ensure_path=False)
    assert breadth_first_path(grid) is None

    removed = carve_corridor(grid)

    assert removed > 0
    assert breadth_first_path(grid) is not None


def test_render_ascii_layout():
    grid = Grid(3, 3)
    grid.toggle_obstacle(1, 1)

    assert render_ascii(grid) == "\n".join(
        [
            "+---+",
            "|S  |",
            "| # |",
            "|  G|",
            "+---+",
        ]
    )


def test_render_ascii_marks_visited_and_path():
    grid = Grid(3, 3)
    grid.get_cell(0, 1).visited = True
    grid.get_cell(0, 1).on_path = True
    grid.get_cell(1, 0).visited = True

    text = render_ascii(grid, symbols={"empty": "_", "unknown": "?"}, border=False)

    assert text.splitlines() == ["S*_", ".__", "__G"]


def test_format_duration():
    assert format_duration(0.012) == "12ms"
    assert format_duration(0.0) == "0ms"
    assert format_duration(1.234) == "1.23s"


def test_spiral_pattern_winds_out_from_center():
    grid = Grid(11, 11)
    grid.set_start(0, 0)
    grid.set_goal(10, 10)
    grid.toggle_obstacle(0, 5)

    count = spiral_pattern(grid)

    walls = set(grid.obstacle_coords())
    assert count == len(walls)
    assert (0, 5) not in walls
    for coord in [(5, 5), (5, 6), (5, 7), (6, 7), (7, 7), (7, 3), (3, 3), (3, 9), (9, 1), (1, 10)]:
        assert coord in walls
    # One-cell corridor between the rings
    assert (6, 6) not in walls
    assert (6, 4) not in walls
    assert breadth_first_path(grid) is not None


def test_diagonal_pattern_crosses_from_top_edge():
    grid = Grid(6, 6)

    diagonal_pattern(grid)

    walls = set(grid.obstacle_coords())
    for coord in [(0, 0), (2, 2), (5, 5), (0, 5), (5, 0), (0, 3), (2, 5), (0, 2), (2, 0)]:
        assert coord in walls
    assert grid.start == (1, 1) and (1, 1) not in walls
    assert grid.goal == (4, 4) and (4, 4) not in walls


def test_simple_walls_leave_middle_gap():
    grid = Grid(8, 10)
    grid.set_start(0, 0)
    grid.set_goal(7, 9)

    count = simple_walls(grid)

    expected = {(row, col) for col in (2, 6) for row in range(8) if row not in (3, 4)}
    assert set(grid.obstacle_coords()) == expected
    assert count == 12
    assert breadth_first_path(grid) is not None


@pytest.mark.parametrize("name", sorted(PATTERNS))
def test_patterns_never_cover_endpoints(name):
    grid = Grid(9, 13)
    PATTERNS[name](grid)
    assert not grid.start_cell.is_obstacle
    assert not grid.goal_cell.is_obstacle
    assert grid.obstacle_coords()
