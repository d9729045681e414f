from collections import deque
from typing import List, Optional

import pytest

from pathviz.core.config import MAP_DIR
from pathviz.core.maps import empty_grid, load_map
from pathviz.core.types import OPEN, WALL, Cell, Grid


def grid_from_rows(rows: List[str], start: Cell, goal: Cell) -> Grid:
    """'#' is a wall, anything else is open; rows are indexed [y][x]."""
    cells = [[WALL if ch == "#" else OPEN for ch in row] for row in rows]
    grid = Grid(len(rows), cells, start, goal)
    grid.validate()
    return grid


def bfs_distance(grid: Grid) -> Optional[int]:
    """Reference shortest move count, None if unreachable."""
    dist = {grid.start: 0}
    q = deque([grid.start])
    while q:
        c = q.popleft()
        if c == grid.goal:
            return dist[c]
        for n in grid.neighbors(c):
            if n not in dist:
                dist[n] = dist[c] + 1
                q.append(n)
    return None


def assert_valid_path(grid: Grid, path: List[Cell]) -> None:
    assert path[0] == grid.start
    assert path[-1] == grid.goal
    for a, b in zip(path, path[1:]):
        assert abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1
        assert not grid.is_wall(b)


@pytest.fixture
def open5() -> Grid:
    return empty_grid(5, (1, 1), (3, 3))


@pytest.fixture
def sealed() -> Grid:
    return load_map(MAP_DIR / "03_sealed_start.json")


@pytest.fixture
def trap() -> Grid:
    return load_map(MAP_DIR / "02_hill_trap.json")


@pytest.fixture
def detour() -> Grid:
    # the only route leaves through (1,0) and goes round the left edge
    return grid_from_rows(
        [
            ".....",
            ".....",
            ".####",
            ".....",
            ".....",
        ],
        start=(2, 0),
        goal=(2, 4),
    )
