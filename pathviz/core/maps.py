# pathviz/core/maps.py
#!/usr/bin/env python3
"""Grid sources: random walls, empty grids, and JSON map files."""

import json
import random
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pathviz.core.config import GRID_SIZE, WALL_PROBABILITY
from pathviz.core.types import OPEN, WALL, Cell, Grid, InvalidGrid


def default_endpoints(size: int):
    return (1, 1), (size - 2, size - 2)


def _endpoints(size: int, start: Optional[Cell], goal: Optional[Cell]):
    d_start, d_goal = default_endpoints(size)
    return (tuple(start) if start is not None else d_start,
            tuple(goal) if goal is not None else d_goal)


def empty_grid(size: int, start: Optional[Cell] = None, goal: Optional[Cell] = None) -> Grid:
    start, goal = _endpoints(size, start, goal)
    grid = Grid(size, [[OPEN] * size for _ in range(size)], start, goal)
    grid.validate()
    return grid


def random_grid(size: int = GRID_SIZE,
                wall_probability: float = WALL_PROBABILITY,
                start: Optional[Cell] = None,
                goal: Optional[Cell] = None,
                rng: Optional[random.Random] = None) -> Grid:
    """Each cell is a wall with probability `wall_probability`; endpoints are forced open."""
    if not 0.0 <= wall_probability <= 1.0:
        raise ValueError("wall_probability must be within [0, 1]")
    rng = rng or random.Random()
    start, goal = _endpoints(size, start, goal)
    cells = [[WALL if rng.random() < wall_probability else OPEN for _ in range(size)]
             for _ in range(size)]
    grid = Grid(size, cells, start, goal)
    grid.validate()
    grid.open_endpoints()
    return grid


def parse_map(data: Dict[str, Any]) -> Grid:
    try:
        if "size" in data:
            size = height = int(data["size"])
        else:
            size, height = int(data["width"]), int(data["height"])
        start = tuple(int(v) for v in data["start"])
        goal = tuple(int(v) for v in data["goal"])
        cells = [[int(v) for v in row] for row in data["cells"]]
    except (KeyError, TypeError, ValueError) as ex:
        raise InvalidGrid(f"malformed map: {ex}") from ex

    if height != size:
        raise InvalidGrid("maps must be square")
    if len(start) != 2 or len(goal) != 2:
        raise InvalidGrid("start and goal must be [x, y] pairs")
    if any(v not in (OPEN, WALL) for row in cells for v in row):
        raise InvalidGrid("cells must be 0 (open) or 1 (wall)")

    grid = Grid(size, cells, start, goal)
    grid.validate()
    grid.open_endpoints()
    return grid


def load_map(path: Union[str, Path]) -> Grid:
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as ex:
            raise InvalidGrid(f"{path}: not valid JSON ({ex})") from ex
    return parse_map(data)
