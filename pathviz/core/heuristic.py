# pathviz/core/heuristic.py
from pathviz.core.types import Cell


def manhattan(a: Cell, b: Cell) -> int:
    """Admissible and consistent for 4-connected unit-cost moves."""
    (ax, ay), (bx, by) = a, b
    return abs(ax - bx) + abs(ay - by)
