# pathviz/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Union

Cell = Tuple[int, int]  # (col, row)

OPEN, WALL = 0, 1

# down, right, up, left -- tie-breaking in several strategies depends on this order
DIRECTIONS: Tuple[Cell, ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


class InvalidGrid(ValueError):
    """Grid or map rejected before a run starts."""


@dataclass
class Grid:
    size: int
    cells: List[List[int]]             # [row][col]
    start: Cell
    goal: Cell

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.size and 0 <= y < self.size

    def is_wall(self, c: Cell) -> bool:
        x, y = c
        return self.cells[y][x] == WALL

    def neighbors(self, c: Cell) -> List[Cell]:
        """Open 4-connected neighbors of c, always in down/right/up/left order."""
        x, y = c
        out: List[Cell] = []
        for dx, dy in DIRECTIONS:
            n = (x + dx, y + dy)
            if self.in_bounds(n) and not self.is_wall(n):
                out.append(n)
        return out

    def open_endpoints(self) -> None:
        sx, sy = self.start
        gx, gy = self.goal
        self.cells[sy][sx] = OPEN
        self.cells[gy][gx] = OPEN

    def validate(self) -> None:
        if self.size < 2:
            raise InvalidGrid(f"grid size {self.size} too small to hold start and goal")
        if len(self.cells) != self.size or any(len(r) != self.size for r in self.cells):
            raise InvalidGrid("cells size mismatch")
        if not self.in_bounds(self.start):
            raise InvalidGrid(f"start {self.start} out of bounds")
        if not self.in_bounds(self.goal):
            raise InvalidGrid(f"goal {self.goal} out of bounds")
        if self.start == self.goal:
            raise InvalidGrid("start and goal must differ")

    def wall_count(self) -> int:
        return sum(v == WALL for row in self.cells for v in row)


@dataclass
class SearchResult:
    path: List[Cell] = field(default_factory=list)
    nodes_explored: int = 0

    @property
    def success(self) -> bool:
        return len(self.path) > 0


# -------------------- state-delta events --------------------

@dataclass(frozen=True)
class NodeExpanded:
    cell: Cell


@dataclass(frozen=True)
class NodeLinked:
    """Frontier insertion (or hill-climbing move). parent=None marks the root."""
    child: Cell
    parent: Optional[Cell]
    cost: Optional[float] = None


@dataclass(frozen=True)
class NodeEvicted:
    cell: Cell


@dataclass(frozen=True)
class StepLogged:
    message: str
    cell: Optional[Cell] = None


Event = Union[NodeExpanded, NodeLinked, NodeEvicted, StepLogged]


@dataclass(frozen=True)
class StepEvent:
    message: str
    cell: Optional[Cell]
    seq: int


@dataclass(frozen=True)
class ExplorationEdge:
    src: Cell
    dst: Cell
    cost: Optional[float]
    seq: int


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    events: List[Event] = field(default_factory=list)
    path: Optional[List[Cell]] = None
