# pathviz/core/base.py
#!/usr/bin/env python3
"""
Shared step machinery for all strategies.

Implements the Algorithm API the viewer and the run driver expect:
- init(grid) - reset() - step() -> StepResult - run() -> SearchResult

A strategy writes its search as a generator in `_search()`. Every bare
`yield` is a suspension point between two node expansions; nothing is
computed there, so stepping one expansion at a time and running straight
through visit nodes in exactly the same order. The generator's return value
is the SearchResult.

While running, the strategy reports what it did as state-delta events
(NodeExpanded, NodeLinked, NodeEvicted, StepLogged). step() hands back the
events emitted since the previous suspension point; observers fold them into
their own copies instead of peeking at the strategy's internals.
"""

from dataclasses import dataclass, field
from typing import Dict, Generator, List, Optional, Set

from pathviz.core.heuristic import manhattan
from pathviz.core.types import (
    Cell, Event, Grid, NodeExpanded, NodeLinked, SearchResult, StepLogged, StepResult,
)

SearchGen = Generator[None, None, SearchResult]


def fmt(c: Cell) -> str:
    return f"({c[0]},{c[1]})"


@dataclass
class SearchAlgo:
    name: str = "search"

    # Per-run state, rebuilt by reset()
    grid: Optional[Grid] = None
    visited: Set[Cell] = field(default_factory=set)
    came_from: Dict[Cell, Cell] = field(default_factory=dict)
    nodes_explored: int = 0
    done: bool = False
    no_path: bool = False
    result: Optional[SearchResult] = None
    _pending: List[Event] = field(default_factory=list, repr=False)
    _run: Optional[SearchGen] = field(default=None, repr=False)

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        """Attach to a grid and prepare a fresh run."""
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        if self.grid is None:
            return
        self.visited = set()
        self.came_from = {}
        self.nodes_explored = 0
        self.done = False
        self.no_path = False
        self.result = None
        self._pending = []
        self._run = self._search()

    # -------------------- helpers for strategies --------------------

    def _search(self) -> SearchGen:
        raise NotImplementedError

    def _h(self, c: Cell) -> int:
        return manhattan(c, self.grid.goal)

    def _emit(self, event: Event) -> None:
        self._pending.append(event)

    def _log(self, message: str, cell: Optional[Cell] = None) -> None:
        self._emit(StepLogged(message, cell))

    def _expand(self, c: Cell, count: bool = True) -> None:
        self.visited.add(c)
        if count:
            self.nodes_explored += 1
        self._emit(NodeExpanded(c))

    def _link(self, child: Cell, parent: Optional[Cell], cost: Optional[float] = None) -> None:
        self._emit(NodeLinked(child, parent, cost))

    def _finish(self, path: List[Cell]) -> SearchResult:
        return SearchResult(path=path, nodes_explored=self.nodes_explored)

    # -------------------- stepping --------------------

    def step(self) -> StepResult:
        """Advance to the next suspension point."""
        if self.grid is None or self._run is None:
            return StepResult(status="idle")

        if self.done or self.no_path:
            return self._terminal()

        try:
            next(self._run)
        except StopIteration as stop:
            self.result = stop.value
            if self.result.success:
                self.done = True
            else:
                self.no_path = True
            return self._terminal(self._drain())

        return StepResult(status="running", events=self._drain())

    def run(self) -> SearchResult:
        """Step to completion and return the result."""
        if self.grid is None:
            raise RuntimeError(f"{self.name}: init(grid) must be called before run()")
        while self.step().status == "running":
            pass
        return self.result

    def _drain(self) -> List[Event]:
        events, self._pending = self._pending, []
        return events

    def _terminal(self, events: Optional[List[Event]] = None) -> StepResult:
        return StepResult(
            status="done" if self.done else "no_path",
            events=events or [],
            path=self.result.path if self.result else [],
        )
