# pathviz/core/smastar.py
#!/usr/bin/env python3
"""
Simplified memory-bounded A*.

Same relaxation as A*, but the frontier holds at most `memory_limit`
entries: an insert that overflows it drops the single worst entry (highest
f, newest on ties). Forgotten nodes do not back their f up to the parent,
and their g stays recorded, so a forgotten cell is only rediscovered through
a strictly cheaper route. Under heavy pressure this can end with no path
even though one exists.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
from math import inf
import logging

from pathviz.core.base import SearchAlgo, SearchGen, fmt
from pathviz.core.frontier import Frontier
from pathviz.core.tree import reconstruct_path
from pathviz.core.types import Cell, NodeEvicted

logger = logging.getLogger(__name__)

MEMORY_LIMIT = 100


@dataclass
class SMAStarAlgo(SearchAlgo):
    name: str = "SMA*"
    memory_limit: int = MEMORY_LIMIT

    g: Dict[Cell, int] = field(default_factory=dict)
    frontier: Optional[Frontier] = None
    evicted_count: int = 0

    def _search(self) -> SearchGen:
        grid = self.grid
        s = grid.start
        self.g = {s: 0}
        self.evicted_count = 0
        self.frontier = Frontier(capacity=self.memory_limit)
        self.frontier.push(s, self._h(s))
        self._link(s, None)

        while self.frontier:
            u = self.frontier.pop().cell

            if u == grid.goal:
                return self._finish(reconstruct_path(self.came_from, u))

            if u in self.visited:
                continue

            self._expand(u)
            self._log(f"Exploring {fmt(u)} f={self.g[u] + self._h(u)}", u)
            yield

            for v in grid.neighbors(u):
                alt = self.g[u] + 1
                if alt < self.g.get(v, inf):
                    self.g[v] = alt
                    self.came_from[v] = u
                    f_v = alt + self._h(v)
                    dropped = self.frontier.push(v, f_v)
                    self._link(v, u, f_v)
                    if dropped is not None:
                        self._forget(dropped.cell)

        return self._finish([])

    def _forget(self, c: Cell) -> None:
        self.evicted_count += 1
        logger.debug("%s: frontier over %d, dropped %s", self.name, self.memory_limit, c)
        self._emit(NodeEvicted(c))
        self._log(f"Memory full - removed {fmt(c)}")
