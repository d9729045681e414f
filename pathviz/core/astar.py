# pathviz/core/astar.py
#!/usr/bin/env python3
"""
A*: one expansion per step() for animation.

Priority f = g + h with Manhattan h, unit move cost. The goal test happens
when a node is dequeued, before it is counted as explored. A neighbor is
relaxed (parent overwritten, frontier entry replaced) only when its
tentative g improves.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
from math import inf

from pathviz.core.base import SearchAlgo, SearchGen, fmt
from pathviz.core.frontier import Frontier
from pathviz.core.tree import reconstruct_path
from pathviz.core.types import Cell


@dataclass
class AStarAlgo(SearchAlgo):
    name: str = "A*"

    g: Dict[Cell, int] = field(default_factory=dict)
    frontier: Optional[Frontier] = None

    def _search(self) -> SearchGen:
        grid = self.grid
        s = grid.start
        self.g = {s: 0}
        self.frontier = Frontier()
        self.frontier.push(s, self._h(s))
        self._link(s, None)

        while self.frontier:
            u = self.frontier.pop().cell

            if u == grid.goal:
                return self._finish(reconstruct_path(self.came_from, u))

            self._expand(u)
            self._log(f"Exploring {fmt(u)} f={self.g[u] + self._h(u)}", u)
            yield

            for v in grid.neighbors(u):
                alt = self.g[u] + 1
                if alt < self.g.get(v, inf):
                    self.came_from[v] = u
                    self.g[v] = alt
                    f_v = alt + self._h(v)
                    self.frontier.push(v, f_v)
                    self._link(v, u, f_v)

        return self._finish([])
