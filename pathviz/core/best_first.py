# pathviz/core/best_first.py
#!/usr/bin/env python3
"""
Best-First search ordered by h alone.

Already-expanded cells are skipped on dequeue. Every unexpanded neighbor has
its parent overwritten and its frontier entry replaced, even when the new
route is no cheaper, so the returned path is not guaranteed shortest.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional

from pathviz.core.base import SearchAlgo, SearchGen, fmt
from pathviz.core.frontier import Frontier
from pathviz.core.tree import reconstruct_path


@dataclass
class BestFirstAlgo(SearchAlgo):
    name: str = "Best-First"

    frontier: Optional[Frontier] = None

    # Greedy keeps stale duplicates instead of replacing them
    replace_stale: ClassVar[bool] = True

    def _search(self) -> SearchGen:
        grid = self.grid
        s = grid.start
        self.frontier = Frontier()
        self.frontier.push(s, self._h(s))
        self._link(s, None)

        while self.frontier:
            u = self.frontier.pop().cell
            if u in self.visited:
                continue

            self._expand(u)
            self._log(f"Exploring {fmt(u)} h={self._h(u)}", u)
            yield

            if u == grid.goal:
                return self._finish(reconstruct_path(self.came_from, u))

            for v in grid.neighbors(u):
                if v not in self.visited:
                    h_v = self._h(v)
                    self.came_from[v] = u
                    self.frontier.push(v, h_v, replace=self.replace_stale)
                    self._link(v, u, h_v)

        return self._finish([])
