# pathviz/core/hill_climbing.py
#!/usr/bin/env python3
"""
Steepest-ascent hill climbing on h.

No frontier and no backtracking: from the current cell, move to the neighbor
with the strictly lowest h (first one wins on ties, in neighbor order). If
that neighbor does not improve on the current h, or there is no neighbor at
all, the climb stops and reports failure even if the goal is reachable.

h drops by at least one on every move, so a run makes at most h(start) + 1
iterations, well under N*N.
"""

from dataclasses import dataclass, field
from typing import List

from pathviz.core.base import SearchAlgo, SearchGen, fmt
from pathviz.core.types import Cell


@dataclass
class HillClimbingAlgo(SearchAlgo):
    name: str = "Hill Climbing"

    trail: List[Cell] = field(default_factory=list)

    def _search(self) -> SearchGen:
        grid = self.grid
        current = grid.start
        self.trail = [current]
        self._link(current, None)

        while current != grid.goal:
            self._expand(current)
            h_cur = self._h(current)
            self._log(f"At {fmt(current)} h={h_cur}", current)
            yield

            neighbors = grid.neighbors(current)
            if not neighbors:
                self._log("No available neighbors - stuck")
                break

            best = neighbors[0]
            best_h = self._h(best)
            for v in neighbors[1:]:
                h_v = self._h(v)
                if h_v < best_h:
                    best, best_h = v, h_v

            if best_h >= h_cur:
                self._log("Local optimum reached - cannot improve further")
                break

            self._link(best, current, best_h)
            self.came_from[best] = current
            current = best
            self.trail.append(current)

            if current == grid.goal:
                self._expand(current, count=False)
                self._log("Reached target!")
                break

        if current == grid.goal:
            self._log(f"✓ Success! Path length: {len(self.trail)}")
            return self._finish(list(self.trail))

        self._log("✗ Failed - stuck in local optimum")
        return self._finish([])
