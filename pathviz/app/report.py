# pathviz/app/report.py
#!/usr/bin/env python3
"""
Headless comparison: every strategy on the same grid, one table.

    python -m pathviz.app.report --seed=7 [--size=25] [--map=maps/02_hill_trap.json] [--budget=100000]

The engine has no internal limit, and IDA* facing an unreachable goal walks
every simple path before giving up, so the report cancels any run that
expands more than `budget` nodes and lists it as cut off.
"""

import logging
import random
import sys
from typing import List, Optional, Tuple

from pathviz.core.algorithms import Algorithm
from pathviz.core.config import GRID_SIZE, WALL_PROBABILITY, resolve_int, resolve_option
from pathviz.core.maps import load_map, random_grid
from pathviz.core.runner import SearchRun
from pathviz.core.types import Grid

logger = logging.getLogger(__name__)

DEFAULT_BUDGET = 100_000

Row = Tuple[Algorithm, SearchRun]


def compare(grid: Grid, algorithms: Optional[List[Algorithm]] = None,
            budget: int = DEFAULT_BUDGET) -> List[Row]:
    """Run each strategy on `grid`, cancelling any that exceeds `budget` expansions."""
    rows = []
    for algo in algorithms or list(Algorithm):
        run = SearchRun(grid, algo)
        for _ in run.steps():
            if run.algo.nodes_explored > budget:
                logger.warning("%s over budget (%d expansions), cancelling", algo.value, budget)
                run.cancel()
                break
        rows.append((algo, run))
    return rows


def format_table(rows: List[Row]) -> str:
    out = [f"{'algorithm':<14}{'result':<10}{'path':>6}{'explored':>10}{'ms':>10}"]
    for algo, run in rows:
        st = run.stats
        if run.failed:
            out.append(f"{algo.value:<14}{'fault':<10}")
        elif st is None:
            out.append(f"{algo.value:<14}{'cut off':<10}{'-':>6}{run.algo.nodes_explored:>10}")
        else:
            result = "found" if st.success else "no path"
            out.append(f"{algo.value:<14}{result:<10}{st.path_length:>6}"
                       f"{st.nodes_explored:>10}{st.elapsed_ms:>10.2f}")
    return "\n".join(out)


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    try:
        budget = resolve_int("budget", DEFAULT_BUDGET, argv)
        map_path = resolve_option("map", None, argv)
        if map_path:
            grid = load_map(map_path)
        else:
            seed = resolve_int("seed", 0, argv)
            grid = random_grid(resolve_int("size", GRID_SIZE, argv), WALL_PROBABILITY,
                               rng=random.Random(seed))
    except (OSError, ValueError) as ex:
        print(f"Failed to build grid: {ex}")
        return 1

    print(f"{grid.size}x{grid.size} grid, {grid.wall_count()} walls, start {grid.start} goal {grid.goal}")
    print(format_table(compare(grid, budget=budget)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
