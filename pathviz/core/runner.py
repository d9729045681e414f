# pathviz/core/runner.py
#!/usr/bin/env python3
"""
Run driver: owns one search run against a grid.

- start() validates the grid, forces start and goal open, resets the trace,
  creates a fresh strategy.
- advance() runs to the next suspension point and folds the emitted events
  into the trace. steps() does the same as a generator for consumers that
  want to look after every expansion; dropping the generator (or calling
  cancel()) is the only way to stop early.
- run() goes to completion, calling `pace` at each suspension point.

Unexpected faults inside a strategy stop here: they are logged, surfaced as
one step message, and the run is marked not running.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Union
import logging
import time

from pathviz.core.algorithms import Algorithm, make_algo, resolve
from pathviz.core.base import SearchAlgo, fmt
from pathviz.core.trace import Trace
from pathviz.core.types import Grid, SearchResult

logger = logging.getLogger(__name__)

SPEED_MIN, SPEED_MAX = 1, 100


def speed_to_delay(speed: int) -> float:
    """Pacing slider (1..100) -> seconds to wait between expansions."""
    speed = max(SPEED_MIN, min(SPEED_MAX, int(speed)))
    return (SPEED_MAX + 1 - speed) / 1000.0


@dataclass
class RunStats:
    nodes_explored: int
    path_length: int
    elapsed_ms: float
    success: bool


class SearchRun:
    def __init__(self, grid: Grid, algorithm: Union[str, Algorithm] = Algorithm.ASTAR, **algo_kwargs):
        self.grid = grid
        self.algorithm = resolve(algorithm)
        self.algo_kwargs = algo_kwargs
        self.trace = Trace(grid.start)
        self.algo: Optional[SearchAlgo] = None
        self.result: Optional[SearchResult] = None
        self.stats: Optional[RunStats] = None
        self.running = False
        self.failed = False
        self.cancelled = False
        self._t0 = 0.0

    # -------------------- lifecycle --------------------

    def start(self) -> None:
        if self.running:
            raise RuntimeError("a run is already in progress; cancel it before starting another")
        self.grid.validate()
        self.grid.open_endpoints()

        self.trace = Trace(self.grid.start)
        self.result = None
        self.stats = None
        self.failed = False
        self.cancelled = False

        self.algo = make_algo(self.algorithm, **self.algo_kwargs)
        self.algo.init(self.grid)
        self.running = True

        s, g = self.grid.start, self.grid.goal
        self.trace.steps.add(f"Starting {self.algorithm.value.upper()}")
        self.trace.steps.add(f"Start: {fmt(s)}, Goal: {fmt(g)}")
        logger.info("starting %s on %dx%d grid, %s -> %s",
                    self.algo.name, self.grid.size, self.grid.size, s, g)
        self._t0 = time.perf_counter()

    def advance(self) -> bool:
        """One suspension point forward. False once the run is over."""
        if not self.running:
            return False
        try:
            res = self.algo.step()
        except Exception:
            logger.exception("%s failed", self.algo.name)
            self.trace.steps.add("⚠️ Algorithm execution failed")
            self.running = False
            self.failed = True
            return False

        self.trace.apply_all(res.events)
        if res.status == "running":
            return True
        self._complete(self.algo.result)
        return False

    def steps(self) -> Iterator[Trace]:
        if not self.running:
            self.start()
        while self.advance():
            yield self.trace

    def run(self, pace: Optional[Callable[[], None]] = None) -> Optional[RunStats]:
        for _ in self.steps():
            if pace is not None:
                pace()
        return self.stats

    def cancel(self) -> None:
        if not self.running:
            return
        self.running = False
        self.cancelled = True
        self.trace.steps.add("Run cancelled")
        logger.info("%s cancelled after %d nodes", self.algo.name, self.algo.nodes_explored)

    # -------------------- completion --------------------

    def _complete(self, result: SearchResult) -> None:
        elapsed_ms = (time.perf_counter() - self._t0) * 1000.0
        self.running = False
        self.result = result
        self.trace.path = list(result.path)
        self.stats = RunStats(
            nodes_explored=result.nodes_explored,
            path_length=len(result.path),
            elapsed_ms=elapsed_ms,
            success=result.success,
        )
        if result.success:
            self.trace.steps.add(f"✓ Path found! Length: {len(result.path)}")
        else:
            self.trace.steps.add("✗ No path found")
        logger.info("%s finished: success=%s path=%d explored=%d in %.1f ms",
                    self.algo.name, result.success, len(result.path),
                    result.nodes_explored, elapsed_ms)


def run_search(grid: Grid, algorithm: Union[str, Algorithm] = Algorithm.ASTAR, **algo_kwargs) -> SearchRun:
    """Convenience: run a strategy to completion and return the finished run."""
    run = SearchRun(grid, algorithm, **algo_kwargs)
    run.run()
    return run
