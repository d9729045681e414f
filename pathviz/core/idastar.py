# pathviz/core/idastar.py
#!/usr/bin/env python3
"""
IDA* with an explicit depth-first stack.

Each iteration probes from the start with f-threshold `bound`. Entering a
node computes f = g + h; if f exceeds the bound the node is not expanded and
f is reported upward as a candidate for the next bound. Otherwise the node
is counted, logged, and (if it is the goal) the probe ends with FOUND.
Children are the neighbors not already on the current DFS path; cells can be
revisited from other branches and in later iterations.

The driver raises `bound` to the smallest f that overflowed, until a probe
returns FOUND or inf (nothing left under any bound: no path).
"""

from dataclasses import dataclass, field
from typing import Generator, List, Optional, Set, Union
from math import inf
import logging

from pathviz.core.base import SearchAlgo, SearchGen, fmt
from pathviz.core.types import Cell

logger = logging.getLogger(__name__)

FOUND = -1

Outcome = Union[int, float]


@dataclass
class _Frame:
    cell: Cell
    g: int
    f: int
    children: List[Cell]
    next_index: int = 0
    minimum: Outcome = inf

    def next_child(self, on_path: Set[Cell]) -> Optional[Cell]:
        # membership is checked lazily, against the path as it is right now
        while self.next_index < len(self.children):
            c = self.children[self.next_index]
            self.next_index += 1
            if c not in on_path:
                return c
        return None


@dataclass
class IDAStarAlgo(SearchAlgo):
    name: str = "IDA*"

    bound: Outcome = 0
    stack: List[Cell] = field(default_factory=list)   # current DFS path

    def _search(self) -> SearchGen:
        s = self.grid.start
        self.bound = self._h(s)
        self._link(s, None)

        while True:
            t = yield from self._probe(self.bound)
            if t == FOUND:
                return self._finish(list(self.stack))
            if t == inf:
                return self._finish([])
            self.bound = t
            logger.debug("%s: bound raised to %s", self.name, t)
            self._log(f"Increasing bound to {t}")

    def _enter(self, c: Cell, g: int, bound: Outcome,
               frames: List[_Frame]) -> Generator[None, None, Optional[Outcome]]:
        """Returns FOUND, an overflowing f, or None once c's frame is pushed."""
        f = g + self._h(c)
        if f > bound:
            return f

        self._expand(c)
        self._log(f"Exploring {fmt(c)} f={f}", c)
        yield

        if c == self.grid.goal:
            return FOUND

        frames.append(_Frame(c, g, f, self.grid.neighbors(c)))
        return None

    def _probe(self, bound: Outcome) -> Generator[None, None, Outcome]:
        s = self.grid.start
        self.stack = [s]
        on_path = {s}
        frames: List[_Frame] = []

        outcome = yield from self._enter(s, 0, bound, frames)
        if outcome is not None:
            return outcome

        while frames:
            top = frames[-1]
            child = top.next_child(on_path)

            if child is None:
                frames.pop()
                on_path.discard(self.stack.pop())
                if not frames:
                    return top.minimum
                frames[-1].minimum = min(frames[-1].minimum, top.minimum)
                continue

            self._link(child, top.cell, top.f)
            self.stack.append(child)
            on_path.add(child)

            outcome = yield from self._enter(child, top.g + 1, bound, frames)
            if outcome == FOUND:
                return FOUND
            if outcome is not None:
                top.minimum = min(top.minimum, outcome)
                on_path.discard(self.stack.pop())

        return inf
