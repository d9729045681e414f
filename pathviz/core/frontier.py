# pathviz/core/frontier.py
#!/usr/bin/env python3
"""
Frontier shared by the queue-based strategies.

Heap entries are (priority, seq, cell): lower priority first, then FIFO by
seq, which is the same order a stable sort by priority would give.

Insert-or-replace uses lazy deletion: the stale entry stays in the heap but
is marked dead and skipped on pop. Duplicates are allowed when replace=False
(Greedy keeps stale entries on purpose). The heap is rebuilt from the live
entries whenever dead ones outnumber them.

With a capacity, every push that overflows evicts the single worst live
entry (highest priority, most recent on ties). Nothing is backed up to the
evicted node's parent.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional
import heapq

from pathviz.core.types import Cell


@dataclass(order=True)
class FrontierEntry:
    priority: float
    seq: int
    cell: Cell = field(compare=False)
    alive: bool = field(default=True, compare=False)


class Frontier:
    def __init__(self, capacity: Optional[int] = None):
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._heap: List[FrontierEntry] = []
        self._latest: Dict[Cell, FrontierEntry] = {}   # last live entry per cell
        self._per_cell: Dict[Cell, int] = {}           # live entries per cell
        self._live = 0
        self._seq = 0

    def _bump(self) -> int:
        self._seq += 1
        return self._seq

    def __len__(self) -> int:
        return self._live

    def __bool__(self) -> bool:
        return self._live > 0

    def __contains__(self, cell: Cell) -> bool:
        return cell in self._per_cell

    def _kill(self, e: FrontierEntry) -> None:
        e.alive = False
        self._live -= 1
        if self._latest.get(e.cell) is e:
            del self._latest[e.cell]
        n = self._per_cell[e.cell] - 1
        if n:
            self._per_cell[e.cell] = n
        else:
            del self._per_cell[e.cell]
        # dead entries may never reach the top; rebuild once they outnumber live ones
        if len(self._heap) > 2 * self._live + 8:
            self._heap = [x for x in self._heap if x.alive]
            heapq.heapify(self._heap)

    def push(self, cell: Cell, priority: float, replace: bool = True) -> Optional[FrontierEntry]:
        """Insert cell; returns the evicted entry if the push overflowed capacity."""
        if replace:
            old = self._latest.get(cell)
            if old is not None and old.alive:
                self._kill(old)
        e = FrontierEntry(priority, self._bump(), cell)
        heapq.heappush(self._heap, e)
        self._latest[cell] = e
        self._per_cell[cell] = self._per_cell.get(cell, 0) + 1
        self._live += 1

        if self.capacity is not None and self._live > self.capacity:
            worst = self._worst()
            self._kill(worst)
            return worst
        return None

    def _worst(self) -> FrontierEntry:
        worst: Optional[FrontierEntry] = None
        for e in self._heap:
            if e.alive and (worst is None or (e.priority, e.seq) > (worst.priority, worst.seq)):
                worst = e
        assert worst is not None
        return worst

    def pop(self) -> FrontierEntry:
        while self._heap:
            e = heapq.heappop(self._heap)
            if e.alive:
                self._kill(e)
                return e
        raise IndexError("pop from empty frontier")

    def __iter__(self) -> Iterator[FrontierEntry]:
        return iter(self.entries())

    def entries(self) -> List[FrontierEntry]:
        """Live entries in extraction order."""
        return sorted(e for e in self._heap if e.alive)
