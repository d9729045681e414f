# pathviz/core/trace.py
#!/usr/bin/env python3
"""
Observer side of a run: folds the engine's state-delta events into its own
visited set, parent map, exploration-edge log and capped step log.

Nothing here reads strategy internals, so the trace looks the same however
often (or rarely) a consumer chooses to look at it.
"""

from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Set

from pathviz.core.tree import TreeNode, build_exploration_tree
from pathviz.core.types import (
    Cell, Event, ExplorationEdge, NodeEvicted, NodeExpanded, NodeLinked, StepEvent, StepLogged,
)

STEP_LOG_LIMIT = 30


class StepLog:
    """Most recent `limit` progress messages; older ones fall off silently."""

    def __init__(self, limit: int = STEP_LOG_LIMIT):
        self.limit = limit
        self._events: Deque[StepEvent] = deque(maxlen=limit)
        self._seq = 0
        self.current: Optional[Cell] = None

    def add(self, message: str, cell: Optional[Cell] = None) -> StepEvent:
        ev = StepEvent(message, cell, self._seq)
        self._seq += 1
        self._events.append(ev)
        if cell is not None:
            self.current = cell
        return ev

    def clear(self) -> None:
        self._events.clear()
        self._seq = 0
        self.current = None

    def messages(self) -> List[str]:
        return [e.message for e in self._events]

    def __iter__(self):
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)


class Trace:
    def __init__(self, start: Cell, step_limit: int = STEP_LOG_LIMIT):
        self.start = start
        self.steps = StepLog(step_limit)
        self.visited: Set[Cell] = set()
        self.parents: Dict[Cell, Optional[Cell]] = {}
        self.edges: List[ExplorationEdge] = []
        self.evicted: List[Cell] = []
        self.path: List[Cell] = []

    def reset(self) -> None:
        self.steps.clear()
        self.visited = set()
        self.parents = {}
        self.edges = []
        self.evicted = []
        self.path = []

    def apply(self, event: Event) -> None:
        if isinstance(event, NodeExpanded):
            self.visited.add(event.cell)
        elif isinstance(event, NodeLinked):
            self.parents[event.child] = event.parent
            if event.parent is not None:
                self.edges.append(ExplorationEdge(event.parent, event.child, event.cost, len(self.edges)))
        elif isinstance(event, NodeEvicted):
            self.evicted.append(event.cell)
        elif isinstance(event, StepLogged):
            self.steps.add(event.message, event.cell)
        else:
            raise TypeError(f"unknown event {event!r}")

    def apply_all(self, events: Iterable[Event]) -> None:
        for e in events:
            self.apply(e)

    @property
    def current(self) -> Optional[Cell]:
        return self.steps.current

    def tree(self) -> TreeNode:
        return build_exploration_tree(self.parents, self.start, self.path, self.current)
