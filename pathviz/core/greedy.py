# pathviz/core/greedy.py
#!/usr/bin/env python3
from dataclasses import dataclass
from typing import ClassVar

from pathviz.core.best_first import BestFirstAlgo


@dataclass
class GreedyAlgo(BestFirstAlgo):
    """Best-First without stale-entry removal: a cell may sit in the frontier
    several times, and the oldest copy with the lowest h is dequeued first."""

    name: str = "Greedy"

    replace_stale: ClassVar[bool] = False
