# pathviz/core/algorithms.py
from enum import Enum
from typing import Dict, Type, Union

from pathviz.core.astar import AStarAlgo
from pathviz.core.base import SearchAlgo
from pathviz.core.best_first import BestFirstAlgo
from pathviz.core.greedy import GreedyAlgo
from pathviz.core.hill_climbing import HillClimbingAlgo
from pathviz.core.idastar import IDAStarAlgo
from pathviz.core.smastar import SMAStarAlgo


class Algorithm(str, Enum):
    ASTAR = "astar"
    BEST_FIRST = "bestfirst"
    GREEDY = "greedy"
    HILL_CLIMBING = "hillclimbing"
    IDASTAR = "idastar"
    SMASTAR = "smastar"


ALGORITHM_CLASSES: Dict[Algorithm, Type[SearchAlgo]] = {
    Algorithm.ASTAR: AStarAlgo,
    Algorithm.BEST_FIRST: BestFirstAlgo,
    Algorithm.GREEDY: GreedyAlgo,
    Algorithm.HILL_CLIMBING: HillClimbingAlgo,
    Algorithm.IDASTAR: IDAStarAlgo,
    Algorithm.SMASTAR: SMAStarAlgo,
}

DESCRIPTIONS: Dict[Algorithm, str] = {
    Algorithm.ASTAR: "A*: Optimal path using cost + heuristic",
    Algorithm.BEST_FIRST: "Best-First: Heuristic-based exploration",
    Algorithm.GREEDY: "Greedy: Local optimal choices",
    Algorithm.HILL_CLIMBING: "Hill Climbing: Local search, can get stuck",
    Algorithm.IDASTAR: "IDA*: Memory-efficient A*",
    Algorithm.SMASTAR: "SMA*: Memory-bounded A*",
}


def resolve(algo: Union[str, Algorithm]) -> Algorithm:
    try:
        return Algorithm(algo)
    except ValueError:
        valid = ", ".join(a.value for a in Algorithm)
        raise ValueError(f"unknown algorithm {algo!r} (expected one of: {valid})") from None


def make_algo(algo: Union[str, Algorithm], **kwargs) -> SearchAlgo:
    """Fresh, un-initialised strategy instance for the given identifier."""
    return ALGORITHM_CLASSES[resolve(algo)](**kwargs)
