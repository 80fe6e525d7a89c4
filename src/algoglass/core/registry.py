# src/algoglass/core/registry.py
#!/usr/bin/env python3
from typing import Dict, Type

from algoglass.core.astar import AStarAlgo
from algoglass.core.bfs import BFSAlgo
from algoglass.core.dfs import DFSAlgo
from algoglass.core.dijkstra import DijkstraAlgo
from algoglass.core.search import GridSearch
from algoglass.core.types import Coord, Grid, SimulationSequence, UnknownAlgorithmError

ALGORITHMS: Dict[str, Type[GridSearch]] = {
    "bfs": BFSAlgo,
    "dfs": DFSAlgo,
    "dijkstra": DijkstraAlgo,
    "astar": AStarAlgo,
}

LABELS: Dict[str, str] = {
    "bfs": "Breadth-First Search (BFS)",
    "dfs": "Depth-First Search (DFS)",
    "dijkstra": "Dijkstra's Algorithm",
    "astar": "A* Search",
}


def check_algorithm(kind: str) -> str:
    if kind not in ALGORITHMS:
        raise UnknownAlgorithmError(
            f"unknown algorithm {kind!r}; expected one of {', '.join(ALGORITHMS)}")
    return kind


def make_algo(kind: str) -> GridSearch:
    return ALGORITHMS[check_algorithm(kind)]()


def structure_title(kind: str) -> str:
    return ALGORITHMS[check_algorithm(kind)].structure_name


def run(grid: Grid, start: Coord, target: Coord, algorithm: str = "bfs") -> SimulationSequence:
    """Run one algorithm to completion and return its full snapshot sequence."""
    return make_algo(algorithm).run(grid, start, target)
