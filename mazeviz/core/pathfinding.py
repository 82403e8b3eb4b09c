#!/usr/bin/env python3
"""
Pathfinding entry point: run one algorithm to completion on a grid and
return every recorded step together with the run statistics.
"""

import time
from typing import Dict, Optional, Type, Union

from mazeviz.core.astar import AStarAlgo
from mazeviz.core.bfs import BreadthFirstAlgo
from mazeviz.core.dfs import DepthFirstAlgo
from mazeviz.core.dijkstra import DijkstraAlgo
from mazeviz.core.grid import Grid
from mazeviz.core.search import SearchAlgo, as_coord
from mazeviz.core.types import Cell, Coord, PathResult, RunStats

BFS = "bfs"
DIJKSTRA = "dijkstra"
ASTAR = "astar"
DFS = "dfs"

ALGORITHMS: Dict[str, Type[SearchAlgo]] = {
    BFS: BreadthFirstAlgo,
    DIJKSTRA: DijkstraAlgo,
    ASTAR: AStarAlgo,
    DFS: DepthFirstAlgo,
}

LABELS = {
    BFS: "Breadth-first",
    DIJKSTRA: "Dijkstra",
    ASTAR: "A*",
    DFS: "Depth-first",
}


def make_algo(algorithm: str) -> SearchAlgo:
    try:
        impl = ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(f"unknown pathfinding algorithm: {algorithm!r}") from None
    return impl(name=algorithm)


def run(grid: Grid, algorithm: str,
        start: Optional[Union[Cell, Coord]],
        end: Optional[Union[Cell, Coord]]) -> PathResult:
    """Run `algorithm` from start to end.

    Missing start or end is not an error: nothing runs and the result has
    no steps and no stats. An unreachable end yields an empty path,
    path_length 0 and no terminal path step.
    """
    algo = make_algo(algorithm)
    if start is None or end is None:
        return PathResult(algorithm=algorithm)

    t0 = time.perf_counter()
    algo.init(grid, as_coord(start), as_coord(end))
    steps = algo.search()
    path = algo.finish()
    runtime_ms = (time.perf_counter() - t0) * 1000.0

    stats = RunStats(
        visited_count=len(algo.visited),
        path_length=len(path),
        runtime_ms=runtime_ms,
    )
    return PathResult(algorithm=algorithm, steps=tuple(steps), stats=stats, path=tuple(path))
