#!/usr/bin/env python3
"""
Shared search state for the grid pathfinders.

Each algorithm is a dataclass with the same lifecycle:
- init(grid, start, goal) - search() -> list of PathStep

The base keeps the pieces every variant needs: the visited set, the
parent map, the recorded steps, walkable-neighbor lookup and path
reconstruction. Subclasses own their frontier and the main loop.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from mazeviz.core.grid import Grid
from mazeviz.core.types import Cell, Coord, PathStep, WALL


@dataclass
class SearchAlgo:
    name: str = "search"

    grid: Optional[Grid] = None
    start: Optional[Coord] = None
    goal: Optional[Coord] = None
    visited: Set[Coord] = field(default_factory=set)
    parent: Dict[Coord, Coord] = field(default_factory=dict)
    steps: List[PathStep] = field(default_factory=list)
    reached: bool = False

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Coord, goal: Coord) -> None:
        self.grid = grid
        self.start = start
        self.goal = goal
        self.reset()

    def reset(self) -> None:
        self.visited.clear()
        self.parent.clear()
        self.steps.clear()
        self.reached = False

    def search(self) -> List[PathStep]:
        raise NotImplementedError

    # -------------------- helpers --------------------

    def _neighbors4(self, pos: Coord) -> List[Coord]:
        """Walkable 4-connected neighbors, in grid order (down, up, right, left)."""
        cell = self.grid.at(pos)
        return [n.pos for n in self.grid.neighbors(cell) if n.type != WALL]

    def _cost_of(self, pos: Coord) -> int:
        # uniform weight; hook for weighted grids
        return 1

    def _emit(self, frontier: Iterable[Coord], visited: Tuple[Coord, ...] = ()) -> None:
        self.steps.append(PathStep(visited=visited, frontier=tuple(frontier)))

    def reconstruct_path(self) -> List[Coord]:
        if not self.reached:
            return []
        path: List[Coord] = []
        cur = self.goal
        while True:
            path.append(cur)
            if cur == self.start:
                break
            cur = self.parent[cur]
        path.reverse()
        return path

    def finish(self) -> List[Coord]:
        """Reconstruct the path and append the terminal path step if there is one."""
        path = self.reconstruct_path()
        if path:
            self.steps.append(PathStep(visited=(), frontier=(), path=tuple(path)))
        return path


def as_coord(cell) -> Coord:
    if isinstance(cell, Cell):
        return cell.pos
    row, col = cell
    return (row, col)
