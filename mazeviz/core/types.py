#!/usr/bin/env python3
from dataclasses import dataclass, field
from math import inf
from typing import Optional, Tuple

Coord = Tuple[int, int]  # (row, col)

# cell types
EMPTY = "empty"
WALL = "wall"
START = "start"
END = "end"
VISITED = "visited"
FRONTIER = "frontier"
PATH = "path"

CELL_TYPES = (EMPTY, WALL, START, END, VISITED, FRONTIER, PATH)
SEARCH_MARKS = (VISITED, FRONTIER, PATH)


@dataclass(eq=False)
class Cell:
    row: int
    col: int
    type: str = EMPTY
    distance: float = inf          # transient, written by cost-based searches

    @property
    def pos(self) -> Coord:
        return (self.row, self.col)

    # informational flags, mirrored by `type`
    @property
    def visited(self) -> bool:
        return self.type == VISITED

    @property
    def in_frontier(self) -> bool:
        return self.type == FRONTIER

    @property
    def in_path(self) -> bool:
        return self.type == PATH

    @property
    def is_wall(self) -> bool:
        return self.type == WALL


@dataclass(frozen=True)
class PathStep:
    visited: Tuple[Coord, ...] = ()    # settled in this micro-step
    frontier: Tuple[Coord, ...] = ()   # whole frontier at this moment
    path: Optional[Tuple[Coord, ...]] = None  # terminal step only


@dataclass(frozen=True)
class MazeStep:
    row: int
    col: int
    make_wall: bool


@dataclass(frozen=True)
class RunStats:
    visited_count: int
    path_length: int
    runtime_ms: float


@dataclass(frozen=True)
class PathResult:
    algorithm: str
    steps: Tuple[PathStep, ...] = ()
    stats: Optional[RunStats] = None    # None when the run did not execute
    path: Tuple[Coord, ...] = field(default_factory=tuple)

    @property
    def executed(self) -> bool:
        return self.stats is not None
