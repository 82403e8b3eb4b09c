#!/usr/bin/env python3
"""
A* on the 4-connected grid.

Same loop as Dijkstra; only the heap key changes to (f, h) with
f = g + h and h = Manhattan distance to the goal. On a unit-cost
4-connected grid Manhattan is admissible and consistent, so the first
settlement of the goal is optimal. Ties on f prefer the cell closer to
the goal, then insertion order.
"""

from dataclasses import dataclass
from typing import Tuple

from mazeviz.core.dijkstra import DijkstraAlgo
from mazeviz.core.types import Coord


@dataclass
class AStarAlgo(DijkstraAlgo):
    name: str = "astar"

    def _h(self, pos: Coord) -> int:
        (r, c) = pos
        (gr, gc) = self.goal
        return abs(gr - r) + abs(gc - c)

    def _priority(self, pos: Coord) -> Tuple[int, ...]:
        h = self._h(pos)
        return (self.g[pos] + h, h)
