#!/usr/bin/env python3
"""
Dijkstra over the grid, recorded one micro-step at a time.

Frontier is a binary heap of (priority, seq, cell). A cell may sit in the
heap several times after its cost improves; entries for cells that are
already settled are skipped when popped, never removed eagerly.
"""

from dataclasses import dataclass, field
from math import inf
from typing import Dict, List, Tuple
import heapq

from mazeviz.core.search import SearchAlgo
from mazeviz.core.types import Coord, PathStep

HeapEntry = Tuple[Tuple[int, ...], int, Coord]   # (priority, seq, cell)


@dataclass
class DijkstraAlgo(SearchAlgo):
    name: str = "dijkstra"

    open_pq: List[HeapEntry] = field(default_factory=list)
    g: Dict[Coord, int] = field(default_factory=dict)
    seq: int = 0  # monotonic counter, keeps equal priorities FIFO

    def reset(self) -> None:
        super().reset()
        self.open_pq.clear()
        self.g.clear()
        self.seq = 0
        if self.start is not None:
            self.g[self.start] = 0
            self._push(self.start)

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _priority(self, pos: Coord) -> Tuple[int, ...]:
        return (self.g[pos],)

    def _push(self, pos: Coord) -> None:
        heapq.heappush(self.open_pq, (self._priority(pos), self._bump(), pos))

    def _frontier(self) -> List[Coord]:
        """Live frontier cells in heap order, stale and duplicate entries dropped."""
        seen = set()
        out: List[Coord] = []
        for _, _, pos in self.open_pq:
            if pos in self.visited or pos in seen:
                continue
            seen.add(pos)
            out.append(pos)
        return out

    # -------------------- main loop --------------------

    def search(self) -> List[PathStep]:
        while self.open_pq:
            _, _, u = heapq.heappop(self.open_pq)
            if u in self.visited:
                continue  # stale entry

            self.visited.add(u)
            self.grid.at(u).distance = self.g[u]
            self._emit(self._frontier(), visited=(u,))

            if u == self.goal:
                self.reached = True
                break

            for v in self._neighbors4(u):
                if v in self.visited:
                    continue
                alt = self.g[u] + self._cost_of(v)
                if alt < self.g.get(v, inf):
                    self.g[v] = alt
                    self.parent[v] = u
                    self._push(v)
                    self._emit(self._frontier())

        return self.steps
