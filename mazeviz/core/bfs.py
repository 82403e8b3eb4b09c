#!/usr/bin/env python3
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List

from mazeviz.core.search import SearchAlgo
from mazeviz.core.types import Coord, PathStep


@dataclass
class BreadthFirstAlgo(SearchAlgo):
    """FIFO frontier; cells count as visited once discovered. Shortest by edge count."""
    name: str = "bfs"
    queue: Deque[Coord] = field(default_factory=deque)

    def reset(self) -> None:
        super().reset()
        self.queue.clear()
        if self.start is not None:
            self.queue.append(self.start)
            self.visited.add(self.start)

    def search(self) -> List[PathStep]:
        while self.queue:
            u = self.queue.popleft()
            self._emit(self.queue, visited=(u,))

            if u == self.goal:
                self.reached = True
                break

            for v in self._neighbors4(u):
                if v in self.visited:
                    continue
                self.visited.add(v)
                self.parent[v] = u
                self.queue.append(v)
                self._emit(self.queue)

        return self.steps
