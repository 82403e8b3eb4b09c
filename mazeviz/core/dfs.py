#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List

from mazeviz.core.search import SearchAlgo
from mazeviz.core.types import Coord, PathStep


@dataclass
class DepthFirstAlgo(SearchAlgo):
    """
    LIFO frontier, visited on push. Neighbors go onto the stack in reverse
    so they come off in grid order. Finds *a* path, not the shortest one.
    """
    name: str = "dfs"
    stack: List[Coord] = field(default_factory=list)

    def reset(self) -> None:
        super().reset()
        self.stack.clear()
        if self.start is not None:
            self.stack.append(self.start)
            self.visited.add(self.start)

    def search(self) -> List[PathStep]:
        while self.stack:
            u = self.stack.pop()
            self._emit(self.stack, visited=(u,))

            if u == self.goal:
                self.reached = True
                break

            for v in reversed(self._neighbors4(u)):
                if v in self.visited:
                    continue
                self.visited.add(v)
                self.parent[v] = u
                self.stack.append(v)
                self._emit(self.stack)

        return self.steps
