import os
import sys
from collections import deque

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from mazeviz.core.grid import Grid


def make_grid(rows, cols, walls=(), start=None, end=None):
    grid = Grid(rows, cols)
    for r, c in walls:
        grid.set_wall(r, c, True)
    if start is not None:
        grid.set_start(*start)
    if end is not None:
        grid.set_end(*end)
    return grid


def grid_from_layout(layout):
    rows, cols = len(layout), len(layout[0])
    grid = Grid(rows, cols)
    for r in range(rows):
        for c in range(cols):
            grid.set_wall(r, c, layout[r][c])
    return grid


def open_cells(layout):
    return {(r, c) for r, row in enumerate(layout) for c, wall in enumerate(row) if not wall}


def bfs_distances(open_set, source):
    """Edge-count distances from source over a set of open coordinates."""
    dist = {source: 0}
    q = deque([source])
    while q:
        r, c = q.popleft()
        for dr, dc in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            n = (r + dr, c + dc)
            if n in open_set and n not in dist:
                dist[n] = dist[(r, c)] + 1
                q.append(n)
    return dist


def grid_open_cells(grid):
    return {cell.pos for cell in grid if not cell.is_wall}
