#!/usr/bin/env python3
"""
Maze generators.

Every generator works on a boolean layout (True = wall) that starts fully
walled. Chambers live on the odd/odd lattice inside the border; carving a
passage opens a chamber and the single cell between it and its parent.
The finished layout is flattened row-major into MazeSteps for playback.

Layouts are random and not seed-reproducible unless an explicit
`random.Random` is passed in (tests do this).
"""

import random
from typing import Callable, Dict, List, Optional, Tuple

from mazeviz.core.types import Coord, MazeStep

Layout = List[List[bool]]   # [row][col], True = wall

DFS_BACKTRACKING = "dfs-backtracking"
PRIMS = "prims"
BINARY_TREE = "binary-tree"

TWO_STEP_DIRS = ((2, 0), (-2, 0), (0, 2), (0, -2))


def _filled(rows: int, cols: int) -> Layout:
    return [[True] * cols for _ in range(rows)]


def _is_chamber(rows: int, cols: int, r: int, c: int) -> bool:
    return 0 < r < rows - 1 and 0 < c < cols - 1


def _chambers_two_away(layout: Layout, r: int, c: int) -> List[Tuple[Coord, Coord]]:
    """Walled chambers two cells away, paired with the cell in between."""
    rows, cols = len(layout), len(layout[0])
    out = []
    for dr, dc in TWO_STEP_DIRS:
        nr, nc = r + dr, c + dc
        if _is_chamber(rows, cols, nr, nc) and layout[nr][nc]:
            out.append(((nr, nc), (r + dr // 2, c + dc // 2)))
    return out


# -------------------- algorithms --------------------

def dfs_backtracking_layout(rows: int, cols: int, rng: random.Random) -> Layout:
    layout = _filled(rows, cols)
    layout[1][1] = False
    stack: List[Coord] = [(1, 1)]

    while stack:
        r, c = stack[-1]
        candidates = _chambers_two_away(layout, r, c)
        if not candidates:
            stack.pop()
            continue
        (nr, nc), (wr, wc) = rng.choice(candidates)
        layout[nr][nc] = False
        layout[wr][wc] = False
        stack.append((nr, nc))

    return layout


def prims_layout(rows: int, cols: int, rng: random.Random) -> Layout:
    layout = _filled(rows, cols)
    layout[1][1] = False
    frontier = _chambers_two_away(layout, 1, 1)

    while frontier:
        i = rng.randrange(len(frontier))
        # swap-remove, order of the frontier list does not matter
        frontier[i], frontier[-1] = frontier[-1], frontier[i]
        (nr, nc), (wr, wc) = frontier.pop()
        if not layout[nr][nc]:
            continue  # already carved through another candidate
        layout[nr][nc] = False
        layout[wr][wc] = False
        frontier.extend(_chambers_two_away(layout, nr, nc))

    return layout


def binary_tree_layout(rows: int, cols: int, rng: random.Random) -> Layout:
    layout = _filled(rows, cols)
    for r in range(1, rows - 1, 2):
        for c in range(1, cols - 1, 2):
            layout[r][c] = False
            if r == 1 and c == 1:
                continue
            if r == 1:
                carve_north = False
            elif c == 1:
                carve_north = True
            else:
                carve_north = rng.random() < 0.5
            if carve_north:
                layout[r - 1][c] = False
            else:
                layout[r][c - 1] = False
    return layout


GENERATORS: Dict[str, Callable[[int, int, random.Random], Layout]] = {
    DFS_BACKTRACKING: dfs_backtracking_layout,
    PRIMS: prims_layout,
    BINARY_TREE: binary_tree_layout,
}
MAZE_TYPES = tuple(GENERATORS)


# -------------------- public API --------------------

def ensure_entrance_exit(layout: Layout) -> None:
    rows, cols = len(layout), len(layout[0])
    er, ec = rows - 2, cols - 2
    layout[1][1] = False
    layout[er][ec] = False

    # with both sides even the exit sits between lattice rows and columns;
    # open the cell above it, which touches chamber (er-1, ec-1)
    open_nb = any(
        not layout[er + dr][ec + dc]
        for dr, dc in ((1, 0), (-1, 0), (0, 1), (0, -1))
        if 0 <= er + dr < rows and 0 <= ec + dc < cols
    )
    if not open_nb and er - 1 >= 1:
        layout[er - 1][ec] = False


def build_layout(rows: int, cols: int, algorithm: str,
                 rng: Optional[random.Random] = None) -> Layout:
    if algorithm not in GENERATORS:
        raise ValueError(f"unknown maze type: {algorithm!r}")
    if rows < 3 or cols < 3:
        return []
    layout = GENERATORS[algorithm](rows, cols, rng or random.Random())
    ensure_entrance_exit(layout)
    return layout


def layout_to_steps(layout: Layout) -> List[MazeStep]:
    return [
        MazeStep(r, c, wall)
        for r, row in enumerate(layout)
        for c, wall in enumerate(row)
    ]


def generate(rows: int, cols: int, algorithm: str,
             rng: Optional[random.Random] = None) -> List[MazeStep]:
    """Build a maze layout and return it as row-major (row, col, make_wall) steps.

    Grids smaller than 3x3 produce no steps.
    """
    return layout_to_steps(build_layout(rows, cols, algorithm, rng))
