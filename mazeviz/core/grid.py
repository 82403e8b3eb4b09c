#!/usr/bin/env python3
"""
Grid model: fixed-size 2-D array of Cells plus the editing rules the
front end relies on (single start, single end, walls never on start/end).
"""

from math import inf
from typing import List, Optional

from mazeviz.core.types import Cell, Coord, EMPTY, WALL, START, END, SEARCH_MARKS

AXIS_DIRS = ((1, 0), (-1, 0), (0, 1), (0, -1))
DIAG_DIRS = ((1, 1), (1, -1), (-1, 1), (-1, -1))


class Grid:
    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        self.cells: List[List[Cell]] = [
            [Cell(r, c) for c in range(cols)] for r in range(rows)
        ]
        self._start: Optional[Cell] = None
        self._end: Optional[Cell] = None

    # -------------------- lookup --------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def at(self, pos: Coord) -> Cell:
        return self.cells[pos[0]][pos[1]]

    def __iter__(self):
        for row in self.cells:
            yield from row

    @property
    def start(self) -> Optional[Cell]:
        return self._start

    @property
    def end(self) -> Optional[Cell]:
        return self._end

    def neighbors(self, cell: Cell, allow_diagonals: bool = False) -> List[Cell]:
        """4-neighbors clipped to the grid; corner offsets appended on request."""
        dirs = AXIS_DIRS + DIAG_DIRS if allow_diagonals else AXIS_DIRS
        out: List[Cell] = []
        for dr, dc in dirs:
            nr, nc = cell.row + dr, cell.col + dc
            if self.in_bounds(nr, nc):
                out.append(self.cells[nr][nc])
        return out

    # -------------------- resets --------------------

    def reset_visits(self) -> None:
        for cell in self:
            cell.distance = inf
            if cell.type in SEARCH_MARKS:
                cell.type = EMPTY

    def clear_all(self) -> None:
        for cell in self:
            cell.distance = inf
            if cell.type == WALL or cell.type in SEARCH_MARKS:
                cell.type = EMPTY

    # -------------------- editing --------------------

    def set_wall(self, row: int, col: int, make_wall: bool) -> None:
        cell = self.cells[row][col]
        if cell.type in (START, END):
            return
        cell.type = WALL if make_wall else EMPTY

    def set_start(self, row: int, col: int) -> Cell:
        cell = self.cells[row][col]
        if self._start is not None and self._start is not cell:
            self._start.type = EMPTY
        if cell is self._end:
            self._end = None
        cell.type = START
        self._start = cell
        return cell

    def set_end(self, row: int, col: int) -> Cell:
        cell = self.cells[row][col]
        if self._end is not None and self._end is not cell:
            self._end.type = EMPTY
        if cell is self._start:
            self._start = None
        cell.type = END
        self._end = cell
        return cell

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols}, start={self._start and self._start.pos}, end={self._end and self._end.pos})"
