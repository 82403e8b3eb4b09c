#!/usr/bin/env python3
"""
How emitted steps land on the grid the viewer draws.

Start and end cells always keep their type; everything else is repainted
from the step being applied.
"""

from mazeviz.core.grid import Grid
from mazeviz.core.types import MazeStep, PathStep, EMPTY, WALL, VISITED, FRONTIER, PATH

MIN_DELAY_MS = 5
MAX_DELAY_MS = 200
DEFAULT_SPEED_SETTING = 120


def speed_setting_to_delay(value: float) -> float:
    """Slider value (higher = faster) -> per-step delay in ms."""
    clamped = min(max(value, MIN_DELAY_MS), MAX_DELAY_MS)
    return MIN_DELAY_MS + MAX_DELAY_MS - clamped


def _is_marker(grid: Grid, cell) -> bool:
    return cell is grid.start or cell is grid.end


def apply_maze_step(grid: Grid, step: MazeStep) -> None:
    cell = grid.cell(step.row, step.col)
    if _is_marker(grid, cell):
        return
    cell.type = WALL if step.make_wall else EMPTY


def finish_maze(grid: Grid) -> None:
    """Drop start/end on the maze entrance and exit if they are not placed yet."""
    if grid.start is None:
        grid.set_start(1, 1)
    if grid.end is None:
        grid.set_end(grid.rows - 2, grid.cols - 2)


def apply_path_step(grid: Grid, step: PathStep) -> None:
    for cell in grid:
        if cell.type == FRONTIER and not _is_marker(grid, cell):
            cell.type = VISITED

    for pos in step.visited:
        cell = grid.at(pos)
        if not _is_marker(grid, cell):
            cell.type = VISITED

    for pos in step.frontier:
        cell = grid.at(pos)
        if not _is_marker(grid, cell):
            cell.type = FRONTIER

    if step.path:
        for cell in grid:
            if cell.type == PATH and not _is_marker(grid, cell):
                cell.type = VISITED
        for pos in step.path:
            cell = grid.at(pos)
            if not _is_marker(grid, cell):
                cell.type = PATH
