"""Dead-end pruning.

Walls back in every floor cell that has exactly one floor neighbour, repeating
until none is left. Removing a dead end can turn its only neighbour into a
new one, so removals are processed as a worklist rather than repeated full
scans.
"""
from __future__ import annotations

from collections import deque
from typing import List

from .grid import DIRECTIONS, Coord2D, Grid
from .tiles import WALL


def is_dead_end(grid: Grid, x: int, y: int) -> bool:
    return grid.cells[y][x] != WALL and grid.floor_neighbors(x, y) == 1


def find_dead_ends(grid: Grid) -> List[Coord2D]:
    return [(x, y) for x, y in grid.interior() if is_dead_end(grid, x, y)]


def remove_dead_ends(grid: Grid) -> int:
    """Remove dead ends one at a time until a fixed point; returns cells removed.

    A floor made only of corridors with no loop shrinks to a single isolated
    cell, which has no floor neighbour and so is not a dead end.
    """
    removed = 0
    pending = deque(find_dead_ends(grid))
    while pending:
        x, y = pending.popleft()
        if not is_dead_end(grid, x, y):
            continue
        grid.carve(x, y, WALL)
        removed += 1
        for dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if 0 < nx < grid.width - 1 and 0 < ny < grid.height - 1 and is_dead_end(grid, nx, ny):
                pending.append((nx, ny))
    return removed


__all__ = ["remove_dead_ends", "find_dead_ends", "is_dead_end"]
