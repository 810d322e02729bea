"""Corridor carving: growing-tree mazes over the odd-coordinate lattice.

Every odd cell left as wall after room placement seeds a maze blob with its
own region id. Carving always moves two cells at a time, so blobs only ever
occupy odd cells plus the passage cells between them, and a wall at least one
cell thick separates neighbouring blobs and rooms until the connector stage
opens it.
"""
from __future__ import annotations

import logging
import random
from typing import List, Optional

from .config import GeneratorConfig
from .grid import DIRECTIONS, Coord2D, Grid
from .tiles import MAX_REGION, WALL

logger = logging.getLogger(__name__)


def can_carve(grid: Grid, cell: Coord2D, direction: Coord2D) -> bool:
    """True if the maze may extend two cells from `cell` in `direction`.

    The cell three steps out must still be inside the grid, which keeps the
    outermost ring of the grid solid.
    """
    x, y = cell
    dx, dy = direction
    if not grid.in_bounds(x + dx * 3, y + dy * 3):
        return False
    return grid.cells[y + dy * 2][x + dx * 2] == WALL


def grow_maze(grid: Grid, start: Coord2D, region: int, winding_chance: int, rng=None) -> int:
    """Carve one maze blob from `start` with id `region`; returns the number of cells carved."""
    if rng is None:
        rng = random
    last_dir: Optional[Coord2D] = None
    grid.carve(start[0], start[1], region)
    carved = 1
    cells: List[Coord2D] = [start]
    while cells:
        x, y = cells[-1]
        open_dirs = [d for d in DIRECTIONS if can_carve(grid, (x, y), d)]
        if not open_dirs:
            cells.pop()
            continue
        # Keep running straight unless the winding roll says turn.
        if last_dir in open_dirs and rng.randrange(100) >= winding_chance:
            dx, dy = last_dir
        else:
            dx, dy = rng.choice(open_dirs)
        grid.carve(x + dx, y + dy, region)
        grid.carve(x + dx * 2, y + dy * 2, region)
        carved += 2
        cells.append((x + dx * 2, y + dy * 2))
        last_dir = (dx, dy)
    return carved


def carve_mazes(grid: Grid, config: GeneratorConfig, rng=None, first_id: int = 1) -> int:
    """Fill every uncarved odd cell with maze blobs; returns the next unused region id.

    Once ids reach MAX_REGION the remaining odd cells are left as wall.
    """
    region = first_id
    for y in range(1, grid.height - 1, 2):
        for x in range(1, grid.width - 1, 2):
            if grid.cells[y][x] != WALL:
                continue
            if region > MAX_REGION:
                logger.warning("region ids exhausted at %d; leaving (%d, %d) onward uncarved", MAX_REGION, x, y)
                return region
            grow_maze(grid, (x, y), region, config.winding_chance, rng)
            region += 1
    return region


__all__ = ["carve_mazes", "grow_maze", "can_carve"]
