"""Region merging: connector discovery and the randomized spanning merge.

A connector is a wall cell flanked on one axis by two different regions.
Opening one connector per region (grown outward from a random seed region)
links every room and maze blob into one walkable whole; extra connectors
between already-joined regions are opened by chance to form loops.
"""
from __future__ import annotations

import logging
import random
from collections import deque
from typing import List, NamedTuple, Optional, Set, Tuple

from .grid import DIRECTIONS, Coord2D, Grid
from .tiles import WALL

logger = logging.getLogger(__name__)


class Connector(NamedTuple):
    x: int
    y: int
    regions: Tuple[int, int]

    def touches(self, region_set: Set[int]) -> bool:
        return self.regions[0] in region_set or self.regions[1] in region_set

    def other_side(self, region_set: Set[int]) -> int:
        a, b = self.regions
        return b if a in region_set else a


class ConnectResult(NamedTuple):
    main_region: Optional[int]
    connectors_found: int
    connectors_opened: int
    loops_opened: int


def connector_regions(grid: Grid, x: int, y: int) -> Optional[Tuple[int, int]]:
    """Return the two regions a wall cell separates, or None if it is not a connector.

    Only exactly opposite neighbours on one axis count; the horizontal axis is
    checked first.
    """
    if grid.cells[y][x] != WALL:
        return None
    if 0 < x < grid.width - 1:
        left, right = grid.cells[y][x - 1], grid.cells[y][x + 1]
        if left != WALL and right != WALL and left != right:
            return (left, right)
    if 0 < y < grid.height - 1:
        up, down = grid.cells[y - 1][x], grid.cells[y + 1][x]
        if up != WALL and down != WALL and up != down:
            return (up, down)
    return None


def find_connectors(grid: Grid) -> List[Connector]:
    found = []
    for x, y in grid.interior():
        regions = connector_regions(grid, x, y)
        if regions is not None:
            found.append(Connector(x, y, regions))
    return found


def connect_regions(
    grid: Grid,
    last_region: int,
    connectivity_chance: int,
    rng=None,
    collapse: bool = False,
) -> ConnectResult:
    """Merge regions ``1..last_region`` into one connected region set.

    Each round opens a connector picked uniformly among those touching the
    merged set, then drops every other connector that now joins two merged
    regions, opening each with `connectivity_chance` percent probability.
    With `collapse` set, every floor cell is relabelled to the seed region
    afterwards.
    """
    if rng is None:
        rng = random
    if last_region < 1:
        return ConnectResult(None, 0, 0, 0)
    connectors = find_connectors(grid)
    found = len(connectors)
    seed_region = rng.randint(1, last_region)
    main: Set[int] = {seed_region}
    opened = 0
    loops = 0
    while connectors:
        candidates = [i for i, c in enumerate(connectors) if c.touches(main)]
        if not candidates:
            logger.warning("%d connectors unreachable from region %d", len(connectors), seed_region)
            break
        index = rng.choice(candidates)
        current = connectors.pop(index)
        new_region = current.other_side(main)
        grid.carve(current.x, current.y, new_region)
        opened += 1
        for i in range(len(connectors) - 1, -1, -1):
            test = connectors[i]
            a, b = test.regions
            if (a == new_region and b in main) or (b == new_region and a in main):
                if rng.randrange(100) < connectivity_chance:
                    grid.carve(test.x, test.y, new_region)
                    loops += 1
                del connectors[i]
        main.add(new_region)
    if collapse:
        for x, y in list(grid.floor_cells()):
            grid.carve(x, y, seed_region)
    return ConnectResult(seed_region, found, opened + loops, loops)


def flood_region(grid: Grid, start: Coord2D) -> Set[Coord2D]:
    """Return every floor cell 4-connected to `start` (empty if `start` is wall)."""
    sx, sy = start
    if grid.get(sx, sy) == WALL:
        return set()
    visited = {start}
    q = deque([start])
    while q:
        cx, cy = q.popleft()
        for dx, dy in DIRECTIONS:
            nx, ny = cx + dx, cy + dy
            if grid.in_bounds(nx, ny) and (nx, ny) not in visited and grid.cells[ny][nx] != WALL:
                visited.add((nx, ny))
                q.append((nx, ny))
    return visited


def count_components(grid: Grid) -> int:
    """Number of 4-connected floor components, ignoring region ids."""
    seen: Set[Coord2D] = set()
    components = 0
    for cell in grid.floor_cells():
        if cell in seen:
            continue
        seen |= flood_region(grid, cell)
        components += 1
    return components


__all__ = [
    "Connector",
    "ConnectResult",
    "connector_regions",
    "find_connectors",
    "connect_regions",
    "flood_region",
    "count_components",
]
