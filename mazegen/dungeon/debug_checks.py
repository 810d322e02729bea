"""Structural diagnostics for finished dungeons.

`analyze` reports every invariant a finished grid must satisfy as a count of
offending cells or pairs; a healthy dungeon reports zero everywhere except
`components`, which is 1 (or 0 for an all-wall grid).
"""
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .connectivity import count_components
from .grid import Coord2D, Grid
from .pruning import find_dead_ends
from .tiles import WALL


def border_floor_cells(grid: Grid) -> List[Coord2D]:
    cells = []
    for x, y in grid.floor_cells():
        if x in (0, grid.width - 1) or y in (0, grid.height - 1):
            cells.append((x, y))
    return cells


def overlapping_rooms(rooms) -> List[Tuple[int, int]]:
    pairs = []
    for i, a in enumerate(rooms):
        for j in range(i + 1, len(rooms)):
            if a.overlaps(rooms[j]):
                pairs.append((i, j))
    return pairs


def analyze(dungeon) -> Dict[str, Any]:
    grid: Grid = dungeon.grid
    components = count_components(grid)
    return {
        "components": components,
        "dead_ends": find_dead_ends(grid),
        "border_floor": border_floor_cells(grid),
        "overlapping_rooms": overlapping_rooms(getattr(dungeon, "rooms", [])),
        "all_wall": all(v == WALL for row in grid.cells for v in row),
    }


def issues_of(report: Dict[str, Any]) -> Dict[str, int]:
    return {
        "disconnected": max(0, report["components"] - 1),
        "dead_ends": len(report["dead_ends"]),
        "border_floor": len(report["border_floor"]),
        "overlapping_rooms": len(report["overlapping_rooms"]),
    }


__all__ = ["analyze", "issues_of", "border_floor_cells", "overlapping_rooms"]
