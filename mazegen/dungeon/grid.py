"""Region-id grid and rectangle helpers shared by every generation stage.

Cells are stored row-major: ``grid.cells[y][x]``. Each row is an
``array('H')`` so every cell is an unsigned 16-bit region id; ``0`` is wall.
"""
from __future__ import annotations

from array import array
from typing import Iterator, List, NamedTuple, Tuple

from .tiles import WALL

Coord2D = Tuple[int, int]

# East, south, west, north
DIRECTIONS: Tuple[Coord2D, ...] = ((1, 0), (0, 1), (-1, 0), (0, -1))


class Rect(NamedTuple):
    x: int
    y: int
    w: int
    h: int

    def cells(self) -> Iterator[Coord2D]:
        for iy in range(self.y, self.y + self.h):
            for ix in range(self.x, self.x + self.w):
                yield ix, iy

    def overlaps(self, other: "Rect") -> bool:
        # Touching extents count as overlapping, so accepted rooms always keep a wall between them.
        if self.x > other.x + other.w or self.x + self.w < other.x:
            return False
        if self.y > other.y + other.h or self.y + self.h < other.y:
            return False
        return True


class Grid:
    __slots__ = ("width", "height", "cells")

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells: List[array] = [array("H", bytes(2 * width)) for _ in range(height)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return self.cells[y][x]

    def carve(self, x: int, y: int, region: int) -> None:
        """Write `region` into one cell. Writing WALL fills the cell back in."""
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        self.cells[y][x] = region

    def fill_rect(self, rect: Rect, region: int) -> None:
        for x, y in rect.cells():
            self.carve(x, y, region)

    def floor_neighbors(self, x: int, y: int) -> int:
        """Count 4-connected nonzero neighbors; cells past the edge count as wall."""
        count = 0
        for dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny) and self.cells[ny][nx] != WALL:
                count += 1
        return count

    def interior(self) -> Iterator[Coord2D]:
        """Row-major walk over every cell not on the outer border."""
        for y in range(1, self.height - 1):
            for x in range(1, self.width - 1):
                yield x, y

    def floor_cells(self) -> Iterator[Coord2D]:
        for y, row in enumerate(self.cells):
            for x, value in enumerate(row):
                if value != WALL:
                    yield x, y

    def region_ids(self) -> set:
        ids = set()
        for row in self.cells:
            ids.update(row)
        ids.discard(WALL)
        return ids

    def copy(self) -> "Grid":
        clone = Grid(0, 0)
        clone.width = self.width
        clone.height = self.height
        clone.cells = [array("H", row) for row in self.cells]
        return clone

    def to_rows(self) -> List[List[int]]:
        return [row.tolist() for row in self.cells]

    def render_ascii(self, wall: str = "#", floor: str = ".") -> str:
        return "\n".join("".join(floor if v != WALL else wall for v in row) for row in self.cells)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.width == other.width and self.height == other.height and self.cells == other.cells

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, regions={len(self.region_ids())})"


__all__ = ["Grid", "Rect", "DIRECTIONS", "Coord2D"]
