"""Display colours for regions.

Purely cosmetic: a colour is a function of the region id and a per-run seed,
so the same dungeon always paints the same way while different runs differ.
"""
import random
from typing import Dict, Tuple

from .grid import Grid

RGB = Tuple[float, float, float]


def region_color(region_id: int, run_seed: int) -> RGB:
    """RGB triple with every channel between 0.2 and 1.0 so no region is near-black."""
    col_gen = random.Random(region_id + run_seed)
    return (col_gen.uniform(0.2, 1.0), col_gen.uniform(0.2, 1.0), col_gen.uniform(0.2, 1.0))


def region_hex(region_id: int, run_seed: int) -> str:
    r, g, b = region_color(region_id, run_seed)
    return "#{:02x}{:02x}{:02x}".format(int(r * 255), int(g * 255), int(b * 255))


def palette_for(grid: Grid, run_seed: int) -> Dict[int, str]:
    return {rid: region_hex(rid, run_seed) for rid in sorted(grid.region_ids())}


__all__ = ["region_color", "region_hex", "palette_for"]
