import random
from typing import List, Tuple

from .config import GeneratorConfig
from .grid import Grid, Rect
from .tiles import FIRST_REGION, MAX_REGION

MIN_ROOM_SIZE = 3


def _largest_odd_span(extent: int) -> int:
    """Largest odd room side that fits inside a 1-cell border on an axis of `extent` cells."""
    span = extent - 2
    if span % 2 == 0:
        span -= 1
    return span


def _odd_size(rng, max_size: int) -> int:
    return rng.randint(MIN_ROOM_SIZE // 2, (max_size - 1) // 2) * 2 + 1


def _odd_origin(rng, extent: int, size: int) -> int:
    # Last room cell must stay at or before extent - 2 and on an odd coordinate.
    slots = (extent - 2 - size) // 2
    return rng.randint(0, slots) * 2 + 1


def place_rooms(grid: Grid, config: GeneratorConfig, rng=None, first_id: int = FIRST_REGION) -> Tuple[List[Rect], int]:
    """Scatter non-overlapping odd-aligned rooms onto the grid.

    Every sample costs one of ``config.room_attempts`` whether it lands or not.
    Each accepted room is stamped with its own id, counting up from `first_id`;
    placement stops once the ids run out at MAX_REGION.

    Returns (rooms, next_id) where next_id is the first id not used by a room.
    """
    if rng is None:
        rng = random
    max_w = min(config.max_room_size, _largest_odd_span(grid.width))
    max_h = min(config.max_room_size, _largest_odd_span(grid.height))
    rooms: List[Rect] = []
    region = first_id
    if max_w < MIN_ROOM_SIZE or max_h < MIN_ROOM_SIZE:
        return rooms, region
    for _ in range(config.room_attempts):
        if region > MAX_REGION:
            break
        w = _odd_size(rng, max_w)
        h = _odd_size(rng, max_h)
        x = _odd_origin(rng, grid.width, w)
        y = _odd_origin(rng, grid.height, h)
        new_room = Rect(x, y, w, h)
        if any(new_room.overlaps(r) for r in rooms):
            continue
        grid.fill_rect(new_room, region)
        rooms.append(new_room)
        region += 1
    return rooms, region


__all__ = ["place_rooms", "MIN_ROOM_SIZE"]
