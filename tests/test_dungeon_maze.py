import random

from mazegen.dungeon.config import GeneratorConfig
from mazegen.dungeon.grid import Grid
from mazegen.dungeon.maze import can_carve, carve_mazes, grow_maze
from mazegen.dungeon.rooms import place_rooms

from tests.dungeon_test_utils import border_is_wall, floor_cells, is_connected


def test_can_carve_respects_border():
    grid = Grid(8, 6)
    assert can_carve(grid, (3, 1), (1, 0))
    assert not can_carve(grid, (5, 1), (1, 0))  # three steps out leaves the grid
    assert not can_carve(grid, (1, 1), (-1, 0))
    assert not can_carve(grid, (1, 1), (0, -1))
    grid.carve(5, 1, 9)
    assert not can_carve(grid, (3, 1), (1, 0))  # target already carved


def test_grow_maze_straight_corridor():
    grid = Grid(12, 4)
    carved = grow_maze(grid, (1, 1), 5, 0, random.Random(1))
    assert carved == 9
    assert list(grid.cells[1][1:10]) == [5] * 9
    assert grid.get(10, 1) == 0
    assert border_is_wall(grid)


def test_small_grid_filled_by_single_blob():
    cfg = GeneratorConfig(width=8, height=6, room_attempts=0, winding_chance=0)
    grid = Grid(8, 6)
    next_id = carve_mazes(grid, cfg, random.Random(3), first_id=1)
    assert next_id == 2
    for y in range(1, 5, 2):
        for x in range(1, 7, 2):
            assert grid.get(x, y) == 1
    # six lattice cells joined by a spanning tree of five passages
    assert len(floor_cells(grid)) == 11
    assert border_is_wall(grid)
    assert is_connected(grid)


def test_every_odd_cell_filled_around_rooms():
    cfg = GeneratorConfig().normalized()
    rng = random.Random(21)
    grid = Grid(cfg.width, cfg.height)
    rooms, next_id = place_rooms(grid, cfg, rng)
    last = carve_mazes(grid, cfg, rng, first_id=next_id)
    assert last > next_id
    for y in range(1, cfg.height - 1, 2):
        for x in range(1, cfg.width - 1, 2):
            assert grid.get(x, y) != 0, f"odd cell {(x, y)} left uncarved"
    assert border_is_wall(grid)


def test_regions_separated_by_walls_before_connecting():
    cfg = GeneratorConfig().normalized()
    rng = random.Random(5)
    grid = Grid(cfg.width, cfg.height)
    _, next_id = place_rooms(grid, cfg, rng)
    carve_mazes(grid, cfg, rng, first_id=next_id)
    for x, y in floor_cells(grid):
        rid = grid.get(x, y)
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            other = grid.get(x + dx, y + dy)
            assert other in (0, rid), f"regions {rid} and {other} touch at {(x, y)}"


def test_maze_ids_continue_after_rooms():
    cfg = GeneratorConfig(width=32, height=20).normalized()
    rng = random.Random(8)
    grid = Grid(cfg.width, cfg.height)
    rooms, next_id = place_rooms(grid, cfg, rng)
    last = carve_mazes(grid, cfg, rng, first_id=next_id)
    assert grid.region_ids() == set(range(1, last))


def test_maze_ids_stop_at_region_limit(monkeypatch):
    from mazegen.dungeon import maze as maze_mod

    monkeypatch.setattr(maze_mod, "MAX_REGION", 2)
    grid = Grid(16, 6)
    # a wall-to-wall strip splits the lattice into two halves
    for y in range(1, 5):
        grid.carve(7, y, 1)
    next_id = carve_mazes(grid, GeneratorConfig(width=16, height=6), random.Random(2), first_id=2)
    assert next_id == 3
    assert grid.get(1, 1) == 2
    assert grid.get(9, 1) == 0
    assert grid.region_ids() == {1, 2}


def _straight_lattice_cells(grid):
    """Lattice cells a corridor passes straight through (one opposite pair of openings)."""
    count = 0
    for y in range(1, grid.height - 1, 2):
        for x in range(1, grid.width - 1, 2):
            east, west = grid.get(x + 1, y), grid.get(x - 1, y)
            south, north = grid.get(x, y + 1), grid.get(x, y - 1)
            openings = [v != 0 for v in (east, west, south, north)]
            if openings in ([True, True, False, False], [False, False, True, True]):
                count += 1
    return count


def test_winding_chance_controls_turns():
    straight = {}
    for winding in (0, 100):
        total = 0
        for seed in range(10):
            grid = Grid(42, 42)
            grow_maze(grid, (1, 1), 1, winding, random.Random(seed))
            total += _straight_lattice_cells(grid)
        straight[winding] = total
    assert straight[100] > 0
    assert straight[0] > straight[100]
