import random

from mazegen.dungeon.config import GeneratorConfig
from mazegen.dungeon.connectivity import (
    Connector,
    connect_regions,
    connector_regions,
    count_components,
    find_connectors,
    flood_region,
)
from mazegen.dungeon.grid import Grid
from mazegen.dungeon.maze import carve_mazes
from mazegen.dungeon.rooms import place_rooms

from tests.dungeon_test_utils import border_is_wall, is_connected


def grid_from_rows(rows):
    grid = Grid(len(rows[0]), len(rows))
    for y, row in enumerate(rows):
        for x, v in enumerate(row):
            grid.carve(x, y, v)
    return grid


def three_in_a_row():
    return grid_from_rows(
        [
            [0, 0, 0, 0, 0, 0, 0],
            [0, 1, 0, 2, 0, 3, 0],
            [0, 0, 0, 0, 0, 0, 0],
        ]
    )


def twin_columns():
    return grid_from_rows(
        [
            [0, 0, 0, 0, 0],
            [0, 1, 0, 2, 0],
            [0, 1, 0, 2, 0],
            [0, 1, 0, 2, 0],
            [0, 0, 0, 0, 0],
        ]
    )


def test_connector_regions_axis_opposite_only():
    grid = three_in_a_row()
    assert connector_regions(grid, 2, 1) == (1, 2)
    assert connector_regions(grid, 4, 1) == (2, 3)
    assert connector_regions(grid, 1, 1) is None  # floor
    assert connector_regions(grid, 6, 1) is None  # border, one side outside
    assert connector_regions(grid, 2, 0) is None
    vertical = grid_from_rows([[0, 0, 0], [0, 4, 0], [0, 0, 0], [0, 7, 0], [0, 0, 0]])
    assert connector_regions(vertical, 1, 2) == (4, 7)


def test_same_region_wall_is_not_connector():
    grid = grid_from_rows([[0, 0, 0, 0, 0], [0, 1, 0, 1, 0], [0, 0, 0, 0, 0]])
    assert connector_regions(grid, 2, 1) is None
    assert find_connectors(grid) == []


def test_diagonal_neighbours_do_not_count():
    grid = grid_from_rows([[0, 0, 0, 0], [0, 1, 0, 0], [0, 0, 2, 0], [0, 0, 0, 0]])
    assert find_connectors(grid) == []


def test_find_connectors_row_major():
    found = find_connectors(three_in_a_row())
    assert found == [Connector(2, 1, (1, 2)), Connector(4, 1, (2, 3))]


def test_connect_chain_opens_every_bridge():
    grid = three_in_a_row()
    result = connect_regions(grid, 3, 0, random.Random(0))
    assert result.connectors_found == 2
    assert result.connectors_opened == 2
    assert result.loops_opened == 0
    assert result.main_region in (1, 2, 3)
    assert all(v != 0 for v in grid.cells[1][1:6])
    assert is_connected(grid)


def test_redundant_connectors_closed_without_chance():
    grid = twin_columns()
    result = connect_regions(grid, 2, 0, random.Random(4))
    assert result.connectors_found == 3
    assert result.connectors_opened == 1
    assert [grid.get(2, y) for y in (1, 2, 3)].count(0) == 2


def test_redundant_connectors_all_opened_at_full_chance():
    grid = twin_columns()
    result = connect_regions(grid, 2, 100, random.Random(4))
    assert result.connectors_opened == 3
    assert result.loops_opened == 2
    assert all(grid.get(2, y) != 0 for y in (1, 2, 3))


def test_opened_connector_takes_joined_region_id():
    grid = twin_columns()
    result = connect_regions(grid, 2, 0, random.Random(9))
    other = 2 if result.main_region == 1 else 1
    opened = [grid.get(2, y) for y in (1, 2, 3) if grid.get(2, y) != 0]
    assert opened == [other]


def test_collapse_relabels_to_main_region():
    grid = three_in_a_row()
    result = connect_regions(grid, 3, 0, random.Random(2), collapse=True)
    assert grid.region_ids() == {result.main_region}


def test_no_regions_is_noop():
    grid = Grid(6, 6)
    result = connect_regions(grid, 0, 50, random.Random(1))
    assert result.main_region is None
    assert grid.region_ids() == set()


def test_full_stage_connects_all_regions():
    cfg = GeneratorConfig().normalized()
    for seed in (1, 2, 3):
        rng = random.Random(seed)
        grid = Grid(cfg.width, cfg.height)
        _, next_id = place_rooms(grid, cfg, rng)
        last = carve_mazes(grid, cfg, rng, first_id=next_id)
        assert count_components(grid) == last - 1
        connect_regions(grid, last - 1, cfg.connectivity_chance, rng)
        assert count_components(grid) == 1
        assert is_connected(grid)
        assert border_is_wall(grid)


def test_seed_region_is_random():
    cfg = GeneratorConfig(width=32, height=20).normalized()
    picks = set()
    for seed in range(20):
        rng = random.Random(seed)
        grid = Grid(cfg.width, cfg.height)
        _, next_id = place_rooms(grid, cfg, rng)
        last = carve_mazes(grid, cfg, rng, first_id=next_id)
        picks.add(connect_regions(grid, last - 1, 0, rng).main_region)
    assert len(picks) > 1


def test_flood_region_from_wall_is_empty():
    grid = three_in_a_row()
    assert flood_region(grid, (0, 0)) == set()
    assert flood_region(grid, (1, 1)) == {(1, 1)}
    assert count_components(grid) == 3


def test_connector_choice_is_random_not_first_found():
    opened_rows = set()
    for seed in range(30):
        grid = twin_columns()
        connect_regions(grid, 2, 0, random.Random(seed))
        opened = [y for y in (1, 2, 3) if grid.get(2, y) != 0]
        assert len(opened) == 1
        opened_rows.add(opened[0])
    assert len(opened_rows) > 1
