import importlib.util
import json
import os

from mazegen.dungeon import Dungeon, GeneratorConfig, Grid, Rect
from mazegen.dungeon.debug_checks import analyze, issues_of


class _Stub:
    def __init__(self, grid, rooms=()):
        self.grid = grid
        self.rooms = list(rooms)


def test_healthy_dungeon_reports_no_issues():
    d = Dungeon(config=GeneratorConfig(width=40, height=24), seed=19)
    report = analyze(d)
    assert report["components"] == 1
    assert not report["all_wall"]
    assert issues_of(report) == {"disconnected": 0, "dead_ends": 0, "border_floor": 0, "overlapping_rooms": 0}


def test_broken_grid_is_flagged():
    grid = Grid(6, 4)
    grid.carve(0, 1, 1)  # on the border
    grid.carve(1, 1, 1)
    grid.carve(4, 2, 2)  # separate component
    report = analyze(_Stub(grid, [Rect(1, 1, 3, 3), Rect(3, 1, 3, 3)]))
    issues = issues_of(report)
    assert issues["disconnected"] == 1
    assert issues["border_floor"] == 1
    assert issues["overlapping_rooms"] == 1
    assert issues["dead_ends"] == 1  # (1, 1); the border cell is outside the interior scan


def test_all_wall_grid():
    report = analyze(_Stub(Grid(4, 4)))
    assert report["all_wall"]
    assert report["components"] == 0
    assert issues_of(report)["disconnected"] == 0


def test_diagnose_script_exit_code(capsys):
    path = os.path.join(os.path.dirname(__file__), "..", "scripts", "diagnose_seeds.py")
    spec = importlib.util.spec_from_file_location("diagnose_seeds", path)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    assert mod.main(["1", "2"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [r["seed"] for r in data["results"]] == [1, 2]
    assert all(r["ok"] for r in data["results"])
