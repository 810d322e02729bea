"""Pipeline orchestration for dungeon generation.

Runs the four structural stages in order on one grid owned by the run:

1. room placement
2. maze carving into every remaining odd cell
3. region connection (spanning merge plus chance loops)
4. dead-end pruning

`generate()` is the bare function of config and random source. `Dungeon`
wraps it with seed bookkeeping, per-phase timing and metrics so a caller can
reproduce or inspect any run from `dungeon.seed`.
"""
from __future__ import annotations

import os
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional

from ..logging_utils import get_logger
from .config import GeneratorConfig
from .connectivity import connect_regions
from .grid import Grid, Rect
from .maze import carve_mazes
from .metrics import init_metrics
from .pruning import remove_dead_ends
from .rooms import place_rooms
from .tiles import FIRST_REGION

log = get_logger("mazegen.dungeon")


class StructuralOutputs(NamedTuple):
    grid: Grid
    rooms: List[Rect]
    last_room: int
    last_region: int
    main_region: Optional[int]
    connectors_found: int
    connectors_opened: int
    loops_opened: int
    dead_ends_removed: int


def run_stages(config: GeneratorConfig, rng, phase=None) -> StructuralOutputs:
    """Execute every stage; `phase(label, fn, *args)` may wrap each call (timing)."""
    if phase is None:
        def phase(label, fn, *a, **k):
            return fn(*a, **k)
    config = config.normalized()
    grid = Grid(config.width, config.height)
    rooms, next_id = phase('place_rooms', place_rooms, grid, config, rng, FIRST_REGION)
    next_id = phase('carve_mazes', carve_mazes, grid, config, rng, next_id)
    joined = phase(
        'connect_regions',
        connect_regions,
        grid,
        next_id - 1,
        config.connectivity_chance,
        rng,
        config.collapse_regions,
    )
    pruned = phase('remove_dead_ends', remove_dead_ends, grid)
    return StructuralOutputs(
        grid=grid,
        rooms=rooms,
        last_room=len(rooms),
        last_region=next_id - 1,
        main_region=joined.main_region,
        connectors_found=joined.connectors_found,
        connectors_opened=joined.connectors_opened,
        loops_opened=joined.loops_opened,
        dead_ends_removed=pruned,
    )


def generate(config: Optional[GeneratorConfig] = None, rng=None) -> Grid:
    """Generate a dungeon grid.

    The result depends only on `config` and the draws taken from `rng`; pass a
    seeded ``random.Random`` for reproducible output.
    """
    if config is None:
        config = GeneratorConfig()
    if rng is None:
        rng = random.Random()
    return run_stages(config, rng).grid


@dataclass
class Dungeon:
    config: GeneratorConfig = field(default_factory=GeneratorConfig)
    seed: Optional[int] = None
    rng: Optional[random.Random] = field(default=None, repr=False, compare=False)
    enable_metrics: bool = True

    def __post_init__(self):
        # 0 is a valid deterministic seed; None => random unless the caller owns the rng
        if self.seed is None and self.rng is None:
            self.seed = random.randint(1, 1_000_000)
        if 'DUNGEON_ENABLE_GENERATION_METRICS' in os.environ:
            val = os.environ.get('DUNGEON_ENABLE_GENERATION_METRICS', '').lower()
            self.enable_metrics = val not in {'0', 'false', 'no', ''}
        if self.rng is None:
            self.rng = random.Random(self.seed)
        self.config = self.config.normalized()
        self.metrics: Dict[str, Any] = init_metrics() if self.enable_metrics else {}
        self._run_pipeline()

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def _run_pipeline(self):
        """Run the stages, recording `phase_ms` per stage when metrics are enabled."""
        phase_times: Dict[str, int] = {}
        if self.enable_metrics:
            start = time.perf_counter()

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter()
                r = fn(*a, **k)
                phase_times[label] = int((time.perf_counter() - ps) * 1000)
                return r
        else:
            _phase = None
        outputs = run_stages(self.config, self.rng, _phase)
        self.grid = outputs.grid
        self.rooms = outputs.rooms
        self.region_count = outputs.last_region
        self.main_region = outputs.main_region
        if self.enable_metrics:
            self.metrics.update(
                rooms_placed=len(outputs.rooms),
                room_attempts=self.config.room_attempts,
                maze_regions=outputs.last_region - outputs.last_room,
                regions_total=outputs.last_region,
                connectors_found=outputs.connectors_found,
                connectors_opened=outputs.connectors_opened,
                loops_opened=outputs.loops_opened,
                dead_ends_removed=outputs.dead_ends_removed,
                floor_tiles=sum(1 for _ in self.grid.floor_cells()),
            )
            self.metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
            self.metrics['phase_ms'] = phase_times
        record = dict(self.metrics)
        record.update(
            seed=self.seed,
            width=self.config.width,
            height=self.config.height,
            rooms_placed=len(self.rooms),
            regions_total=self.region_count,
        )
        log.generation(**record)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'seed': self.seed,
            'width': self.width,
            'height': self.height,
            'grid': self.grid.to_rows(),
            'rooms': [list(r) for r in self.rooms],
            'main_region': self.main_region,
            'metrics': dict(self.metrics),
        }


__all__ = ["Dungeon", "generate", "run_stages", "StructuralOutputs"]
