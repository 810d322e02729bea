"""
project: mazegen
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

GET /api/dungeon builds (or fetches from a small cache) the dungeon for a
seed and configuration and returns the region grid row-major along with the
display palette and generation metrics.
"""

import os
import threading
from dataclasses import asdict, fields, replace

from flask import Blueprint, current_app, jsonify, request

from mazegen.dungeon import Dungeon, GeneratorConfig
from mazegen.dungeon.palette import palette_for
from mazegen.dungeon.seeds import coerce_seed

bp_dungeon = Blueprint("dungeon", __name__)

_INT_PARAMS = tuple(f.name for f in fields(GeneratorConfig) if f.name != "collapse_regions")

# (seed, config, metrics flag) -> Dungeon. Locked because the dev server may run threaded.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()
_DUNGEON_CACHE_MAX = 8

# Request-side ceilings; generation runs on the request thread.
MAX_DIMENSION = 256
MAX_ROOM_ATTEMPTS = 5000


def get_cached_dungeon(seed: int, config: GeneratorConfig, enable_metrics: bool = True) -> Dungeon:
    if os.environ.get("DUNGEON_DISABLE_CACHE") == "1":
        return Dungeon(config=config, seed=seed, enable_metrics=enable_metrics)
    key = (seed, config.normalized(), enable_metrics)
    with _dungeon_cache_lock:
        dungeon = _dungeon_cache.get(key)
        if dungeon is not None:
            return dungeon
    dungeon = Dungeon(config=config, seed=seed, enable_metrics=enable_metrics)
    with _dungeon_cache_lock:
        _dungeon_cache[key] = dungeon
        if len(_dungeon_cache) > _DUNGEON_CACHE_MAX:
            first_key = next(iter(_dungeon_cache.keys()))
            if first_key != key:
                _dungeon_cache.pop(first_key, None)
    return dungeon


def _config_from_args(args) -> GeneratorConfig:
    base = current_app.config.get("DUNGEON_DEFAULTS") or GeneratorConfig()
    overrides = {}
    for name in _INT_PARAMS:
        raw = args.get(name)
        if raw is None or raw == "":
            continue
        try:
            overrides[name] = int(raw)
        except ValueError:
            raise ValueError(f"{name} must be an integer") from None
    if "collapse_regions" in args:
        overrides["collapse_regions"] = args.get("collapse_regions", "").lower() in {"1", "true", "yes", "on"}
    config = replace(base, **overrides).validate()
    max_dim = current_app.config.get("DUNGEON_MAX_DIMENSION", MAX_DIMENSION)
    for name in ("width", "height"):
        if getattr(config, name) > max_dim:
            raise ValueError(f"{name} must be at most {max_dim}")
    max_attempts = current_app.config.get("DUNGEON_MAX_ROOM_ATTEMPTS", MAX_ROOM_ATTEMPTS)
    if config.room_attempts > max_attempts:
        raise ValueError(f"room_attempts must be at most {max_attempts}")
    return config


@bp_dungeon.route("/api/dungeon")
def dungeon_grid():
    """
    Generate a dungeon.

    Query args (all optional): seed (int or string), width, height,
    max_room_size, room_attempts, winding_chance, connectivity_chance,
    collapse_regions.

    Response: { seed, width, height, grid: [[id, ...], ...] (row-major),
    regions: [ids], colors: {id: "#rrggbb"}, metrics }
    """
    try:
        config = _config_from_args(request.args)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    seed = coerce_seed(request.args.get("seed"))
    dungeon = get_cached_dungeon(seed, config, current_app.config.get("DUNGEON_ENABLE_GENERATION_METRICS", True))
    palette = palette_for(dungeon.grid, dungeon.seed)
    return jsonify(
        {
            "seed": dungeon.seed,
            "width": dungeon.width,
            "height": dungeon.height,
            "grid": dungeon.grid.to_rows(),
            "regions": list(palette.keys()),
            "colors": {str(k): v for k, v in palette.items()},
            "metrics": dungeon.metrics,
        }
    )


@bp_dungeon.route("/api/dungeon/config")
def dungeon_config():
    """Return the effective default generator configuration."""
    base = current_app.config.get("DUNGEON_DEFAULTS") or GeneratorConfig()
    return jsonify({"config": asdict(base), "normalized": asdict(base.normalized())})
