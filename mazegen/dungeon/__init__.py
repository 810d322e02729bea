"""Public dungeon package interface."""

from .config import GeneratorConfig
from .grid import Grid, Rect
from .pipeline import Dungeon, generate
from .tiles import WALL  # noqa: F401

__all__ = [
    "Dungeon",
    "GeneratorConfig",
    "Grid",
    "Rect",
    "generate",
    "WALL",
]
