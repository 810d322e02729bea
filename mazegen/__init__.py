"""
project: mazegen
module: __init__.py
License: MIT

Procedural dungeon generator: rooms, growing-tree corridors, region merging
and dead-end pruning over a grid of 16-bit region ids. The HTTP surface lives
in `mazegen.server`; the generator itself only needs `mazegen.dungeon`.
"""

__version__ = "0.1.0"
