# Cell value constants. Any nonzero value is the id of the region owning the floor cell.
WALL = 0
FIRST_REGION = 1
MAX_REGION = 0xFFFF  # grid cells are unsigned 16-bit

__all__ = ["WALL", "FIRST_REGION", "MAX_REGION"]
