from typing import Dict


def init_metrics() -> Dict[str, int]:
    return {
        'rooms_placed': 0,
        'room_attempts': 0,
        'maze_regions': 0,
        'regions_total': 0,
        'connectors_found': 0,
        'connectors_opened': 0,
        'loops_opened': 0,
        'dead_ends_removed': 0,
        'floor_tiles': 0,
        'runtime_ms': 0,
    }
