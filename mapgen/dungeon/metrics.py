from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'rooms_placed': 0,
        'waypoints_placed': 0,
        'placement_attempts': 0,
        'path_length': 0,
        'final_rooms': 0,
        'branch_rooms': 0,
        'doors_created': 0,
        'door_tiles': 0,
        'tile_collisions': 0,
        'tiles': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
