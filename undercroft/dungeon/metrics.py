from typing import Any, Dict


def init_metrics() -> Dict[str, Any]:
    return {
        'walls_loaded': 0,
        'generation_attempts': 0,
        'refined': {},
        'stair_attempts': 0,
        'tiles_empty': 0,
        'tiles_wall': 0,
    }
