import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Grid dimensions shared by every level.
MAXROWS = 22
MAXCOLS = 80

# Static level files: MAXROWS rows of MAXCOLS map bytes plus a newline.
STATIC_ROW_BYTES = 81
STATIC_LEVEL_BYTES = 1782

# Minimum |(r1 + c1) - (r2 + c2)| between the two stairs of a level.
STAIR_MIN_SEPARATION = 50

DEFAULT_LEVEL_COUNT = 3
DEFAULT_STATIC_LEVEL = Path(__file__).resolve().parent.parent / "data" / "level1"


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


@dataclass
class WorldConfig:
    level_count: int = DEFAULT_LEVEL_COUNT
    static_level_path: str = str(DEFAULT_STATIC_LEVEL)
    seed: Optional[int] = None
    placement_attempts: int = 10_000
    generation_attempts: int = 5
    cave_wall_probability: float = 0.45
    cave_smooth_steps: int = 4
    cave_wall_threshold: int = 5
    cave_min_open_fraction: float = 0.30

    @classmethod
    def from_env(cls) -> "WorldConfig":
        """Build a config from UNDERCROFT_* environment variables (unset keys keep defaults)."""
        cfg = cls()
        cfg.level_count = _env_int("UNDERCROFT_LEVEL_COUNT", cfg.level_count)
        cfg.static_level_path = os.getenv("UNDERCROFT_STATIC_LEVEL") or cfg.static_level_path
        cfg.seed = _env_int("UNDERCROFT_SEED", cfg.seed)
        cfg.placement_attempts = _env_int("UNDERCROFT_PLACEMENT_ATTEMPTS", cfg.placement_attempts)
        return cfg


__all__ = [
    "MAXROWS",
    "MAXCOLS",
    "STATIC_ROW_BYTES",
    "STATIC_LEVEL_BYTES",
    "STAIR_MIN_SEPARATION",
    "DEFAULT_LEVEL_COUNT",
    "DEFAULT_STATIC_LEVEL",
    "WorldConfig",
]
