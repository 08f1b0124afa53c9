"""Public dungeon package interface: tiles, grid, refiner, levels and the world."""

from .cave import CaveGenerator
from .config import (
    MAXCOLS,
    MAXROWS,
    STAIR_MIN_SEPARATION,
    STATIC_LEVEL_BYTES,
    STATIC_ROW_BYTES,
    WorldConfig,
)
from .grid import GLYPHS, Grid
from .level import Level, LevelLoadError, LevelOrigin, PlacementError, die
from .refine import classify, neighbor_mask, refine
from .tiles import Tile, TileType, is_empty, is_wall
from .world import World

__all__ = [
    "CaveGenerator",
    "MAXCOLS",
    "MAXROWS",
    "STAIR_MIN_SEPARATION",
    "STATIC_LEVEL_BYTES",
    "STATIC_ROW_BYTES",
    "WorldConfig",
    "GLYPHS",
    "Grid",
    "Level",
    "LevelLoadError",
    "LevelOrigin",
    "PlacementError",
    "die",
    "classify",
    "neighbor_mask",
    "refine",
    "Tile",
    "TileType",
    "is_empty",
    "is_wall",
    "World",
]
