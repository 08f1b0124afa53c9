"""Tile types and the two admissibility predicates used by placement and movement."""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Optional


class TileType(str, Enum):
    EMPTY = "empty"
    WALL = "wall"
    HLINE = "hline"
    VLINE = "vline"
    BTEE = "btee"
    TTEE = "ttee"
    LTEE = "ltee"
    RTEE = "rtee"
    CROSS = "cross"
    LLCORNER = "llcorner"
    LRCORNER = "lrcorner"
    ULCORNER = "ulcorner"
    URCORNER = "urcorner"
    UPSTAIR = "upstair"
    DOWNSTAIR = "downstair"


# Directional wall segments produced by the refiner.
GLYPH_TYPES: FrozenSet[TileType] = frozenset(
    {
        TileType.HLINE,
        TileType.VLINE,
        TileType.BTEE,
        TileType.TTEE,
        TileType.LTEE,
        TileType.RTEE,
        TileType.CROSS,
        TileType.LLCORNER,
        TileType.LRCORNER,
        TileType.ULCORNER,
        TileType.URCORNER,
    }
)
WALL_TYPES: FrozenSet[TileType] = GLYPH_TYPES | {TileType.WALL}
# Types a creature may stand on (occupancy checked separately).
OPEN_TYPES: FrozenSet[TileType] = frozenset({TileType.EMPTY, TileType.UPSTAIR, TileType.DOWNSTAIR})
STAIR_TYPES: FrozenSet[TileType] = frozenset({TileType.UPSTAIR, TileType.DOWNSTAIR})


class Tile:
    """One grid cell: a type plus an optional occupant handle (creature id)."""

    __slots__ = ("type", "occupant")

    def __init__(self, type: TileType = TileType.EMPTY, occupant: Optional[int] = None):
        self.type = type
        self.occupant = occupant

    def clear(self) -> None:
        self.type = TileType.EMPTY
        self.occupant = None

    def to_dict(self):
        return {"type": self.type.value, "occupant": self.occupant}

    def __repr__(self) -> str:
        return f"Tile({self.type.name}, occupant={self.occupant})"


def is_empty(tile: Tile) -> bool:
    return tile.type in OPEN_TYPES and tile.occupant is None


def is_wall(tile: Tile) -> bool:
    return tile.type in WALL_TYPES


__all__ = [
    "TileType",
    "Tile",
    "GLYPH_TYPES",
    "WALL_TYPES",
    "OPEN_TYPES",
    "STAIR_TYPES",
    "is_empty",
    "is_wall",
]
