"""Fixed-size tile grid.

All coordinates are (row, col) with row 0 at the top. Every access goes
through ``in_bounds`` first; ``tile`` raises IndexError for coordinates
outside the grid so misuse is loud, while movement code checks ``in_bounds``
and rejects instead.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .config import MAXCOLS, MAXROWS
from .tiles import Tile, TileType

Coord = Tuple[int, int]
Snapshot = List[List[TileType]]

# Debug/text rendering of tile types.
GLYPHS: Dict[TileType, str] = {
    TileType.EMPTY: ".",
    TileType.WALL: "#",
    TileType.HLINE: "─",
    TileType.VLINE: "│",
    TileType.BTEE: "┴",
    TileType.TTEE: "┬",
    TileType.LTEE: "├",
    TileType.RTEE: "┤",
    TileType.CROSS: "┼",
    TileType.LLCORNER: "└",
    TileType.LRCORNER: "┘",
    TileType.ULCORNER: "┌",
    TileType.URCORNER: "┐",
    TileType.UPSTAIR: "<",
    TileType.DOWNSTAIR: ">",
}
_FROM_GLYPH: Dict[str, TileType] = {ch: t for t, ch in GLYPHS.items()}


class Grid:
    __slots__ = ("rows", "cols", "_tiles")

    def __init__(self, rows: int = MAXROWS, cols: int = MAXCOLS):
        if rows <= 0 or cols <= 0:
            raise ValueError("grid dimensions must be positive")
        self.rows = rows
        self.cols = cols
        self._tiles: List[List[Tile]] = [[Tile() for _ in range(cols)] for _ in range(rows)]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def tile(self, row: int, col: int) -> Tile:
        if not self.in_bounds(row, col):
            raise IndexError(f"({row}, {col}) outside {self.rows}x{self.cols} grid")
        return self._tiles[row][col]

    def positions(self) -> Iterator[Coord]:
        """Yield every coordinate in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    def reset(self) -> None:
        for row in self._tiles:
            for t in row:
                t.clear()

    def snapshot(self) -> Snapshot:
        """Copy of the type matrix; later writes to the grid do not affect it."""
        return [[t.type for t in row] for row in self._tiles]

    def count(self, tile_type: TileType) -> int:
        return sum(1 for row in self._tiles for t in row if t.type is tile_type)

    def to_lines(self, occupants: Optional[Dict[int, str]] = None) -> List[str]:
        """Render rows as text; occupied tiles use ``occupants[id]`` (default '@')."""
        occupants = occupants or {}
        lines = []
        for row in self._tiles:
            chars = []
            for t in row:
                if t.occupant is not None:
                    chars.append(occupants.get(t.occupant, "@"))
                else:
                    chars.append(GLYPHS[t.type])
            lines.append("".join(chars))
        return lines

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "Grid":
        """Build a grid from text rows using the GLYPHS characters ('#' wall, '.' empty)."""
        if not lines:
            raise ValueError("lines must not be empty")
        width = len(lines[0])
        for i, line in enumerate(lines):
            if len(line) != width:
                raise ValueError(f"row {i} has width {len(line)}, expected {width}")
        grid = cls(len(lines), width)
        for row, line in enumerate(lines):
            for col, ch in enumerate(line):
                if ch not in _FROM_GLYPH:
                    raise ValueError(f"unknown tile character {ch!r} at ({row}, {col})")
                grid._tiles[row][col].type = _FROM_GLYPH[ch]
        return grid

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols})"


__all__ = ["Grid", "GLYPHS", "Coord", "Snapshot"]
