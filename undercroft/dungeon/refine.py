"""Wall topology refinement.

Turns undifferentiated WALL tiles into directional glyphs (lines, tees,
corners, crosses) so walls render as connected line drawings.

Each interior WALL gets an 8-bit neighbor mask, neighbors weighted in
row-major order with the center skipped::

    128  64  32
     16   .   8
      4   2   1

A neighbor counts only if its type in the snapshot is exactly WALL. The
mask is classified by the ordered rule table in ``classify``; the first
matching rule wins.

The pass is deterministic but not idempotent: glyph tiles no longer count
as walls, so running it over its own output reclassifies whatever WALL tiles
remain. Run it once per freshly loaded or generated grid, before stairs and
creatures are placed. Border rows and columns are never touched.
"""

from __future__ import annotations

from typing import Dict

from .grid import Grid, Snapshot
from .tiles import TileType

# (d_row, d_col, weight) for the eight neighbors.
NEIGHBOR_WEIGHTS = (
    (-1, -1, 128),
    (-1, 0, 64),
    (-1, 1, 32),
    (0, -1, 16),
    (0, 1, 8),
    (1, -1, 4),
    (1, 0, 2),
    (1, 1, 1),
)

FULLY_ENCLOSED = 255
CROSS_MASKS = frozenset({90, 91, 94})

# Tee junctions, tested by containment in this order.
TEE_RULES = (
    (88, TileType.BTEE),
    (82, TileType.RTEE),
    (74, TileType.LTEE),
    (26, TileType.TTEE),
)

# Corners: (exact mask, containment mask, type).
CORNER_RULES = (
    (127, 80, TileType.LRCORNER),
    (223, 72, TileType.LLCORNER),
    (251, 18, TileType.URCORNER),
    (254, 10, TileType.ULCORNER),
)

VLINE_BITS = (66, 64, 2)
HLINE_BITS = (34, 16, 8)


def neighbor_mask(snapshot: Snapshot, row: int, col: int) -> int:
    """Mask of WALL neighbors around an interior cell of ``snapshot``."""
    mask = 0
    for d_row, d_col, weight in NEIGHBOR_WEIGHTS:
        if snapshot[row + d_row][col + d_col] is TileType.WALL:
            mask |= weight
    return mask


def _contains(mask: int, bits: int) -> bool:
    return (mask & bits) == bits


def classify(mask: int) -> TileType:
    if mask == FULLY_ENCLOSED:
        return TileType.WALL
    if mask in CROSS_MASKS:
        return TileType.CROSS
    for bits, tee in TEE_RULES:
        if _contains(mask, bits):
            return tee
    for exact, bits, corner in CORNER_RULES:
        if mask == exact or _contains(mask, bits):
            return corner
    if any(_contains(mask, bits) for bits in VLINE_BITS):
        return TileType.VLINE
    if any(_contains(mask, bits) for bits in HLINE_BITS):
        return TileType.HLINE
    # Isolated or diagonal-only walls.
    return TileType.WALL


def refine(grid: Grid) -> Dict[str, int]:
    """Classify every interior WALL of ``grid`` in place.

    Returns a count of resulting types keyed by TileType value, covering the
    interior WALL tiles that were examined.
    """
    snapshot = grid.snapshot()
    counts: Dict[str, int] = {}
    for row in range(1, grid.rows - 1):
        for col in range(1, grid.cols - 1):
            if snapshot[row][col] is not TileType.WALL:
                continue
            new_type = classify(neighbor_mask(snapshot, row, col))
            grid.tile(row, col).type = new_type
            counts[new_type.value] = counts.get(new_type.value, 0) + 1
    return counts


__all__ = ["neighbor_mask", "classify", "refine", "NEIGHBOR_WEIGHTS"]
