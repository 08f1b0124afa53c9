"""Level lifecycle: reset, static load, cave generation, refinement, stairs.

A Level wraps one Grid plus its origin. Levels are owned by the World; they
never own creatures, tiles only carry creature handles.

Static level files are a fatal-configuration concern: a missing, truncated or
unreadable file means a broken installation, so ``load_static`` raises
``LevelLoadError`` and entry points hand it to ``die`` which releases the
presentation layer and exits.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Any, Callable, Dict, NoReturn, Optional, Tuple

from ..logging_utils import get_logger
from . import refine as refine_mod
from .config import (
    MAXCOLS,
    MAXROWS,
    STAIR_MIN_SEPARATION,
    STATIC_LEVEL_BYTES,
    STATIC_ROW_BYTES,
)
from .grid import Coord, Grid
from .metrics import init_metrics
from .tiles import Tile, TileType, is_empty, is_wall

log = get_logger("undercroft.level")

SPACE = ord(" ")


class LevelOrigin(Enum):
    NONE = "none"
    STATIC = "static"
    GENERATED = "generated"


class LevelLoadError(Exception):
    """Static level file missing, wrong size or unreadable."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = str(path)
        self.reason = reason


class PlacementError(Exception):
    """No valid placement found (or a placement precondition was violated)."""


def die(error: LevelLoadError, cleanup: Optional[Callable[[], Any]] = None) -> NoReturn:
    """Fail fast on a load error: release the presentation layer, report, exit 1."""
    if cleanup is not None:
        cleanup()
    log.error(event="level_load_failed", path=error.path, reason=error.reason)
    print(f"{error.path}: {error.reason}", file=sys.stderr)
    sys.exit(1)


class Level:
    def __init__(self, rows: int = MAXROWS, cols: int = MAXCOLS, depth: int = 0):
        self.grid = Grid(rows, cols)
        self.depth = depth
        self.origin = LevelOrigin.NONE
        self.metrics: Dict[str, Any] = init_metrics()
        self._refined = False

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def cols(self) -> int:
        return self.grid.cols

    def tile(self, row: int, col: int) -> Tile:
        return self.grid.tile(row, col)

    def occupant_at(self, row: int, col: int) -> Optional[int]:
        return self.grid.tile(row, col).occupant

    def find_first(self, tile_type: TileType) -> Optional[Coord]:
        """Row-major scan for the first tile of ``tile_type``."""
        for row, col in self.grid.positions():
            if self.grid.tile(row, col).type is tile_type:
                return row, col
        return None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self.origin = LevelOrigin.NONE
        self.grid.reset()
        self.metrics = init_metrics()
        self._refined = False

    def load_static(self, path: str) -> None:
        """Mark WALL wherever the file has a non-space byte.

        The file must be exactly STATIC_LEVEL_BYTES long and is read in rows
        of STATIC_ROW_BYTES; only the first ``cols`` bytes of each row map to
        tiles. Tiles not covered stay EMPTY.
        """
        self.origin = LevelOrigin.STATIC
        walls = 0
        try:
            with open(path, "rb") as fh:
                size = os.fstat(fh.fileno()).st_size
                if size != STATIC_LEVEL_BYTES:
                    raise LevelLoadError(path, f"file should be {STATIC_LEVEL_BYTES} bytes long")
                for row in range(self.rows):
                    line = fh.read(STATIC_ROW_BYTES)
                    if not line:
                        break
                    for col in range(min(self.cols, len(line))):
                        if line[col] != SPACE:
                            self.grid.tile(row, col).type = TileType.WALL
                            walls += 1
        except OSError as exc:
            raise LevelLoadError(path, exc.strerror or str(exc)) from exc
        self.metrics["walls_loaded"] = walls
        log.debug(event="level_loaded", depth=self.depth, path=path, walls=walls)

    def generate(self, generator) -> None:
        """Reset and let the cave generator collaborator fill the grid with WALL/EMPTY."""
        self.reset()
        self.origin = LevelOrigin.GENERATED
        generator.generate(self)
        log.debug(event="level_generated", depth=self.depth, walls=self.grid.count(TileType.WALL))

    def refine(self) -> Dict[str, int]:
        if self._refined:
            raise RuntimeError("level already refined; the refiner is not idempotent")
        counts = refine_mod.refine(self.grid)
        self._refined = True
        self.metrics["refined"] = counts
        self._count_tiles()
        log.debug(event="level_refined", depth=self.depth, glyphs=sum(counts.values()))
        return counts

    def add_stairs(
        self,
        rng,
        upstair: bool = True,
        downstair: bool = True,
        max_attempts: int = 10_000,
    ) -> Tuple[Optional[Coord], Optional[Coord]]:
        """Stamp an UPSTAIR and/or DOWNSTAIR on two far-apart empty tiles.

        Two coordinates are sampled per attempt; they are accepted once their
        ``row + col`` sums differ by at least STAIR_MIN_SEPARATION and both
        tiles are empty. Raises PlacementError when the level cannot host such
        a pair or no pair turned up within ``max_attempts``.
        Returns the (up, down) coordinates actually stamped.
        """
        sums = [r + c for r, c in self.grid.positions() if is_empty(self.grid.tile(r, c))]
        if len(sums) < 2 or max(sums) - min(sums) < STAIR_MIN_SEPARATION:
            log.warn(event="placement_failed", what="stairs", depth=self.depth, reason="no_capacity")
            raise PlacementError(f"level {self.depth} has no pair of empty tiles far enough apart for stairs")
        for attempt in range(1, max_attempts + 1):
            up = (rng.uniform(self.rows), rng.uniform(self.cols))
            down = (rng.uniform(self.rows), rng.uniform(self.cols))
            if abs(sum(up) - sum(down)) < STAIR_MIN_SEPARATION:
                continue
            if not is_empty(self.grid.tile(*up)) or not is_empty(self.grid.tile(*down)):
                continue
            if upstair:
                self.grid.tile(*up).type = TileType.UPSTAIR
            if downstair:
                self.grid.tile(*down).type = TileType.DOWNSTAIR
            self.metrics["stair_attempts"] = attempt
            self._count_tiles()
            log.debug(event="stairs_placed", depth=self.depth, up=up if upstair else None,
                      down=down if downstair else None, attempts=attempt)
            return (up if upstair else None, down if downstair else None)
        self.metrics["stair_attempts"] = max_attempts
        log.warn(event="placement_failed", what="stairs", depth=self.depth, attempts=max_attempts)
        raise PlacementError(f"no stair placement found on level {self.depth} after {max_attempts} attempts")

    def _count_tiles(self) -> None:
        empty = wall = 0
        for row, col in self.grid.positions():
            t = self.grid.tile(row, col)
            if is_wall(t):
                wall += 1
            elif t.type is TileType.EMPTY:
                empty += 1
        self.metrics["tiles_empty"] = empty
        self.metrics["tiles_wall"] = wall

    def __repr__(self) -> str:
        return f"Level(depth={self.depth}, origin={self.origin.name})"


__all__ = ["Level", "LevelOrigin", "LevelLoadError", "PlacementError", "die"]
