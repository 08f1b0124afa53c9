"""Default cave generator collaborator (cellular automaton).

Algorithm:
- Fill the interior with random walls at ``wall_probability``; the border is
  always wall.
- Smooth ``smooth_steps`` times with the Moore-neighborhood rule
  (>= ``wall_threshold`` wall neighbors => wall).
- Keep only the largest 4-connected open region; everything else becomes wall.
- Reroll a few times while the open fraction stays under ``min_open_fraction``.

Output is WALL/EMPTY only: no glyphs, no stairs.
"""

from __future__ import annotations

from collections import deque
from typing import List, Set

from ..logging_utils import get_logger
from .grid import Coord
from .tiles import TileType

log = get_logger("undercroft.cave")

_MAX_REROLLS = 5


class CaveGenerator:
    def __init__(
        self,
        rng,
        wall_probability: float = 0.45,
        smooth_steps: int = 4,
        wall_threshold: int = 5,
        min_open_fraction: float = 0.30,
    ):
        self.rng = rng
        self.wall_probability = float(wall_probability)
        self.smooth_steps = int(smooth_steps)
        self.wall_threshold = int(wall_threshold)
        self.min_open_fraction = float(min_open_fraction)

    def generate(self, level) -> None:
        rows, cols = level.rows, level.cols
        walls: List[List[bool]] = []
        region: Set[Coord] = set()
        for attempt in range(_MAX_REROLLS):
            walls = self._randomize(rows, cols)
            for _ in range(self.smooth_steps):
                walls = self._smooth(walls)
            region = _largest_open_region(walls)
            if len(region) / float(rows * cols) >= self.min_open_fraction:
                break
            log.debug(event="cave_reroll", depth=level.depth, attempt=attempt, open=len(region))
        level.metrics["generation_attempts"] = attempt + 1
        for row, col in level.grid.positions():
            open_tile = (row, col) in region
            level.tile(row, col).type = TileType.EMPTY if open_tile else TileType.WALL

    def _randomize(self, rows: int, cols: int) -> List[List[bool]]:
        threshold = int(self.wall_probability * 1000)
        grid = []
        for row in range(rows):
            line = []
            for col in range(cols):
                if row in (0, rows - 1) or col in (0, cols - 1):
                    line.append(True)
                else:
                    line.append(self.rng.uniform(1000) < threshold)
            grid.append(line)
        return grid

    def _smooth(self, walls: List[List[bool]]) -> List[List[bool]]:
        rows, cols = len(walls), len(walls[0])
        out = [line[:] for line in walls]
        for row in range(1, rows - 1):
            for col in range(1, cols - 1):
                count = 0
                for d_row in (-1, 0, 1):
                    for d_col in (-1, 0, 1):
                        if (d_row or d_col) and walls[row + d_row][col + d_col]:
                            count += 1
                out[row][col] = count >= self.wall_threshold
        return out


def _largest_open_region(walls: List[List[bool]]) -> Set[Coord]:
    rows, cols = len(walls), len(walls[0])
    seen: Set[Coord] = set()
    best: Set[Coord] = set()
    for row in range(rows):
        for col in range(cols):
            if walls[row][col] or (row, col) in seen:
                continue
            region = {(row, col)}
            q = deque([(row, col)])
            while q:
                r, c = q.popleft()
                for nr, nc in ((r + 1, c), (r - 1, c), (r, c + 1), (r, c - 1)):
                    if 0 <= nr < rows and 0 <= nc < cols and not walls[nr][nc] and (nr, nc) not in region:
                        region.add((nr, nc))
                        q.append((nr, nc))
            seen |= region
            if len(region) > len(best):
                best = region
    return best


__all__ = ["CaveGenerator"]
