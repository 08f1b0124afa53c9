"""World: the ordered set of levels plus the current-level cursor.

Build phases (``World.build``):
    * Level 0: reset, static load, refine.
    * Every later level: reset, cave generation, refine, stairs. The first
      generated level gets only an up-stair, the last only a down-stair,
      levels in between both (a level that is both first and last takes the
      first rule). Generation is retried when stairs cannot be placed.

The World exclusively owns its levels; ``free`` drops them all and leaves the
world unusable until rebuilt.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from ..rng import UniformSource
from .cave import CaveGenerator
from .config import WorldConfig
from .level import Level, PlacementError

log = get_logger("undercroft.world")


class World:
    def __init__(self, config: WorldConfig | None = None, *, rng=None, generator=None):
        self.config = config or WorldConfig()
        if self.config.level_count < 1:
            raise ValueError("a world needs at least one level")
        self.rng = rng if rng is not None else UniformSource(self.config.seed)
        self.generator = generator or CaveGenerator(
            self.rng,
            wall_probability=self.config.cave_wall_probability,
            smooth_steps=self.config.cave_smooth_steps,
            wall_threshold=self.config.cave_wall_threshold,
            min_open_fraction=self.config.cave_min_open_fraction,
        )
        self.level_count = self.config.level_count
        self.levels: List[Level] = []
        self.current = -1
        self.metrics: Dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def build(self) -> "World":
        start = time.perf_counter()
        phase_times: Dict[str, int] = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        self.levels = []
        self.current = 0
        self.level_count = self.config.level_count
        _phase("static_level", self._build_static)
        for depth in range(1, self.level_count):
            _phase(f"level_{depth}", self._build_generated, depth)
        self.metrics["phase_ms"] = phase_times
        self.metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
        log.info(event="world_built", levels=self.level_count, runtime_ms=self.metrics["runtime_ms"])
        return self

    def _build_static(self) -> None:
        level = Level(depth=0)
        level.reset()
        level.load_static(self.config.static_level_path)
        level.refine()
        self.add(level)

    def _stair_flags(self, depth: int):
        if depth == 1:
            return True, False
        if depth == self.level_count - 1:
            return False, True
        return True, True

    def _build_generated(self, depth: int) -> None:
        upstair, downstair = self._stair_flags(depth)
        level = Level(depth=depth)
        last_error: Optional[PlacementError] = None
        for _ in range(max(1, self.config.generation_attempts)):
            level.generate(self.generator)
            level.refine()
            try:
                level.add_stairs(self.rng, upstair, downstair, self.config.placement_attempts)
            except PlacementError as exc:
                last_error = exc
                continue
            self.add(level)
            return
        raise last_error

    def add(self, level: Level) -> None:
        """Insert ``level`` into the next free slot."""
        if len(self.levels) >= self.level_count:
            raise ValueError(f"world already holds {self.level_count} levels")
        self.levels.append(level)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _require_built(self) -> None:
        if not self.levels:
            raise RuntimeError("world has no levels (not built or already freed)")

    @property
    def current_level(self) -> Level:
        self._require_built()
        return self.levels[self.current]

    def first(self) -> Level:
        self._require_built()
        return self.levels[0]

    def next(self) -> Level:
        self._require_built()
        if self.current + 1 < len(self.levels):
            self.current += 1
        return self.current_level

    def prev(self) -> Level:
        self._require_built()
        if self.current - 1 >= 0:
            self.current -= 1
        return self.current_level

    def level(self, depth: int) -> Level:
        self._require_built()
        return self.levels[depth]

    def free(self) -> None:
        self.levels = []
        self.level_count = 0
        self.current = -1
        log.debug(event="world_freed")

    def __len__(self) -> int:
        return len(self.levels)

    def __iter__(self):
        return iter(self.levels)


__all__ = ["World"]
