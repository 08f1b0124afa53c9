"""Creature placement and movement on a Level.

Every operation checks all of its preconditions before touching anything, so
a rejected move or climb leaves tiles and creature exactly as they were. A
creature's coordinates and the occupant handle of the tile it stands on are
always written together.

Rejections that are part of normal play (walls, occupied tiles, missing
stairs) return False. Misuse (moving an unplaced creature, placing a placed
one) and exhausted placement retries raise PlacementError.
"""

from __future__ import annotations

from typing import Tuple

from undercroft.dungeon.level import Level, PlacementError
from undercroft.dungeon.tiles import TileType, is_empty, is_wall
from undercroft.logging_utils import get_logger
from undercroft.models.creature import Creature

log = get_logger("undercroft.movement")

# (name, d_row, d_col)
DIRECTIONS: Tuple[Tuple[str, int, int], ...] = (
    ("left", 0, -1),
    ("down", 1, 0),
    ("up", -1, 0),
    ("right", 0, 1),
    ("upleft", -1, -1),
    ("downleft", 1, -1),
    ("upright", -1, 1),
    ("downright", 1, 1),
)


def _require_placed(creature: Creature) -> None:
    if not creature.placed:
        raise PlacementError(f"creature {creature.id} is not placed")


def _require_unplaced(creature: Creature) -> None:
    if creature.placed:
        raise PlacementError(f"creature {creature.id} is already placed at {creature.position}")


def _occupy(creature: Creature, level: Level, row: int, col: int) -> None:
    creature.row, creature.col = row, col
    level.tile(row, col).occupant = creature.id


def remove(creature: Creature, level: Level) -> None:
    """Take ``creature`` off ``level``, clearing its tile and coordinates."""
    _require_placed(creature)
    level.tile(creature.row, creature.col).occupant = None
    creature.row = creature.col = None


def place_randomly(creature: Creature, level: Level, rng, max_attempts: int = 10_000) -> Tuple[int, int]:
    """Put ``creature`` on a uniformly sampled empty tile and return its coordinates."""
    _require_unplaced(creature)
    if not any(is_empty(level.tile(r, c)) for r, c in level.grid.positions()):
        log.warn(event="placement_failed", what="creature", id=creature.id, reason="no_empty_tile")
        raise PlacementError(f"level {level.depth} has no empty tile")
    for _ in range(max_attempts):
        row = rng.uniform(level.rows)
        col = rng.uniform(level.cols)
        if is_empty(level.tile(row, col)):
            _occupy(creature, level, row, col)
            return row, col
    log.warn(event="placement_failed", what="creature", id=creature.id, attempts=max_attempts)
    raise PlacementError(f"no empty tile found for creature {creature.id} after {max_attempts} attempts")


def place_at_stair(creature: Creature, level: Level, up: bool) -> bool:
    """Place on the first UPSTAIR (``up``) or DOWNSTAIR in row-major order.

    Returns False, placing nothing, when the level has no such stair or the
    stair is occupied.
    """
    _require_unplaced(creature)
    target = level.find_first(TileType.UPSTAIR if up else TileType.DOWNSTAIR)
    if target is None or level.occupant_at(*target) is not None:
        return False
    _occupy(creature, level, *target)
    return True


def move(creature: Creature, level: Level, d_row: int, d_col: int) -> bool:
    _require_placed(creature)
    row, col = creature.row + d_row, creature.col + d_col
    if not level.grid.in_bounds(row, col):
        return False
    dest = level.tile(row, col)
    if is_wall(dest) or not is_empty(dest):
        return False
    level.tile(creature.row, creature.col).occupant = None
    _occupy(creature, level, row, col)
    return True


def move_left(creature: Creature, level: Level) -> bool:
    return move(creature, level, 0, -1)


def move_right(creature: Creature, level: Level) -> bool:
    return move(creature, level, 0, 1)


def move_up(creature: Creature, level: Level) -> bool:
    return move(creature, level, -1, 0)


def move_down(creature: Creature, level: Level) -> bool:
    return move(creature, level, 1, 0)


def move_upleft(creature: Creature, level: Level) -> bool:
    return move(creature, level, -1, -1)


def move_upright(creature: Creature, level: Level) -> bool:
    return move(creature, level, -1, 1)


def move_downleft(creature: Creature, level: Level) -> bool:
    return move(creature, level, 1, -1)


def move_downright(creature: Creature, level: Level) -> bool:
    return move(creature, level, 1, 1)


def _climb(creature: Creature, from_level: Level, to_level: Level, stair: TileType, arrival: TileType) -> bool:
    _require_placed(creature)
    if from_level.tile(creature.row, creature.col).type is not stair:
        return False
    target = to_level.find_first(arrival)
    if target is None or to_level.occupant_at(*target) is not None:
        return False
    source = creature.position
    remove(creature, from_level)
    _occupy(creature, to_level, *target)
    log.debug(
        event="creature_climbed",
        id=creature.id,
        src_depth=from_level.depth,
        src=source,
        dst_depth=to_level.depth,
        dst=target,
    )
    return True


def climb_upstair(creature: Creature, from_level: Level, to_level: Level) -> bool:
    """Climb from an UPSTAIR; arrive on ``to_level``'s first DOWNSTAIR."""
    return _climb(creature, from_level, to_level, TileType.UPSTAIR, TileType.DOWNSTAIR)


def climb_downstair(creature: Creature, from_level: Level, to_level: Level) -> bool:
    """Climb from a DOWNSTAIR; arrive on ``to_level``'s first UPSTAIR."""
    return _climb(creature, from_level, to_level, TileType.DOWNSTAIR, TileType.UPSTAIR)


def rest(creature: Creature) -> bool:
    # Time-passing hook; nothing consumes turns yet.
    return True


__all__ = [
    "DIRECTIONS",
    "remove",
    "place_randomly",
    "place_at_stair",
    "move",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "move_upleft",
    "move_upright",
    "move_downleft",
    "move_downright",
    "climb_upstair",
    "climb_downstair",
    "rest",
]
