"""Default creature AI: wander one step in a random direction.

A blocked step is simply lost; the creature stays put and the caller gets
False. Deeper behavior (pursuit, fleeing) plugs in here later.
"""

from __future__ import annotations

from undercroft.dungeon.level import Level
from undercroft.models.creature import Creature

from .movement import DIRECTIONS, move


def do_something(creature: Creature, level: Level, rng) -> bool:
    _name, d_row, d_col = DIRECTIONS[rng.uniform(len(DIRECTIONS))]
    return move(creature, level, d_row, d_col)


__all__ = ["do_something"]
