"""Creature model and the roster that owns creatures.

Tiles refer to creatures by integer handle (``Creature.id``) and never own
them; the roster is the only owner and resolves handles back to creatures.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

from ..logging_utils import get_logger

log = get_logger("undercroft.creature")


class Race(Enum):
    HUMAN = "human"
    GOBLIN = "goblin"


RACE_SPEED: Dict[Race, int] = {
    Race.HUMAN: 5,
    Race.GOBLIN: 7,
}

# Map glyphs for text rendering.
RACE_GLYPH: Dict[Race, str] = {
    Race.HUMAN: "@",
    Race.GOBLIN: "g",
}


class UnknownRaceError(ValueError):
    pass


@dataclass
class Creature:
    id: int
    race: Race
    speed: int
    action_points: int = 0
    row: Optional[int] = None
    col: Optional[int] = None

    @property
    def placed(self) -> bool:
        return self.row is not None

    @property
    def position(self) -> Optional[Tuple[int, int]]:
        if self.row is None:
            return None
        return (self.row, self.col)

    @property
    def glyph(self) -> str:
        return RACE_GLYPH[self.race]


class CreatureRoster:
    def __init__(self):
        self._creatures: Dict[int, Creature] = {}
        self._next_id = 1

    def spawn(self, race: Race) -> Creature:
        """Create a creature of ``race`` with race-derived speed and zero action points."""
        if not isinstance(race, Race):
            raise UnknownRaceError(f"unknown race: {race!r}")
        creature = Creature(id=self._next_id, race=race, speed=RACE_SPEED[race])
        self._creatures[creature.id] = creature
        self._next_id += 1
        log.debug(event="creature_spawned", id=creature.id, race=race.value)
        return creature

    def get(self, creature_id: int) -> Creature:
        return self._creatures[creature_id]

    def glyphs(self) -> Dict[int, str]:
        return {cid: c.glyph for cid, c in self._creatures.items()}

    def __contains__(self, creature_id: int) -> bool:
        return creature_id in self._creatures

    def __len__(self) -> int:
        return len(self._creatures)

    def __iter__(self) -> Iterator[Creature]:
        return iter(self._creatures.values())


__all__ = ["Race", "RACE_SPEED", "RACE_GLYPH", "UnknownRaceError", "Creature", "CreatureRoster"]
