from .creature import RACE_SPEED, Creature, CreatureRoster, Race, UnknownRaceError  # noqa: F401

__all__ = ["Race", "RACE_SPEED", "Creature", "CreatureRoster", "UnknownRaceError"]
