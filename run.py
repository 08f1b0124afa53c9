"""Undercroft CLI entry point.

Builds the dungeon world and prints levels as text, or runs a short
wandering simulation. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from textwrap import dedent

import colorama
from colorama import Fore, Style
from dotenv import load_dotenv

from undercroft import create_world
from undercroft import __version__ as _package_version
from undercroft.dungeon import GLYPHS, LevelLoadError, PlacementError, TileType, WorldConfig, die
from undercroft.dungeon.tiles import WALL_TYPES
from undercroft.logging_utils import log
from undercroft.models import CreatureRoster, Race
from undercroft.services.creature_ai import do_something
from undercroft.services.movement import place_randomly


def _load_version() -> str:
    try:
        return (Path(__file__).resolve().parent / "VERSION").read_text(encoding="utf-8").strip()
    except OSError:
        return _package_version


__version__ = _load_version()

_TILE_COLORS = {t: Fore.CYAN for t in WALL_TYPES}
_TILE_COLORS[TileType.UPSTAIR] = Fore.YELLOW + Style.BRIGHT
_TILE_COLORS[TileType.DOWNSTAIR] = Fore.YELLOW + Style.BRIGHT
_RACE_COLORS = {Race.HUMAN: Fore.GREEN + Style.BRIGHT, Race.GOBLIN: Fore.RED}


def parse_args(argv: list[str]) -> argparse.Namespace:
    epilog = dedent(
        """
        Environment variables:
          UNDERCROFT_STATIC_LEVEL        Path to the 1782-byte static level file
          UNDERCROFT_LEVEL_COUNT         Number of levels (default: 3)
          UNDERCROFT_SEED                Seed for generation and placement
          UNDERCROFT_PLACEMENT_ATTEMPTS  Retry bound for random placement
          UNDERCROFT_LOG_LEVEL           debug | info | warn | error
          UNDERCROFT_LOG_JSON            1 to log JSON lines

        Examples:
          # Print the static first level
          python run.py map

          # Print the second level of a seeded world without colors
          python run.py map --level 1 --seed 42 --no-color

          # Let three goblins wander for 20 turns
          python run.py walk --goblins 3 --turns 20
        """
    )
    parser = argparse.ArgumentParser(
        prog="Undercroft",
        description="Undercroft dungeon simulation core",
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--env-file", dest="env_file", help="Path to a .env file to load before processing flags")
    parser.add_argument("--version", action="version", version=f"Undercroft {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    map_parser = subparsers.add_parser("map", help="Build the world and print one level")
    map_parser.add_argument("--level", type=int, default=0, help="Level index to print (default: 0)")
    map_parser.add_argument("--seed", type=int, default=None, help="Seed (default: env UNDERCROFT_SEED or random)")
    map_parser.add_argument("--no-color", dest="no_color", action="store_true", help="Disable ANSI colors")
    map_parser.set_defaults(command="map")

    walk_parser = subparsers.add_parser("walk", help="Place creatures on level 0 and let goblins wander")
    walk_parser.add_argument("--turns", type=int, default=10, help="Number of turns to simulate (default: 10)")
    walk_parser.add_argument("--goblins", type=int, default=2, help="Number of goblins (default: 2)")
    walk_parser.add_argument("--seed", type=int, default=None, help="Seed (default: env UNDERCROFT_SEED or random)")
    walk_parser.add_argument("--no-color", dest="no_color", action="store_true", help="Disable ANSI colors")
    walk_parser.set_defaults(command="walk")

    if len(argv) == 0:
        argv = ["map"]
    return parser.parse_args(argv)


def render(level, roster=None, color: bool = False) -> list[str]:
    """Text rows for ``level``; creatures in ``roster`` drawn with their race glyph."""
    lines = []
    for row in range(level.rows):
        chars = []
        for col in range(level.cols):
            tile = level.tile(row, col)
            if tile.occupant is not None and roster is not None and tile.occupant in roster:
                creature = roster.get(tile.occupant)
                ch, tint = creature.glyph, _RACE_COLORS.get(creature.race)
            else:
                ch, tint = GLYPHS[tile.type], _TILE_COLORS.get(tile.type)
            chars.append(f"{tint}{ch}{Style.RESET_ALL}" if color and tint else ch)
        lines.append("".join(chars))
    return lines


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    config = WorldConfig.from_env()
    if getattr(args, "seed", None) is not None:
        config.seed = args.seed
    color = not getattr(args, "no_color", False) and sys.stdout.isatty()
    if color:
        colorama.init()
    log.info(event="startup", command=args.command, seed=config.seed, levels=config.level_count)

    try:
        world = create_world(config)
    except LevelLoadError as err:
        die(err, cleanup=colorama.deinit)

    if args.command == "map":
        if not 0 <= args.level < len(world):
            print(f"[ERROR] Level {args.level} out of range (0-{len(world) - 1})", file=sys.stderr)
            return 1
        print("\n".join(render(world.level(args.level), color=color)))
        return 0

    # walk
    level = world.first()
    roster = CreatureRoster()
    placement_rng = world.rng
    try:
        hero = roster.spawn(Race.HUMAN)
        place_randomly(hero, level, placement_rng, config.placement_attempts)
        goblins = [roster.spawn(Race.GOBLIN) for _ in range(max(0, args.goblins))]
        for goblin in goblins:
            place_randomly(goblin, level, placement_rng, config.placement_attempts)
    except PlacementError as err:
        print(f"[ERROR] {err}", file=sys.stderr)
        return 1
    moved = blocked = 0
    for _ in range(max(0, args.turns)):
        for goblin in goblins:
            if do_something(goblin, level, placement_rng):
                moved += 1
            else:
                blocked += 1
    log.debug(event="walk_finished", turns=args.turns, moved=moved, blocked=blocked)
    print("\n".join(render(level, roster, color=color)))
    print(f"Turns: {args.turns}  Moves: {moved}  Blocked: {blocked}")
    for creature in roster:
        print(f"  #{creature.id} {creature.race.value:<6} speed={creature.speed} at {creature.position}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
