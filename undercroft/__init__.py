"""
project: Undercroft
module: __init__.py
License: MIT

World factory for the dungeon simulation core.

Configuration is sourced from UNDERCROFT_* environment variables (see
``undercroft.dungeon.config.WorldConfig.from_env``); a local ``.env`` file is
loaded on import so development settings do not need exporting.
"""

from __future__ import annotations

from dotenv import load_dotenv

from .dungeon import World, WorldConfig

load_dotenv()

__version__ = "0.1.0"


def create_world(config: WorldConfig | None = None, *, rng=None, generator=None) -> World:
    """Build a fresh World. Each call returns an independent world; there is no global one."""
    return World(config or WorldConfig.from_env(), rng=rng, generator=generator).build()


__all__ = ["create_world", "World", "WorldConfig", "__version__"]
