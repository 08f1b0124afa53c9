import unittest

import pytest

from undercroft import create_world
from undercroft.dungeon import Level, LevelLoadError, LevelOrigin, PlacementError, TileType, World, WorldConfig
from undercroft.dungeon.config import DEFAULT_STATIC_LEVEL
from undercroft.rng import UniformSource

from dungeon_test_utils import BorderedCaveStub, SolidCaveStub


def _world(level_count=3, seed=17, generator=None, **cfg):
    config = WorldConfig(level_count=level_count, seed=seed, **cfg)
    return World(config, generator=generator or BorderedCaveStub()).build()


def _stair_counts(level):
    return level.grid.count(TileType.UPSTAIR), level.grid.count(TileType.DOWNSTAIR)


class TestWorldBuild(unittest.TestCase):
    def test_default_three_levels(self):
        world = _world()
        self.assertEqual(len(world), 3)
        self.assertEqual(world.current, 0)
        self.assertIs(world.first().origin, LevelOrigin.STATIC)
        for depth in (1, 2):
            self.assertIs(world.level(depth).origin, LevelOrigin.GENERATED)
            self.assertEqual(world.level(depth).depth, depth)

    def test_stair_rule_per_depth(self):
        world = _world()
        self.assertEqual(_stair_counts(world.level(0)), (0, 0))
        self.assertEqual(_stair_counts(world.level(1)), (1, 0))
        self.assertEqual(_stair_counts(world.level(2)), (0, 1))

    def test_middle_levels_get_both_stairs(self):
        world = _world(level_count=5)
        self.assertEqual(_stair_counts(world.level(1)), (1, 0))
        for depth in (2, 3):
            self.assertEqual(_stair_counts(world.level(depth)), (1, 1))
        self.assertEqual(_stair_counts(world.level(4)), (0, 1))

    def test_first_generated_rule_wins_when_also_last(self):
        world = _world(level_count=2)
        self.assertEqual(_stair_counts(world.level(1)), (1, 0))

    def test_single_level_world(self):
        world = _world(level_count=1)
        self.assertEqual(len(world), 1)
        self.assertIs(world.next(), world.first())

    def test_metrics_recorded(self):
        world = _world()
        self.assertIn("runtime_ms", world.metrics)
        self.assertEqual(set(world.metrics["phase_ms"]), {"static_level", "level_1", "level_2"})

    def test_same_seed_same_world(self):
        a, b = _world(seed=5), _world(seed=5)
        for la, lb in zip(a, b):
            self.assertEqual(la.grid.snapshot(), lb.grid.snapshot())


def test_navigation_clamps_at_both_ends():
    world = _world()
    assert world.prev() is world.level(0)
    assert world.current == 0
    assert world.next() is world.level(1)
    assert world.next() is world.level(2)
    assert world.next() is world.level(2)
    assert world.current == 2
    assert world.prev() is world.level(1)
    assert world.current_level is world.level(1)


def test_cursor_stays_in_range_under_any_walk():
    world = _world(level_count=4)
    rng = UniformSource(3)
    for _ in range(200):
        (world.next if rng.uniform(2) else world.prev)()
        assert 0 <= world.current < len(world)


def test_add_rejects_overflow():
    world = _world()
    with pytest.raises(ValueError):
        world.add(Level())


def test_free_drops_levels():
    world = _world()
    world.free()
    assert len(world) == 0
    assert world.level_count == 0
    assert world.current == -1
    with pytest.raises(RuntimeError):
        world.current_level
    with pytest.raises(RuntimeError):
        world.next()


def test_unbuilt_world_has_no_levels():
    world = World(WorldConfig(seed=1), generator=BorderedCaveStub())
    with pytest.raises(RuntimeError):
        world.first()


def test_level_count_must_be_positive():
    with pytest.raises(ValueError):
        World(WorldConfig(level_count=0))


def test_missing_static_file_propagates(tmp_path):
    config = WorldConfig(static_level_path=str(tmp_path / "missing"), seed=1)
    with pytest.raises(LevelLoadError):
        World(config, generator=BorderedCaveStub()).build()


def test_static_level_comes_from_config(mask_file):
    path = mask_file(["#" * 80] * 22)
    world = _world(level_count=1, static_level_path=str(path))
    assert world.first().grid.count(TileType.EMPTY) == 0


def test_generation_retried_then_fails():
    gen = SolidCaveStub()
    with pytest.raises(PlacementError):
        _world(generator=gen, generation_attempts=3)
    assert gen.calls == 3


def test_generation_recovers_after_a_bad_cave():
    class FlakyCave(BorderedCaveStub):
        def generate(self, level):
            if self.calls == 0:
                self.calls += 1
                SolidCaveStub().generate(level)
                return
            super().generate(level)

    gen = FlakyCave()
    world = _world(level_count=2, generator=gen)
    assert gen.calls == 2
    assert _stair_counts(world.level(1)) == (1, 0)


def test_default_cave_generator_builds_a_world():
    world = World(WorldConfig(seed=2024)).build()
    assert len(world) == 3
    assert _stair_counts(world.level(2)) == (0, 1)


def test_config_from_env(monkeypatch, tmp_path):
    assert WorldConfig.from_env().level_count == 3
    assert WorldConfig.from_env().static_level_path == str(DEFAULT_STATIC_LEVEL)
    monkeypatch.setenv("UNDERCROFT_LEVEL_COUNT", "4")
    monkeypatch.setenv("UNDERCROFT_SEED", "0")
    monkeypatch.setenv("UNDERCROFT_PLACEMENT_ATTEMPTS", "50")
    monkeypatch.setenv("UNDERCROFT_STATIC_LEVEL", str(tmp_path / "x"))
    cfg = WorldConfig.from_env()
    assert (cfg.level_count, cfg.seed, cfg.placement_attempts) == (4, 0, 50)
    assert cfg.static_level_path == str(tmp_path / "x")


def test_create_world_returns_independent_worlds(monkeypatch):
    monkeypatch.setenv("UNDERCROFT_LEVEL_COUNT", "2")
    monkeypatch.setenv("UNDERCROFT_SEED", "9")
    a = create_world(generator=BorderedCaveStub())
    b = create_world(generator=BorderedCaveStub())
    assert len(a) == len(b) == 2
    assert a is not b
    a.free()
    assert len(b) == 2
