"""
Tests for star spawning, falling and pruning.
"""

from dataclasses import replace

import pytest

from star_catch.catch_core.config_loader import load_config
from star_catch.catch_core.object_pool import FallingObject, ObjectPool


class ScriptedRandom:
    """Stand-in for random.Random that replays fixed samples in [0, 1)."""

    def __init__(self, samples):
        self._samples = list(samples)

    def random(self):
        return self._samples.pop(0)

    def uniform(self, a, b):
        return a + (b - a) * self.random()


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def capped_config(config):
    return replace(config, spawn=replace(config.spawn, max_probability=0.5))


@pytest.fixture
def pool(config):
    return ObjectPool(config, seed=42)


class TestSpawnProbability:
    """Test the spawn chance ramp."""

    def test_base_probability_at_start(self, pool):
        assert pool.spawn_probability(0) == pytest.approx(0.02)

    def test_ramp_per_second(self, pool):
        assert pool.spawn_probability(30) == pytest.approx(0.05)
        assert pool.spawn_probability(60) == pytest.approx(0.08)

    def test_ramp_is_uncapped_by_default(self, pool):
        """Long rounds push the chance above 1."""
        assert pool.spawn_probability(2000) == pytest.approx(2.02)
        assert pool.spawn_probability(2000) > 1.0

    def test_uncapped_chance_spawns_every_tick(self, pool, config):
        for _ in range(200):
            assert pool.maybe_spawn(2000, config.field.width, 2.0) is not None
        assert pool.count == 200

    def test_capped_variant(self, capped_config):
        """A configured cap limits the chance."""
        pool = ObjectPool(capped_config, seed=1)
        assert pool.spawn_probability(0) == pytest.approx(0.02)
        assert pool.spawn_probability(2000) == 0.5

        pool._rng = ScriptedRandom([0.6])
        assert pool.maybe_spawn(2000, capped_config.field.width, 2.0) is None

        pool._rng = ScriptedRandom([0.4, 0.0, 0.0])
        assert pool.maybe_spawn(2000, capped_config.field.width, 2.0) is not None

    def test_sample_equal_to_chance_does_not_spawn(self, pool, config):
        """Spawning requires sample < chance."""
        pool._rng = ScriptedRandom([0.02])
        assert pool.maybe_spawn(0, config.field.width, 2.0) is None
        assert pool.count == 0


class TestSpawnGeometry:
    """Test the shape of new stars."""

    def test_scripted_spawn(self, pool, config):
        """Sample, then x position, then speed jitter."""
        pool._rng = ScriptedRandom([0.01, 0.25, 0.5])
        star = pool.maybe_spawn(0, config.field.width, 2.0)

        size = config.spawn.object_size
        assert star is not None
        assert star.size == size
        assert star.y == -size
        assert star.x == pytest.approx(0.25 * (config.field.width - size))
        assert star.speed == pytest.approx(3.0)
        assert pool.objects == [star]

    def test_spawns_in_bounds_with_jittered_speed(self, pool, config):
        size = config.spawn.object_size
        for _ in range(500):
            pool.maybe_spawn(2000, config.field.width, 4.0)

        assert pool.count == 500
        for star in pool.objects:
            assert 0 <= star.x <= config.field.width - size
            assert star.y == -size
            assert 4.0 <= star.speed < 4.0 + config.spawn.speed_jitter

    def test_same_seed_same_stars(self, config):
        p1 = ObjectPool(config, seed=9)
        p2 = ObjectPool(config, seed=9)

        for elapsed in range(0, 60):
            for _ in range(30):
                p1.maybe_spawn(elapsed, config.field.width, 2.0)
                p2.maybe_spawn(elapsed, config.field.width, 2.0)

        assert p1.objects == p2.objects
        assert p1.count > 0


class TestAdvanceAndPrune:
    """Test falling and removal below the field."""

    def test_objects_fall_by_speed(self, pool):
        star = FallingObject(x=100, y=0, size=15, speed=2.5)
        pool.add(star)

        pool.advance_and_prune(600)
        assert star.y == 2.5

    def test_prunes_below_field(self, pool):
        staying = FallingObject(x=10, y=590, size=15, speed=5)
        at_edge = FallingObject(x=20, y=595, size=15, speed=5)
        leaving = FallingObject(x=30, y=598, size=15, speed=5)
        pool.add(staying)
        pool.add(at_edge)
        pool.add(leaving)

        missed = pool.advance_and_prune(600)

        assert missed == 1
        assert pool.objects == [staying, at_edge]
        assert at_edge.y == 600

    def test_adjacent_removals_not_skipped(self, pool):
        """Consecutive stars leaving in the same pass are all removed."""
        for i in range(5):
            pool.add(FallingObject(x=i * 20, y=599, size=15, speed=3))
        pool.add(FallingObject(x=200, y=0, size=15, speed=3))

        assert pool.advance_and_prune(600) == 5
        assert pool.count == 1

    def test_nothing_below_field_after_prune(self, pool, config):
        for _ in range(2000):
            pool.maybe_spawn(100, config.field.width, 6.0)
            pool.advance_and_prune(config.field.height)
            assert all(star.y <= config.field.height for star in pool.objects)

    def test_clear(self, pool, config):
        for _ in range(10):
            pool.maybe_spawn(2000, config.field.width, 2.0)
        pool.clear()
        assert pool.count == 0
