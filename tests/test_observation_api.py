"""
Test suite for observation and render-data elements.

Ensures snapshots are correctly shaped, typed and ordered.
"""

from dataclasses import replace

import numpy as np
import pytest

from star_catch.catch_core.config_loader import load_config
from star_catch.catch_core.env_gym import CatchEnv
from star_catch.catch_core.game import RoundStateMachine
from star_catch.catch_core.object_pool import FallingObject


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def game(config):
    game = RoundStateMachine(config=config, seed=42)
    game.start_round()
    return game


class TestSnapshot:
    """Verify snapshot contents."""

    def test_empty_field(self, game, config):
        snap = game.snapshot()
        max_obj = config.observation.max_objects

        assert snap.objects_count == 0
        assert snap.obj_mask.shape == (max_obj,)
        assert not snap.obj_mask.any()
        assert snap.nearest_object_x == -1.0
        assert snap.ticks_to_nearest == -1.0
        assert snap.phase == "running"

    def test_objects_sorted_lowest_first(self, game):
        pool = game.state.pool
        pool.add(FallingObject(x=100, y=50, size=15, speed=2))
        pool.add(FallingObject(x=200, y=400, size=15, speed=3))
        pool.add(FallingObject(x=300, y=200, size=15, speed=4))

        snap = game.snapshot()

        assert snap.objects_count == 3
        assert snap.obj_mask.sum() == 3
        np.testing.assert_array_equal(snap.obj_y[:3], [400, 200, 50])
        np.testing.assert_array_equal(snap.obj_x[:3], [200, 300, 100])
        np.testing.assert_array_equal(snap.obj_speed[:3], [3, 4, 2])

    def test_nearest_object_features(self, game):
        game.state.pool.add(FallingObject(x=200, y=400, size=15, speed=5))
        game.state.pool.add(FallingObject(x=100, y=50, size=15, speed=2))

        snap = game.snapshot()

        assert snap.nearest_object_x == 207.5
        assert snap.nearest_object_y == 400
        # Basket top at 550, star bottom at 415
        assert snap.ticks_to_nearest == pytest.approx(135 / 5)

    def test_nearest_skips_stars_past_basket_bottom(self, game):
        """Basket spans y 550..580; a star reaching 585 can no longer be caught."""
        game.state.pool.add(FallingObject(x=100, y=570, size=15, speed=2))
        game.state.pool.add(FallingObject(x=300, y=560, size=15, speed=2))

        snap = game.snapshot()

        assert snap.nearest_object_x == 307.5
        assert snap.nearest_object_y == 560
        assert snap.ticks_to_nearest == 0.0

    def test_truncated_to_max_objects(self, config):
        small = replace(config, observation=replace(config.observation, max_objects=4))
        game = RoundStateMachine(config=small, seed=1)
        game.start_round()
        for i in range(10):
            game.state.pool.add(FallingObject(x=i * 10, y=i * 20, size=15, speed=2))

        snap = game.snapshot()

        assert snap.objects_count == 10
        assert snap.obj_mask.sum() == 4
        np.testing.assert_array_equal(snap.obj_y, [180, 160, 140, 120])

    def test_snapshot_arrays_are_copies(self, game):
        game.state.pool.add(FallingObject(x=10, y=10, size=15, speed=2))
        first = game.snapshot()
        game.state.pool.clear()
        game.snapshot()
        assert first.obj_mask.sum() == 1


class TestObsDict:
    """Verify observation dtypes."""

    @pytest.fixture
    def env(self):
        env = CatchEnv()
        yield env
        env.close()

    def test_scalar_fields(self, env):
        obs, _ = env.reset(seed=42)
        assert obs["score"].dtype == np.int64
        assert obs["time_remaining"].dtype == np.int32
        assert obs["collector_x"].dtype == np.float32
        assert obs["phase"] == 1
        assert obs["score"].shape == ()

    def test_keys_match_space(self, env):
        obs, _ = env.reset(seed=42)
        assert set(obs.keys()) == set(env.observation_space.spaces.keys())

    def test_observations_inside_space_for_whole_round(self, env):
        rng = np.random.default_rng(5)
        obs, _ = env.reset(seed=42)
        assert env.observation_space.contains(obs)

        terminated = False
        while not terminated:
            obs, _, terminated, _, _ = env.step(int(rng.integers(0, 4)))
            assert env.observation_space.contains(obs)

    def test_array_fields(self, env):
        obs, _ = env.reset(seed=42)
        max_obj = env.config.observation.max_objects
        for key in ("obj_x", "obj_y", "obj_size", "obj_speed"):
            assert obs[key].shape == (max_obj,)
            assert obs[key].dtype == np.float32
        assert obs["obj_mask"].dtype == bool


class TestRenderData:
    """Verify the dict read by renderers."""

    def test_render_data_fields(self, game, config):
        game.state.pool.add(FallingObject(x=10, y=20, size=15, speed=2))
        data = game.get_render_data()

        assert data["field_width"] == config.field.width
        assert data["field_height"] == config.field.height
        assert data["collector"] == {"x": 350, "y": 550, "width": 100, "height": 30}
        assert data["objects"] == [{"x": 10, "y": 20, "size": 15}]
        assert data["score"] == 0
        assert data["time_remaining"] == 60
        assert data["phase"] == "running"
