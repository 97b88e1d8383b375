"""
Tests for the stepped speed curve.
"""

import pytest

from star_catch.catch_core.config_loader import load_config
from star_catch.catch_core.difficulty import DifficultyController


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def controller(config):
    return DifficultyController(config)


@pytest.fixture
def params(controller):
    return controller.new_params()


class TestDifficultySteps:
    """Test speed increments at interval boundaries."""

    def test_initial_params(self, params):
        assert params.base_speed == 2.0
        assert params.speed_increment == 0.5
        assert params.step_interval_seconds == 15
        assert params.last_step_elapsed == 0

    def test_no_step_before_first_boundary(self, controller, params):
        for elapsed in range(0, 15):
            assert not controller.update_speed(params, elapsed)
        assert params.base_speed == 2.0

    def test_step_fires_once_per_boundary(self, controller, params):
        """60 calls at elapsed=15 apply the increment once."""
        results = [controller.update_speed(params, 15) for _ in range(60)]

        assert results.count(True) == 1
        assert params.base_speed == 2.5
        assert params.last_step_elapsed == 15

    def test_cumulative_increment_after_three_boundaries(self, controller, params):
        """After 15, 30 and 45 the total increment is exactly 1.5."""
        for elapsed in range(0, 60):
            for _ in range(60):
                controller.update_speed(params, elapsed)

        assert params.base_speed - 2.0 == 1.5
        assert params.last_step_elapsed == 45

    def test_speed_holds_between_boundaries(self, controller, params):
        controller.update_speed(params, 15)
        for elapsed in range(16, 30):
            controller.update_speed(params, elapsed)
        assert params.base_speed == 2.5

    def test_skipped_boundaries_each_applied_once(self, controller, params):
        """Jumping from 0 to 45 applies three steps."""
        assert controller.update_speed(params, 45)
        assert params.base_speed == 3.5
        assert not controller.update_speed(params, 45)
        assert not controller.update_speed(params, 46)

    def test_reset(self, controller, params):
        controller.update_speed(params, 30)
        controller.reset(params)
        assert params.base_speed == 2.0
        assert params.last_step_elapsed == 0
        assert controller.update_speed(params, 15)
