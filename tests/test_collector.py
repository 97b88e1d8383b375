"""
Tests for basket movement and input intents.
"""

import random

import pytest

from star_catch.catch_core.config_loader import load_config
from star_catch.catch_core.collector import Collector, InputIntent


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def collector(config):
    return Collector(config)


class TestInputIntent:
    """Test intent construction."""

    def test_named_intents(self):
        """Named constants should carry the expected flags."""
        assert InputIntent.NONE == InputIntent(False, False)
        assert InputIntent.LEFT == InputIntent(True, False)
        assert InputIntent.RIGHT == InputIntent(False, True)
        assert InputIntent.BOTH == InputIntent(True, True)

    def test_action_mapping_round_trips(self):
        """Discrete actions map to intents and back."""
        for action in range(4):
            assert InputIntent.from_action(action).to_action() == action
        assert InputIntent.from_action(1) == InputIntent.LEFT
        assert InputIntent.from_action(2) == InputIntent.RIGHT

    def test_invalid_action_rejected(self):
        with pytest.raises(ValueError):
            InputIntent.from_action(4)


class TestCollectorMovement:
    """Test the per-tick movement rule."""

    def test_default_position(self, collector):
        """Basket starts centered near the bottom of the field."""
        assert collector.x == 350
        assert collector.y == 550
        assert collector.width == 100
        assert collector.height == 30
        assert collector.right == 450
        assert collector.bottom == 580

    def test_left_and_right_step(self, collector, config):
        """Each direction moves by one step."""
        collector.apply_intent(InputIntent.LEFT, config.field.width)
        assert collector.x == 345

        collector.apply_intent(InputIntent.RIGHT, config.field.width)
        collector.apply_intent(InputIntent.RIGHT, config.field.width)
        assert collector.x == 355

    def test_none_does_not_move(self, collector, config):
        collector.apply_intent(InputIntent.NONE, config.field.width)
        assert collector.x == 350

    def test_both_directions_cancel(self, collector, config):
        """Simultaneous left and right give zero net movement."""
        for _ in range(10):
            collector.apply_intent(InputIntent.BOTH, config.field.width)
        assert collector.x == 350

    def test_clamped_at_left_wall(self, collector, config):
        """Basket cannot leave the field on the left."""
        collector.x = 2
        collector.apply_intent(InputIntent.LEFT, config.field.width)
        assert collector.x == 0

        collector.apply_intent(InputIntent.LEFT, config.field.width)
        assert collector.x == 0

    def test_clamped_at_right_wall(self, collector, config):
        """Basket cannot leave the field on the right."""
        max_x = config.field.width - collector.width
        collector.x = max_x - 2
        collector.apply_intent(InputIntent.RIGHT, config.field.width)
        assert collector.x == max_x

        collector.apply_intent(InputIntent.RIGHT, config.field.width)
        assert collector.x == max_x

    def test_both_at_wall_only_inward_move_applies(self, collector, config):
        """At a wall the clamp absorbs the outward move of a BOTH intent."""
        collector.x = 0
        collector.apply_intent(InputIntent.BOTH, config.field.width)
        assert collector.x == 5

        max_x = config.field.width - collector.width
        collector.x = max_x
        collector.apply_intent(InputIntent.BOTH, config.field.width)
        assert collector.x == max_x

    def test_bounds_hold_for_random_intents(self, collector, config):
        """0 <= x <= field_width - width after any sequence of intents."""
        rng = random.Random(7)
        intents = [InputIntent.NONE, InputIntent.LEFT, InputIntent.RIGHT, InputIntent.BOTH]
        max_x = config.field.width - collector.width

        for _ in range(5000):
            collector.apply_intent(rng.choice(intents), config.field.width)
            assert 0 <= collector.x <= max_x

    def test_reset_restores_start(self, collector, config):
        for _ in range(20):
            collector.apply_intent(InputIntent.LEFT, config.field.width)
        collector.reset()
        assert collector.x == config.collector.start_x
