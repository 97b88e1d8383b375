"""
Team Template Agent
===================

Your agent must provide one of:
1. A `CatchAgent` class with an `act(obs) -> action` method
2. A standalone `act(obs) -> action` function

Actions are integers: 0 = stay, 1 = left, 2 = right, 3 = both (cancels out).

See star_catch/catch_core/state_snapshot.py for the observation keys.
"""

from __future__ import annotations

from typing import Dict
import numpy as np


class CatchAgent:
    """
    Your Star Catch agent implementation.

    Replace the strategy in `act()` with your own logic.
    """

    def __init__(self):
        """Initialize your agent. Load models, set up state, etc."""
        self.rng = np.random.default_rng()

    def act(self, obs: Dict[str, np.ndarray]) -> int:
        """
        Choose an action based on the observation.

        Args:
            obs: Dictionary containing round state.

        Returns:
            action: Integer in {0, 1, 2, 3}.
        """
        return int(self.rng.integers(0, 4))

    def reset(self) -> None:
        """Called when a new round starts (optional)."""
        pass


def act(obs: Dict[str, np.ndarray]) -> int:
    """Standalone act function (alternative to class-based agent)."""
    return int(np.random.randint(0, 4))
