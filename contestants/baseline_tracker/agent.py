"""
Baseline Tracker Agent - Chases the lowest catchable star.

This is a simple heuristic agent that reads nearest_object_x (the center
of the lowest star that can still be caught) and moves the basket toward it.

This serves as:
1. A working example of how to read observations and return actions
2. A baseline benchmark to compare against
3. A verification that the environment API works correctly

Strategy:
- If no star is catchable, stay put
- Otherwise move toward the star's center
- Stay put inside a small deadband so the basket does not jitter
"""

from typing import Any, Dict, Optional

STAY, LEFT, RIGHT = 0, 1, 2

# Pixels of slack before the basket reacts; matches the default move step
DEADBAND = 5.0


class CatchAgent:
    """
    Simple baseline agent that keeps the basket under the lowest star.
    """

    def __init__(self, debug: bool = False):
        """
        Initialize the agent.

        Args:
            debug: If True, print decisions to stdout.
        """
        self.debug = debug

    def reset(self, seed: Optional[int] = None) -> None:
        """Nothing to reset; the agent is stateless."""

    def act(self, observation: Dict[str, Any]) -> int:
        """
        Choose a move for this tick.

        Args:
            observation: Observation dict from CatchEnv.

        Returns:
            Discrete action: 0 = stay, 1 = left, 2 = right.
        """
        basket_center = float(observation["collector_x"]) + float(observation["collector_width"]) / 2
        target = float(observation["nearest_object_x"])

        if target < 0:
            # Nothing catchable yet
            target = basket_center

        delta = target - basket_center
        if abs(delta) <= DEADBAND:
            action = STAY
        elif delta < 0:
            action = LEFT
        else:
            action = RIGHT

        if self.debug:
            print(f"[DEBUG] basket={basket_center:.1f} target={target:.1f} action={action}")

        return action


def act(observation: Dict[str, Any]) -> int:
    """Standalone act function (alternative to class-based agent)."""
    return CatchAgent().act(observation)
