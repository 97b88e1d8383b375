"""
Collector
=========

The player-controlled basket and the per-tick input intent that moves it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from star_catch.catch_core.config_loader import GameConfig, get_config


@dataclass(frozen=True)
class InputIntent:
    """
    Movement request for one tick.

    Left and right are independent flags, so keyboard and touch input can
    both be active in the same tick.
    """
    left: bool = False
    right: bool = False

    NONE: ClassVar["InputIntent"]
    LEFT: ClassVar["InputIntent"]
    RIGHT: ClassVar["InputIntent"]
    BOTH: ClassVar["InputIntent"]

    @staticmethod
    def from_action(action: int) -> "InputIntent":
        """
        Map a discrete action to an intent.

        Args:
            action: 0 = none, 1 = left, 2 = right, 3 = both.

        Returns:
            Matching InputIntent.
        """
        if action not in (0, 1, 2, 3):
            raise ValueError(f"Invalid action: {action}")
        return InputIntent(left=bool(action & 1), right=bool(action & 2))

    def to_action(self) -> int:
        """Inverse of from_action()."""
        return int(self.left) | (int(self.right) << 1)


InputIntent.NONE = InputIntent()
InputIntent.LEFT = InputIntent(left=True)
InputIntent.RIGHT = InputIntent(right=True)
InputIntent.BOTH = InputIntent(left=True, right=True)


class Collector:
    """
    Axis-aligned basket rectangle.

    Only x changes during a round; it stays within [0, field_width - width].
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._start_x = config.collector.start_x
        self._move_step = config.collector.move_step

        self.x: float = self._start_x
        self.y: float = config.collector.y
        self.width: float = config.collector.width
        self.height: float = config.collector.height

    @property
    def right(self) -> float:
        """X coordinate of the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Y coordinate of the bottom edge."""
        return self.y + self.height

    def reset(self) -> None:
        """Move back to the round-start position."""
        self.x = self._start_x

    def apply_intent(self, intent: InputIntent, field_width: float) -> None:
        """
        Move by one step per active direction, clamped to the field.

        Both directions are checked independently, so LEFT and RIGHT in the
        same tick cancel out unless a wall absorbs one of the moves.

        Args:
            intent: Requested movement for this tick.
            field_width: Width of the playfield in pixels.
        """
        max_x = max(0.0, field_width - self.width)

        if intent.left:
            self.x = max(0.0, self.x - self._move_step)
        if intent.right:
            self.x = min(max_x, self.x + self._move_step)

        # Guards against a start position or resize outside the field
        self.x = max(0.0, min(max_x, self.x))

    def __repr__(self) -> str:
        return f"Collector(x={self.x}, y={self.y}, width={self.width}, height={self.height})"
