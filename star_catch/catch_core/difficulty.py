"""
Difficulty Controller
=====================

Stepped fall-speed curve driven by elapsed round seconds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from star_catch.catch_core.config_loader import GameConfig, get_config


@dataclass
class DifficultyParams:
    """Current speed curve state for one round."""
    base_speed: float
    speed_increment: float
    step_interval_seconds: int
    last_step_elapsed: int = 0

    @property
    def steps_applied(self) -> int:
        return self.last_step_elapsed // self.step_interval_seconds


class DifficultyController:
    """
    Raises base_speed by speed_increment once per step interval.

    tick() runs many times per elapsed second, so the boundary that was
    already applied is remembered in last_step_elapsed.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config

    def new_params(self) -> DifficultyParams:
        """Fresh parameters at the start of a round."""
        difficulty = self._config.difficulty
        return DifficultyParams(
            base_speed=difficulty.base_speed,
            speed_increment=difficulty.speed_increment,
            step_interval_seconds=difficulty.step_interval_seconds
        )

    def reset(self, params: DifficultyParams) -> None:
        """Restore initial speed and clear the step guard in place."""
        params.base_speed = self._config.difficulty.base_speed
        params.last_step_elapsed = 0

    def update_speed(self, params: DifficultyParams, elapsed_seconds: int) -> bool:
        """
        Apply any speed steps due at elapsed_seconds.

        Each positive multiple of the interval is applied exactly once, even
        if several were skipped since the last call.

        Args:
            params: Curve state, modified in place.
            elapsed_seconds: Whole seconds since round start.

        Returns:
            True if the speed changed.
        """
        if elapsed_seconds <= 0:
            return False

        interval = params.step_interval_seconds
        target_step = int(elapsed_seconds) // interval
        pending = target_step - params.steps_applied
        if pending <= 0:
            return False

        params.base_speed += params.speed_increment * pending
        params.last_step_elapsed = target_step * interval
        return True
