"""
Object Pool
===========

Owns the falling stars: probabilistic spawning, falling and pruning of
stars that left the bottom of the field.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

from star_catch.catch_core.config_loader import GameConfig, get_config


@dataclass
class FallingObject:
    """A single falling star. (x, y) is the top-left of its bounding box."""
    x: float
    y: float
    size: float
    speed: float  # Pixels per tick

    @property
    def right(self) -> float:
        return self.x + self.size

    @property
    def bottom(self) -> float:
        return self.y + self.size


class ObjectPool:
    """
    Active falling objects plus the spawn rule.

    Spawn chance per tick is base_probability + elapsed * probability_ramp.
    The ramp is uncapped unless spawn.max_probability is configured; once
    the chance reaches 1 every tick spawns a star.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize object pool.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = random.Random(seed)
        self._objects: List[FallingObject] = []

    @property
    def objects(self) -> List[FallingObject]:
        """Live list of active objects (insertion order)."""
        return self._objects

    @property
    def count(self) -> int:
        return len(self._objects)

    def spawn_probability(self, elapsed_seconds: float) -> float:
        """
        Spawn chance for one tick at the given elapsed time.

        May exceed 1.0 for long rounds when no cap is configured.
        """
        spawn = self._config.spawn
        probability = spawn.base_probability + elapsed_seconds * spawn.probability_ramp
        if spawn.max_probability is not None:
            probability = min(probability, spawn.max_probability)
        return probability

    def maybe_spawn(
        self,
        elapsed_seconds: float,
        field_width: float,
        base_speed: float
    ) -> Optional[FallingObject]:
        """
        Draw one sample and spawn a star if it falls under the spawn chance.

        Args:
            elapsed_seconds: Seconds since round start.
            field_width: Playfield width in pixels.
            base_speed: Current base fall speed from the difficulty curve.

        Returns:
            The spawned object, or None.
        """
        if self._rng.random() >= self.spawn_probability(elapsed_seconds):
            return None

        spawn = self._config.spawn
        size = spawn.object_size
        obj = FallingObject(
            x=self._rng.uniform(0.0, max(0.0, field_width - size)),
            y=-size,
            size=size,
            speed=base_speed + self._rng.random() * spawn.speed_jitter
        )
        self._objects.append(obj)
        return obj

    def advance_and_prune(self, field_height: float) -> int:
        """
        Move every object down by its speed, then drop those below the field.

        Args:
            field_height: Playfield height in pixels.

        Returns:
            Number of objects removed (missed).
        """
        for obj in self._objects:
            obj.y += obj.speed

        before = len(self._objects)
        self._objects[:] = [obj for obj in self._objects if obj.y <= field_height]
        return before - len(self._objects)

    def add(self, obj: FallingObject) -> None:
        """Insert an object directly (scripted scenarios and tests)."""
        self._objects.append(obj)

    def clear(self) -> None:
        self._objects.clear()

    def reseed(self, seed: Optional[int]) -> None:
        """Restart the random stream. Keeps the current stream if seed is None."""
        if seed is not None:
            self._rng = random.Random(seed)
