"""
State Snapshot
==============

Packs round state into fixed-size numpy arrays for observations and
read-only views for rendering/UI collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, TYPE_CHECKING
import numpy as np

from star_catch.catch_core.config_loader import GameConfig, get_config

if TYPE_CHECKING:
    from star_catch.catch_core.game import RoundState

PHASE_IDS = {"idle": 0, "running": 1, "ended": 2}


@dataclass
class RoundSnapshot:
    """
    Round state at one instant.

    Object arrays are fixed-size with masking for variable object counts.
    When more objects are active than max_objects, the lowest ones
    (closest to the basket) are kept.
    """
    # Core state
    score: int
    time_remaining: int
    elapsed: int
    phase: str
    objects_count: int
    base_speed: float

    # Field info (for normalization)
    field_width: float
    field_height: float

    # Basket
    collector_x: float
    collector_y: float
    collector_width: float
    collector_height: float

    # Derived features
    nearest_object_x: float      # Center x of the lowest star, or -1
    nearest_object_y: float      # Top y of the lowest star, or -1
    ticks_to_nearest: float      # Ticks until the lowest star reaches the basket top, or -1

    # Object arrays (fixed size, padded)
    obj_x: np.ndarray            # (MAX_OBJ,) float32
    obj_y: np.ndarray            # (MAX_OBJ,) float32
    obj_size: np.ndarray         # (MAX_OBJ,) float32
    obj_speed: np.ndarray        # (MAX_OBJ,) float32
    obj_mask: np.ndarray         # (MAX_OBJ,) bool

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        return {
            "score": np.array(self.score, dtype=np.int64),
            "time_remaining": np.array(self.time_remaining, dtype=np.int32),
            "elapsed": np.array(self.elapsed, dtype=np.int32),
            "phase": np.array(PHASE_IDS[self.phase], dtype=np.int32),
            "objects_count": np.array(self.objects_count, dtype=np.int32),
            "base_speed": np.array(self.base_speed, dtype=np.float32),

            "collector_x": np.array(self.collector_x, dtype=np.float32),
            "collector_y": np.array(self.collector_y, dtype=np.float32),
            "collector_width": np.array(self.collector_width, dtype=np.float32),

            "nearest_object_x": np.array(self.nearest_object_x, dtype=np.float32),
            "nearest_object_y": np.array(self.nearest_object_y, dtype=np.float32),
            "ticks_to_nearest": np.array(self.ticks_to_nearest, dtype=np.float32),

            "obj_x": self.obj_x,
            "obj_y": self.obj_y,
            "obj_size": self.obj_size,
            "obj_speed": self.obj_speed,
            "obj_mask": self.obj_mask,
        }


class SnapshotBuilder:
    """Builds round snapshots with pre-allocated arrays."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_obj = config.observation.max_objects

        self._obj_x = np.zeros(self._max_obj, dtype=np.float32)
        self._obj_y = np.zeros(self._max_obj, dtype=np.float32)
        self._obj_size = np.zeros(self._max_obj, dtype=np.float32)
        self._obj_speed = np.zeros(self._max_obj, dtype=np.float32)
        self._obj_mask = np.zeros(self._max_obj, dtype=bool)

    @property
    def max_objects(self) -> int:
        return self._max_obj

    def build(self, state: "RoundState") -> RoundSnapshot:
        """
        Build a snapshot from the round state.

        Args:
            state: Current round state.

        Returns:
            RoundSnapshot with copies of the packed arrays.
        """
        self._obj_x.fill(0)
        self._obj_y.fill(0)
        self._obj_size.fill(0)
        self._obj_speed.fill(0)
        self._obj_mask.fill(False)

        # Lowest stars first
        objects = sorted(state.pool.objects, key=lambda o: o.y, reverse=True)
        count = min(len(objects), self._max_obj)
        for i, obj in enumerate(objects[:count]):
            self._obj_x[i] = obj.x
            self._obj_y[i] = obj.y
            self._obj_size[i] = obj.size
            self._obj_speed[i] = obj.speed
            self._obj_mask[i] = True

        collector = state.collector
        nearest_x = -1.0
        nearest_y = -1.0
        ticks_to_nearest = -1.0
        # Stars whose bottom edge has not passed the basket bottom can still be caught
        catchable = [o for o in objects if o.bottom <= collector.bottom]
        if catchable:
            nearest = catchable[0]
            nearest_x = nearest.x + nearest.size / 2
            nearest_y = nearest.y
            gap = collector.y - nearest.bottom
            ticks_to_nearest = max(0.0, gap / nearest.speed) if nearest.speed > 0 else -1.0

        return RoundSnapshot(
            score=state.score,
            time_remaining=state.time_remaining,
            elapsed=state.elapsed,
            phase=state.phase.value,
            objects_count=len(objects),
            base_speed=state.difficulty.base_speed,
            field_width=float(self._config.field.width),
            field_height=float(self._config.field.height),
            collector_x=collector.x,
            collector_y=collector.y,
            collector_width=collector.width,
            collector_height=collector.height,
            nearest_object_x=nearest_x,
            nearest_object_y=nearest_y,
            ticks_to_nearest=ticks_to_nearest,
            obj_x=self._obj_x.copy(),
            obj_y=self._obj_y.copy(),
            obj_size=self._obj_size.copy(),
            obj_speed=self._obj_speed.copy(),
            obj_mask=self._obj_mask.copy(),
        )
