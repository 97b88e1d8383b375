"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(__file__)),
    "game_config.yaml"
)


@dataclass(frozen=True)
class FieldConfig:
    """Playfield geometry."""
    width: int
    height: int


@dataclass(frozen=True)
class CollectorConfig:
    """Basket geometry and movement."""
    start_x: float    # Left edge at round start
    y: float          # Fixed top edge
    width: float
    height: float
    move_step: float  # Pixels per tick per active direction


@dataclass(frozen=True)
class SpawnConfig:
    """Star spawn parameters."""
    object_size: float
    base_probability: float
    probability_ramp: float          # Added chance per elapsed second
    speed_jitter: float
    max_probability: Optional[float] = None  # None keeps the ramp uncapped


@dataclass(frozen=True)
class DifficultyConfig:
    """Stepped speed curve."""
    base_speed: float
    speed_increment: float
    step_interval_seconds: int


@dataclass(frozen=True)
class RoundConfig:
    """Round timing."""
    duration_seconds: int
    tick_rate: int  # Simulation ticks per round second

    @property
    def tick_interval(self) -> float:
        """Seconds between two simulation ticks."""
        return 1.0 / self.tick_rate


@dataclass(frozen=True)
class ObservationConfig:
    """Observation export parameters."""
    max_objects: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    field: FieldConfig
    collector: CollectorConfig
    spawn: SpawnConfig
    difficulty: DifficultyConfig
    round: RoundConfig
    observation: ObservationConfig

    @property
    def max_collector_x(self) -> float:
        """Largest legal left edge for the basket."""
        return self.field.width - self.collector.width


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.field.width <= 0 or config.field.height <= 0:
        raise ValueError(
            f"Field size must be positive, got {config.field.width}x{config.field.height}"
        )

    collector = config.collector
    if collector.width <= 0 or collector.height <= 0:
        raise ValueError(
            f"Collector size must be positive, got {collector.width}x{collector.height}"
        )
    if collector.width > config.field.width:
        raise ValueError(
            f"Collector width ({collector.width}) exceeds field width ({config.field.width})"
        )
    if not 0 <= collector.start_x <= config.max_collector_x:
        raise ValueError(
            f"collector.start_x ({collector.start_x}) must be within [0, {config.max_collector_x}]"
        )
    if collector.move_step < 0:
        raise ValueError(f"collector.move_step must be >= 0, got {collector.move_step}")

    spawn = config.spawn
    if spawn.object_size <= 0 or spawn.object_size > config.field.width:
        raise ValueError(
            f"spawn.object_size must be in (0, {config.field.width}], got {spawn.object_size}"
        )
    if not 0.0 <= spawn.base_probability <= 1.0:
        raise ValueError(f"spawn.base_probability must be in [0, 1], got {spawn.base_probability}")
    if spawn.probability_ramp < 0:
        raise ValueError(f"spawn.probability_ramp must be >= 0, got {spawn.probability_ramp}")
    if spawn.speed_jitter < 0:
        raise ValueError(f"spawn.speed_jitter must be >= 0, got {spawn.speed_jitter}")
    if spawn.max_probability is not None and not 0.0 <= spawn.max_probability <= 1.0:
        raise ValueError(f"spawn.max_probability must be in [0, 1], got {spawn.max_probability}")

    difficulty = config.difficulty
    if difficulty.base_speed < 0:
        raise ValueError(f"difficulty.base_speed must be >= 0, got {difficulty.base_speed}")
    if difficulty.step_interval_seconds <= 0:
        raise ValueError(
            f"difficulty.step_interval_seconds must be positive, got {difficulty.step_interval_seconds}"
        )

    if config.round.duration_seconds <= 0:
        raise ValueError(f"round.duration_seconds must be positive, got {config.round.duration_seconds}")
    if config.round.tick_rate <= 0:
        raise ValueError(f"round.tick_rate must be positive, got {config.round.tick_rate}")

    if config.observation.max_objects <= 0:
        raise ValueError(f"observation.max_objects must be positive, got {config.observation.max_objects}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    field_data = raw["field"]
    field = FieldConfig(
        width=int(field_data["width"]),
        height=int(field_data["height"])
    )

    collector_data = raw["collector"]
    collector = CollectorConfig(
        start_x=float(collector_data["start_x"]),
        y=float(collector_data["y"]),
        width=float(collector_data["width"]),
        height=float(collector_data["height"]),
        move_step=float(collector_data.get("move_step", 5))
    )

    spawn_data = raw["spawn"]
    max_probability = spawn_data.get("max_probability")
    spawn = SpawnConfig(
        object_size=float(spawn_data["object_size"]),
        base_probability=float(spawn_data["base_probability"]),
        probability_ramp=float(spawn_data.get("probability_ramp", 0.0)),
        speed_jitter=float(spawn_data.get("speed_jitter", 0.0)),
        max_probability=None if max_probability is None else float(max_probability)
    )

    difficulty_data = raw["difficulty"]
    difficulty = DifficultyConfig(
        base_speed=float(difficulty_data["base_speed"]),
        speed_increment=float(difficulty_data["speed_increment"]),
        step_interval_seconds=int(difficulty_data["step_interval_seconds"])
    )

    round_data = raw["round"]
    round_config = RoundConfig(
        duration_seconds=int(round_data["duration_seconds"]),
        tick_rate=int(round_data.get("tick_rate", 60))
    )

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_objects=int(obs_data.get("max_objects", 64))
    )

    config = GameConfig(
        field=field,
        collector=collector,
        spawn=spawn,
        difficulty=difficulty,
        round=round_config,
        observation=observation
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
