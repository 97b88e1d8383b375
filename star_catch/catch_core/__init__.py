"""
Catch Core - The round simulation.

This module provides the round state machine, its components (basket,
star pool, catch detection, difficulty curve), the drivers' scheduler and
a Gymnasium environment wrapper.

Main exports:
- RoundStateMachine: Round lifecycle and per-tick simulation
- CatchEnv: Gymnasium environment for agent training and evaluation
- ManualScheduler: Single-threaded driver scheduler
- GameConfig: Configuration loaded from game_config.yaml
"""

from star_catch.catch_core.config_loader import GameConfig, load_config
from star_catch.catch_core.collector import Collector, InputIntent
from star_catch.catch_core.object_pool import FallingObject, ObjectPool
from star_catch.catch_core.collision import CollisionResolver, overlaps
from star_catch.catch_core.difficulty import DifficultyController, DifficultyParams
from star_catch.catch_core.scheduler import ManualScheduler, RepeatingTask
from star_catch.catch_core.scoring import HighScoreTracker
from star_catch.catch_core.game import (
    RoundEvent,
    RoundEventKind,
    RoundPhase,
    RoundState,
    RoundStateMachine,
    TickResult,
)
from star_catch.catch_core.env_gym import CatchEnv

__all__ = [
    "GameConfig",
    "load_config",
    "Collector",
    "InputIntent",
    "FallingObject",
    "ObjectPool",
    "CollisionResolver",
    "overlaps",
    "DifficultyController",
    "DifficultyParams",
    "ManualScheduler",
    "RepeatingTask",
    "HighScoreTracker",
    "RoundEvent",
    "RoundEventKind",
    "RoundPhase",
    "RoundState",
    "RoundStateMachine",
    "TickResult",
    "CatchEnv",
]
