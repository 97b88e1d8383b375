"""
Core Game
=========

Round state machine combining the basket, star pool, catch detection and
difficulty curve.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from star_catch.catch_core.config_loader import GameConfig, get_config
from star_catch.catch_core.collector import Collector, InputIntent
from star_catch.catch_core.collision import CollisionResolver
from star_catch.catch_core.difficulty import DifficultyController, DifficultyParams
from star_catch.catch_core.object_pool import ObjectPool
from star_catch.catch_core.scheduler import ManualScheduler, RepeatingTask
from star_catch.catch_core.state_snapshot import RoundSnapshot, SnapshotBuilder


class RoundPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


class RoundEventKind(Enum):
    ROUND_STARTED = "round_started"
    SCORE_CHANGED = "score_changed"
    TIME_CHANGED = "time_changed"
    ROUND_ENDED = "round_ended"


@dataclass(frozen=True)
class RoundEvent:
    """Notification for UI and rendering collaborators."""
    kind: RoundEventKind
    score: int
    time_remaining: int


RoundListener = Callable[[RoundEvent], None]


@dataclass
class RoundState:
    """
    Everything that changes during a round.

    Owned by RoundStateMachine; collaborators should treat it as read-only.
    """
    round_duration: int
    collector: Collector
    pool: ObjectPool
    difficulty: DifficultyParams
    score: int = 0
    time_remaining: int = 0
    phase: RoundPhase = RoundPhase.IDLE
    ticks: int = 0
    spawned_total: int = 0
    caught_total: int = 0
    missed_total: int = 0

    @property
    def elapsed(self) -> int:
        """Whole seconds since round start."""
        return self.round_duration - self.time_remaining

    @property
    def is_running(self) -> bool:
        return self.phase is RoundPhase.RUNNING


@dataclass
class TickResult:
    """Result of a single simulation tick."""
    caught: int
    spawned: bool
    missed: int
    score: int
    speed_stepped: bool

    @staticmethod
    def idle(score: int) -> "TickResult":
        return TickResult(caught=0, spawned=False, missed=0, score=score, speed_stepped=False)


class RoundStateMachine:
    """
    Main round simulation class.

    Orchestrates per tick:
    - Basket movement from the input intent
    - Star spawning, falling and pruning
    - Catch resolution and scoring
    - Difficulty steps

    and per second the countdown that ends the round.

    Without a scheduler the caller drives tick() and second_tick() directly.
    With one, start_round() schedules both drivers and end_round() cancels
    them before the phase leaves RUNNING.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        scheduler: Optional[ManualScheduler] = None,
        input_source: Optional[Callable[[], InputIntent]] = None,
        debug: bool = False
    ):
        """
        Initialize the state machine in the IDLE phase.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducible spawns.
            scheduler: Optional scheduler for the tick and second drivers.
            input_source: Polled by the tick driver for the current intent.
            debug: If True, print lifecycle transitions.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._scheduler = scheduler
        self._input_source = input_source
        self._debug = debug

        self._difficulty = DifficultyController(config)
        self._resolver = CollisionResolver()
        self._snapshot_builder = SnapshotBuilder(config)

        self._state = RoundState(
            round_duration=config.round.duration_seconds,
            collector=Collector(config),
            pool=ObjectPool(config, seed),
            difficulty=self._difficulty.new_params(),
            time_remaining=config.round.duration_seconds
        )

        self._listeners: List[RoundListener] = []
        self._tick_task: Optional[RepeatingTask] = None
        self._second_task: Optional[RepeatingTask] = None

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def state(self) -> RoundState:
        """Current round state."""
        return self._state

    @property
    def phase(self) -> RoundPhase:
        return self._state.phase

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def time_remaining(self) -> int:
        return self._state.time_remaining

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def has_drivers(self) -> bool:
        """True while scheduled tick/second drivers are active."""
        return self._tick_task is not None or self._second_task is not None

    def subscribe(self, listener: RoundListener) -> Callable[[], None]:
        """
        Register a listener for round events.

        Returns:
            Function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, kind: RoundEventKind) -> None:
        event = RoundEvent(kind, self._state.score, self._state.time_remaining)
        for listener in list(self._listeners):
            listener(event)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_round(self, seed: Optional[int] = None) -> RoundSnapshot:
        """
        Start a fresh round, discarding any round in progress.

        Args:
            seed: New random seed for spawns. Keeps the current stream if None.

        Returns:
            Initial round snapshot.
        """
        self._stop_drivers()

        if seed is not None:
            self._seed = seed
            self._state.pool.reseed(seed)

        state = self._state
        state.score = 0
        state.time_remaining = self._config.round.duration_seconds
        state.round_duration = self._config.round.duration_seconds
        state.ticks = 0
        state.spawned_total = 0
        state.caught_total = 0
        state.missed_total = 0
        state.pool.clear()
        state.collector.reset()
        self._difficulty.reset(state.difficulty)
        state.phase = RoundPhase.RUNNING

        self._start_drivers()

        if self._debug:
            print(f"[DEBUG] Round started: duration={state.round_duration}s, seed={self._seed}")

        self._emit(RoundEventKind.ROUND_STARTED)
        return self.snapshot()

    def tick(self, intent: InputIntent = InputIntent.NONE) -> TickResult:
        """
        Advance the simulation by one tick. No-op unless RUNNING.

        Args:
            intent: Basket movement for this tick.

        Returns:
            TickResult describing what happened.
        """
        state = self._state
        if state.phase is not RoundPhase.RUNNING:
            return TickResult.idle(state.score)

        field = self._config.field
        elapsed = state.elapsed

        state.collector.apply_intent(intent, field.width)

        spawned = state.pool.maybe_spawn(elapsed, field.width, state.difficulty.base_speed)
        missed = state.pool.advance_and_prune(field.height)

        caught = self._resolver.resolve(state.collector, state.pool.objects)
        state.score += caught

        stepped = self._difficulty.update_speed(state.difficulty, elapsed)

        state.ticks += 1
        state.spawned_total += int(spawned is not None)
        state.caught_total += caught
        state.missed_total += missed

        if caught:
            self._emit(RoundEventKind.SCORE_CHANGED)

        return TickResult(
            caught=caught,
            spawned=spawned is not None,
            missed=missed,
            score=state.score,
            speed_stepped=stepped
        )

    def second_tick(self) -> None:
        """Count down one second, ending the round at zero. No-op unless RUNNING."""
        state = self._state
        if state.phase is not RoundPhase.RUNNING:
            return

        state.time_remaining = max(0, state.time_remaining - 1)
        self._emit(RoundEventKind.TIME_CHANGED)

        if state.time_remaining <= 0:
            self.end_round()

    def end_round(self) -> int:
        """
        Stop the round and freeze its state.

        Drivers are cancelled before the phase changes so no stray tick can
        touch the finished round. Calling this outside RUNNING changes nothing.

        Returns:
            Final score.
        """
        state = self._state
        if state.phase is not RoundPhase.RUNNING:
            return state.score

        self._stop_drivers()
        state.phase = RoundPhase.ENDED

        if self._debug:
            print(f"[DEBUG] Round ended: score={state.score}, caught={state.caught_total}, "
                  f"missed={state.missed_total}, ticks={state.ticks}")

        self._emit(RoundEventKind.ROUND_ENDED)
        return state.score

    def reset(self) -> None:
        """Return to IDLE with an empty field."""
        self._stop_drivers()
        state = self._state
        state.phase = RoundPhase.IDLE
        state.score = 0
        state.time_remaining = self._config.round.duration_seconds
        state.ticks = 0
        state.spawned_total = 0
        state.caught_total = 0
        state.missed_total = 0
        state.pool.clear()
        state.collector.reset()
        self._difficulty.reset(state.difficulty)

    # ------------------------------------------------------------------
    # Drivers
    # ------------------------------------------------------------------

    def _start_drivers(self) -> None:
        if self._scheduler is None:
            return
        self._tick_task = self._scheduler.schedule_repeating(
            self._config.round.tick_interval, self._on_tick_driver, name="tick"
        )
        self._second_task = self._scheduler.schedule_repeating(
            1.0, self.second_tick, name="second"
        )

    def _stop_drivers(self) -> None:
        if self._tick_task is not None:
            self._tick_task.cancel()
            self._tick_task = None
        if self._second_task is not None:
            self._second_task.cancel()
            self._second_task = None

    def _on_tick_driver(self) -> None:
        intent = self._input_source() if self._input_source is not None else InputIntent.NONE
        self.tick(intent)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def snapshot(self) -> RoundSnapshot:
        """Build a snapshot of the current state."""
        return self._snapshot_builder.build(self._state)

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        state = self._state
        return {
            "score": state.score,
            "time_remaining": state.time_remaining,
            "elapsed": state.elapsed,
            "phase": state.phase.value,
            "ticks": state.ticks,
            "spawned": state.spawned_total,
            "caught": state.caught_total,
            "missed": state.missed_total,
            "base_speed": state.difficulty.base_speed,
            "spawn_probability": state.pool.spawn_probability(state.elapsed),
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with basket rect, star rects and HUD values.
        """
        state = self._state
        collector = state.collector
        return {
            "field_width": self._config.field.width,
            "field_height": self._config.field.height,
            "collector": {
                "x": collector.x,
                "y": collector.y,
                "width": collector.width,
                "height": collector.height,
            },
            "objects": [
                {"x": obj.x, "y": obj.y, "size": obj.size}
                for obj in state.pool.objects
            ],
            "score": state.score,
            "time_remaining": state.time_remaining,
            "phase": state.phase.value,
        }
