"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the Star Catch round.
One environment step is one simulation tick; every `tick_rate` ticks the
round clock counts down one second.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from star_catch.catch_core.collector import InputIntent
from star_catch.catch_core.config_loader import GameConfig, load_config
from star_catch.catch_core.game import RoundEvent, RoundEventKind, RoundPhase, RoundStateMachine
from star_catch.catch_core.scoring import HighScoreTracker
from star_catch.catch_core.state_snapshot import RoundSnapshot


class CatchEnv(gym.Env):
    """
    Star Catch as a Gymnasium environment.

    Action Space:
        Discrete(4): 0 = stay, 1 = left, 2 = right, 3 = left and right
        (the two moves cancel, as with simultaneous key presses).

    Observation Space:
        Dict containing structured round state and optional RGB image.

    Reward:
        Stars caught this tick.

    Info:
        Contains score, time_remaining, caught/missed totals, base_speed, etc.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        image_obs: bool = False,
        image_width: int = 200,
        image_height: int = 150,
        debug: bool = False,
    ):
        """
        Initialize Star Catch environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            image_obs: If True, include field_rgb in observations.
            image_width: Observation image width.
            image_height: Observation image height.
            debug: If True, enables verbose debug output for agent development.
        """
        super().__init__()

        self._config = load_config(config_path)

        self.render_mode = render_mode
        self._image_obs = image_obs
        self._img_width = image_width
        self._img_height = image_height
        self._debug = debug

        self._game = RoundStateMachine(config=self._config, debug=debug)
        self._high_scores = HighScoreTracker()
        self._game.subscribe(self._on_round_event)
        self._ticks_this_second = 0

        # Initialized lazily
        self._renderer = None
        self._screen_renderer = None

        self.action_space = spaces.Discrete(4)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] CatchEnv initialized")
            print(f"[DEBUG]   Field: {self._config.field.width}x{self._config.field.height}")
            print(f"[DEBUG]   Round: {self._config.round.duration_seconds}s @ {self._config.round.tick_rate} ticks/s")
            print(f"[DEBUG]   Max objects: {self._config.observation.max_objects}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_obj = self._config.observation.max_objects
        field = self._config.field
        duration = self._config.round.duration_seconds

        obs_dict = {
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "time_remaining": spaces.Box(low=0, high=duration, shape=(), dtype=np.int32),
            "elapsed": spaces.Box(low=0, high=duration, shape=(), dtype=np.int32),
            "phase": spaces.Box(low=0, high=2, shape=(), dtype=np.int32),
            "objects_count": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
            "base_speed": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),

            "collector_x": spaces.Box(low=0, high=field.width, shape=(), dtype=np.float32),
            "collector_y": spaces.Box(low=0, high=field.height, shape=(), dtype=np.float32),
            "collector_width": spaces.Box(low=0, high=field.width, shape=(), dtype=np.float32),

            "nearest_object_x": spaces.Box(low=-1, high=field.width, shape=(), dtype=np.float32),
            "nearest_object_y": spaces.Box(low=-np.inf, high=field.height, shape=(), dtype=np.float32),
            "ticks_to_nearest": spaces.Box(low=-1, high=np.inf, shape=(), dtype=np.float32),

            "obj_x": spaces.Box(low=0, high=field.width, shape=(max_obj,), dtype=np.float32),
            "obj_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_size": spaces.Box(low=0, high=field.width, shape=(max_obj,), dtype=np.float32),
            "obj_speed": spaces.Box(low=0, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_mask": spaces.MultiBinary(max_obj),
        }

        if self._image_obs:
            obs_dict["field_rgb"] = spaces.Box(
                low=0,
                high=255,
                shape=(self._img_height, self._img_width, 3),
                dtype=np.uint8
            )

        return spaces.Dict(obs_dict)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Start a new round.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._ticks_this_second = 0
        snapshot = self._game.start_round(seed=seed)

        obs = self._snapshot_to_obs(snapshot)
        info = self._game.get_info()
        info["caught_this_tick"] = 0

        return obs, info

    def step(
        self,
        action: Union[int, np.integer, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one tick.

        Args:
            action: Discrete action in {0, 1, 2, 3}.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        if isinstance(action, np.ndarray):
            action = action.item()
        intent = InputIntent.from_action(int(action))

        result = self._game.tick(intent)

        self._ticks_this_second += 1
        if self._ticks_this_second >= self._config.round.tick_rate:
            self._ticks_this_second = 0
            self._game.second_tick()

        terminated = not self._game.is_running

        obs = self._snapshot_to_obs(self._game.snapshot())
        reward = float(result.caught)

        info = self._game.get_info()
        info["caught_this_tick"] = result.caught
        info["missed_this_tick"] = result.missed

        if self._debug and terminated:
            print(f"[DEBUG] TERMINATED: score={info['score']}, missed={info['missed']}")

        return obs, reward, terminated, False, info

    def _on_round_event(self, event: RoundEvent) -> None:
        if event.kind is RoundEventKind.ROUND_ENDED:
            self._high_scores.record(event.score)

    def _snapshot_to_obs(self, snapshot: RoundSnapshot) -> Dict[str, np.ndarray]:
        """Convert snapshot to observation dict."""
        obs = snapshot.to_obs_dict()

        if self._image_obs:
            obs["field_rgb"] = self._render_to_array()

        return obs

    def _render_to_array(self) -> np.ndarray:
        """Render field to RGB array."""
        if self._renderer is None:
            from star_catch.catch_core.render_solid import SolidRenderer
            self._renderer = SolidRenderer(self._config)

        return self._renderer.render(
            self._game.get_render_data(),
            self._img_width,
            self._img_height
        )

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current round.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            return self._render_to_array()

        if self.render_mode == "human":
            if self._screen_renderer is None:
                from star_catch.catch_core.render_pygame import PygameRenderer
                self._screen_renderer = PygameRenderer(self._config)
            final_score = self._game.score if self._game.phase is RoundPhase.ENDED else None
            self._screen_renderer.render_to_screen(
                self._game.get_render_data(),
                high_score=self._high_scores.high_score,
                final_score=final_score
            )
            return None

        return None

    def close(self) -> None:
        """Clean up resources."""
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None
        if self._screen_renderer is not None:
            self._screen_renderer.close()
            self._screen_renderer = None

    @property
    def game(self) -> RoundStateMachine:
        """Access to underlying round (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def high_score(self) -> int:
        """Best final score across rounds played by this environment."""
        return self._high_scores.high_score
