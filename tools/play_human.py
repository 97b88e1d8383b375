"""
Human Play Mode
================

Play Star Catch interactively with the keyboard or mouse.

Controls:
    - Left/Right arrows: Move basket
    - Hold left mouse button on the left/right half: Move basket (touch-style)
    - R or Space: Restart round
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--config PATH]
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from star_catch.catch_core.collector import InputIntent
from star_catch.catch_core.config_loader import GameConfig, load_config
from star_catch.catch_core.game import RoundEvent, RoundEventKind, RoundStateMachine
from star_catch.catch_core.scheduler import ManualScheduler
from star_catch.catch_core.scoring import HighScoreTracker


class HumanPlayer:
    """
    Interactive player.

    The round runs on a ManualScheduler fed with real frame time, so the
    tick and second drivers fire from this single loop.
    """

    # Largest frame time fed to the scheduler; avoids a burst of ticks after a stall
    MAX_FRAME_SECONDS = 0.25

    def __init__(
        self,
        config: GameConfig,
        seed: Optional[int] = None,
        target_fps: int = 60
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for human play mode")

        from star_catch.catch_core.render_pygame import PygameRenderer

        self._config = config
        self._seed = seed
        self._target_fps = target_fps

        pygame.init()
        self._clock = pygame.time.Clock()
        self._renderer = PygameRenderer(config)

        self._scheduler = ManualScheduler()
        self._game = RoundStateMachine(
            config=config,
            seed=seed,
            scheduler=self._scheduler,
            input_source=self._read_intent
        )
        self._high_scores = HighScoreTracker()
        self._game.subscribe(self._on_round_event)

        self._final_score: Optional[int] = None
        self._running = True

    def _read_intent(self) -> InputIntent:
        """Combine keyboard and pointer state into this tick's intent."""
        keys = pygame.key.get_pressed()
        left = bool(keys[pygame.K_LEFT])
        right = bool(keys[pygame.K_RIGHT])

        if pygame.mouse.get_pressed()[0]:
            mouse_x, _ = pygame.mouse.get_pos()
            if mouse_x < self._config.field.width / 2:
                left = True
            else:
                right = True

        return InputIntent(left=left, right=right)

    def _on_round_event(self, event: RoundEvent) -> None:
        if event.kind is RoundEventKind.ROUND_STARTED:
            self._final_score = None
        elif event.kind is RoundEventKind.ROUND_ENDED:
            self._final_score = event.score
            if self._high_scores.record(event.score):
                print(f"New high score: {event.score}")
            print(f"\nTIME'S UP - Score: {event.score}")

    def run(self) -> int:
        """Run the game loop. Returns the session high score."""
        print("=== Star Catch ===")
        print("Arrow keys or hold mouse on either half to move")
        print("R/Space to restart, ESC to quit")
        print()

        self._game.start_round()

        while self._running:
            self._handle_events()

            frame_seconds = self._clock.tick(self._target_fps) / 1000.0
            self._scheduler.advance(min(frame_seconds, self.MAX_FRAME_SECONDS))

            self._renderer.render_to_screen(
                self._game.get_render_data(),
                high_score=self._high_scores.high_score,
                final_score=self._final_score
            )

        self._game.reset()
        pygame.quit()
        return self._high_scores.high_score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key in (pygame.K_r, pygame.K_SPACE):
                    self._game.start_round()
                    print("\n=== Round Restarted ===\n")


def main():
    parser = argparse.ArgumentParser(description="Play Star Catch interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        player = HumanPlayer(config=config, seed=args.seed, target_fps=args.fps)
        high_score = player.run()
        print(f"\nSession High Score: {high_score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
