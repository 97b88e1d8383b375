"""
Pygame Renderer
===============

Pretty renderer using pygame: five-point stars, a crystal basket with
orbiting sparkles, and the score/timer/high-score HUD.
Used by the human play tool and the environment's "human" render mode.
"""

from __future__ import annotations

import math
import time
from typing import Any, Dict, List, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from star_catch.catch_core.config_loader import GameConfig, get_config


def star_points(cx: float, cy: float, outer: float, inner: float, spikes: int = 5) -> List[Tuple[float, float]]:
    """Vertices of a star polygon centered at (cx, cy)."""
    points = []
    for i in range(spikes * 2):
        radius = outer if i % 2 == 0 else inner
        angle = i * math.pi / spikes
        points.append((cx + math.cos(angle) * radius, cy + math.sin(angle) * radius))
    return points


class PygameRenderer:
    """
    Full-featured renderer using pygame.

    Decorative sparkles are driven by wall-clock time and never feed back
    into the simulation.
    """

    HUD_HEIGHT = 50

    def __init__(self, config: Optional[GameConfig] = None):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config

        if not pygame.get_init():
            pygame.init()

        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        pygame.font.init()
        self._font = pygame.font.Font(None, 32)
        self._font_large = pygame.font.Font(None, 64)

        self._bg_top = (12, 16, 40)
        self._bg_bottom = (48, 25, 80)
        self._star_fill = (255, 215, 0)
        self._star_edge = (255, 165, 0)
        self._basket_dark = (30, 58, 138)
        self._basket_light = (96, 165, 250)
        self._rim_color = (255, 215, 0)
        self._sparkle_color = (255, 200, 60)
        self._text_color = (255, 255, 255)

        self._bg_cache: Dict[Tuple[int, int], pygame.Surface] = {}

    def render_to_screen(
        self,
        render_data: Dict[str, Any],
        high_score: int = 0,
        final_score: Optional[int] = None
    ) -> None:
        """
        Render to a pygame window sized to the field plus the HUD.

        Args:
            render_data: Data from RoundStateMachine.get_render_data().
            high_score: Session high score for the HUD.
            final_score: If set, draw the game-over overlay.
        """
        size = (
            int(render_data["field_width"]),
            int(render_data["field_height"]) + self.HUD_HEIGHT
        )
        if self._screen is None or self._screen_size != size:
            self._screen = pygame.display.set_mode(size)
            self._screen_size = size
            pygame.display.set_caption("Star Catch")

        self._render_to_surface(self._screen, render_data, high_score)
        if final_score is not None:
            self._draw_game_over(self._screen, final_score)
        pygame.display.flip()

    def _background(self, size: Tuple[int, int]) -> pygame.Surface:
        if size not in self._bg_cache:
            surface = pygame.Surface(size)
            w, h = size
            for y in range(h):
                t = y / max(1, h - 1)
                color = tuple(
                    int(a * (1 - t) + b * t) for a, b in zip(self._bg_top, self._bg_bottom)
                )
                pygame.draw.line(surface, color, (0, y), (w, y))
            self._bg_cache[size] = surface
        return self._bg_cache[size]

    def _render_to_surface(
        self,
        surface: pygame.Surface,
        render_data: Dict[str, Any],
        high_score: int
    ) -> None:
        width, height = surface.get_size()
        field_w = render_data["field_width"]
        field_h = render_data["field_height"]
        scale = min(width / field_w, (height - self.HUD_HEIGHT) / field_h)
        offset_x = (width - field_w * scale) / 2
        offset_y = float(self.HUD_HEIGHT)

        surface.blit(self._background((width, height)), (0, 0))

        for obj in render_data["objects"]:
            self._draw_star(surface, obj, scale, offset_x, offset_y)

        self._draw_basket(surface, render_data["collector"], scale, offset_x, offset_y)
        self._draw_hud(surface, render_data, high_score, width)

    def _draw_star(
        self,
        surface: pygame.Surface,
        obj: Dict[str, Any],
        scale: float,
        offset_x: float,
        offset_y: float
    ) -> None:
        size = obj["size"] * scale
        cx = offset_x + obj["x"] * scale + size / 2
        cy = offset_y + obj["y"] * scale + size / 2
        points = star_points(cx, cy, size * 0.75, size * 0.3)
        pygame.draw.polygon(surface, self._star_fill, points)
        pygame.draw.polygon(surface, self._star_edge, points, 1)

    def _draw_basket(
        self,
        surface: pygame.Surface,
        basket: Dict[str, Any],
        scale: float,
        offset_x: float,
        offset_y: float
    ) -> None:
        x = offset_x + basket["x"] * scale
        y = offset_y + basket["y"] * scale
        w = basket["width"] * scale
        h = basket["height"] * scale

        # Trapezoid body, wider at the bottom
        body = [(x + 10 * scale, y), (x + w - 10 * scale, y), (x + w + 5 * scale, y + h), (x - 5 * scale, y + h)]
        pygame.draw.polygon(surface, self._basket_dark, body)
        inner = [(x + 15 * scale, y + 3 * scale), (x + 35 * scale, y + 3 * scale),
                 (x + 30 * scale, y + 15 * scale), (x + 10 * scale, y + 15 * scale)]
        pygame.draw.polygon(surface, self._basket_light, inner)
        pygame.draw.line(surface, self._rim_color, (x + 10 * scale, y), (x + w - 10 * scale, y), 3)

        # Orbiting sparkles
        t = time.time() * 3.0
        cx = x + w / 2
        cy = y + h / 2
        for i in range(6):
            angle = i * math.pi * 2 / 6 + t
            radius = (35 + math.sin(t * 2 + i) * 5) * scale
            px = cx + math.cos(angle) * radius
            py = cy + math.sin(angle) * radius * 0.3
            pygame.draw.circle(surface, self._sparkle_color, (int(px), int(py)), max(1, int(3 * scale)))

    def _draw_hud(
        self,
        surface: pygame.Surface,
        render_data: Dict[str, Any],
        high_score: int,
        width: int
    ) -> None:
        texts = [
            f"Score: {render_data['score']}",
            f"Time: {render_data['time_remaining']}",
            f"High Score: {high_score}",
        ]
        slot = width / len(texts)
        for i, text in enumerate(texts):
            rendered = self._font.render(text, True, self._text_color)
            x = int(slot * i + (slot - rendered.get_width()) / 2)
            surface.blit(rendered, (x, (self.HUD_HEIGHT - rendered.get_height()) // 2))

    def _draw_game_over(self, surface: pygame.Surface, final_score: int) -> None:
        width, height = surface.get_size()
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 160))
        surface.blit(overlay, (0, 0))

        title = self._font_large.render("Time's up!", True, self._star_fill)
        score = self._font.render(f"Final score: {final_score}", True, self._text_color)
        hint = self._font.render("Press R or Space to play again", True, self._text_color)
        y = height // 2 - 60
        for rendered in (title, score, hint):
            surface.blit(rendered, ((width - rendered.get_width()) // 2, y))
            y += rendered.get_height() + 12

    def close(self) -> None:
        """Clean up pygame resources."""
        self._bg_cache.clear()
        if self._screen is not None:
            self._screen = None
