"""
Solid Renderer
==============

Fast numpy-based renderer that draws stars and the basket as solid
rectangles (their actual hitboxes). Used for image observations.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
import numpy as np

from star_catch.catch_core.config_loader import GameConfig, get_config


class SolidRenderer:
    """
    Renders the field as solid-color hitboxes.

    Uses numpy for fast CPU-based rendering without pygame.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config

        self._bg_color = np.array([12, 16, 40], dtype=np.uint8)       # Night sky
        self._star_color = np.array([255, 215, 0], dtype=np.uint8)    # Gold
        self._basket_color = np.array([59, 130, 246], dtype=np.uint8)
        self._rim_color = np.array([255, 165, 0], dtype=np.uint8)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render the round state to an RGB array.

        Args:
            render_data: Data from RoundStateMachine.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = np.empty((height, width, 3), dtype=np.uint8)
        img[:] = self._bg_color

        scale_x = width / render_data["field_width"]
        scale_y = height / render_data["field_height"]

        for obj in render_data["objects"]:
            self._fill_rect(
                img, obj["x"], obj["y"], obj["size"], obj["size"],
                scale_x, scale_y, self._star_color
            )

        basket = render_data["collector"]
        self._fill_rect(
            img, basket["x"], basket["y"], basket["width"], basket["height"],
            scale_x, scale_y, self._basket_color
        )
        # Rim marks the catching edge
        self._fill_rect(
            img, basket["x"], basket["y"], basket["width"], max(1.0, 1.0 / scale_y),
            scale_x, scale_y, self._rim_color
        )

        return img

    @staticmethod
    def _fill_rect(
        img: np.ndarray,
        x: float,
        y: float,
        w: float,
        h: float,
        scale_x: float,
        scale_y: float,
        color: np.ndarray
    ) -> None:
        """Fill a field-space rectangle, clipped to the image."""
        height, width = img.shape[:2]
        x0 = max(0, int(np.floor(x * scale_x)))
        y0 = max(0, int(np.floor(y * scale_y)))
        x1 = min(width, int(np.ceil((x + w) * scale_x)))
        y1 = min(height, int(np.ceil((y + h) * scale_y)))
        if x1 > x0 and y1 > y0:
            img[y0:y1, x0:x1] = color

    def close(self) -> None:
        """Nothing to release."""
