#!/usr/bin/env python3
"""
Camera utilities for 2D world-to-screen transforms.
"""
from typing import Optional, Tuple
from .constants import (
    DEFAULT_UNITS_PER_PIXEL,
    MIN_UNITS_PER_PIXEL,
    MAX_UNITS_PER_PIXEL,
    VIEW_WIDTH,
    VIEW_HEIGHT,
)
from .vector_utils import clamp


class Camera2D:
    """
    2D camera that keeps the ship in the middle of the viewport.

    Attributes:
        center: world-space center kept as a mutable list [x, y].
        upp: world units per pixel (smaller means zoomed-in).
        viewport_size: (width, height) in pixels.
    """

    def __init__(self, center=(0.0, 0.0), units_per_pixel=DEFAULT_UNITS_PER_PIXEL):
        self.center = [center[0], center[1]]
        self.upp = units_per_pixel
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def follow(self, pos: Tuple[float, float]) -> None:
        self.center[0] = pos[0]
        self.center[1] = pos[1]

    def world_to_screen(self, pos: Tuple[float, float], parallax: float = 1.0) -> Tuple[int, int]:
        """Project a world point. parallax < 1 makes distant layers (stars) drift slower."""
        cx, cy = self.center[0] * parallax, self.center[1] * parallax
        px = (pos[0] - cx) / self.upp + self.viewport_size[0] / 2
        py = (pos[1] - cy) / self.upp + self.viewport_size[1] / 2
        return (int(px), int(py))

    def screen_to_world(self, screen: Tuple[int, int]) -> Tuple[float, float]:
        cx, cy = self.center
        wx = (screen[0] - self.viewport_size[0] / 2) * self.upp + cx
        wy = (screen[1] - self.viewport_size[1] / 2) * self.upp + cy
        return (wx, wy)

    def zoom(self, factor: float) -> None:
        factor = clamp(factor, 0.05, 20.0)
        self.upp = clamp(self.upp * (1.0 / factor), MIN_UNITS_PER_PIXEL, MAX_UNITS_PER_PIXEL)

    def world_bounds(self, margin: float = 0.0) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) of the visible world, grown by margin world units."""
        w, h = self.viewport_size
        (x0, y0), (x1, y1) = self.screen_to_world((0, 0)), self.screen_to_world((w, h))
        return (x0 - margin, y0 - margin, x1 + margin, y1 + margin)

    def scale_length(self, length: float, minimum: Optional[int] = None) -> int:
        px = int(length / self.upp)
        if minimum is not None:
            px = max(minimum, px)
        return px
