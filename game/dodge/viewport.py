"""
Letterbox transform between arena space and window space.

The arena uses a y-down coordinate system with the origin in the top-left
corner. Arcade windows are y-up with the origin in the bottom-left, so the
transform flips the vertical axis as well as scaling and centering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

Rect = Tuple[float, float, float, float]  # left, right, bottom, top


@dataclass(frozen=True)
class Letterbox:
    scale: float
    offset_x: float
    offset_y: float
    window_width: float
    window_height: float
    arena_width: float
    arena_height: float

    @classmethod
    def fit(cls, window_width, window_height, arena_width, arena_height) -> "Letterbox":
        """Largest uniform scale that fits the arena, centered in the window"""
        if arena_width <= 0 or arena_height <= 0:
            raise ValueError("Arena dimensions must be positive")
        scale = min(window_width / arena_width, window_height / arena_height)
        offset_x = (window_width - arena_width * scale) / 2
        offset_y = (window_height - arena_height * scale) / 2
        return cls(scale, offset_x, offset_y,
                   window_width, window_height, arena_width, arena_height)

    def to_screen(self, x: float, y: float) -> Tuple[float, float]:
        sx = self.offset_x + x * self.scale
        sy = self.offset_y + (self.arena_height - y) * self.scale
        return sx, sy

    def to_arena(self, sx: float, sy: float) -> Tuple[float, float]:
        x = (sx - self.offset_x) / self.scale
        y = self.arena_height - (sy - self.offset_y) / self.scale
        return x, y

    def arena_rect(self) -> Rect:
        left = self.offset_x
        bottom = self.offset_y
        return (left, left + self.arena_width * self.scale,
                bottom, bottom + self.arena_height * self.scale)

    def bars(self) -> List[Rect]:
        """Rectangles outside the arena that must be painted over"""
        left, right, bottom, top = self.arena_rect()
        w, h = self.window_width, self.window_height
        rects = []
        if left > 0:
            rects.append((0, left, 0, h))
            rects.append((right, w, 0, h))
        if bottom > 0:
            rects.append((0, w, 0, bottom))
            rects.append((0, w, top, h))
        return rects
