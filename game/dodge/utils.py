"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def circle_collide(x1, y1, r1, x2, y2, r2, tolerance: float = 0.0) -> bool:
    """
    Check if two circles overlap by more than `tolerance`.
    A positive tolerance lets grazing contacts survive.
    """
    return math.hypot(x1 - x2, y1 - y2) < r1 + r2 - tolerance


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Convert '#rrggbb' to an (r, g, b) tuple"""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #rrggbb color, got {color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)


class FrameClock:
    """
    Deterministic clock for headless runs.
    Calling it returns the current time in seconds; tick() moves it by dt.
    """

    def __init__(self, dt: float = 1 / 60, start: float = 0.0):
        self.dt = dt
        self.now = start

    def __call__(self) -> float:
        return self.now

    def tick(self, frames: int = 1) -> float:
        self.now += self.dt * frames
        return self.now
