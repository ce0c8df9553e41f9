"""
Game entity dataclasses
"""

from dataclasses import dataclass


@dataclass
class Player:
    """Player-steered circle that glides toward its target"""
    x: float
    y: float
    target_x: float
    target_y: float
    radius: float = 16.0
    speed: float = 7.0  # max step per frame
    color: str = "#00ffff"
    moving: bool = False


@dataclass
class Enemy:
    """Hostile circle flying on a heading fixed at spawn"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float = 32.0


@dataclass
class Particle:
    """Explosion fragment that fades out"""
    x: float
    y: float
    vx: float
    vy: float
    life: float = 1.0  # normalized [0,1]
    color: str = "#ffffff"


@dataclass
class RunState:
    """Mutable state of the current run"""
    is_active: bool = False
    start_time: float = 0.0
    death_count: int = 0  # enemies dodged this run
