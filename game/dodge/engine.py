"""
DodgeEngine - per-frame simulation of the dodge arena
-----------------------------------------------------
- One player circle steered toward a target point
- Enemies spawn just outside a random edge, aimed at the player's position
  at spawn time, and never re-aim
- Difficulty steps up every 10 seconds (spawn chance and enemy speed)
- Collision ends the run with an explosion; particles keep animating after
  the run is over until they fade out
- Score is the elapsed time of the run, plus a count of dodged enemies

The engine is passive: a host calls advance() once per frame and reads
the returned FrameResult. Optional listeners receive the same events.
"""

from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from .entities import Player, Enemy, Particle, RunState
from .utils import clamp, circle_collide

logger = logging.getLogger(__name__)

# Arena
GAME_WIDTH = 800
GAME_HEIGHT = 600

# Player
PLAYER_RADIUS = 16.0
PLAYER_SPEED = 7.0
PLAYER_COLOR = "#00ffff"
ARRIVE_DISTANCE = 1.0

# Enemies
ENEMY_BASE_SPEED = 3.0
ENEMY_RADIUS_RANGE = (28.0, 36.0)
ENEMY_SPEED_PER_LEVEL = 0.4
ENEMY_SPEED_JITTER = 2.0
SPAWN_MARGIN = 50.0
DESTROY_LIMIT = 100.0
SPAWN_BASE_CHANCE = 0.04
SPAWN_CHANCE_PER_LEVEL = 0.005
COLLISION_TOLERANCE = 2.0
DIFFICULTY_STEP_SECONDS = 10.0

# Particles
EXPLOSION_PARTICLES = 25
PARTICLE_SPEED_RANGE = (2.0, 8.0)
PARTICLE_DECAY = 0.04
_LIFE_EPS = 1e-9

ScoreListener = Callable[[float, int], None]


@dataclass(frozen=True)
class ScoreUpdate:
    """Score snapshot emitted on every active frame"""
    elapsed: float
    deaths: int


@dataclass(frozen=True)
class GameOver:
    """Emitted once, on the frame the player is hit"""
    elapsed: float
    deaths: int


@dataclass(frozen=True)
class FrameResult:
    """Outcome of one advance() call"""
    score: Optional[ScoreUpdate] = None
    game_over: Optional[GameOver] = None

    @property
    def no_events(self) -> bool:
        return self.score is None and self.game_over is None

    @property
    def is_game_over(self) -> bool:
        return self.game_over is not None


class DodgeEngine:
    """Owns all mutable game state and advances it one frame at a time"""

    def __init__(
        self,
        on_game_over: Optional[ScoreListener] = None,
        on_score_update: Optional[ScoreListener] = None,
        *,
        width: float = GAME_WIDTH,
        height: float = GAME_HEIGHT,
        player_radius: float = PLAYER_RADIUS,
        player_speed: float = PLAYER_SPEED,
        player_color: str = PLAYER_COLOR,
        enemy_base_speed: float = ENEMY_BASE_SPEED,
        enemy_radius_range=ENEMY_RADIUS_RANGE,
        spawn_margin: float = SPAWN_MARGIN,
        destroy_limit: float = DESTROY_LIMIT,
        spawn_base_chance: float = SPAWN_BASE_CHANCE,
        spawn_chance_per_level: float = SPAWN_CHANCE_PER_LEVEL,
        collision_tolerance: float = COLLISION_TOLERANCE,
        particle_decay: float = PARTICLE_DECAY,
        clock: Callable[[], float] = time.monotonic,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        if width <= 2 * player_radius or height <= 2 * player_radius:
            raise ValueError(
                f"Arena {width}x{height} is too small for a player of radius {player_radius}"
            )

        self.on_game_over = on_game_over
        self.on_score_update = on_score_update

        # Arena
        self.width = width
        self.height = height

        # Gameplay config
        self.enemy_base_speed = enemy_base_speed
        self.enemy_radius_range = tuple(enemy_radius_range)
        self.spawn_margin = spawn_margin
        self.destroy_limit = destroy_limit
        self.spawn_base_chance = spawn_base_chance
        self.spawn_chance_per_level = spawn_chance_per_level
        self.collision_tolerance = collision_tolerance
        self.particle_decay = particle_decay

        self.clock = clock
        self.rng = rng if rng is not None else random.Random(seed)

        # World state
        self.player = Player(
            x=width * 0.5,
            y=height * 0.5,
            target_x=width * 0.5,
            target_y=height * 0.5,
            radius=player_radius,
            speed=player_speed,
            color=player_color,
        )
        self.enemies: List[Enemy] = []
        self.particles: List[Particle] = []
        self.state = RunState()

    # ----------------------------
    # Run state
    # ----------------------------

    @property
    def is_active(self) -> bool:
        return self.state.is_active

    @property
    def death_count(self) -> int:
        return self.state.death_count

    @property
    def start_time(self) -> float:
        return self.state.start_time

    def elapsed(self) -> float:
        """Seconds since the current run started"""
        return self.clock() - self.state.start_time

    def difficulty(self, elapsed: Optional[float] = None) -> int:
        """Difficulty level: 1 for the first 10 seconds, then +1 every 10 seconds"""
        if elapsed is None:
            elapsed = self.elapsed()
        return 1 + int(math.floor(elapsed / DIFFICULTY_STEP_SECONDS))

    # ----------------------------
    # Lifecycle and input
    # ----------------------------

    def start(self):
        """Begin a fresh run. Safe to call at any time."""
        self.enemies = []
        self.particles = []
        self.state = RunState(is_active=True, start_time=self.clock(), death_count=0)

        p = self.player
        p.x = self.width * 0.5
        p.y = self.height * 0.5
        p.target_x = p.x
        p.target_y = p.y
        p.moving = False

        logger.info("Run started at t=%.3f", self.state.start_time)

    def set_target(self, x: float, y: float):
        """Steer toward (x, y), clamped so the player stays fully inside the arena"""
        r = self.player.radius
        self.player.target_x = clamp(x, r, self.width - r)
        self.player.target_y = clamp(y, r, self.height - r)
        self.player.moving = True

    def stop_moving(self):
        self.player.moving = False

    # ----------------------------
    # Spawning and effects
    # ----------------------------

    def spawn_enemy(self, difficulty: int) -> Enemy:
        """Spawn an enemy just outside a random edge, aimed at the player"""
        rng = self.rng
        r = rng.uniform(*self.enemy_radius_range)
        side = rng.randrange(4)
        m = self.spawn_margin

        if side == 0:  # top
            x, y = rng.random() * self.width, -m
        elif side == 1:  # right
            x, y = self.width + m, rng.random() * self.height
        elif side == 2:  # bottom
            x, y = rng.random() * self.width, self.height + m
        else:  # left
            x, y = -m, rng.random() * self.height

        angle = math.atan2(self.player.y - y, self.player.x - x)
        speed = (
            self.enemy_base_speed
            + difficulty * ENEMY_SPEED_PER_LEVEL
            + rng.random() * ENEMY_SPEED_JITTER
        )

        enemy = Enemy(
            x=x, y=y,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            radius=r,
        )
        self.enemies.append(enemy)
        logger.debug("Spawned enemy r=%.1f at (%.1f, %.1f) speed=%.2f", r, x, y, speed)
        return enemy

    def create_explosion(self, x: float, y: float, color: str):
        """Burst of particles flying out of (x, y) in random directions"""
        lo, hi = PARTICLE_SPEED_RANGE
        for _ in range(EXPLOSION_PARTICLES):
            angle = self.rng.random() * math.pi * 2
            speed = lo + self.rng.random() * (hi - lo)
            self.particles.append(Particle(
                x=x, y=y,
                vx=math.cos(angle) * speed,
                vy=math.sin(angle) * speed,
                life=1.0,
                color=color,
            ))

    # ----------------------------
    # Frame update
    # ----------------------------

    def advance(self) -> FrameResult:
        """Advance the simulation by one frame"""
        state = self.state
        if not state.is_active and not self.particles:
            return FrameResult()

        elapsed = self.elapsed()
        score = None
        if state.is_active:
            score = ScoreUpdate(elapsed=elapsed, deaths=state.death_count)
            if self.on_score_update is not None:
                self.on_score_update(elapsed, state.death_count)

        difficulty = self.difficulty(elapsed)

        self._update_player()

        spawn_chance = self.spawn_base_chance + difficulty * self.spawn_chance_per_level
        if state.is_active and self.rng.random() < spawn_chance:
            self.spawn_enemy(difficulty)

        game_over = self._update_enemies(elapsed)
        self._update_particles()

        return FrameResult(score=score, game_over=game_over)

    def _update_player(self):
        p = self.player
        if not p.moving:
            return

        dx = p.target_x - p.x
        dy = p.target_y - p.y
        dist = math.hypot(dx, dy)
        if dist > ARRIVE_DISTANCE:
            step = min(p.speed, dist)
            p.x += dx / dist * step
            p.y += dy / dist * step

    def _update_enemies(self, elapsed: float) -> Optional[GameOver]:
        state = self.state
        p = self.player
        game_over = None
        limit = self.destroy_limit
        removed = set()

        # Newest first, so dodges and the hit are resolved in spawn-reverse order
        for i in range(len(self.enemies) - 1, -1, -1):
            e = self.enemies[i]
            e.x += e.vx
            e.y += e.vy

            # Once the run is over the test below is skipped, so a second
            # overlap in the same frame cannot end the run again
            if state.is_active and circle_collide(
                p.x, p.y, p.radius, e.x, e.y, e.radius, self.collision_tolerance
            ):
                self.create_explosion(p.x, p.y, p.color)
                state.is_active = False
                game_over = GameOver(elapsed=elapsed, deaths=state.death_count)
                logger.info(
                    "Game over after %.2fs with %d dodges", elapsed, state.death_count
                )
                if self.on_game_over is not None:
                    self.on_game_over(elapsed, state.death_count)

            if (e.x < -limit or e.x > self.width + limit
                    or e.y < -limit or e.y > self.height + limit):
                removed.add(i)
                if state.is_active:
                    state.death_count += 1

        if removed:
            self.enemies = [e for i, e in enumerate(self.enemies) if i not in removed]
        return game_over

    def _update_particles(self):
        for particle in reversed(self.particles):
            particle.x += particle.vx
            particle.y += particle.vy
            particle.life -= self.particle_decay

        self.particles = [p for p in self.particles if p.life > _LIFE_EPS]

