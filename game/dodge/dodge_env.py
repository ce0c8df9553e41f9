"""
DodgeEnv - Gymnasium wrapper around DodgeEngine
-----------------------------------------------
- Engine time comes from a FrameClock, so episodes are reproducible per seed
- Discrete MultiDiscrete action space: [hold(2), heading(9)]
- Vector observation: player state + difficulty + top-K nearest enemies
- Reward: small bonus per survived frame, bonus per dodge, penalty on death

Quick test:
    python -m game.dodge.dodge_env
"""

from __future__ import annotations

import math
from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .engine import DodgeEngine, FrameResult, GAME_WIDTH, GAME_HEIGHT
from .utils import clamp, seed_everything, FrameClock

DEFAULT_REWARDS = {
    "R_TIME": 0.01,   # per survived frame
    "R_DODGE": 0.5,   # per enemy that left the arena
    "R_DEATH": 5.0,   # collision penalty
}


class DodgeEnv(gym.Env):
    """Dodge arena as a Gymnasium environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = GAME_WIDTH,
        height: int = GAME_HEIGHT,
        dt: float = 1 / 60,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 5,
        reach: float = 60.0,
        max_difficulty: int = 10,
        rewards: Optional[Dict[str, float]] = None,
        engine_kwargs: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")
        self.render_mode = render_mode

        self.width = width
        self.height = height
        self.dt = dt
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.reach = reach
        self.max_difficulty = max_difficulty
        self.rewards = dict(DEFAULT_REWARDS, **(rewards or {}))

        self.clock = FrameClock(dt)
        engine_kwargs = dict(engine_kwargs or {})
        engine_kwargs.update(width=width, height=height, clock=self.clock)
        self.engine = DodgeEngine(**engine_kwargs)

        # hold: 0 stop, 1 move
        # heading: 0 stay, 1..8 compass directions starting east, clockwise (y-down)
        self.action_space = spaces.MultiDiscrete([2, 9])
        self._headings = [(0.0, 0.0)]
        for i in range(8):
            ang = (math.pi * 2) * (i / 8.0)
            self._headings.append((math.cos(ang), math.sin(ang)))

        # Player: pos(2) moving(1) difficulty(1)
        # Each enemy: rel pos(2) vel(2)
        obs_dim = 2 + 1 + 1 + (self.k_enemies * 4)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._step_count = 0
        self._last_result = FrameResult()

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)
        if seed is not None:
            self.engine.rng.seed(seed)

        self._step_count = 0
        self.engine.start()
        self._last_result = FrameResult()
        if self._window is not None:
            self._window.hud.begin_run()
        return self._get_obs(), self._get_info()

    def step(self, action):
        hold, heading = int(action[0]), int(action[1])
        self._apply_action(hold, heading)

        dodges_before = self.engine.death_count
        self.clock.tick()
        result = self.engine.advance()
        self._last_result = result

        terminated = result.is_game_over
        dodged = self.engine.death_count - dodges_before

        reward = self.rewards["R_TIME"] + self.rewards["R_DODGE"] * dodged
        if terminated:
            reward -= self.rewards["R_DEATH"]

        self._step_count += 1
        truncated = not terminated and self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    def _apply_action(self, hold: int, heading: int):
        if hold == 0 or heading == 0:
            self.engine.stop_moving()
            return
        dx, dy = self._headings[heading % 9]
        p = self.engine.player
        self.engine.set_target(p.x + dx * self.reach, p.y + dy * self.reach)

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        p = self.engine.player
        difficulty = self.engine.difficulty(self.engine.elapsed())

        obs_parts = [
            p.x / self.width * 2 - 1,
            p.y / self.height * 2 - 1,
            1.0 if p.moving else -1.0,
            clamp(difficulty / self.max_difficulty * 2 - 1, -1, 1),
        ]

        enemies_sorted = sorted(
            self.engine.enemies,
            key=lambda e: (e.x - p.x) ** 2 + (e.y - p.y) ** 2
        )
        vmax = max(1e-6, p.speed)
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.x - p.x) / self.width, -1, 1),
                    clamp((e.y - p.y) / self.height, -1, 1),
                    clamp(e.vx / vmax, -1, 1),
                    clamp(e.vy / vmax, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "elapsed": self.engine.elapsed(),
            "dodges": self.engine.death_count,
            "alive": self.engine.is_active,
            "num_enemies": len(self.engine.enemies),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode != "human":
            return None

        if self._window is None:
            from .window import DodgeWindow
            self._window = DodgeWindow(self.engine, self.width, self.height,
                                       drives_engine=False)

        self._window.handle_result(self._last_result)
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def run_random_episode(render: bool = True, seed: Optional[int] = 42):
    """Run a random episode for testing"""
    env = DodgeEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}  "
          f"survived {info['elapsed']:.2f}s, dodged {info['dodges']}")
    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True)
