"""2D Game module - arena dodge engine and environment"""

from .engine import DodgeEngine, FrameResult, ScoreUpdate, GameOver
from .dodge_env import DodgeEnv, run_random_episode

__all__ = ['DodgeEngine', 'FrameResult', 'ScoreUpdate', 'GameOver',
           'DodgeEnv', 'run_random_episode']
