"""
Screen state and HUD values of the game window.

Kept free of any drawing code so the state transitions can be exercised
without a display.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import List, Optional

from .engine import FrameResult
from .leaderboard import Leaderboard, LeaderboardEntry, LeaderboardError

logger = logging.getLogger(__name__)


class AppState(Enum):
    MENU = auto()
    PLAYING = auto()
    GAME_OVER = auto()
    RANKING = auto()


class HudState:
    """
    Tracks which screen is shown and the numbers the HUD displays.

    With follows_engine=True the runs are started by someone else (an
    environment or a replay), so a frame that reports a score switches the
    screen back to PLAYING on its own.
    """

    def __init__(self, leaderboard: Optional[Leaderboard] = None, follows_engine: bool = False):
        self.leaderboard = leaderboard
        self.follows_engine = follows_engine

        self.app_state = AppState.PLAYING if follows_engine else AppState.MENU
        self.elapsed = 0.0
        self.dodges = 0
        self.final_time: Optional[float] = None
        self.final_dodges = 0
        self.status_message: Optional[str] = None
        self.ranking: List[LeaderboardEntry] = []

    def begin_run(self):
        self.elapsed = 0.0
        self.dodges = 0
        self.final_time = None
        self.final_dodges = 0
        self.status_message = None
        self.app_state = AppState.PLAYING

    def handle_result(self, result: FrameResult):
        """Dispatch one frame's events to the HUD and the leaderboard"""
        if result.score is not None:
            if self.follows_engine and self.app_state is not AppState.PLAYING:
                self.begin_run()
            self.elapsed = result.score.elapsed
            self.dodges = result.score.deaths

        if result.game_over is not None:
            self.final_time = result.game_over.elapsed
            self.final_dodges = result.game_over.deaths
            self.app_state = AppState.GAME_OVER
            self.submit_score(result.game_over.elapsed)

    def submit_score(self, seconds: float):
        if self.leaderboard is None:
            return
        try:
            self.leaderboard.login()
            self.leaderboard.submit_score(seconds)
            self.status_message = "Score submitted"
        except LeaderboardError as exc:
            logger.warning("Score submission failed: %s", exc)
            self.status_message = f"Score not saved: {exc}"

    def show_ranking(self):
        self.ranking = []
        self.app_state = AppState.RANKING
        if self.leaderboard is None:
            self.status_message = "No leaderboard configured"
            return
        try:
            self.ranking = self.leaderboard.get_leaderboard()
            self.status_message = None
        except LeaderboardError as exc:
            logger.warning("Could not load ranking: %s", exc)
            self.status_message = f"Failed to load ranking: {exc}"
