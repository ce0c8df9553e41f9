"""
Leaderboard - survival-time ranking kept in a local JSON store.

Mirrors the operations of an online leaderboard service: a device logs in
with a persistent custom id, may set a display name, submits its final
survival time and reads back the ranked top entries. Scores are stored as
integer centiseconds.
"""

from __future__ import annotations

import json
import logging
import math
import os
import random
import secrets
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Any

logger = logging.getLogger(__name__)

DEFAULT_STATISTIC = "SurvivalTime"


class LeaderboardError(Exception):
    """Base class for leaderboard failures"""


class NotLoggedInError(LeaderboardError):
    """Raised when an operation needs a logged-in player"""


class LeaderboardStorageError(LeaderboardError):
    """Raised when the store cannot be read or written"""


class InvalidDisplayNameError(LeaderboardError, ValueError):
    """Raised for a display name that is empty after trimming"""


@dataclass(frozen=True)
class LeaderboardEntry:
    position: int  # 0-based rank
    player_id: str
    display_name: Optional[str]
    stat_value: int  # centiseconds

    @property
    def seconds(self) -> float:
        return self.stat_value / 100

    def format_row(self) -> str:
        name = self.display_name or "Unknown"
        return f"{self.position + 1:>3}  {name[:18]:<18} {self.seconds:>8.2f}s"


def make_custom_id(now_ms: Optional[int] = None, rng: Optional[random.Random] = None) -> str:
    """Device id of the form user_<epoch ms>_<random base36 suffix>"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    rng = rng or random.Random()
    alphabet = "0123456789abcdefghijklmnopqrstuvwxyz"
    suffix = "".join(rng.choice(alphabet) for _ in range(6))
    return f"user_{now_ms}_{suffix}"


def to_stat_value(seconds: float) -> int:
    return int(math.floor(seconds * 100))


class Leaderboard:
    """File-backed leaderboard for a single statistic"""

    def __init__(
        self,
        store_path: str,
        identity_path: Optional[str] = None,
        statistic_name: str = DEFAULT_STATISTIC,
        max_results: int = 10,
    ):
        self.store_path = store_path
        self.identity_path = identity_path or store_path + ".id"
        self.statistic_name = statistic_name
        self.max_results = max_results

        self.player_id: Optional[str] = None
        self.display_name: Optional[str] = None

    @property
    def is_logged_in(self) -> bool:
        return self.player_id is not None

    # ----------------------------
    # Storage
    # ----------------------------

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.store_path):
            return {"accounts": {}, "players": {}}
        try:
            with open(self.store_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise LeaderboardStorageError(
                f"Could not read leaderboard store {self.store_path}: {exc}"
            ) from exc
        data.setdefault("accounts", {})
        data.setdefault("players", {})
        return data

    def _save(self, data: Dict[str, Any]):
        tmp_path = self.store_path + ".tmp"
        try:
            directory = os.path.dirname(os.path.abspath(self.store_path))
            os.makedirs(directory, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.store_path)
        except OSError as exc:
            raise LeaderboardStorageError(
                f"Could not write leaderboard store {self.store_path}: {exc}"
            ) from exc

    def _custom_id(self) -> str:
        try:
            if os.path.exists(self.identity_path):
                with open(self.identity_path, "r", encoding="utf-8") as f:
                    custom_id = f.read().strip()
                if custom_id:
                    return custom_id

            custom_id = make_custom_id()
            with open(self.identity_path, "w", encoding="utf-8") as f:
                f.write(custom_id)
        except OSError as exc:
            raise LeaderboardStorageError(
                f"Could not access identity file {self.identity_path}: {exc}"
            ) from exc
        return custom_id

    def _require_login(self):
        if not self.is_logged_in:
            raise NotLoggedInError("Not logged in")

    # ----------------------------
    # Service operations
    # ----------------------------

    def login(self) -> str:
        """Log in with this device's custom id, creating the account on first use"""
        if self.player_id is not None:
            return self.player_id

        custom_id = self._custom_id()
        data = self._load()
        player_id = data["accounts"].get(custom_id)
        if player_id is None:
            player_id = secrets.token_hex(8).upper()
            data["accounts"][custom_id] = player_id
            data["players"][player_id] = {"display_name": None, "statistics": {}}
            self._save(data)
            logger.info("Created leaderboard account %s", player_id)

        self.player_id = player_id
        self.display_name = data["players"].get(player_id, {}).get("display_name")
        return player_id

    def update_display_name(self, name: str):
        self._require_login()
        name = name.strip()
        if not name:
            raise InvalidDisplayNameError("Display name must not be empty")

        data = self._load()
        record = data["players"].setdefault(
            self.player_id, {"display_name": None, "statistics": {}}
        )
        record["display_name"] = name
        self._save(data)
        self.display_name = name

    def submit_score(self, seconds: float) -> int:
        """Record a survival time; only the player's best value is kept"""
        self._require_login()

        value = to_stat_value(seconds)
        data = self._load()
        record = data["players"].setdefault(
            self.player_id, {"display_name": self.display_name, "statistics": {}}
        )
        stats = record.setdefault("statistics", {})
        best = stats.get(self.statistic_name)
        if best is None or value > best:
            stats[self.statistic_name] = value
            self._save(data)
            logger.info("New best %s for %s: %d", self.statistic_name, self.player_id, value)
        return value

    def get_leaderboard(self, max_results: Optional[int] = None) -> List[LeaderboardEntry]:
        """Top entries ranked by survival time, best first"""
        if not self.is_logged_in:
            self.login()

        limit = self.max_results if max_results is None else max_results
        data = self._load()

        scored = []
        for player_id, record in data["players"].items():
            value = record.get("statistics", {}).get(self.statistic_name)
            if value is None:
                continue
            scored.append((player_id, record.get("display_name"), int(value)))

        scored.sort(key=lambda item: (-item[2], item[0]))
        return [
            LeaderboardEntry(position=i, player_id=pid, display_name=name, stat_value=value)
            for i, (pid, name, value) in enumerate(scored[:limit])
        ]
