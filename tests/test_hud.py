from types import SimpleNamespace

import numpy as np

from game.dodge import DodgeEnv
from game.dodge.engine import FrameResult, GameOver, ScoreUpdate
from game.dodge.hud import AppState, HudState
from game.dodge.leaderboard import Leaderboard, LeaderboardStorageError


def score(elapsed, deaths=0):
    return FrameResult(score=ScoreUpdate(elapsed=elapsed, deaths=deaths))


def game_over(elapsed, deaths=0):
    return FrameResult(game_over=GameOver(elapsed=elapsed, deaths=deaths))


def make_board(tmp_path):
    return Leaderboard(
        store_path=str(tmp_path / "board.json"),
        identity_path=str(tmp_path / "hud.id"),
    )


def test_interactive_hud_starts_on_menu():
    hud = HudState()
    assert hud.app_state is AppState.MENU


def test_score_frames_update_hud():
    hud = HudState()
    hud.begin_run()
    hud.handle_result(score(3.5, deaths=2))
    assert (hud.elapsed, hud.dodges) == (3.5, 2)
    assert hud.app_state is AppState.PLAYING


def test_game_over_records_final_score():
    hud = HudState()
    hud.begin_run()
    hud.handle_result(game_over(12.25, deaths=7))
    assert hud.app_state is AppState.GAME_OVER
    assert (hud.final_time, hud.final_dodges) == (12.25, 7)


def test_interactive_hud_stays_on_game_over_screen():
    # Only the player restarts an interactive run
    hud = HudState()
    hud.begin_run()
    hud.handle_result(game_over(4.0))
    hud.handle_result(score(0.1))
    assert hud.app_state is AppState.GAME_OVER


def test_following_hud_returns_to_playing_on_next_episode():
    hud = HudState(follows_engine=True)
    hud.handle_result(game_over(4.0, deaths=3))
    assert hud.app_state is AppState.GAME_OVER

    hud.handle_result(score(1 / 60))

    assert hud.app_state is AppState.PLAYING
    assert hud.final_time is None
    assert hud.elapsed == 1 / 60
    assert hud.dodges == 0


def test_game_over_submits_best_score(tmp_path):
    board = make_board(tmp_path)
    hud = HudState(board)
    hud.begin_run()
    hud.handle_result(game_over(8.5))

    assert hud.status_message == "Score submitted"
    (entry,) = board.get_leaderboard()
    assert entry.stat_value == 850


def test_submission_failure_is_shown_not_raised(tmp_path):
    store = tmp_path / "board.json"
    store.write_text("{not json")
    hud = HudState(Leaderboard(str(store), identity_path=str(tmp_path / "hud.id")))
    hud.begin_run()

    hud.handle_result(game_over(2.0))

    assert hud.app_state is AppState.GAME_OVER
    assert hud.status_message.startswith("Score not saved")


def test_ranking_without_leaderboard():
    hud = HudState()
    hud.show_ranking()
    assert hud.app_state is AppState.RANKING
    assert hud.ranking == []
    assert hud.status_message == "No leaderboard configured"


def test_ranking_load_failure(tmp_path, monkeypatch):
    board = make_board(tmp_path)

    def broken(*args, **kwargs):
        raise LeaderboardStorageError("disk gone")

    monkeypatch.setattr(board, "get_leaderboard", broken)
    hud = HudState(board)
    hud.show_ranking()

    assert hud.ranking == []
    assert "disk gone" in hud.status_message


def test_env_reset_restarts_window_hud():
    env = DodgeEnv(engine_kwargs={"spawn_base_chance": 0.0, "spawn_chance_per_level": 0.0})
    hud = HudState(follows_engine=True)
    env._window = SimpleNamespace(hud=hud, close=lambda: None)

    env.reset(seed=0)
    hud.handle_result(game_over(5.0, deaths=1))
    env.reset(seed=1)

    assert hud.app_state is AppState.PLAYING
    assert hud.final_time is None

    env.step(np.array([0, 0]))
    env.close()
