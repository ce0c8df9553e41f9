import argparse
import json
import random

import pytest

from game.dodge.leaderboard import (
    InvalidDisplayNameError,
    Leaderboard,
    LeaderboardEntry,
    LeaderboardError,
    LeaderboardStorageError,
    NotLoggedInError,
    make_custom_id,
    to_stat_value,
)


def make_board(tmp_path, device="a"):
    return Leaderboard(
        store_path=str(tmp_path / "board.json"),
        identity_path=str(tmp_path / f"{device}.id"),
    )


def test_login_is_persistent(tmp_path):
    first = make_board(tmp_path).login()
    second = make_board(tmp_path).login()
    assert first == second

    other = make_board(tmp_path, device="b").login()
    assert other != first


def test_login_is_idempotent(tmp_path):
    board = make_board(tmp_path)
    assert board.login() == board.login()
    assert board.is_logged_in


def test_submit_requires_login(tmp_path):
    board = make_board(tmp_path)
    with pytest.raises(NotLoggedInError):
        board.submit_score(12.3)
    with pytest.raises(NotLoggedInError):
        board.update_display_name("Alice")


def test_scores_are_stored_as_centiseconds():
    assert to_stat_value(12.3456) == 1234
    assert to_stat_value(0.009) == 0


def test_only_best_score_is_kept(tmp_path):
    board = make_board(tmp_path)
    board.login()
    board.submit_score(20.5)
    board.submit_score(10.0)

    entries = board.get_leaderboard()
    assert len(entries) == 1
    assert entries[0].stat_value == 2050
    assert entries[0].seconds == pytest.approx(20.5)


def test_ranking_orders_best_first(tmp_path):
    for device, name, seconds in [("a", "Ann", 12.0), ("b", "Bob", 30.25), ("c", None, 7.5)]:
        board = make_board(tmp_path, device)
        board.login()
        if name:
            board.update_display_name(name)
        board.submit_score(seconds)

    entries = make_board(tmp_path, "d").get_leaderboard()

    assert [e.position for e in entries] == [0, 1, 2]
    assert [e.display_name for e in entries] == ["Bob", "Ann", None]
    assert [e.stat_value for e in entries] == [3025, 1200, 750]


def test_ranking_is_limited(tmp_path):
    for i in range(5):
        board = make_board(tmp_path, f"dev{i}")
        board.login()
        board.submit_score(i)

    entries = make_board(tmp_path, "dev0").get_leaderboard(max_results=3)
    assert [e.stat_value for e in entries] == [400, 300, 200]


def test_display_name_round_trips(tmp_path):
    board = make_board(tmp_path)
    board.login()
    board.update_display_name("  Alice ")
    assert board.display_name == "Alice"

    again = make_board(tmp_path)
    again.login()
    assert again.display_name == "Alice"


def test_empty_display_name_rejected(tmp_path):
    board = make_board(tmp_path)
    board.login()
    with pytest.raises(InvalidDisplayNameError):
        board.update_display_name("   ")
    assert board.display_name is None


def test_blank_name_is_a_leaderboard_error(tmp_path):
    board = make_board(tmp_path)
    board.login()
    with pytest.raises(LeaderboardError):
        board.update_display_name("")


def test_play_cli_survives_blank_name(tmp_path, monkeypatch, capsys):
    from game.dodge import play

    monkeypatch.setitem(play.LEADERBOARD_CONFIG, "identity_path", str(tmp_path / "cli.id"))
    args = argparse.Namespace(name="   ", leaderboard=str(tmp_path / "board.json"))

    board = play.build_leaderboard(args)

    assert board.player_id is not None
    assert board.display_name is None
    assert "Leaderboard unavailable" in capsys.readouterr().out


def test_corrupt_store_raises_storage_error(tmp_path):
    (tmp_path / "board.json").write_text("{not json")
    with pytest.raises(LeaderboardStorageError):
        make_board(tmp_path).login()


def test_store_is_plain_json(tmp_path):
    board = make_board(tmp_path)
    player_id = board.login()
    board.submit_score(3.25)

    data = json.loads((tmp_path / "board.json").read_text())
    assert data["players"][player_id]["statistics"]["SurvivalTime"] == 325


def test_custom_id_format():
    custom_id = make_custom_id(now_ms=1700000000000, rng=random.Random(1))
    prefix, ms, suffix = custom_id.split("_")
    assert prefix == "user"
    assert ms == "1700000000000"
    assert len(suffix) == 6


def test_entry_row_formatting():
    entry = LeaderboardEntry(position=0, player_id="X", display_name=None, stat_value=1234)
    row = entry.format_row()
    assert row.startswith("  1")
    assert "Unknown" in row
    assert row.endswith("12.34s")
