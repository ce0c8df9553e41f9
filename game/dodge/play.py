"""
Play the dodge game in an Arcade window.

    python -m game.dodge.play
    python -m game.dodge.play --name Alice --seed 7
"""

import argparse
import logging

from game.dodge.engine import DodgeEngine
from game.dodge.leaderboard import Leaderboard, LeaderboardError
from rl.configs.dodge_config import ENGINE_CONFIG, LEADERBOARD_CONFIG, WINDOW_CONFIG


def build_leaderboard(args) -> Leaderboard:
    leaderboard = Leaderboard(
        store_path=args.leaderboard,
        identity_path=LEADERBOARD_CONFIG["identity_path"],
        statistic_name=LEADERBOARD_CONFIG["statistic_name"],
        max_results=LEADERBOARD_CONFIG["max_results"],
    )
    try:
        leaderboard.login()
        if args.name:
            leaderboard.update_display_name(args.name)
    except LeaderboardError as exc:
        print(f"Leaderboard unavailable: {exc}")
    return leaderboard


def main():
    parser = argparse.ArgumentParser(description="Play the dodge game")
    parser.add_argument(
        "--name",
        type=str,
        default=None,
        help="Display name shown on the leaderboard",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for enemy spawns (default: random)",
    )
    parser.add_argument(
        "--leaderboard",
        type=str,
        default=LEADERBOARD_CONFIG["store_path"],
        help=f"Leaderboard store path (default: {LEADERBOARD_CONFIG['store_path']})",
    )
    parser.add_argument(
        "--no-leaderboard",
        action="store_true",
        help="Do not record scores",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    # Imported here so --help works without a display
    from game.dodge.window import run_window

    engine = DodgeEngine(seed=args.seed, **ENGINE_CONFIG)
    leaderboard = None if args.no_leaderboard else build_leaderboard(args)
    run_window(engine, leaderboard, **WINDOW_CONFIG)


if __name__ == "__main__":
    main()
