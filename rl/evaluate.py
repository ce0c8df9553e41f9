"""
Evaluation script for trained dodge agents
"""

import time
import argparse
from typing import Optional

import numpy as np

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from game.dodge import DodgeEnv
from rl.configs.dodge_config import ENV_CONFIG, env_engine_kwargs
from rl.train import MultiDiscreteToDiscreteWrapper


def make_eval_env(render_mode: Optional[str] = None) -> DodgeEnv:
    """Same env configuration the training scripts use"""
    return DodgeEnv(render_mode=render_mode, engine_kwargs=env_engine_kwargs(), **ENV_CONFIG)


def _print_results(title: str, survival, dodges, rewards):
    print("\n" + "="*50)
    print(f"{title} ({len(survival)} episodes):")
    print(f"Mean Reward: {np.mean(rewards):.2f} ± {np.std(rewards):.2f}")
    print(f"Mean Survival: {np.mean(survival):.2f}s ± {np.std(survival):.2f}")
    print(f"Best Survival: {np.max(survival):.2f}s")
    print(f"Mean Dodges: {np.mean(dodges):.1f}")
    print("="*50)


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats (for PPO)
    """

    if algo == "ppo":
        model = PPO.load(model_path)
    elif algo == "dqn":
        model = DQN.load(model_path)
    else:
        raise ValueError(f"Unknown algorithm: {algo}")

    render_mode = "human" if render else None
    base_env = make_eval_env(render_mode)
    env = MultiDiscreteToDiscreteWrapper(base_env) if algo == "dqn" else base_env

    venv = DummyVecEnv([lambda: env])
    if vec_normalize_path:
        venv = VecNormalize.load(vec_normalize_path, venv)
        venv.training = False
        venv.norm_reward = False

    episode_rewards = []
    episode_survival = []
    episode_dodges = []

    for episode in range(n_episodes):
        if seed is not None:
            venv.seed(seed + episode)
        obs = venv.reset()

        total_reward = 0.0
        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, info = venv.step(action)
            total_reward += float(reward[0])
            if render:
                time.sleep(1 / 60)
            if done[0]:
                break

        episode_rewards.append(total_reward)
        episode_survival.append(info[0]["elapsed"])
        episode_dodges.append(info[0]["dodges"])

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Survived {info[0]['elapsed']:.2f}s, Dodged {info[0]['dodges']}, "
              f"Reward = {total_reward:.2f}")

    venv.close()

    _print_results("Evaluation Results", episode_survival, episode_dodges, episode_rewards)
    return {
        "mean_reward": float(np.mean(episode_rewards)),
        "mean_survival": float(np.mean(episode_survival)),
        "mean_dodges": float(np.mean(episode_dodges)),
        "episode_rewards": episode_rewards,
        "episode_survival": episode_survival,
    }


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None):
    """
    Evaluate a random policy baseline
    """
    print("Evaluating random policy baseline...")

    env = make_eval_env()
    if seed is not None:
        env.action_space.seed(seed)

    episode_rewards = []
    episode_survival = []
    episode_dodges = []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0

        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward

        episode_rewards.append(total_reward)
        episode_survival.append(info["elapsed"])
        episode_dodges.append(info["dodges"])

    env.close()

    _print_results("Random Policy Results", episode_survival, episode_dodges, episode_rewards)
    return {
        "mean_reward": float(np.mean(episode_rewards)),
        "mean_survival": float(np.mean(episode_survival)),
        "mean_dodges": float(np.mean(episode_dodges)),
    }


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained dodge agent")
    parser.add_argument(
        "model_path",
        type=str,
        help="Path to the trained model",
    )
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn"],
        help="Algorithm used to train the model (default: ppo)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=10,
        help="Number of evaluation episodes (default: 10)",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Disable rendering",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--vec-normalize",
        type=str,
        default=None,
        help="Path to VecNormalize stats file (for PPO)",
    )
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate random policy for comparison",
    )

    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )

    if args.compare_random:
        print("\n")
        random_results = compare_with_random(
            n_episodes=args.n_episodes,
            seed=args.seed,
        )

        improvement = results["mean_survival"] - random_results["mean_survival"]
        print(f"\nSurvival improvement over random: {improvement:.2f}s")


if __name__ == "__main__":
    main()
