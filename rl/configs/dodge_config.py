"""
Configuration for the dodge game and its training tooling
"""

# Engine parameters (keyword arguments of DodgeEngine)
ENGINE_CONFIG = {
    "width": 800,
    "height": 600,
    "player_radius": 16.0,
    "player_speed": 7.0,          # max step per frame
    "player_color": "#00ffff",
    "enemy_base_speed": 3.0,
    "enemy_radius_range": (28.0, 36.0),
    "spawn_margin": 50.0,         # spawn distance outside the arena edge
    "destroy_limit": 100.0,       # enemies beyond this margin are removed
    "spawn_base_chance": 0.04,    # per-frame spawn probability at level 0
    "spawn_chance_per_level": 0.005,
    "collision_tolerance": 2.0,   # overlap allowed before a hit counts
    "particle_decay": 0.04,
}

# Window parameters
WINDOW_CONFIG = {
    "width": 800,
    "height": 600,
}

# Leaderboard parameters
LEADERBOARD_CONFIG = {
    "store_path": "./leaderboard.json",
    "identity_path": "./.dodge_id",
    "statistic_name": "SurvivalTime",
    "max_results": 10,
}

# ==============================================================================
# ENVIRONMENT / REWARD
# ==============================================================================

REWARD_CONFIG = {
    "R_TIME": 0.01,      # Reward per survived frame
    "R_DODGE": 0.5,      # Reward for each enemy that leaves the arena
    "R_DEATH": 5.0,      # Collision penalty
}

ENV_CONFIG = {
    "width": ENGINE_CONFIG["width"],
    "height": ENGINE_CONFIG["height"],
    "dt": 1/60,
    "max_steps": 3600,   # 60 seconds at 60 FPS
    "k_enemies": 5,
    "reach": 60.0,
    "max_difficulty": 10,
    "rewards": REWARD_CONFIG,
}


def env_engine_kwargs():
    """ENGINE_CONFIG without the arena size, which DodgeEnv sets itself"""
    return {k: v for k, v in ENGINE_CONFIG.items() if k not in ("width", "height")}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
