"""
Training configuration for the Stardust Drifter environment
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training
    "width": 960,
    "height": 540,
    "dt": 1/60,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_planets": 5,
    "c_comets": 2,
    "m_stars": 3,
    "n_directions": 16,
    "n_powers": 8,
    "allow_relaunch": False,
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG = {
    "R_SCORE": 0.01,     # Per point (survival ticks and stars)
    "R_STAR": 1.0,       # Bonus per star collected
    "R_LEVEL": 5.0,      # Bonus per level completed
    "R_DEATH": 10.0,     # Game over penalty
    "R_IDLE": 0.001,     # Penalty per step parked at the spawn point
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.995,
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
    "gamma": 0.995,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.2,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

ALGO_CONFIGS = {
    "ppo": PPO_CONFIG,
    "dqn": DQN_CONFIG,
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
