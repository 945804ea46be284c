"""
Custom callbacks for tracking Stardust Drifter metrics during training.
Records: score, level reached, stars collected, cause of death.
"""

import os
import csv
from collections import Counter
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback

DEATH_CAUSES = ("planet", "comet", "boundary")


class MetricsCallback(BaseCallback):
    """
    Callback to track and log game metrics per episode.
    Saves to CSV for easy plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        # Episode tracking
        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_scores: List[int] = []
        self.episode_levels: List[int] = []
        self.episode_stars: List[int] = []
        self.death_causes: Counter = Counter()

        # CSV file
        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow([
            "timestep", "episode", "reward", "length",
            "score", "level", "stars", "death_cause",
        ])
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def record_episode(self, info: Dict[str, Any]):
        """Store one finished episode from its final info dict"""
        ep_info = info["episode"]
        score = int(info.get("score", 0))
        level = int(info.get("level", 1))
        stars = int(info.get("stars_collected", 0))
        cause = info.get("death_cause") or "survived"

        self.episode_rewards.append(float(ep_info["r"]))
        self.episode_lengths.append(int(ep_info["l"]))
        self.episode_scores.append(score)
        self.episode_levels.append(level)
        self.episode_stars.append(stars)
        self.death_causes[cause] += 1

        if self.csv_writer:
            self.csv_writer.writerow([
                self.num_timesteps,
                len(self.episode_rewards),
                ep_info["r"],
                ep_info["l"],
                score,
                level,
                stars,
                cause,
            ])
            self.csv_file.flush()

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor wrapper adds episode info at the end of an episode
            if done and "episode" in info:
                self.record_episode(info)

                if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
                    avg_reward = sum(self.episode_rewards[-10:]) / 10
                    avg_score = sum(self.episode_scores[-10:]) / 10
                    print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                          f"Timestep {self.num_timesteps}, "
                          f"Avg Reward (10 ep): {avg_reward:.2f}, "
                          f"Avg Score: {avg_score:.0f}")

        return True

    def _on_training_end(self) -> None:
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        if not self.episode_rewards:
            return {}

        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "total_episodes": len(self.episode_rewards),
            "mean_score": np.mean(self.episode_scores),
            "max_level": max(self.episode_levels),
            "mean_stars": np.mean(self.episode_stars),
            "death_causes": dict(self.death_causes),
        }


class TensorboardMetricsCallback(BaseCallback):
    """
    Logs game metrics to TensorBoard at the end of each episode.
    """

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            if done and "episode" in info and self.logger:
                self.logger.record("custom/episode_reward", info["episode"]["r"])
                self.logger.record("custom/score", info.get("score", 0))
                self.logger.record("custom/level", info.get("level", 1))
                self.logger.record("custom/stars", info.get("stars_collected", 0))
                cause = info.get("death_cause")
                for name in DEATH_CAUSES:
                    self.logger.record(f"custom/death_{name}", 1.0 if cause == name else 0.0)

        return True
