"""
DrifterEnv - Stardust Drifter as a Gymnasium environment
--------------------------------------------------------
- Wraps one Simulation; the env clock (step * dt) drives level transitions
- Arcade window for "human" rendering
- 1 RL agent that picks when, where and how hard to launch
- Stars and survival give score; planets, comets and the screen edge kill
- Vector observation: player state + K nearest planets + C nearest comets
  + M nearest stars
- MultiDiscrete action space: [launch(2), direction(16), power(8)]

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.drifter.drifter_env
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .simulation import Simulation
from .states import GameState
from .utils import clamp

DEFAULT_REWARDS = {
    "R_SCORE": 0.01,   # per point of score
    "R_STAR": 1.0,     # per star collected, on top of its score
    "R_LEVEL": 5.0,    # per level completed
    "R_DEATH": 10.0,   # game over penalty
    "R_IDLE": 0.001,   # per step spent parked at the spawn point
}


class DrifterEnv(gym.Env):
    """Gravity-slingshot survival environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        width: int = 960,
        height: int = 540,
        dt: float = 1 / 60,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_planets: int = 5,
        c_comets: int = 2,
        m_stars: int = 3,
        n_directions: int = 16,
        n_powers: int = 8,
        allow_relaunch: bool = False,
        rewards: Optional[Dict[str, float]] = None,
        game_config: Optional[GameConfig] = None,
    ):
        super().__init__()

        assert obs_mode in ("vector",), "Only 'vector' observations are implemented."
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.obs_mode = obs_mode

        # Arena
        self.width = width
        self.height = height
        self.dt = dt
        self.max_steps = max_steps

        # Observation config
        self.k_planets = k_planets
        self.c_comets = c_comets
        self.m_stars = m_stars

        # Action config
        self.n_directions = n_directions
        self.n_powers = n_powers
        self.allow_relaunch = allow_relaunch

        self.rewards = dict(DEFAULT_REWARDS)
        if rewards:
            self.rewards.update({k: v for k, v in rewards.items() if k in DEFAULT_REWARDS})
        self.game_config = game_config

        # Action space:
        # launch: 0 wait, 1 launch
        # direction: 0..n_directions-1, evenly spaced angles
        # power: 0..n_powers-1, fraction of the maximum launch speed
        self.action_space = spaces.MultiDiscrete([2, n_directions, n_powers])

        # Observation space (vector)
        # Player: pos(2) vel(2) moving(1) level progress(1)
        # Each planet: rel pos(2) radius(1)
        # Each comet: rel pos(2) vel(2)
        # Each star: rel pos(2)
        obs_dim = 6 + (self.k_planets * 3) + (self.c_comets * 4) + (self.m_stars * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._sim_time = 0.0
        self._step_count = 0
        self.sim: Simulation = None  # type: ignore

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._step_count = 0
        self._sim_time = 0.0

        self.sim = Simulation(
            self.width,
            self.height,
            config=self.game_config,
            rng=self.np_random,
            clock=lambda: self._sim_time,
        )
        # Leave the title screen straight away
        self.sim.key_down()

        if self._window is not None:
            self._window.attach(self.sim)

        return self._get_obs(), self._get_info()

    def step(self, action):
        launch, direction, power = int(action[0]), int(action[1]), int(action[2])
        sim = self.sim

        prev_score = sim.score
        prev_level = sim.level
        prev_stars = sim.stars_collected

        if launch:
            self._apply_launch(direction, power)

        self._sim_time += self.dt
        sim.frame(self._sim_time)

        reward = self._compute_reward(
            score_gain=sim.score - prev_score,
            stars=sim.stars_collected - prev_stars,
            levels=sim.level - prev_level,
        )

        terminated = sim.state == GameState.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def max_drag(self) -> float:
        """Drag length that reaches full launch power"""
        cfg = self.sim.config
        return cfg.launch_power_divisor * cfg.max_launch_power * self.sim.scale ** 2

    def _apply_launch(self, direction: int, power: int):
        sim = self.sim
        if sim.state == GameState.LEVEL_TRANSITION:
            # Any input skips the level banner
            sim.pointer_down(sim.player.x, sim.player.y)
            return
        if sim.state != GameState.PLAYING:
            return
        if sim.player.is_moving and not self.allow_relaunch:
            return

        angle = (math.pi * 2) * (direction % self.n_directions) / self.n_directions
        length = self.max_drag() * (power % self.n_powers + 1) / self.n_powers

        px, py = sim.player.x, sim.player.y
        sim.pointer_down(px, py)
        sim.pointer_up(px + math.cos(angle) * length, py + math.sin(angle) * length)

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _nearest(self, entities: List, n: int) -> List:
        p = self.sim.player
        return sorted(entities, key=lambda e: (e.x - p.x) ** 2 + (e.y - p.y) ** 2)[:n]

    def _get_obs(self) -> np.ndarray:
        sim = self.sim
        p = sim.player
        cfg = sim.config
        vmax = max(1e-6, cfg.max_launch_power * sim.scale)
        rmax = max(1e-6, cfg.planet_max_radius * sim.scale)

        progress = sim.score / max(1e-6, sim.required_score)
        obs_parts = [
            clamp(p.x / self.width * 2 - 1, -1, 1),
            clamp(p.y / self.height * 2 - 1, -1, 1),
            clamp(p.vx / vmax, -1, 1),
            clamp(p.vy / vmax, -1, 1),
            1.0 if p.is_moving else -1.0,
            clamp(progress * 2 - 1, -1, 1),
        ]

        planets = self._nearest(sim.planets, self.k_planets)
        for i in range(self.k_planets):
            if i < len(planets):
                pl = planets[i]
                obs_parts += [
                    clamp((pl.x - p.x) / self.width, -1, 1),
                    clamp((pl.y - p.y) / self.height, -1, 1),
                    clamp(pl.radius / rmax, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        comets = self._nearest(sim.comets, self.c_comets)
        for i in range(self.c_comets):
            if i < len(comets):
                c = comets[i]
                obs_parts += [
                    clamp((c.x - p.x) / self.width, -1, 1),
                    clamp((c.y - p.y) / self.height, -1, 1),
                    clamp(c.vx / vmax, -1, 1),
                    clamp(c.vy / vmax, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        stars = self._nearest(sim.collectable_stars, self.m_stars)
        for i in range(self.m_stars):
            if i < len(stars):
                s = stars[i]
                obs_parts += [
                    clamp((s.x - p.x) / self.width, -1, 1),
                    clamp((s.y - p.y) / self.height, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, score_gain: int, stars: int, levels: int) -> float:
        r = self.rewards
        reward = 0.0
        reward += r["R_SCORE"] * score_gain
        reward += r["R_STAR"] * stars
        reward += r["R_LEVEL"] * levels

        if self.sim.state == GameState.PLAYING and not self.sim.player.is_moving:
            reward -= r["R_IDLE"]
        if self.sim.state == GameState.GAME_OVER:
            reward -= r["R_DEATH"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        sim = self.sim
        return {
            "score": sim.score,
            "level": sim.level,
            "state": sim.state.value,
            "stars_collected": sim.stars_collected,
            "death_cause": sim.death_cause,
            "num_planets": len(sim.planets),
            "num_comets": len(sim.comets),
            "num_stars": len(sim.collectable_stars),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            # TODO: read back the arcade framebuffer instead of a blank frame
            return np.zeros((self.height, self.width, 3), dtype=np.uint8)

        if self._window is None:
            from .window import DrifterWindow
            self._window = DrifterWindow(self.sim, self.width, self.height, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42) -> float:
    """Run a random episode and return its total reward"""
    env = DrifterEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f} "
          f"(score {info['score']}, level {info['level']}, death: {info['death_cause']})")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
