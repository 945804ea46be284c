"""
Procedural level content and difficulty progression
"""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from .config import GameConfig
from .entities import BackgroundStar, CollectableStar, Comet, Planet
from .states import GameState

logger = logging.getLogger(__name__)


class LevelDirector:
    """Builds planets, comets and stars for a level and decides when the
    level is complete.

    Generation methods are pure apart from drawing from ``rng``; the
    ``start_level`` / ``check_level_completion`` pair mutate the
    simulation passed to them.
    """

    def __init__(self, config: GameConfig, rng: np.random.Generator):
        self.config = config
        self.rng = rng

    # ----------------------------
    # Progression
    # ----------------------------

    def required_score_for(self, level: int) -> float:
        cfg = self.config
        return cfg.base_score_threshold * cfg.score_threshold_multiplier ** (level - 1)

    def planet_count_for(self, level: int) -> int:
        """Random planets for a level, not counting the central one"""
        cfg = self.config
        return cfg.base_planet_count + (level - 1) * cfg.planet_count_per_level

    # ----------------------------
    # Generation
    # ----------------------------

    def _drift(self, scale: float) -> float:
        return float((self.rng.random() - 0.5) * self.config.planet_drift_speed * scale)

    def _variant(self) -> int:
        return int(self.rng.integers(self.config.num_planet_variants))

    def central_planet(self, width: float, height: float, scale: float) -> Planet:
        return Planet(
            x=width / 2,
            y=height / 2,
            vx=self._drift(scale),
            vy=self._drift(scale),
            radius=self.config.central_planet_radius * scale,
            variant=self._variant(),
        )

    def random_planet(self, width: float, height: float, scale: float) -> Planet:
        cfg = self.config
        radius = self.rng.uniform(cfg.planet_min_radius, cfg.planet_max_radius) * scale
        return Planet(
            x=float(self.rng.random() * width),
            y=float(self.rng.random() * height),
            vx=self._drift(scale),
            vy=self._drift(scale),
            radius=float(radius),
            variant=self._variant(),
        )

    def generate_planets_for_level(self, level: int, width: float, height: float, scale: float) -> List[Planet]:
        planets = [self.central_planet(width, height, scale)]
        for _ in range(self.planet_count_for(level)):
            planets.append(self.random_planet(width, height, scale))
        return planets

    def generate_comet(self, width: float, height: float, scale: float) -> Comet:
        """Comet on a random edge heading into the canvas"""
        speed = self.config.comet_speed * scale
        rand = self.rng.random
        edge = int(self.rng.integers(4))

        if edge == 0:  # top
            x, y = rand() * width, 0.0
            vx, vy = (rand() - 0.5) * speed, rand() * speed
        elif edge == 1:  # right
            x, y = width, rand() * height
            vx, vy = -rand() * speed, (rand() - 0.5) * speed
        elif edge == 2:  # bottom
            x, y = rand() * width, height
            vx, vy = (rand() - 0.5) * speed, -rand() * speed
        else:  # left
            x, y = 0.0, rand() * height
            vx, vy = rand() * speed, (rand() - 0.5) * speed

        return Comet(x=float(x), y=float(y), vx=float(vx), vy=float(vy),
                     radius=self.config.comet_radius * scale)

    def maybe_spawn_star(self, width: float, height: float, scale: float) -> Optional[CollectableStar]:
        if self.rng.random() >= self.config.star_spawn_rate:
            return None
        return CollectableStar(
            x=float(self.rng.random() * width),
            y=float(self.rng.random() * height),
            radius=self.config.star_radius * scale,
        )

    def generate_background_stars(self, width: float, height: float, scale: float) -> List[BackgroundStar]:
        return [
            BackgroundStar(
                x=float(self.rng.random() * width),
                y=float(self.rng.random() * height),
                radius=float((self.rng.random() * 2 + 1) * scale),
            )
            for _ in range(self.config.static_star_count)
        ]

    # ----------------------------
    # Level flow
    # ----------------------------

    def populate_level(self, sim):
        """Replace the planet and comet collections for ``sim.level``"""
        sim.planets = self.generate_planets_for_level(sim.level, sim.width, sim.height, sim.scale)
        sim.comets = []
        if sim.level >= self.config.comet_start_level:
            sim.comets.append(self.generate_comet(sim.width, sim.height, sim.scale))
        # Index still holds the previous level's entities
        sim.collisions.reset()

    def start_level(self, sim):
        """Reset the player, rebuild the level and hold it for the transition delay"""
        sim.state = GameState.LEVEL_TRANSITION
        sim.reset_player()
        sim.dragging = False
        sim.drag_start = None
        self.populate_level(sim)
        sim.transition_task = sim.scheduler.call_later(
            self.config.level_transition_delay,
            sim.finish_level_transition,
            name=f"level-{sim.level}-transition",
        )
        logger.info("Level %d: %d planets, %d comets, needs %.0f points",
                    sim.level, len(sim.planets), len(sim.comets),
                    self.required_score_for(sim.level))

    def check_level_completion(self, sim) -> bool:
        if sim.score < self.required_score_for(sim.level):
            return False
        sim.level += 1
        self.start_level(sim)
        return True
