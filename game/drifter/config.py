"""
Game configuration for Stardust Drifter
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class GameConfig:
    """Tunable constants. Sizes and speeds are in reference pixels and get
    multiplied by the viewport scale when entities are created."""

    # Scaling
    base_height: float = 1080.0

    # Player
    player_radius: float = 20.0
    launch_power_divisor: float = 20.0
    max_launch_power: float = 10.0
    spawn_y_fraction: float = 1 / 3

    # Planets
    planet_min_radius: float = 20.0
    planet_max_radius: float = 50.0
    central_planet_radius: float = 40.0
    planet_drift_speed: float = 0.5
    num_planet_variants: int = 4
    gravity: float = 0.5

    # Comets
    comet_start_level: int = 3
    comet_speed: float = 2.0
    comet_radius: float = 15.0

    # Stars
    star_spawn_rate: float = 0.01  # probability per tick
    star_radius: float = 10.0
    star_score: int = 100
    static_star_count: int = 100
    survival_points_per_tick: int = 1

    # Levels
    level_transition_delay: float = 2.0  # seconds
    base_planet_count: int = 3
    planet_count_per_level: int = 2
    base_score_threshold: float = 1000.0
    score_threshold_multiplier: float = 1.5

    # Collision broadphase
    max_collision_distance: float = 200.0
    collision_check_frequency: int = 1  # rebuild grid every N ticks
    min_grid_cell_size: float = 100.0
    use_spatial_grid: bool = True

    def validate(self) -> "GameConfig":
        """Raise ValueError for values the simulation cannot run with"""
        positive = (
            "base_height", "player_radius", "launch_power_divisor",
            "planet_min_radius", "planet_max_radius", "central_planet_radius",
            "comet_radius", "star_radius", "min_grid_cell_size",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)!r}")

        non_negative = (
            "max_launch_power", "planet_drift_speed", "gravity", "comet_speed",
            "star_score", "static_star_count", "survival_points_per_tick",
            "level_transition_delay", "base_planet_count",
            "planet_count_per_level", "max_collision_distance",
        )
        for name in non_negative:
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)!r}")

        if self.planet_min_radius >= self.planet_max_radius:
            raise ValueError("planet_min_radius must be smaller than planet_max_radius")
        if self.num_planet_variants < 1:
            raise ValueError("num_planet_variants must be at least 1")
        if not 0.0 <= self.star_spawn_rate <= 1.0:
            raise ValueError("star_spawn_rate must be a probability in [0, 1]")
        if self.collision_check_frequency < 1:
            raise ValueError("collision_check_frequency must be >= 1")
        if self.base_score_threshold <= 0:
            raise ValueError("base_score_threshold must be > 0")
        if self.score_threshold_multiplier <= 1.0:
            raise ValueError("score_threshold_multiplier must be > 1 for levels to escalate")
        if self.comet_start_level < 1:
            raise ValueError("comet_start_level must be >= 1")
        if not 0.0 <= self.spawn_y_fraction <= 1.0:
            raise ValueError("spawn_y_fraction must be in [0, 1]")
        return self

    def scale_for(self, viewport_height: float) -> float:
        """Resolution multiplier for a viewport of the given height"""
        if viewport_height <= 0:
            raise ValueError(f"viewport height must be > 0, got {viewport_height!r}")
        return viewport_height / self.base_height

    def grid_cell_size(self, scale: float) -> float:
        # Big enough to hold the largest planet
        return max(self.planet_max_radius * 2 * scale, self.min_grid_cell_size)

    def with_overrides(self, **overrides: Any) -> "GameConfig":
        return replace(self, **overrides).validate()


DEFAULT_CONFIG = GameConfig()
