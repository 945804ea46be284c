"""
Stardust Drifter simulation
---------------------------
One object owns the whole game: entity collections, score, level and the
state machine

    START --input--> PLAYING --score threshold--> LEVEL_TRANSITION
    LEVEL_TRANSITION --delay elapsed or input--> PLAYING
    PLAYING --collision / out of bounds--> GAME_OVER
    any --reset()--> START

A host (arcade window, gym env, tests) calls ``frame()`` once per rendered
frame and forwards pointer/key events. Nothing here draws or blocks.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Callable, List, Optional, Tuple

import numpy as np

from .collisions import CollisionEngine
from .config import DEFAULT_CONFIG, GameConfig
from .entities import BackgroundStar, CollectableStar, Comet, Planet, Player
from .gravity import integrate_player
from .levels import LevelDirector
from .motion import update_comets, update_planets
from .scheduler import ScheduledTask, TaskScheduler
from .spatial import BruteForceIndex, SpatialGrid
from .states import GameState

logger = logging.getLogger(__name__)


class Simulation:
    """Fixed-step game simulation for a ``width`` x ``height`` viewport"""

    def __init__(
        self,
        width: float,
        height: float,
        config: Optional[GameConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
        on_score: Optional[Callable[[int], None]] = None,
        on_game_over: Optional[Callable[[int], None]] = None,
    ):
        self.config = (config or DEFAULT_CONFIG).validate()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.scheduler = TaskScheduler(clock)
        self.director = LevelDirector(self.config, self.rng)

        # Display sinks
        self.on_score = on_score
        self.on_game_over = on_game_over

        # World state, filled by reset()
        self.player: Player = None  # type: ignore
        self.planets: List[Planet] = []
        self.comets: List[Comet] = []
        self.collectable_stars: List[CollectableStar] = []
        self.background_stars: List[BackgroundStar] = []
        self.score = 0
        self.level = 1
        self.state = GameState.START
        self.death_cause: Optional[str] = None
        self.stars_collected = 0
        self.ticks = 0

        # Drag gesture
        self.dragging = False
        self.drag_start: Optional[Tuple[float, float]] = None

        self.transition_task: Optional[ScheduledTask] = None

        self._configure_viewport(width, height)
        self.reset()

    # ----------------------------
    # Setup
    # ----------------------------

    def _configure_viewport(self, width: float, height: float):
        cfg = self.config
        self.width = width
        self.height = height
        self.scale = cfg.scale_for(height)

        if cfg.use_spatial_grid:
            index = SpatialGrid(width, height, cfg.grid_cell_size(self.scale))
        else:
            index = BruteForceIndex()
        self.collisions = CollisionEngine(
            index=index,
            max_distance=cfg.max_collision_distance * self.scale,
            rebuild_every=cfg.collision_check_frequency,
        )

    def reset(self):
        """Full game reset back to START"""
        # Anything scheduled by the previous game must not fire
        self.scheduler.invalidate()
        self.transition_task = None

        self.score = 0
        self.level = 1
        self.state = GameState.START
        self.death_cause = None
        self.stars_collected = 0
        self.ticks = 0
        self.dragging = False
        self.drag_start = None

        self.player = Player(x=0.0, y=0.0, radius=self.config.player_radius * self.scale)
        self.reset_player()
        self.planets = []
        self.comets = []
        self.collectable_stars = []
        self.background_stars = self.director.generate_background_stars(
            self.width, self.height, self.scale)
        self.collisions.reset()

        self._notify_score()
        logger.debug("Reset %dx%d viewport (scale %.3f)", self.width, self.height, self.scale)

    def resize(self, width: float, height: float):
        """New viewport size; restarts the game"""
        logger.info("Viewport resized to %dx%d", width, height)
        self._configure_viewport(width, height)
        self.reset()

    def reset_player(self):
        p = self.player
        p.x = self.width / 2
        p.y = self.height * self.config.spawn_y_fraction
        p.vx = 0.0
        p.vy = 0.0
        p.is_moving = False

    # ----------------------------
    # State transitions
    # ----------------------------

    @property
    def running(self) -> bool:
        """False once the game is over; the host should stop ticking"""
        return self.state != GameState.GAME_OVER

    @property
    def required_score(self) -> float:
        return self.director.required_score_for(self.level)

    def start_game(self):
        """Handle START/LEVEL_TRANSITION input"""
        if self.state == GameState.START:
            self.state = GameState.PLAYING
            self.director.populate_level(self)
            logger.info("Game started with %d planets", len(self.planets))
        elif self.state == GameState.LEVEL_TRANSITION:
            # Skip the wait; the pending timer must not end a later transition
            if self.transition_task is not None:
                self.transition_task.cancel()
                self.transition_task = None
            self.state = GameState.PLAYING

    def finish_level_transition(self):
        if self.state == GameState.LEVEL_TRANSITION:
            self.state = GameState.PLAYING
            self.transition_task = None

    def game_over(self, cause: str):
        if self.state == GameState.GAME_OVER:
            return
        self.state = GameState.GAME_OVER
        self.death_cause = cause
        self.dragging = False
        self.scheduler.invalidate()
        self.transition_task = None
        logger.info("Game over (%s) at level %d with score %d", cause, self.level, self.score)
        if self.on_game_over is not None:
            self.on_game_over(self.score)

    # ----------------------------
    # Input
    # ----------------------------

    def pointer_down(self, x: float, y: float):
        if self.state in (GameState.START, GameState.LEVEL_TRANSITION):
            self.start_game()
            return
        if self.state != GameState.PLAYING:
            return
        self.dragging = True
        self.drag_start = (x, y)

    def pointer_up(self, x: float, y: float):
        if not self.dragging:
            return
        self.dragging = False
        sx, sy = self.drag_start
        self.drag_start = None
        if self.state != GameState.PLAYING:
            return
        self.launch(x - sx, y - sy)

    def key_down(self):
        if self.state in (GameState.START, GameState.LEVEL_TRANSITION):
            self.start_game()

    def launch_velocity(self, dx: float, dy: float) -> Tuple[float, float]:
        """Velocity for a drag of (dx, dy) pixels"""
        cfg = self.config
        angle = math.atan2(dy, dx)
        power = min(
            math.hypot(dx, dy) / (cfg.launch_power_divisor * self.scale),
            cfg.max_launch_power * self.scale,
        )
        return math.cos(angle) * power, math.sin(angle) * power

    def launch(self, dx: float, dy: float):
        self.player.vx, self.player.vy = self.launch_velocity(dx, dy)
        self.player.is_moving = True

    @property
    def drag_line(self) -> Optional[Tuple[Tuple[float, float], Tuple[float, float]]]:
        """(player position, drag origin) while a drag is in progress"""
        if not self.dragging or self.drag_start is None:
            return None
        return (self.player.x, self.player.y), self.drag_start

    # ----------------------------
    # Per-frame update
    # ----------------------------

    def frame(self, now: Optional[float] = None) -> bool:
        """One host frame: fire due timers, then step if playing.
        Returns whether the host should keep running frames."""
        self.scheduler.run_due(now)
        if self.state == GameState.PLAYING:
            self.update()
        return self.running

    def update(self):
        """Advance the world by one tick"""
        if self.state != GameState.PLAYING:
            return
        assert self.player is not None, "simulation has no player"

        update_planets(self.planets, self.width, self.height)
        self.comets = update_comets(self.comets, self.width, self.height)

        if integrate_player(self.player, self.planets, self.config.gravity, self.scale):
            self.add_score(self.config.survival_points_per_tick)

        star = self.director.maybe_spawn_star(self.width, self.height, self.scale)
        if star is not None:
            self.collectable_stars.append(star)

        self.ticks += 1
        if self.check_collisions():
            return
        self.director.check_level_completion(self)

    def check_collisions(self) -> bool:
        """Resolve this tick's contacts. Returns True if the game ended."""
        player = self.player
        self.collisions.begin_pass(self.planets, self.comets, self.collectable_stars)

        if self.collisions.first_hit(player, self.planets) is not None:
            self.game_over("planet")
            return True
        if self.collisions.first_hit(player, self.comets) is not None:
            self.game_over("comet")
            return True

        picked = self.collisions.pickups_hit(player, self.collectable_stars)
        if picked:
            taken = set(picked)
            self.collectable_stars = [s for s in self.collectable_stars if s not in taken]
            self.stars_collected += len(picked)
            self.add_score(self.config.star_score * len(picked))

        if self.collisions.out_of_bounds(player, self.width, self.height):
            self.game_over("boundary")
            return True
        return False

    def add_score(self, points: int):
        if points <= 0:
            return
        self.score += points
        self._notify_score()

    def _notify_score(self):
        if self.on_score is not None:
            self.on_score(self.score)
