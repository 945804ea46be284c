"""2D Game module - Stardust Drifter gravity-slingshot simulation and environment"""

from .config import GameConfig, DEFAULT_CONFIG
from .states import GameState
from .simulation import Simulation
from .drifter_env import DrifterEnv, run_random_episode

__all__ = ['GameConfig', 'DEFAULT_CONFIG', 'GameState', 'Simulation', 'DrifterEnv', 'run_random_episode']
