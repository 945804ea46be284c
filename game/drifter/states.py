"""Game state machine values"""

from enum import Enum


class GameState(str, Enum):
    START = "START"
    LEVEL_TRANSITION = "LEVEL_TRANSITION"
    PLAYING = "PLAYING"
    GAME_OVER = "GAME_OVER"
