"""
Game entity dataclasses

Entities compare by identity (eq=False) so they can be used in sets and
removed from their collections without matching a look-alike.
"""

from dataclasses import dataclass


@dataclass(eq=False)
class Player:
    """The player's craft"""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    radius: float = 20.0
    is_moving: bool = False


@dataclass(eq=False)
class Planet:
    """Gravity source that drifts and bounces off the canvas edges"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    variant: int = 0  # visual type index


@dataclass(eq=False)
class Comet:
    """Lethal projectile that crosses the canvas from an edge"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float = 15.0


@dataclass(eq=False)
class CollectableStar:
    """Pickup worth a fixed score"""
    x: float
    y: float
    radius: float = 10.0


@dataclass(eq=False)
class BackgroundStar:
    """Decorative star, never collides"""
    x: float
    y: float
    radius: float = 1.0
