"""
Planet gravity acting on the player
"""

from __future__ import annotations

from typing import Iterable, Tuple

# Squared distances at or below this are ignored to avoid the singularity
MIN_DISTANCE_SQ = 1.0


def gravity_acceleration(
    px: float,
    py: float,
    planets: Iterable,
    gravity: float,
    scale: float,
) -> Tuple[float, float]:
    """Net acceleration at (px, py).

    Each planet pulls along the offset vector with strength
    gravity * radius / d^2 (radius stands in for mass), times ``scale``.
    """
    ax, ay = 0.0, 0.0
    for p in planets:
        dx = p.x - px
        dy = p.y - py
        dist_sq = dx * dx + dy * dy
        if dist_sq <= MIN_DISTANCE_SQ:
            continue
        force = (gravity * p.radius / dist_sq) * scale
        ax += dx * force
        ay += dy * force
    return ax, ay


def integrate_player(player, planets: Iterable, gravity: float, scale: float) -> bool:
    """Semi-implicit Euler step: velocity first, then position.

    Does nothing for a player that has not been launched. Returns whether
    the player moved.
    """
    if not player.is_moving:
        return False
    ax, ay = gravity_acceleration(player.x, player.y, planets, gravity, scale)
    player.vx += ax
    player.vy += ay
    player.x += player.vx
    player.y += player.vy
    return True
