"""
Per-tick entity movement: drift with wall bounce, and off-screen culling
"""

from __future__ import annotations

from typing import List


def advance(ent):
    ent.x += ent.vx
    ent.y += ent.vy


def bounce_off_walls(ent, width: float, height: float):
    """Flip the velocity component of any axis the entity has crossed.

    Position is not corrected, so an entity can sit slightly past the edge
    for a tick before it turns around.
    """
    if ent.x < ent.radius or ent.x > width - ent.radius:
        ent.vx = -ent.vx
    if ent.y < ent.radius or ent.y > height - ent.radius:
        ent.vy = -ent.vy


def is_off_screen(ent, width: float, height: float) -> bool:
    r = ent.radius
    return ent.x < -r or ent.x > width + r or ent.y < -r or ent.y > height + r


def update_planets(planets: List, width: float, height: float):
    for p in planets:
        advance(p)
        bounce_off_walls(p, width, height)


def update_comets(comets: List, width: float, height: float) -> List:
    """Move comets and return the ones still on screen"""
    kept = []
    for c in comets:
        advance(c)
        if not is_off_screen(c, width, height):
            kept.append(c)
    return kept
