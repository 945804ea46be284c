"""
Utility functions for game mechanics
"""

from __future__ import annotations


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance_sq(a, b) -> float:
    """Squared distance between two entities' centers"""
    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (touching is not a hit)"""
    dx = x1 - x2
    dy = y1 - y2
    rr = r1 + r2
    return (dx * dx + dy * dy) < (rr * rr)


def aabb_overlap(x1, y1, r1, x2, y2, r2) -> bool:
    """Bounding-box overlap with the radius as half-extent on both axes"""
    rr = r1 + r2
    return abs(x1 - x2) < rr and abs(y1 - y2) < rr


def entities_collide(a, b) -> bool:
    """Box pre-filter followed by the exact circle test"""
    if not aabb_overlap(a.x, a.y, a.radius, b.x, b.y, b.radius):
        return False
    return circle_collide(a.x, a.y, a.radius, b.x, b.y, b.radius)
