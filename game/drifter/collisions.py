"""
Player collision queries against planets, comets and stars
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .spatial import BruteForceIndex
from .utils import distance_sq, entities_collide


class CollisionEngine:
    """Answers "what does the player touch" using a pluggable broadphase.

    ``index`` is any object with clear/insert_all/query_near (a SpatialGrid,
    or BruteForceIndex for the plain O(n) scan). The broadphase and the
    distance cull only drop candidates; the final answer always comes from
    the exact circle test.
    """

    def __init__(
        self,
        index=None,
        max_distance: Optional[float] = None,
        rebuild_every: int = 1,
    ):
        if rebuild_every < 1:
            raise ValueError("rebuild_every must be >= 1")
        self.index = index if index is not None else BruteForceIndex()
        self.max_distance = max_distance
        self.rebuild_every = rebuild_every
        self._passes = 0

    def rebuild(self, *collections: Iterable):
        self.index.clear()
        for entities in collections:
            self.index.insert_all(entities)

    def begin_pass(self, *collections: Iterable) -> bool:
        """Count one collision pass; rebuilds the index on the first pass and
        every ``rebuild_every`` passes after it. Returns True when a rebuild
        happened."""
        self._passes += 1
        if (self._passes - 1) % self.rebuild_every == 0:
            self.rebuild(*collections)
            return True
        return False

    def reset(self):
        """Forget the indexed entities; the next pass rebuilds"""
        self._passes = 0
        self.index.clear()

    def candidates(self, player, entities: Sequence) -> list:
        """Members of ``entities`` the broadphase says may touch the player"""
        if not entities:
            return []
        members = set(entities)
        near = [e for e in self.index.query_near(player) if e in members]
        if self.max_distance is None:
            return near

        kept = []
        for e in near:
            # Never cull below the touching distance
            limit = max(self.max_distance, player.radius + e.radius)
            if distance_sq(player, e) < limit * limit:
                kept.append(e)
        return kept

    def first_hit(self, player, dangers: Sequence):
        """First dangerous entity overlapping the player, or None"""
        for e in self.candidates(player, dangers):
            if entities_collide(player, e):
                return e
        return None

    def pickups_hit(self, player, pickups: Sequence) -> List:
        """Every pickup overlapping the player"""
        return [e for e in self.candidates(player, pickups) if entities_collide(player, e)]

    @staticmethod
    def out_of_bounds(player, width: float, height: float) -> bool:
        return player.x < 0 or player.x > width or player.y < 0 or player.y > height
