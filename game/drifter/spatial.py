"""
Broadphase indices for collision queries

Both indices expose the same three calls (clear / insert / query_near) so
the collision engine can be built with either one. Entities only need
``x``, ``y`` and ``radius`` attributes and must be hashable.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Tuple


class SpatialGrid:
    """Uniform grid of square cells covering [0, width] x [0, height].

    An entity is registered in every cell its bounding square touches, so
    two entities whose squares overlap inside the grid always share a
    cell. Queries can return false positives; callers narrow them with an
    exact test.
    """

    def __init__(self, width: float, height: float, cell_size: float):
        if cell_size <= 0:
            raise ValueError(f"cell_size must be > 0, got {cell_size!r}")
        if width <= 0 or height <= 0:
            raise ValueError(f"grid bounds must be positive, got {width!r}x{height!r}")

        self.width = width
        self.height = height
        self.cell_size = float(cell_size)
        self.cols = max(1, math.ceil(width / self.cell_size))
        self.rows = max(1, math.ceil(height / self.cell_size))
        self.cells: List[list] = [[] for _ in range(self.cols * self.rows)]

    def clear(self):
        for bucket in self.cells:
            bucket.clear()

    def _cell_range(self, ent) -> Tuple[int, int, int, int]:
        cs = self.cell_size
        c0 = max(0, math.floor((ent.x - ent.radius) / cs))
        c1 = min(self.cols - 1, math.floor((ent.x + ent.radius) / cs))
        r0 = max(0, math.floor((ent.y - ent.radius) / cs))
        r1 = min(self.rows - 1, math.floor((ent.y + ent.radius) / cs))
        # Empty range when the square lies fully outside the grid
        return c0, c1, r0, r1

    def cells_for(self, ent) -> List[int]:
        """Flat indices of the cells the entity's bounding square overlaps"""
        c0, c1, r0, r1 = self._cell_range(ent)
        return [col + row * self.cols
                for row in range(r0, r1 + 1)
                for col in range(c0, c1 + 1)]

    def insert(self, ent):
        for idx in self.cells_for(ent):
            self.cells[idx].append(ent)

    def insert_all(self, ents: Iterable):
        for ent in ents:
            self.insert(ent)

    def query_near(self, ent) -> list:
        """Entities sharing at least one cell with ``ent``, without duplicates"""
        nearby = {}
        for idx in self.cells_for(ent):
            for other in self.cells[idx]:
                nearby[other] = None
        return list(nearby)

    def __len__(self):
        return len({e for bucket in self.cells for e in bucket})


class BruteForceIndex:
    """Degenerate index: every inserted entity is a candidate for every query"""

    def __init__(self):
        self._entities: list = []

    def clear(self):
        self._entities.clear()

    def insert(self, ent):
        self._entities.append(ent)

    def insert_all(self, ents: Iterable):
        self._entities.extend(ents)

    def query_near(self, ent) -> list:
        return list(dict.fromkeys(self._entities))

    def __len__(self):
        return len(self._entities)
