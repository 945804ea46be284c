"""
Deferred callbacks that can be invalidated wholesale

Tasks carry the scheduler generation they were created in. ``invalidate``
bumps the generation, so anything queued before a reset is discarded
instead of firing into the new game.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class ScheduledTask:
    due: float
    generation: int
    callback: Callable[[], None] = field(repr=False)
    name: str = ""
    cancelled: bool = False

    def cancel(self):
        self.cancelled = True


class TaskScheduler:
    """Time-based task queue polled by the frame driver"""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self.generation = 0
        self._pending: List[ScheduledTask] = []

    def call_later(self, delay: float, callback: Callable[[], None], name: str = "") -> ScheduledTask:
        task = ScheduledTask(
            due=self.clock() + max(0.0, delay),
            generation=self.generation,
            callback=callback,
            name=name,
        )
        self._pending.append(task)
        return task

    def invalidate(self):
        """Drop every pending task and reject any that is still referenced"""
        self.generation += 1
        for task in self._pending:
            task.cancel()
        self._pending = []

    def is_current(self, task: ScheduledTask) -> bool:
        return not task.cancelled and task.generation == self.generation

    def run_due(self, now: Optional[float] = None) -> int:
        """Fire every due task from the current generation. Returns the count fired."""
        if now is None:
            now = self.clock()
        due = [t for t in self._pending if t.due <= now]
        if not due:
            return 0
        self._pending = [t for t in self._pending if t.due > now]

        fired = 0
        for task in sorted(due, key=lambda t: t.due):
            if not self.is_current(task):
                logger.debug("Skipping stale task %s (generation %d)", task.name, task.generation)
                continue
            task.callback()
            fired += 1
        return fired

    @property
    def pending(self) -> List[ScheduledTask]:
        return [t for t in self._pending if self.is_current(t)]
