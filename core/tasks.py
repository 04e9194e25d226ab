import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)

_ids = itertools.count(1)


@dataclass
class PendingTask:
    """Simulated background work that completes once `due_at` has passed.

    Tasks complete only when their group is polled, so a cancelled task
    never runs its callback.
    """

    name: str
    due_at: float
    on_done: Callable[[], None]
    task_id: int = field(default_factory=lambda: next(_ids))
    cancelled: bool = False
    finished: bool = False

    def cancel(self) -> bool:
        if self.finished:
            return False
        self.cancelled = True
        return True

    def done(self) -> bool:
        return self.finished or self.cancelled


class TaskGroup:
    """Tasks owned by one screen; cancelled together when the screen is left."""

    def __init__(self, owner: str, clock: Callable[[], float] = time.monotonic):
        self.owner = owner
        self._clock = clock
        self._tasks: list[PendingTask] = []

    def start(self, name: str, delay: float, on_done: Callable[[], None]) -> PendingTask:
        task = PendingTask(name=name, due_at=self._clock() + delay, on_done=on_done)
        self._tasks.append(task)
        logger.debug("Started task %s (%s) for %s", task.task_id, name, self.owner)
        return task

    def pending(self) -> list[PendingTask]:
        return [t for t in self._tasks if not t.done()]

    def is_running(self, name: str) -> bool:
        return any(t.name == name for t in self.pending())

    def poll(self, now: float | None = None) -> list[PendingTask]:
        """Complete every due task and return the ones that completed."""
        now = self._clock() if now is None else now
        completed = []
        for task in self.pending():
            if task.due_at <= now:
                task.finished = True
                task.on_done()
                completed.append(task)
        self._tasks = self.pending()
        return completed

    def cancel_all(self) -> int:
        count = sum(1 for t in self.pending() if t.cancel())
        if count:
            logger.info("Cancelled %d pending task(s) for %s", count, self.owner)
        self._tasks = []
        return count
