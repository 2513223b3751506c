"""Cancellable delayed callbacks for AI turns and enemy counter-attacks.

Tasks are keyed by ``(session_id, turn_id)`` so a whole session, or just
one of its turns, can be cancelled with a key prefix. Two implementations
share the interface:

- ``AsyncioScheduler`` runs callbacks on the event loop (server use)
- ``ManualScheduler`` keeps a virtual clock that callers advance by hand
  (tests and the CLI simulation)
"""

import asyncio
import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

TaskKey = tuple


@dataclass
class ScheduledTask:
    """Handle for one pending callback."""

    key: TaskKey
    due: float
    callback: Callable[[], None]
    seq: int = 0
    cancelled: bool = False
    fired: bool = False
    handle: Any = field(default=None, repr=False)  # asyncio.TimerHandle for AsyncioScheduler

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def matches(self, key_prefix: TaskKey) -> bool:
        return self.key[: len(key_prefix)] == tuple(key_prefix)


class Scheduler(ABC):
    """Interface shared by every scheduler."""

    def __init__(self):
        self._tasks: list[ScheduledTask] = []
        self._seq = itertools.count()

    @abstractmethod
    def now(self) -> float:
        """Current time on this scheduler's clock, in seconds."""

    @abstractmethod
    def _arm(self, task: ScheduledTask, delay: float) -> None:
        """Arrange for ``task`` to fire after ``delay`` seconds."""

    def schedule(self, delay: float, key: TaskKey, callback: Callable[[], None]) -> ScheduledTask:
        """Run ``callback`` after ``delay`` seconds.

        Args:
            delay: Seconds to wait
            key: (session_id, turn_id) the task belongs to
            callback: Zero-argument callable

        Returns:
            ScheduledTask handle
        """
        task = ScheduledTask(key=tuple(key), due=self.now() + delay, callback=callback, seq=next(self._seq))
        self._tasks.append(task)
        self._arm(task, delay)
        return task

    def cancel(self, key_prefix: TaskKey) -> int:
        """Cancel every pending task whose key starts with ``key_prefix``.

        Returns:
            Number of tasks cancelled
        """
        cancelled = 0
        for task in self._tasks:
            if task.pending and task.matches(key_prefix):
                task.cancelled = True
                if task.handle is not None:
                    task.handle.cancel()
                cancelled += 1
        self._tasks = [task for task in self._tasks if task.pending]
        if cancelled:
            logger.debug(f"Cancelled {cancelled} task(s) for {key_prefix}")
        return cancelled

    def pending(self, key_prefix: TaskKey = ()) -> list[ScheduledTask]:
        """Pending tasks, optionally filtered by key prefix."""
        return [task for task in self._tasks if task.pending and task.matches(key_prefix)]

    def _fire(self, task: ScheduledTask) -> None:
        if not task.pending:
            return
        task.fired = True
        self._tasks = [t for t in self._tasks if t.pending]
        task.callback()


class AsyncioScheduler(Scheduler):
    """Scheduler backed by ``loop.call_later``.

    Without an explicit loop, tasks go to whichever loop is running when
    they are scheduled.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        super().__init__()
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def now(self) -> float:
        return self.loop.time()

    def _arm(self, task: ScheduledTask, delay: float) -> None:
        task.handle = self.loop.call_later(delay, self._fire_logged, task)

    def _fire_logged(self, task: ScheduledTask) -> None:
        """Fire a task on the loop; a failing callback is logged, not re-raised."""
        try:
            self._fire(task)
        except Exception as e:
            logger.error(f"Scheduled task {task.key} failed: {e}", exc_info=True)


class ManualScheduler(Scheduler):
    """Scheduler with a virtual clock, advanced explicitly.

    Tasks due at the same instant fire in the order they were scheduled.
    Callbacks may schedule further tasks; those fire too if they fall due
    inside the window being advanced.
    """

    def __init__(self):
        super().__init__()
        self._now = 0.0

    def now(self) -> float:
        return self._now

    def _arm(self, task: ScheduledTask, delay: float) -> None:
        pass

    def _next_due(self) -> Optional[ScheduledTask]:
        pending = [task for task in self._tasks if task.pending]
        if not pending:
            return None
        return min(pending, key=lambda task: (task.due, task.seq))

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing every task that falls due.

        Args:
            seconds: Time to advance

        Returns:
            Number of tasks fired
        """
        target = self._now + seconds
        fired = 0
        while True:
            task = self._next_due()
            if task is None or task.due > target:
                break
            self._now = task.due
            self._fire(task)
            fired += 1
        self._now = target
        return fired

    def run_next(self) -> bool:
        """Jump the clock to the next due task and fire it.

        Returns:
            False if nothing was pending
        """
        task = self._next_due()
        if task is None:
            return False
        self._now = max(self._now, task.due)
        self._fire(task)
        return True

    def run_until_idle(self, max_tasks: int = 10_000) -> int:
        """Fire tasks in due order until none are left.

        Args:
            max_tasks: Safety limit on the number of tasks fired

        Returns:
            Number of tasks fired
        """
        fired = 0
        while fired < max_tasks:
            task = self._next_due()
            if task is None:
                return fired
            self._now = max(self._now, task.due)
            self._fire(task)
            fired += 1
        logger.warning(f"run_until_idle stopped after {max_tasks} tasks with work still pending")
        return fired
