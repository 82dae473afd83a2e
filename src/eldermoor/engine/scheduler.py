"""Deferred task queue for delayed game events.

Enemy retaliation happens "a moment later" rather than inside the attack
command. Instead of a timer thread, the session owns an EventQueue and
drains it when the caller signals that time has passed, which keeps the
engine single-threaded and lets tests run delayed events deterministically.
"""

from __future__ import annotations

import heapq
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from itertools import count

from eldermoor.core.logging import get_logger


logger = get_logger(__name__)


@dataclass(order=True)
class ScheduledTask:
    """A callback due at a point on the queue's clock.

    Attributes:
        due_at: Clock value at which the task becomes runnable.
        sequence: Tie-breaker preserving scheduling order.
        name: Label for diagnostics.
        callback: Zero-argument callable to run.
        cancelled: Set when the task should be skipped.
    """

    due_at: float
    sequence: int
    name: str = field(compare=False)
    callback: Callable[[], None] = field(compare=False, repr=False)
    cancelled: bool = field(default=False, compare=False)


class EventQueue:
    """Time-ordered queue of deferred callbacks.

    Example:
        >>> queue = EventQueue(clock=lambda: 0.0)
        >>> task = queue.schedule(1.0, "ping", lambda: None)
        >>> queue.run_due(0.5)
        0
        >>> queue.run_due(1.0)
        1
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._heap: list[ScheduledTask] = []
        self._sequence = count()

    @property
    def pending(self) -> int:
        """Number of tasks that have not run or been cancelled."""
        return sum(1 for task in self._heap if not task.cancelled)

    def now(self) -> float:
        return self._clock()

    def schedule(self, delay: float, name: str, callback: Callable[[], None]) -> ScheduledTask:
        """Schedule a callback ``delay`` seconds from now.

        Args:
            delay: Seconds until the task is due. Negative counts as zero.
            name: Label for diagnostics.
            callback: Callable to run once due.

        Returns:
            The scheduled task, usable with ``cancel``.
        """
        task = ScheduledTask(
            due_at=self._clock() + max(0.0, delay),
            sequence=next(self._sequence),
            name=name,
            callback=callback,
        )
        heapq.heappush(self._heap, task)
        logger.debug("Task scheduled", task=name, due_at=task.due_at)
        return task

    def cancel(self, task: ScheduledTask) -> None:
        task.cancelled = True

    def clear(self) -> None:
        """Drop every pending task."""
        for task in self._heap:
            task.cancelled = True
        self._heap.clear()

    def run_due(self, now: float | None = None) -> int:
        """Run every task due at or before ``now``, in due order.

        Tasks scheduled by a running callback are picked up in the same
        drain if they are already due.

        Args:
            now: Clock value to run up to. Defaults to the queue clock.

        Returns:
            Number of tasks executed.
        """
        if now is None:
            now = self._clock()

        executed = 0
        while self._heap and self._heap[0].due_at <= now:
            task = heapq.heappop(self._heap)
            if task.cancelled:
                continue
            logger.debug("Running task", task=task.name)
            task.callback()
            executed += 1
        return executed

    def run_all(self) -> int:
        """Run every pending task regardless of its due time."""
        executed = 0
        while self._heap:
            task = heapq.heappop(self._heap)
            if task.cancelled:
                continue
            logger.debug("Running task", task=task.name)
            task.callback()
            executed += 1
        return executed


__all__ = [
    "ScheduledTask",
    "EventQueue",
]
