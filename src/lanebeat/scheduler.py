"""Game-clock scheduler for periodic and one-shot tasks.

The clock only moves when ``advance`` is called, so whatever drives it
(normally the frame loop) decides when tasks are suspended.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class ScheduledTask:
    """A callback due at ``due_ms``; repeats every ``interval_ms`` when periodic."""

    def __init__(
        self,
        name: str,
        callback: Callable[[], object],
        due_ms: float,
        interval_ms: float | None = None,
    ) -> None:
        self.name = name
        self.callback = callback
        self.due_ms = due_ms
        self.interval_ms = interval_ms
        self.cancelled = False
        self.fired = 0

    @property
    def periodic(self) -> bool:
        return self.interval_ms is not None

    def cancel(self) -> bool:
        """Cancel the task. Returns True only for the call that cancelled it."""
        if self.cancelled:
            return False
        self.cancelled = True
        logger.debug("Cancelled task %s after %d firings", self.name, self.fired)
        return True


class Scheduler:
    def __init__(self) -> None:
        self.now_ms: float = 0.0
        self._tasks: list[ScheduledTask] = []

    def every(self, interval_ms: float, callback: Callable[[], object], name: str = "") -> ScheduledTask:
        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive, got {interval_ms}")
        task = ScheduledTask(name or "periodic", callback, self.now_ms + interval_ms, interval_ms)
        self._tasks.append(task)
        return task

    def after(self, delay_ms: float, callback: Callable[[], object], name: str = "") -> ScheduledTask:
        task = ScheduledTask(name or "oneshot", callback, self.now_ms + max(0.0, delay_ms))
        self._tasks.append(task)
        return task

    @property
    def tasks(self) -> list[ScheduledTask]:
        return [t for t in self._tasks if not t.cancelled]

    def advance(self, dt_ms: float) -> int:
        """Move the clock forward and fire every task that fell due. Returns the firing count."""
        if dt_ms < 0:
            raise ValueError(f"Cannot move the clock backwards ({dt_ms} ms)")
        self.now_ms += dt_ms
        fired = 0

        while True:
            due = [t for t in self._tasks if not t.cancelled and t.due_ms <= self.now_ms]
            if not due:
                break
            task = min(due, key=lambda t: t.due_ms)
            if task.periodic:
                task.due_ms += task.interval_ms
            else:
                task.cancelled = True
            task.fired += 1
            fired += 1
            task.callback()

        self._tasks = [t for t in self._tasks if not t.cancelled]
        return fired

    def cancel_all(self) -> int:
        """Cancel every live task. Returns how many were cancelled."""
        count = sum(1 for t in self._tasks if t.cancel())
        self._tasks = []
        return count
