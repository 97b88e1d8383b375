"""
Scheduler
=========

Single-threaded repeating task scheduler on a virtual clock.

The round uses two drivers: the animation tick and the once-per-second
countdown. Both run on one ManualScheduler so callbacks never overlap.
Real-time front ends feed it frame time with advance(); tests and
headless runs advance it by exact amounts.
"""

from __future__ import annotations

from typing import Callable, List, Optional

# Tolerance for float drift when comparing due times
_EPSILON = 1e-9


class RepeatingTask:
    """Handle for a callback that fires every `interval` seconds until cancelled."""

    def __init__(
        self,
        scheduler: "ManualScheduler",
        interval: float,
        callback: Callable[[], None],
        start_time: float,
        order: int,
        name: str = ""
    ):
        self._scheduler = scheduler
        self.interval = interval
        self.callback = callback
        self.name = name
        self._start_time = start_time
        self._order = order
        self._fired: int = 0
        self._cancelled: bool = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fire_count(self) -> int:
        """Number of times the callback has run."""
        return self._fired

    @property
    def next_due(self) -> float:
        # Multiplying avoids accumulating interval rounding error
        return self._start_time + (self._fired + 1) * self.interval

    def cancel(self) -> None:
        """Stop future firings. Safe to call from inside any callback."""
        if not self._cancelled:
            self._cancelled = True
            self._scheduler._discard(self)

    def _sort_key(self):
        return (self.next_due, self._order)

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else f"next_due={self.next_due:.4f}"
        return f"RepeatingTask({self.name or 'task'}, interval={self.interval}, {state})"


class ManualScheduler:
    """
    Deterministic scheduler advanced explicitly by the caller.

    Tasks due at the same instant fire in the order they were scheduled.
    """

    def __init__(self, start_time: float = 0.0):
        self._now = start_time
        self._tasks: List[RepeatingTask] = []
        self._order = 0

    @property
    def now(self) -> float:
        """Current virtual time in seconds."""
        return self._now

    @property
    def active_tasks(self) -> List[RepeatingTask]:
        return list(self._tasks)

    def schedule_repeating(
        self,
        interval: float,
        callback: Callable[[], None],
        name: str = ""
    ) -> RepeatingTask:
        """
        Schedule callback every interval seconds, first firing one interval from now.

        Args:
            interval: Period in seconds. Must be positive.
            callback: Zero-argument callable.
            name: Label for debugging.

        Returns:
            Cancellable task handle.
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        task = RepeatingTask(self, interval, callback, self._now, self._order, name)
        self._order += 1
        self._tasks.append(task)
        return task

    def _discard(self, task: RepeatingTask) -> None:
        if task in self._tasks:
            self._tasks.remove(task)

    def _next_task(self) -> Optional[RepeatingTask]:
        if not self._tasks:
            return None
        return min(self._tasks, key=RepeatingTask._sort_key)

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward, firing every task that comes due.

        Args:
            seconds: Amount of virtual time to advance. Negative values are ignored.

        Returns:
            Number of callbacks fired.
        """
        target = self._now + max(0.0, seconds)
        fired = 0

        while True:
            task = self._next_task()
            if task is None or task.next_due > target + _EPSILON:
                break

            self._now = max(self._now, task.next_due)
            task._fired += 1
            task.callback()
            fired += 1

        self._now = target
        return fired

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()
