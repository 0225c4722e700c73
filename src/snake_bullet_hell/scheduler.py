"""Cooperative fixed-rate scheduler driven by elapsed frame time."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PeriodicTask:
    name: str
    period: float
    callback: Callable[[], None]
    order: int
    due: float = 0.0


class TickScheduler:
    """Runs named periodic tasks on one thread, in time order.

    Time only moves when :meth:`advance` is called, so the caller decides
    whether the clock is real (a frame loop) or simulated (tests). Tasks due
    at the same instant fire in the order they were added. Each task's own
    firings are strictly ordered; nothing ever runs concurrently.
    """

    def __init__(self) -> None:
        self._tasks: Dict[str, PeriodicTask] = {}
        self.now: float = 0.0
        self.running: bool = False

    def add(self, name: str, period: float, callback: Callable[[], None]) -> None:
        if name in self._tasks:
            raise ValueError(f"Task {name!r} is already scheduled.")
        if period <= 0:
            raise ValueError(f"Task {name!r} needs a positive period, got {period}.")
        self._tasks[name] = PeriodicTask(
            name=name,
            period=float(period),
            callback=callback,
            order=len(self._tasks),
            due=self.now + period,
        )

    def period(self, name: str) -> float:
        return self._tasks[name].period

    def start(self) -> None:
        """(Re)start every task with a full period ahead of it."""
        self.now = 0.0
        for task in self._tasks.values():
            task.due = task.period
        self.running = True

    def stop(self) -> None:
        self.running = False

    def reschedule(self, name: str, period: float) -> None:
        """Change a task's period; its next firing is one new period from now."""
        if period <= 0:
            raise ValueError(f"Task {name!r} needs a positive period, got {period}.")
        task = self._tasks[name]
        task.period = float(period)
        task.due = self.now + task.period
        logger.debug("Rescheduled %s every %.1f ms", name, task.period)

    def advance(self, elapsed: float) -> int:
        """Move the clock forward and fire everything that came due.

        Returns how many firings happened. Stops early if a callback stops
        the scheduler.
        """
        if not self.running or elapsed <= 0:
            return 0
        target = self.now + elapsed
        fired = 0
        while self.running:
            task = self._next_due(target)
            if task is None:
                break
            self.now = task.due
            scheduled = task.due
            task.callback()
            fired += 1
            if task.due == scheduled:
                task.due += task.period
        if self.running:
            self.now = target
        return fired

    def _next_due(self, limit: float) -> PeriodicTask | None:
        ready: List[PeriodicTask] = [
            task for task in self._tasks.values() if task.due <= limit
        ]
        if not ready:
            return None
        return min(ready, key=lambda task: (task.due, task.order))
