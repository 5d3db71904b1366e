"""
Deferred Scheduler: single-shot, cancelable, time-deferred callbacks.

The Playback Orchestrator never sleeps. It hands callbacks to a scheduler
and keeps the returned handles so a later load can cancel them.

  AsyncioScheduler: runs on the current event loop (used by the HTTP app)
  ManualScheduler:  virtual clock advanced explicitly (tests, scripted hosts)

Both run every callback on the thread that owns the state, so callbacks
never overlap each other or a mutator.
"""

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple


class TaskHandle(Protocol):
    def cancel(self) -> None:
        ...


class DeferredScheduler(Protocol):
    """Protocol for deferred execution: pluggable backend."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TaskHandle:
        ...


class AsyncioScheduler:
    """Schedules on the running event loop. Must be called from loop code."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class ManualTask:
    """Handle returned by ManualScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Deterministic scheduler with a virtual clock.

    Nothing fires until `advance()` or `run_all()` is called. Tasks scheduled
    by a firing callback are picked up in the same advance if they fall due
    within the window.
    """

    def __init__(self):
        self.now = 0.0
        self._queue: List[Tuple[float, int, ManualTask]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTask:
        task = ManualTask(self.now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (task.due, next(self._counter), task))
        return task

    @property
    def pending(self) -> List[ManualTask]:
        """Tasks that have neither fired nor been cancelled, in due order."""
        return [t for _, _, t in sorted(self._queue) if not t.cancelled]

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing everything that falls due. Returns fired count."""
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            self.now = due
            task.fired = True
            task.callback()
            fired += 1
        self.now = target
        return fired

    def run_all(self) -> int:
        """Fire every pending task, including ones scheduled along the way."""
        fired = 0
        while self._queue:
            due, _, task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            self.now = max(self.now, due)
            task.fired = True
            task.callback()
            fired += 1
        return fired
