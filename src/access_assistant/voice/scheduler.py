"""Delayed callbacks used for capture restarts."""

from __future__ import annotations

import heapq
import itertools
import threading
from typing import Callable, Protocol


class ScheduledCall(Protocol):
    def cancel(self) -> None:
        """Prevent the callback from running if it has not run yet."""


class Scheduler(Protocol):
    """Runs a callback once after a delay."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledCall:
        """Schedule ``callback`` and return a handle that can cancel it."""


class ThreadingScheduler:
    """Scheduler backed by daemon :class:`threading.Timer` threads."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledCall:
        timer = threading.Timer(max(0.0, delay_seconds), callback)
        timer.daemon = True
        timer.start()
        return timer


class _ManualCall:
    __slots__ = ("due", "callback", "cancelled")

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic scheduler driven by :meth:`advance` or :meth:`run_pending`."""

    def __init__(self) -> None:
        self._now = 0.0
        self._counter = itertools.count()
        self._queue: list[tuple[float, int, _ManualCall]] = []

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledCall:
        call = _ManualCall(self._now + max(0.0, delay_seconds), callback)
        heapq.heappush(self._queue, (call.due, next(self._counter), call))
        return call

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every callback that became due. Returns how many ran."""
        return self._run_until(self._now + seconds)

    def run_pending(self, *, max_calls: int = 1_000) -> int:
        """Run callbacks in due order, including ones they schedule, until none are left."""
        ran = 0
        while ran < max_calls:
            call = self._pop_live()
            if call is None:
                break
            self._now = max(self._now, call.due)
            call.callback()
            ran += 1
        return ran

    def _run_until(self, deadline: float) -> int:
        ran = 0
        while self._queue and self._queue[0][0] <= deadline:
            _, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self._now = max(self._now, call.due)
            call.callback()
            ran += 1
        self._now = max(self._now, deadline)
        return ran

    def _pop_live(self) -> _ManualCall | None:
        while self._queue:
            _, _, call = heapq.heappop(self._queue)
            if not call.cancelled:
                return call
        return None
