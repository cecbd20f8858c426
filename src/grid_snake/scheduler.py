"""One-shot timer abstractions used to drive the game loop."""

from __future__ import annotations

import asyncio
import heapq
import itertools
from collections.abc import Callable
from typing import Protocol


class Scheduler(Protocol):
    """Arms at most one pending callback at a time."""

    def arm(self, delay_ms: float, callback: Callable[[], None]) -> None:
        """Run *callback* after *delay_ms*, replacing any pending one."""

    def cancel(self) -> None:
        """Drop the pending callback, if any."""


class AsyncioScheduler:
    """Scheduler backed by ``loop.call_later`` on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def arm(self, delay_ms: float, callback: Callable[[], None]) -> None:
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()

        def fire() -> None:
            self._handle = None
            callback()

        self._handle = loop.call_later(delay_ms / 1000.0, fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class ManualScheduler:
    """Virtual-clock scheduler for headless runs and tests.

    Time only moves when :meth:`advance` or :meth:`run_next` is called.
    Cancelled timers stay in the queue but never fire.
    """

    def __init__(self) -> None:
        self.now_ms: float = 0.0
        self._queue: list[tuple[float, int, Callable[[], None]]] = []
        self._seq = itertools.count()
        self._live: int | None = None

    @property
    def pending(self) -> bool:
        return self._live is not None

    @property
    def next_due_ms(self) -> float | None:
        for due, seq, _ in sorted(self._queue):
            if seq == self._live:
                return due
        return None

    def arm(self, delay_ms: float, callback: Callable[[], None]) -> None:
        seq = next(self._seq)
        self._live = seq
        heapq.heappush(self._queue, (self.now_ms + delay_ms, seq, callback))

    def cancel(self) -> None:
        self._live = None

    def advance(self, ms: float) -> int:
        """Move the clock forward by *ms*, firing due callbacks. Returns count fired."""
        target = self.now_ms + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, seq, callback = heapq.heappop(self._queue)
            self.now_ms = due
            if seq != self._live:
                continue
            self._live = None
            callback()
            fired += 1
        self.now_ms = target
        return fired

    def run_next(self) -> bool:
        """Jump to the pending callback and fire it. Returns False if none."""
        due = self.next_due_ms
        if due is None:
            return False
        self.advance(due - self.now_ms)
        return True
