"""
Cancellable timer scheduling.

Training logic never talks to a wall clock directly. It receives a
Scheduler and asks it to run a callback after a delay. Two implementations:

- ManualScheduler: deterministic clock advanced by the caller (tests, replays)
- AsyncioScheduler: real timers on a running asyncio event loop (CLI host)

TimerSlot wraps a scheduler for owners that keep at most one pending
deferral of a given kind: arming the slot again cancels the prior timer.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

from loguru import logger

Callback = Callable[[], None]


class Scheduler(Protocol):
    """Scheduling capability injected into editors and sessions."""

    def now(self) -> float:
        """Current time in milliseconds."""
        ...

    def schedule(self, delay_ms: float, callback: Callback) -> Any:
        """Run callback once after delay_ms. Returns an opaque handle."""
        ...

    def cancel(self, handle: Any) -> None:
        """Cancel a pending handle. Cancelling twice is harmless."""
        ...


@dataclass(order=True)
class _ManualTimer:
    due: float
    seq: int
    callback: Callback = field(compare=False)
    cancelled: bool = field(default=False, compare=False)


class ManualScheduler:
    """
    Scheduler driven by explicit clock advances.

    Callbacks fire in deadline order (ties in scheduling order) during
    advance(). A callback may schedule further timers; those fire in the same
    advance() call if they fall due before its target time.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms
        self._queue: list[_ManualTimer] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def schedule(self, delay_ms: float, callback: Callback) -> _ManualTimer:
        timer = _ManualTimer(self._now + max(0.0, delay_ms), next(self._seq), callback)
        heapq.heappush(self._queue, timer)
        return timer

    def cancel(self, handle: _ManualTimer) -> None:
        handle.cancelled = True

    @property
    def pending(self) -> int:
        """Number of timers still waiting to fire."""
        return sum(1 for t in self._queue if not t.cancelled)

    def advance(self, ms: float) -> int:
        """Move the clock forward, firing due callbacks. Returns how many fired."""
        target = self._now + ms
        fired = 0
        while self._queue and self._queue[0].due <= target:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = timer.due
            timer.callback()
            fired += 1
        self._now = target
        return fired

    def run_all(self) -> int:
        """Advance until no timers remain."""
        fired = 0
        while self.pending:
            next_due = min(t.due for t in self._queue if not t.cancelled)
            fired += self.advance(next_due - self._now)
        return fired


class AsyncioScheduler:
    """Scheduler backed by loop.call_later on the running event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop or asyncio.get_running_loop()

    def now(self) -> float:
        return self._loop.time() * 1000.0

    def schedule(self, delay_ms: float, callback: Callback) -> asyncio.TimerHandle:
        return self._loop.call_later(max(0.0, delay_ms) / 1000.0, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class TimerSlot:
    """At most one pending timer per owner for one kind of deferral."""

    def __init__(self, scheduler: Scheduler, name: str):
        self._scheduler = scheduler
        self.name = name
        self._handle: Any = None
        self._due: float | None = None

    @property
    def armed(self) -> bool:
        return self._handle is not None

    @property
    def due(self) -> float | None:
        """Scheduler time at which the pending timer fires."""
        return self._due

    def remaining_ms(self) -> float:
        if self._due is None:
            return 0.0
        return max(0.0, self._due - self._scheduler.now())

    def arm(self, delay_ms: float, callback: Callback) -> None:
        """Schedule callback, replacing any timer already pending in the slot."""
        self.cancel()

        def fire() -> None:
            self._handle = None
            self._due = None
            callback()

        self._due = self._scheduler.now() + delay_ms
        self._handle = self._scheduler.schedule(delay_ms, fire)
        logger.trace("Armed {} timer for {}ms", self.name, delay_ms)

    def cancel(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None
            self._due = None
