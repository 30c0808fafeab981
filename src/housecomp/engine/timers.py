"""Cancellable timers for housecomp.

All waiting in the resolution pipeline is expressed as a scheduled callback
on a Scheduler, never as a blocking wait. Every scheduled callback returns a
TimerHandle with ``cancel()``, and a TimerGroup owns all handles of one
session so teardown can cancel them in one call.

Schedulers:
- AsyncioScheduler: wraps ``loop.call_later`` on the running event loop
- ManualScheduler: virtual clock advanced explicitly, for deterministic
  replays and tests

Times are in milliseconds throughout.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

logger = logging.getLogger(__name__)


class TimerHandle(ABC):
    """A scheduled callback that can be cancelled before it fires."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call repeatedly."""
        pass

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        pass


class Scheduler(ABC):
    """Source of time and delayed callbacks."""

    @abstractmethod
    def now(self) -> float:
        """Current time in ms."""
        pass

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay_ms``."""
        pass


# =============================================================================
# Manual scheduler
# =============================================================================


class ManualTimerHandle(TimerHandle):
    """Handle for a ManualScheduler entry."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self._cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """Virtual-clock scheduler.

    Time only moves when ``advance`` is called. Timers due at the same
    instant fire in the order they were scheduled.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)
        self._queue: list[tuple[float, int, ManualTimerHandle]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ManualTimerHandle:
        handle = ManualTimerHandle(self._now + max(0.0, float(delay_ms)), callback)
        heapq.heappush(self._queue, (handle.due, next(self._counter), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of scheduled timers that have not fired or been cancelled."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def advance(self, delay_ms: float) -> int:
        """Move the clock forward, firing every timer that comes due.

        Callbacks may schedule further timers; those fire too if they fall
        inside the window.

        Returns:
            Number of callbacks fired
        """
        deadline = self._now + float(delay_ms)
        fired = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = max(self._now, due)
            handle.fired = True
            handle.callback()
            fired += 1
        self._now = deadline
        return fired

    def run_all(self) -> int:
        """Fire every pending timer, however far in the future."""
        fired = 0
        while self._queue:
            due, _, handle = self._queue[0]
            fired += self.advance(max(0.0, due - self._now))
        return fired


# =============================================================================
# Asyncio scheduler
# =============================================================================


class AsyncioTimerHandle(TimerHandle):
    """Adapter over ``asyncio.TimerHandle``."""

    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop.

    Args:
        loop: Loop to schedule on. Defaults to the running loop at call time.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            return asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> AsyncioTimerHandle:
        return AsyncioTimerHandle(self.loop.call_later(max(0.0, delay_ms) / 1000.0, callback))


# =============================================================================
# Timer groups
# =============================================================================


class TimerGroup:
    """Owns every timer of one session.

    Once closed, the group refuses new timers, so a callback racing the
    teardown cannot leak a late-firing timer into a discarded session.
    """

    def __init__(self, scheduler: Scheduler, name: str = ""):
        self.scheduler = scheduler
        self.name = name
        self._handles: dict[str, TimerHandle] = {}
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def schedule(self, label: str, delay_ms: float, callback: Callable[[], None]) -> TimerHandle | None:
        """Schedule ``callback`` under ``label``, replacing any timer with that label.

        Returns:
            The new handle, or None if the group is closed
        """
        if self._closed:
            logger.debug(f"Timer group {self.name} closed, not scheduling {label}")
            return None
        self.cancel(label)

        def fire() -> None:
            self._handles.pop(label, None)
            callback()

        handle = self.scheduler.call_later(delay_ms, fire)
        self._handles[label] = handle
        return handle

    def cancel(self, label: str) -> bool:
        """Cancel one labelled timer. Returns True if one was pending."""
        handle = self._handles.pop(label, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def is_pending(self, label: str) -> bool:
        return label in self._handles

    def close(self) -> int:
        """Cancel every pending timer and refuse new ones.

        Returns:
            Number of timers cancelled
        """
        self._closed = True
        count = len(self._handles)
        for handle in self._handles.values():
            handle.cancel()
        self._handles.clear()
        return count
