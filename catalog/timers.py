"""Cancelable timers used to debounce search input.

``ThreadingScheduler`` runs callbacks on ``threading.Timer`` threads;
``ManualScheduler`` keeps a virtual clock so tests can step time explicitly.
Both expose ``schedule(fn, delay) -> handle`` and ``cancel(handle)``.
"""

import heapq
import itertools
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

__all__ = ["Scheduler", "ThreadingScheduler", "ManualScheduler", "Debouncer"]


class Scheduler:
    """Interface for delayed, cancelable callbacks."""

    def schedule(self, fn: Callable[[], None], delay: float) -> Any:
        raise NotImplementedError

    def cancel(self, handle: Any) -> None:
        raise NotImplementedError


class ThreadingScheduler(Scheduler):
    """Scheduler backed by ``threading.Timer`` (daemon threads)."""

    def schedule(self, fn: Callable[[], None], delay: float) -> threading.Timer:
        timer = threading.Timer(delay, fn)
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer) -> None:
        if handle is not None:
            handle.cancel()


class ManualScheduler(Scheduler):
    """Virtual-clock scheduler; nothing fires until ``advance`` is called."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[Tuple[float, int, int]] = []
        self._callbacks: Dict[int, Callable[[], None]] = {}
        self._ids = itertools.count(1)

    def schedule(self, fn: Callable[[], None], delay: float) -> int:
        handle = next(self._ids)
        self._callbacks[handle] = fn
        heapq.heappush(self._queue, (self.now + max(0.0, delay), handle, handle))
        return handle

    def cancel(self, handle: int) -> None:
        self._callbacks.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every callback that came due.

        Returns the number of callbacks run.
        """
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target + 1e-9:
            due, _, handle = heapq.heappop(self._queue)
            fn = self._callbacks.pop(handle, None)
            if fn is None:
                continue
            self.now = max(self.now, due)
            fn()
            fired += 1
        self.now = target
        return fired


class Debouncer:
    """Trailing-edge debounce: only the last trigger within ``delay`` fires.

    ``fn`` runs while ``lock`` is held, so passing the lock that guards the
    caller's own state means a ``trigger()`` from another thread lands either
    before the staleness check or after ``fn`` returns. The lock must be
    reentrant when ``fn`` calls back into ``trigger()`` or ``cancel()``.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        delay: float,
        fn: Callable[[], None],
        lock: Optional[Any] = None,
    ):
        self.scheduler = scheduler
        self.delay = delay
        self.fn = fn
        self._handle: Optional[Any] = None
        self._generation = 0
        self._lock = lock if lock is not None else threading.RLock()

    def trigger(self) -> None:
        with self._lock:
            if self._handle is not None:
                self.scheduler.cancel(self._handle)
            self._generation += 1
            generation = self._generation
            self._handle = self.scheduler.schedule(lambda: self._fire(generation), self.delay)

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1
            if self._handle is not None:
                self.scheduler.cancel(self._handle)
                self._handle = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def _fire(self, generation: int) -> None:
        # A timer thread may already be running when cancel() is called
        with self._lock:
            if generation != self._generation:
                return
            self._handle = None
            self.fn()
