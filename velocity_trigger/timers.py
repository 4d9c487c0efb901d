"""
Timers - The single timeline every engine callback runs on.

Two schedulers share one small contract:

    now()                      -> seconds on the scheduler's clock
    call_later(delay, fn)      -> TimerHandle
    call_every(interval, fn)   -> TimerHandle
    TimerHandle.cancel()       -> idempotent

ThreadingScheduler runs on the real clock with threading.Timer daemons and
serializes every callback through one re-entrant lock, so callbacks never
overlap. ManualScheduler runs on a simulated clock that only moves when
advance() is called.
"""

import heapq
import itertools
import logging
import threading
import time

logger = logging.getLogger(__name__)


class TimerHandle:
    """A cancellable scheduled callback."""

    def __init__(self, callback, deadline, interval=None):
        self.callback = callback
        self.deadline = deadline
        self.interval = interval
        self.cancelled = False
        self._timer = None

    def cancel(self):
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    @property
    def repeating(self):
        return self.interval is not None


def cancel_timer(handle):
    """Cancel a handle that may be None. Always returns None."""
    if handle is not None:
        handle.cancel()
    return None


class ThreadingScheduler:
    """Real-time scheduler backed by threading.Timer."""

    def __init__(self, lock=None, clock=time.monotonic):
        self.lock = lock or threading.RLock()
        self._clock = clock

    def now(self):
        return self._clock()

    def call_later(self, delay, callback):
        handle = TimerHandle(callback, self.now() + delay)
        self._start(handle, delay)
        return handle

    def call_every(self, interval, callback):
        handle = TimerHandle(callback, self.now() + interval, interval)
        self._start(handle, interval)
        return handle

    def _start(self, handle, delay):
        timer = threading.Timer(max(0.0, delay), self._fire, args=(handle,))
        timer.daemon = True
        handle._timer = timer
        timer.start()

    def _fire(self, handle):
        with self.lock:
            if handle.cancelled:
                return
            if handle.repeating:
                handle.deadline += handle.interval
                self._start(handle, handle.deadline - self.now())
            try:
                handle.callback()
            except Exception:
                logger.exception("Timer callback failed")


class ManualScheduler:
    """Simulated-clock scheduler for deterministic driving and tests."""

    def __init__(self, start=0.0):
        self.lock = threading.RLock()
        self._now = start
        self._queue = []
        self._seq = itertools.count()

    def now(self):
        return self._now

    def call_later(self, delay, callback):
        handle = TimerHandle(callback, self._now + delay)
        self._push(handle)
        return handle

    def call_every(self, interval, callback):
        if interval <= 0:
            raise ValueError("interval must be positive")
        handle = TimerHandle(callback, self._now + interval, interval)
        self._push(handle)
        return handle

    def _push(self, handle):
        heapq.heappush(self._queue, (handle.deadline, next(self._seq), handle))

    def pending(self):
        """Number of live (not cancelled) scheduled callbacks."""
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def advance(self, seconds):
        """Move the clock forward, running every callback that falls due."""
        target = self._now + seconds
        while self._queue and self._queue[0][0] <= target:
            deadline, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = deadline
            if handle.repeating:
                handle.deadline = deadline + handle.interval
                self._push(handle)
            with self.lock:
                handle.callback()
        self._now = target

    def advance_to(self, moment):
        self.advance(max(0.0, moment - self._now))
