"""
Keystroke Ingestor - Character arrivals into the recent-history buffer.
"""

import logging

logger = logging.getLogger(__name__)


class KeystrokeIngestor:
    """Records arrival times of committed characters."""

    def __init__(self, state, scheduler):
        self.state = state
        self.scheduler = scheduler
        self.listeners = []

    def add_listener(self, listener):
        """Call `listener(char, timestamp)` for every accepted character."""
        self.listeners.append(listener)

    def ingest(self, char):
        """Record `char` if the engine is active and no IME composition is open."""
        with self.state.lock:
            if not self.state.active or self.state.composing:
                return False

            now = self.scheduler.now()
            # deque maxlen drops the oldest entry on overflow
            self.state.history.append((char, now))

        for listener in self.listeners:
            listener(char, now)
        return True

    def set_composing(self, composing):
        """Open or close a multi-stage input sequence."""
        with self.state.lock:
            if self.state.composing != bool(composing):
                logger.debug("IME composition %s", "opened" if composing else "closed")
            self.state.composing = bool(composing)

    def recent(self, now, window):
        """Entries strictly younger than `window` seconds at `now`."""
        with self.state.lock:
            return [(c, t) for c, t in self.state.history if now - t < window]

    def prune(self, now, window):
        """Drop entries at least `window` seconds old."""
        with self.state.lock:
            history = self.state.history
            while history and now - history[0][1] >= window:
                history.popleft()
