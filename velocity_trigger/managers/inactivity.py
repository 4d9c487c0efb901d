"""
Inactivity Guard - Disarms the engine after a long span without input.
"""

import logging

from ..timers import cancel_timer

logger = logging.getLogger(__name__)


class InactivityGuard:
    """Single resettable timer; fires `on_timeout` once per silent span."""

    def __init__(self, state, config, scheduler, on_timeout):
        self.state = state
        self.config = config
        self.scheduler = scheduler
        self.on_timeout = on_timeout

    def reset(self, *_):
        """Restart the timer. Accepts (char, timestamp) as an ingest listener."""
        with self.state.lock:
            cancel_timer(self.state.inactivity_timer)
            self.state.inactivity_timer = self.scheduler.call_later(
                self.config.INACTIVITY_TIMEOUT, self._expire
            )

    def cancel(self):
        with self.state.lock:
            self.state.inactivity_timer = cancel_timer(self.state.inactivity_timer)

    def _expire(self):
        with self.state.lock:
            self.state.inactivity_timer = None
            if not self.state.active:
                return
        logger.info("Auto-disabling after %gs of inactivity", self.config.INACTIVITY_TIMEOUT)
        self.on_timeout()
