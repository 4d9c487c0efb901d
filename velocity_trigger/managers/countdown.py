"""
Countdown Scheduler - Turns a confirmed STOPPED state into a timed decision.
"""

import logging

from ..state import CompositionState
from ..timers import cancel_timer
from .gate import ends_with_terminal_mark

logger = logging.getLogger(__name__)


class CountdownScheduler:
    """
    Two-phase arming: entering STOPPED starts a grace period; if the state
    is still STOPPED when it ends, a countdown starts whose length depends
    on whether the text looks finished. Leaving STOPPED cancels both.
    """

    def __init__(self, state, config, scheduler, gate, text_source, fire, feedback,
                 resample=None):
        self.state = state
        self.config = config
        self.scheduler = scheduler
        self.gate = gate
        self.text_source = text_source  # () -> accessor or None
        self.fire = fire                # (text) -> None
        self.feedback = feedback        # (state, value) -> None
        self.resample = resample        # () -> None, reclassifies now

    @property
    def armed(self):
        return self.state.countdown_timer is not None

    def on_state_change(self, previous, current):
        if current is CompositionState.STOPPED:
            if previous is not CompositionState.STOPPED:
                self._start_grace()
        else:
            self.cancel()

    def cancel(self):
        """Drop any pending grace check and running countdown."""
        with self.state.lock:
            had_countdown = self.state.countdown_timer is not None
            self.state.grace_timer = cancel_timer(self.state.grace_timer)
            self.state.countdown_timer = cancel_timer(self.state.countdown_timer)
            self.state.midpoint_timer = cancel_timer(self.state.midpoint_timer)
        if had_countdown:
            logger.debug("Countdown cancelled")

    def _start_grace(self):
        with self.state.lock:
            cancel_timer(self.state.grace_timer)
            self.state.grace_timer = self.scheduler.call_later(
                self.config.MICRO_PAUSE_GRACE, self._grace_elapsed
            )

    def _grace_elapsed(self):
        with self.state.lock:
            self.state.grace_timer = None
            if self.state.active and self.state.stopped:
                self.arm()

    def wait_for(self, text):
        """Countdown length for `text`."""
        if ends_with_terminal_mark(text, self.config):
            return self.config.NATURAL_COMPLETION_WAIT
        return self.config.PLANNING_PAUSE_WAIT

    def arm(self):
        """Start the countdown from the text present now."""
        accessor = self.text_source()
        if accessor is None:
            logger.warning("No text accessor wired, skipping countdown")
            return None

        with self.state.lock:
            text = accessor() or ""
            wait = self.wait_for(text)
            logger.debug("%s: %s -> STOPPED",
                         "Natural completion" if ends_with_terminal_mark(text, self.config)
                         else "Planning pause",
                         self.state.previous.value)

            cancel_timer(self.state.countdown_timer)
            cancel_timer(self.state.midpoint_timer)
            self.state.midpoint_timer = self.scheduler.call_later(
                self.config.COUNTDOWN_MIDPOINT, self._midpoint
            )
            self.state.countdown_timer = self.scheduler.call_later(wait, self._expire)
            logger.debug("Countdown started: %.1fs (text length %d)", wait, len(text))
            return wait

    def _midpoint(self):
        with self.state.lock:
            self.state.midpoint_timer = None
            if not (self.state.active and self.state.stopped):
                return
        logger.debug("Countdown midpoint")
        self.feedback(CompositionState.STOPPED, self.config.MIDPOINT_FEEDBACK)

    def _expire(self):
        with self.state.lock:
            self.state.countdown_timer = None
            self.state.midpoint_timer = cancel_timer(self.state.midpoint_timer)
            # Chars typed since the last tick are not classified yet.
            if self.resample is not None and self.state.active:
                self.resample()
            # A stale expiry after the user resumed must not fire.
            if not (self.state.active and self.state.stopped):
                return

            accessor = self.text_source()
            if accessor is None:
                logger.warning("No text accessor wired at countdown expiry")
                return

            text = accessor()
            result = self.gate.evaluate(text, self.scheduler.now())
            if not result:
                logger.debug("Countdown ended without trigger: %s", result.reason.value)
                return

        self.feedback(CompositionState.STOPPED, self.config.TRIGGER_FEEDBACK)
        logger.debug("Triggering")
        self.fire(text)
