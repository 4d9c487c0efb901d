"""
Velocity Classifier - Chars/second into a composition state.
"""

import logging

from ..state import CompositionState

logger = logging.getLogger(__name__)


def classify(rate, config):
    """Map a chars/second rate to a CompositionState, high thresholds first."""
    if rate >= config.FLOW_THRESHOLD:
        return CompositionState.FLOW
    if rate >= config.EDITING_THRESHOLD:
        return CompositionState.EDITING
    if rate >= config.REVIEWING_THRESHOLD:
        return CompositionState.REVIEWING
    return CompositionState.STOPPED


def feedback_for(state, config):
    """Display value the feedback consumer receives for `state`."""
    return config.STATE_FEEDBACK.get(CompositionState(state).value, config.DEFAULT_FEEDBACK)


def listening_intensity(rate, config):
    """Linear velocity -> intensity mapping, saturating at LISTENING_MAX_VELOCITY."""
    lo = config.LISTENING_MIN_INTENSITY
    hi = config.LISTENING_MAX_INTENSITY
    normalized = min(max(rate, 0.0) / config.LISTENING_MAX_VELOCITY, 1.0)
    return lo + normalized * (hi - lo)


class VelocityClassifier:
    """Samples the ingestor on a fixed cadence and reports state changes."""

    def __init__(self, state, config, scheduler, ingestor):
        self.state = state
        self.config = config
        self.scheduler = scheduler
        self.ingestor = ingestor
        self.listeners = []

    def add_listener(self, listener):
        """Call `listener(previous, current)` on every confirmed state change."""
        self.listeners.append(listener)

    def velocity(self):
        """Characters received in the last VELOCITY_WINDOW seconds."""
        now = self.scheduler.now()
        return float(len(self.ingestor.recent(now, self.config.VELOCITY_WINDOW)))

    def start(self):
        with self.state.lock:
            if self.state.sample_timer is not None:
                return
            self.state.sample_timer = self.scheduler.call_every(
                self.config.SAMPLE_INTERVAL, self.sample
            )

    def stop(self):
        with self.state.lock:
            if self.state.sample_timer is not None:
                self.state.sample_timer.cancel()
                self.state.sample_timer = None

    def sample(self):
        """One classifier tick. Returns the state after the tick."""
        with self.state.lock:
            if not self.state.active:
                return self.state.current

            now = self.scheduler.now()
            self.ingestor.prune(now, self.config.VELOCITY_WINDOW)
            rate = self.velocity()
            new_state = classify(rate, self.config)
            logger.debug("Sample: %.1f c/s -> %s", rate, new_state.value)

            if new_state is self.state.current:
                return new_state

            previous = self.state.current
            self.state.previous = previous
            self.state.current = new_state
            logger.debug("State: %s -> %s", previous.value, new_state.value)

            for listener in self.listeners:
                listener(previous, new_state)
            return new_state
