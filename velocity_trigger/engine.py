"""
Velocity Engine - Decides when to fire an analysis call on composed text.

Keystrokes flow one way through the components:

    KeystrokeIngestor -> VelocityClassifier -> CountdownScheduler
        -> EligibilityGate -> on_trigger(text)

with the InactivityGuard watching the ingest stream and disarming the whole
engine after a long silence. Every callback runs on the scheduler's single
timeline; pass a ManualScheduler to drive the engine on a simulated clock.
"""

import logging

from .config import Config
from .state import State, CompositionState
from .timers import ThreadingScheduler
from .managers import (
    KeystrokeIngestor,
    VelocityClassifier,
    CountdownScheduler,
    EligibilityGate,
    InactivityGuard,
    feedback_for,
)

logger = logging.getLogger(__name__)

AUTO = "auto"
MANUAL = "manual"


class VelocityEngine:
    """One engine per monitored field."""

    def __init__(self, config=Config, scheduler=None):
        config.validate()
        self.config = config
        self.scheduler = scheduler or ThreadingScheduler()
        self.state = State(config, lock=self.scheduler.lock)

        self._get_text = None
        self._trigger_callback = None
        self._state_callback = None
        self._deactivate_callback = None
        self.last_trigger_kind = None

        self.ingestor = KeystrokeIngestor(self.state, self.scheduler)
        self.classifier = VelocityClassifier(self.state, config, self.scheduler, self.ingestor)
        self.gate = EligibilityGate(self.state, config)
        self.countdown = CountdownScheduler(
            self.state, config, self.scheduler, self.gate,
            text_source=lambda: self._get_text,
            fire=lambda text: self._fire(text, AUTO),
            feedback=self._emit_state,
            resample=lambda: self.classifier.sample(),
        )
        self.guard = InactivityGuard(self.state, config, self.scheduler, self._on_inactive)

        self.classifier.add_listener(self._on_classified)
        self.classifier.add_listener(self.countdown.on_state_change)
        self.ingestor.add_listener(self.guard.reset)

    # ── Callback registration ────────────────────────────────────────────

    def on_trigger(self, callback):
        """Register `callback(text)`. Returns it so it can be used as a decorator."""
        self._trigger_callback = callback
        return callback

    def on_state_change(self, callback):
        """Register `callback(state, feedback_value)`."""
        self._state_callback = callback
        return callback

    def on_deactivate(self, callback):
        """Register `callback(reason)`, reason is "inactivity" or "stopped"."""
        self._deactivate_callback = callback
        return callback

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def active(self):
        return self.state.active

    @property
    def composition_state(self):
        return self.state.current

    def activate(self, get_text=None):
        """Arm ingestion and sampling. Idempotent; always restarts the inactivity timer."""
        with self.state.lock:
            if get_text is not None:
                self._get_text = get_text
            if self._get_text is None:
                logger.warning("Activated without a text accessor; countdowns will be skipped")

            if not self.state.active:
                logger.info("Activating velocity engine")
                self.state.active = True
                self.classifier.start()
            self.guard.reset()

    def ingest(self, char):
        """Record a committed character. Returns True if it was counted."""
        return self.ingestor.ingest(char)

    def set_composing(self, composing):
        self.ingestor.set_composing(composing)

    def get_current_velocity(self):
        """Characters per second over the last window."""
        return self.classifier.velocity()

    def force_trigger(self):
        """Manual fast path: only the lower length floor applies. Returns True if fired."""
        with self.state.lock:
            if self._get_text is None or self._trigger_callback is None:
                logger.warning("Manual trigger ignored: engine not wired")
                return False

            text = self._get_text()
            if not self.gate.allows_manual(text):
                logger.info("Manual trigger ignored: text too short (%d chars)", len(text or ""))
                return False

            self.countdown.cancel()
            logger.info("Manual trigger")
            self._fire(text, MANUAL)
            return True

    def stop(self):
        """Deactivate and cancel every pending timer."""
        self._deactivate("stopped")

    def status(self):
        with self.state.lock:
            return {
                "active": self.state.active,
                "composing": self.state.composing,
                "state": self.state.current.value,
                "velocity": self.get_current_velocity(),
                "countdown_armed": self.countdown.armed,
                "last_sent_at": self.state.last_sent_time,
            }

    # ── Internals ────────────────────────────────────────────────────────

    def _fire(self, text, kind):
        with self.state.lock:
            callback = self._trigger_callback
            if callback is None:
                logger.warning("No trigger callback registered, dropping trigger")
                return
            self.state.record_sent(text, self.scheduler.now())
            self.last_trigger_kind = kind
        callback(text)

    def _emit_state(self, state, value):
        if self._state_callback is not None:
            self._state_callback(state, value)

    def _on_classified(self, previous, current):
        self._emit_state(current, feedback_for(current, self.config))

    def _on_inactive(self):
        self._deactivate("inactivity")

    def _deactivate(self, reason):
        with self.state.lock:
            was_active = self.state.active
            self.state.active = False
            self.countdown.cancel()
            self.classifier.stop()
            self.guard.cancel()
            self.state.reset_history()

        if was_active:
            logger.info("Velocity engine deactivated (%s)", reason)
            self._emit_state(CompositionState.STOPPED, self.config.DEACTIVATED_FEEDBACK)
            if self._deactivate_callback is not None:
                self._deactivate_callback(reason)


__all__ = ['VelocityEngine', 'CompositionState', 'AUTO', 'MANUAL']
