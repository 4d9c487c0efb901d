"""
State - Per-engine mutable state.
"""

import threading
from collections import deque
from enum import Enum

from .config import Config


class CompositionState(str, Enum):
    """Classifier output, ordered by decreasing typing rate."""

    FLOW = "FLOW"
    EDITING = "EDITING"
    REVIEWING = "REVIEWING"
    STOPPED = "STOPPED"


class State:
    """Mutable engine state. One instance per monitored field."""

    def __init__(self, config=Config, lock=None):
        self.lock = lock or threading.RLock()

        # --- Activation ---
        self.active = False
        self.composing = False

        # --- Recent History: (char, timestamp) ---
        self.history = deque(maxlen=config.CHAR_BUFFER_SIZE)

        # --- Classifier ---
        self.current = CompositionState.STOPPED
        self.previous = CompositionState.STOPPED

        # --- Last Sent ---
        self.last_sent_text = ""
        self.last_sent_time = None

        # --- Timer Handles ---
        self.sample_timer = None
        self.grace_timer = None
        self.countdown_timer = None
        self.midpoint_timer = None
        self.inactivity_timer = None

    @property
    def stopped(self):
        return self.current is CompositionState.STOPPED

    def record_sent(self, text, now):
        """Update last-sent text and timestamp together."""
        if self.last_sent_time is not None and now < self.last_sent_time:
            now = self.last_sent_time
        self.last_sent_text = text
        self.last_sent_time = now

    def reset_history(self):
        """Clear recent history and return the classifier to STOPPED."""
        self.history.clear()
        self.previous = self.current
        self.current = CompositionState.STOPPED
