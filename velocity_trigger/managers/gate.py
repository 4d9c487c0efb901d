"""
Eligibility Gate - Pass/fail filters applied before a trigger fires.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..distance import change_distance

logger = logging.getLogger(__name__)


class RejectReason(str, Enum):
    TOO_SHORT = "too_short"
    COOLDOWN = "cooldown"
    UNCHANGED = "unchanged"
    THROWAWAY = "throwaway"


@dataclass(frozen=True)
class GateResult:
    accepted: bool
    reason: Optional[RejectReason] = None

    def __bool__(self):
        return self.accepted


ACCEPT = GateResult(True)


def ends_with_terminal_mark(text, config):
    """True if the trimmed text ends with a sentence-terminal mark."""
    trimmed = (text or "").strip()
    return bool(trimmed) and trimmed[-1] in config.TERMINAL_MARKS


def is_throwaway(text, config):
    return (text or "").strip().lower() in config.THROWAWAY_PHRASES


class EligibilityGate:
    """
    Evaluates a candidate text against the last text actually sent.

    Checks run in a fixed order and the first failure is the reason:
    length, cooldown, change distance, throwaway phrase. The gate only
    reads the last-sent pair; the caller records a send.
    """

    def __init__(self, state, config):
        self.state = state
        self.config = config

    def evaluate(self, text, now):
        text = text or ""
        cfg = self.config

        if len(text) < cfg.MIN_PROMPT_LENGTH:
            return self._reject(RejectReason.TOO_SHORT, f"too short ({len(text)} chars)")

        with self.state.lock:
            last_time = self.state.last_sent_time
            last_text = self.state.last_sent_text

        if last_time is not None and now - last_time < cfg.COOLDOWN_PERIOD:
            return self._reject(RejectReason.COOLDOWN, "cooldown active")

        changed = change_distance(text, last_text)
        if changed < cfg.MIN_CHANGE_FRACTION:
            return self._reject(
                RejectReason.UNCHANGED, f"insufficient change ({round(changed * 100)}%)"
            )

        if is_throwaway(text, cfg):
            return self._reject(RejectReason.THROWAWAY, "throwaway phrase")

        return ACCEPT

    def allows_manual(self, text):
        """Manual requests only need the lower absolute length floor."""
        return len(text or "") >= self.config.MANUAL_MIN_LENGTH

    @staticmethod
    def _reject(reason, detail):
        logger.debug("Pre-filter failed: %s", detail)
        return GateResult(False, reason)
