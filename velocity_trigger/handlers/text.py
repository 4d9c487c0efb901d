"""
Text Change Tracker - Feeds the engine from full-text snapshots.

For hosts that can only observe the field's whole content (polling or
change events), each new snapshot is compared with the previous one and
only characters appended at the end are ingested.
"""

import logging

logger = logging.getLogger(__name__)


class TextChangeTracker:
    """Snapshot-diff text source for one VelocityEngine."""

    def __init__(self, engine):
        self.engine = engine
        self.text = ""

    def get_text(self):
        """Accessor handed to VelocityEngine.activate()."""
        return self.text

    def update(self, text):
        """Record a new snapshot. Returns the number of characters ingested."""
        text = text or ""
        previous, self.text = self.text, text

        if len(text) <= len(previous):
            return 0

        new_chars = text[len(previous):]
        if not self.engine.active:
            return 0

        logger.debug("Text changed, tracking %d new chars", len(new_chars))
        return sum(1 for char in new_chars if self.engine.ingest(char))
