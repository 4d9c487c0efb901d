"""
IPC Manager - JSON-lines events for the host process.
"""

import json
import sys


class IPCManager:
    """Writes one JSON object per line to stdout."""

    stream = None  # defaults to sys.stdout at send time

    @classmethod
    def send(cls, event_data):
        """Send event to the host via stdout."""
        stream = cls.stream or sys.stdout
        try:
            stream.write(json.dumps(event_data, ensure_ascii=False) + "\n")
            stream.flush()
        except (OSError, ValueError):
            # Host closed the pipe; nothing left to report to.
            pass

    @classmethod
    def send_error(cls, message):
        """Send error event."""
        cls.send({"event": "error", "message": message})

    @classmethod
    def send_trigger(cls, trigger_type, text, max_chars=None):
        """Send trigger event, keeping only the last `max_chars` characters."""
        if max_chars and len(text) > max_chars:
            text = text[-max_chars:]
        cls.send({
            "event": "trigger",
            "type": trigger_type,
            "text": text,
            "char_count": len(text),
        })

    @classmethod
    def send_state(cls, state, value):
        """Send composition state / feedback value."""
        cls.send({"event": "state", "state": getattr(state, "value", state), "value": value})
