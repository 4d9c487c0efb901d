"""
Background Threads - Stdin command reader.
"""

import sys
import json
import logging

from .managers import IPCManager

logger = logging.getLogger(__name__)


def stdin_reader(session, handler, stream=None):
    """Read JSON-lines commands until EOF or shutdown."""
    stream = stream or sys.stdin
    while session.running:
        try:
            line = stream.readline()
            if not line:
                session.running = False
                break

            line = line.strip()
            if line:
                try:
                    handler.handle(json.loads(line))
                except json.JSONDecodeError:
                    IPCManager.send_error(f"Invalid JSON: {line}")

        except Exception as e:
            logger.exception("stdin error")
            IPCManager.send_error(f"stdin error: {e}")
            session.running = False
            break
