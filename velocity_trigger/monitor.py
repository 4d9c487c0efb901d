"""
Monitor - Process entry point driving one engine over JSON-lines stdio.

stdout carries events only; logs go to stderr.
"""

import argparse
import logging
import os
import sys
import threading
import time

from .config import Config
from .engine import VelocityEngine
from .handlers import TextChangeTracker, CommandHandler
from .managers import IPCManager
from .threads import stdin_reader

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Session:
    """Everything one host connection needs."""

    def __init__(self, engine, config=Config):
        self.engine = engine
        self.config = config
        self.tracker = TextChangeTracker(engine)
        self.keys = None
        self.running = True

        engine.on_trigger(self._send_trigger)
        engine.on_state_change(IPCManager.send_state)
        engine.on_deactivate(self._send_deactivated)

    def get_text(self):
        if self.keys is not None:
            return self.keys.get_text()
        return self.tracker.get_text()

    def install_hook(self):
        # Imported here: the keyboard library is only needed with --hook.
        from .handlers.keystroke import KeystrokeHandler

        self.keys = KeystrokeHandler(self.engine, self.config)
        self.keys.install()

    def close(self):
        if self.keys is not None:
            self.keys.uninstall()
            self.keys = None
        self.engine.stop()

    def _send_trigger(self, text):
        IPCManager.send_trigger(self.engine.last_trigger_kind, text, self.config.MAX_TRIGGER_TEXT)

    @staticmethod
    def _send_deactivated(reason):
        IPCManager.send({"event": "deactivated", "reason": reason})


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="velocity-trigger",
        description="Fire analysis triggers from typing pauses (JSON-lines on stdio).",
    )
    parser.add_argument("--hook", action="store_true",
                        help="capture keys with a global keyboard hook")
    default_level = os.environ.get("VELOCITY_TRIGGER_LOG_LEVEL", "WARNING").upper()
    if default_level not in LOG_LEVELS:
        default_level = "WARNING"
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=default_level,
                        help="stderr log level (default: %(default)s)")
    return parser.parse_args(argv)


def main(argv=None):
    """Application entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    session = Session(VelocityEngine(Config))
    handler = CommandHandler(session)

    if args.hook:
        try:
            session.install_hook()
        except (ImportError, OSError) as e:
            IPCManager.send_error(f"Keyboard hook unavailable: {e}")

    IPCManager.send({"event": "started", "pid": os.getpid()})

    reader = threading.Thread(target=stdin_reader, args=(session, handler), daemon=True)
    reader.start()

    try:
        while session.running:
            time.sleep(0.1)
    except KeyboardInterrupt:
        pass
    finally:
        session.close()
        IPCManager.send({"event": "stopped"})
    return 0


if __name__ == "__main__":
    sys.exit(main())
