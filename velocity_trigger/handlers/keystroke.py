"""
Keystroke Handler - Global keyboard hook as a text source.

Maintains a field buffer from raw key events and forwards every committed
character to the engine.
"""

import logging

import keyboard

from ..config import Config
from ..managers import IPCManager

logger = logging.getLogger(__name__)


class KeystrokeHandler:
    """Turns keyboard events into a field buffer plus engine ingests."""

    def __init__(self, engine, config=Config):
        self.engine = engine
        self.config = config
        self.buffer = []

    def get_text(self):
        """Accessor handed to VelocityEngine.activate()."""
        with self.engine.state.lock:
            return "".join(self.buffer)

    def reset(self):
        with self.engine.state.lock:
            self.buffer.clear()

    def on_key(self, event):
        """Main keyboard event handler."""
        if event.event_type != keyboard.KEY_DOWN:
            return

        key = event.name or ""
        try:
            if key == 'backspace':
                self._handle_backspace()
            elif key == 'enter':
                self._handle_char('\n')
            elif key == 'space':
                self._handle_char(' ')
            elif key == 'tab':
                self._handle_char('\t')
            elif len(key) == 1 and not keyboard.is_pressed('ctrl'):
                self._handle_char(key)

        except Exception as e:
            logger.exception("Key event error")
            IPCManager.send_error(f"Key event error: {e}")

    def _handle_backspace(self):
        with self.engine.state.lock:
            if self.buffer:
                self.buffer.pop()

    def _handle_char(self, char):
        with self.engine.state.lock:
            if len(self.buffer) >= self.config.MAX_FIELD_BUFFER:
                self.buffer = self.buffer[-(self.config.MAX_FIELD_BUFFER - 1):]
            self.buffer.append(char)
        self.engine.ingest(char)

    def install(self):
        """Hook the keyboard and the manual-trigger hotkey."""
        keyboard.hook(self.on_key)
        keyboard.add_hotkey(self.config.MANUAL_TRIGGER_HOTKEY, self.engine.force_trigger)
        logger.info("Keyboard hook installed (manual trigger: %s)",
                    self.config.MANUAL_TRIGGER_HOTKEY)

    @staticmethod
    def uninstall():
        keyboard.unhook_all()
