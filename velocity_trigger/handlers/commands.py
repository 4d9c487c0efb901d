"""
Command Handler - JSON commands from the host process.
"""

from ..managers import IPCManager


class CommandHandler:
    """Routes {"cmd": ...} messages to the registered handler."""

    COMMANDS = {}

    def __init__(self, session):
        self.session = session

    @classmethod
    def register(cls, name):
        """Decorator to register command handlers."""
        def decorator(func):
            cls.COMMANDS[name] = func
            return func
        return decorator

    def handle(self, cmd_data):
        """Route command to appropriate handler."""
        if not isinstance(cmd_data, dict):
            IPCManager.send_error(f"Command must be an object: {cmd_data!r}")
            return

        cmd = cmd_data.get("cmd", "")
        handler = self.COMMANDS.get(cmd)

        if handler:
            handler(self.session, cmd_data)
        else:
            IPCManager.send_error(f"Unknown command: {cmd}")


# ══════════════════════════════════════════════════════════════════════════════
# COMMAND HANDLERS
# ══════════════════════════════════════════════════════════════════════════════

@CommandHandler.register("activate")
def cmd_activate(session, data):
    """Arm the engine (first manual request, or re-arm after inactivity)."""
    session.engine.activate(session.get_text)
    IPCManager.send({"event": "activated"})


@CommandHandler.register("text")
def cmd_text(session, data):
    """Full-text snapshot of the monitored field."""
    session.tracker.update(data.get("text", ""))


@CommandHandler.register("key")
def cmd_key(session, data):
    """Single committed character appended to the field."""
    session.tracker.update(session.tracker.text + data.get("char", ""))


@CommandHandler.register("compose")
def cmd_compose(session, data):
    """IME composition opened or closed."""
    session.engine.set_composing(bool(data.get("composing", False)))


@CommandHandler.register("trigger")
def cmd_trigger(session, data):
    """Manual trigger from the host."""
    if not session.engine.force_trigger():
        IPCManager.send_error("Manual trigger ignored")


@CommandHandler.register("stop")
def cmd_stop(session, data):
    """Deactivate the engine."""
    session.engine.stop()


@CommandHandler.register("status")
def cmd_status(session, data):
    """Return engine status for debugging."""
    IPCManager.send(dict(session.engine.status(), event="status"))


@CommandHandler.register("ping")
def cmd_ping(session, data):
    """Health check."""
    IPCManager.send({"event": "pong"})


@CommandHandler.register("shutdown")
def cmd_shutdown(session, data):
    """Stop the engine and exit."""
    session.engine.stop()
    session.running = False
    IPCManager.send({"event": "shutdown_ack"})
