"""
Configuration - All constants in one place.
"""


class Config:
    """All configuration constants. Durations are in seconds."""

    # === Sampling ===
    SAMPLE_INTERVAL = 0.5        # Seconds between classifier samples
    VELOCITY_WINDOW = 1.0        # Lookback window for chars/second
    CHAR_BUFFER_SIZE = 10        # Max entries in recent-history buffer

    # === Velocity Thresholds (chars/second) ===
    FLOW_THRESHOLD = 2.0
    EDITING_THRESHOLD = 0.5
    REVIEWING_THRESHOLD = 0.1

    # === Countdown ===
    MICRO_PAUSE_GRACE = 1.5      # Absorbs IME candidate-selection pauses
    NATURAL_COMPLETION_WAIT = 6.0  # Text ends with a terminal mark
    PLANNING_PAUSE_WAIT = 8.0    # No terminal mark
    COUNTDOWN_MIDPOINT = 3.0     # Feedback tick after arming

    # === Eligibility Gate ===
    MIN_PROMPT_LENGTH = 15
    MANUAL_MIN_LENGTH = 10       # Floor for explicit manual triggers
    COOLDOWN_PERIOD = 30.0
    MIN_CHANGE_FRACTION = 0.2

    # === Inactivity ===
    INACTIVITY_TIMEOUT = 15 * 60

    # === Process Bridge ===
    MAX_TRIGGER_TEXT = 5000      # Max chars forwarded on trigger
    MAX_FIELD_BUFFER = 10000     # Max chars kept by the keyboard-hook field buffer
    MANUAL_TRIGGER_HOTKEY = "ctrl+shift+s"

    # === Text Policy ===
    TERMINAL_MARKS = frozenset([".", "?", "!", "。", "？", "！"])

    THROWAWAY_PHRASES = frozenset([
        "hello", "hi", "test", "testing",
        "测试", "你好",
    ])

    # === Feedback ===
    STATE_FEEDBACK = {
        "FLOW": 0.2,
        "EDITING": 0.6,
        "REVIEWING": 0.6,
        "STOPPED": 0.8,
    }
    MIDPOINT_FEEDBACK = 0.8
    TRIGGER_FEEDBACK = 1.0
    DEACTIVATED_FEEDBACK = 0.0   # Tracking ceased
    DEFAULT_FEEDBACK = 0.6

    LISTENING_MIN_INTENSITY = 0.2
    LISTENING_MAX_INTENSITY = 0.3
    LISTENING_MAX_VELOCITY = 10.0

    @classmethod
    def override(cls, **values):
        """
        Return a Config subclass with the given constants replaced.
        Names may be passed lower-case: Config.override(cooldown_period=0).
        """
        attrs = {}
        for name, value in values.items():
            key = name.upper()
            if not hasattr(cls, key):
                raise AttributeError(f"Unknown config constant: {name}")
            attrs[key] = value
        return type(f"{cls.__name__}Override", (cls,), attrs)

    @classmethod
    def validate(cls):
        """Raise ValueError if the constants are inconsistent."""
        durations = (
            "SAMPLE_INTERVAL", "VELOCITY_WINDOW", "MICRO_PAUSE_GRACE",
            "NATURAL_COMPLETION_WAIT", "PLANNING_PAUSE_WAIT",
            "COUNTDOWN_MIDPOINT", "COOLDOWN_PERIOD", "INACTIVITY_TIMEOUT",
        )
        for name in durations:
            if getattr(cls, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if cls.SAMPLE_INTERVAL == 0:
            raise ValueError("SAMPLE_INTERVAL must be positive")
        if cls.CHAR_BUFFER_SIZE < 1:
            raise ValueError("CHAR_BUFFER_SIZE must be at least 1")
        if not cls.FLOW_THRESHOLD >= cls.EDITING_THRESHOLD >= cls.REVIEWING_THRESHOLD > 0:
            raise ValueError("Thresholds must satisfy FLOW >= EDITING >= REVIEWING > 0")
        if not 0.0 <= cls.MIN_CHANGE_FRACTION <= 1.0:
            raise ValueError("MIN_CHANGE_FRACTION must be within [0, 1]")
