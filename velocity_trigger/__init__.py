"""
Velocity Trigger - Decides when a user has finished composing text.

Modules:
- config: All configuration constants
- state: Per-engine state and CompositionState
- timers: Threading and simulated-clock schedulers
- distance: Normalized edit distance
- managers: Ingestor, classifier, countdown, gate, inactivity guard, IPC
- engine: VelocityEngine, the public entry point
- handlers: Text sources and JSON command routing
- monitor: Process entry point (velocity-trigger)
"""

from .config import Config
from .state import CompositionState
from .timers import ThreadingScheduler, ManualScheduler
from .distance import change_distance, levenshtein
from .managers import GateResult, RejectReason, listening_intensity
from .engine import VelocityEngine
from .handlers import TextChangeTracker

__all__ = [
    'Config',
    'CompositionState',
    'ThreadingScheduler',
    'ManualScheduler',
    'change_distance',
    'levenshtein',
    'GateResult',
    'RejectReason',
    'listening_intensity',
    'VelocityEngine',
    'TextChangeTracker',
]
