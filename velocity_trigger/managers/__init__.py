"""
Managers - Engine components.
"""

from .ipc import IPCManager
from .ingest import KeystrokeIngestor
from .velocity import VelocityClassifier, classify, feedback_for, listening_intensity
from .countdown import CountdownScheduler
from .gate import EligibilityGate, GateResult, RejectReason
from .inactivity import InactivityGuard

__all__ = [
    'IPCManager',
    'KeystrokeIngestor',
    'VelocityClassifier',
    'CountdownScheduler',
    'EligibilityGate',
    'GateResult',
    'RejectReason',
    'InactivityGuard',
    'classify',
    'feedback_for',
    'listening_intensity',
]
