"""
Handlers - Text sources and command handling.
"""

from .text import TextChangeTracker
from .commands import CommandHandler

__all__ = ['TextChangeTracker', 'CommandHandler']
