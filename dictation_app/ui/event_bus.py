"""
Centralized event bus for the dictation trainer.

This module provides a singleton SignalBus class that acts as a central
event hub for communication between UI panels and controllers.
"""
import logging
from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)


class SignalBus(QObject):
    """Centralized signal hub for the application.

    Provides typed signals for communication between components without
    requiring direct dependencies between them.
    """
    # ===== user-actions =====
    transcriptionRequested = Signal(object)     # AudioFile

    # ===== transcription feedback =====
    transcriptionProgress = Signal(float)       # %
    transcriptionFinished = Signal(list)        # list[Segment]
    transcriptionFailed = Signal(str)           # user-visible message


# Create a singleton instance for import by other modules
BUS = SignalBus()

# Export only the BUS instance for cleaner imports
__all__ = ["BUS"]
