"""Core components for the Tonal Tuner application."""

# Import interfaces for easier access
from .errors import ConfigurationError
from .interfaces import (
    IPitchDetector,
    IAudioProvider,
    ITuningService,
)

__all__ = ["ConfigurationError", "IPitchDetector", "IAudioProvider", "ITuningService"]
