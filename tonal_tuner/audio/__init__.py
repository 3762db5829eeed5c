"""Signal processing pipeline for pitch detection."""

from .pitch_detector import PitchDetector

__all__ = ["PitchDetector"]
