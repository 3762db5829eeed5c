"""Tonal Tuner - spectral pitch detection for guitar tuning."""

from .audio.pitch_detector import PitchDetector
from .core.errors import ConfigurationError
from .note_types import (
    DetectionResult,
    DetectionState,
    FrequencyBand,
    NoteMatch,
    SpectralPeak,
    TargetNote,
    TuningReading,
    TuningState,
)
from .note_utils import STANDARD_GUITAR_TUNING

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DetectionResult",
    "DetectionState",
    "FrequencyBand",
    "NoteMatch",
    "PitchDetector",
    "SpectralPeak",
    "STANDARD_GUITAR_TUNING",
    "TargetNote",
    "TuningReading",
    "TuningState",
]
