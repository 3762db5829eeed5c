"""Audio sources and the tuning service built on the pitch detector."""

from .audio_providers import ToneAudioProvider, WavFileAudioProvider, sine_wave
from .tuning_service import TuningService

__all__ = ["ToneAudioProvider", "WavFileAudioProvider", "TuningService", "sine_wave"]
