"""Defines the core interfaces for the Tonal Tuner application."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, Iterator, Optional, Tuple

import numpy as np

from ..note_types import DetectionResult, NoteMatch, TargetNote, TuningReading


class IPitchDetector(ABC):
    """Interface for single-pitch detection algorithms."""

    @abstractmethod
    def detect(self, samples: np.ndarray) -> DetectionResult:
        """Analyse one block of samples."""
        pass

    @abstractmethod
    def find_closest_note(self, frequency: Optional[float]) -> NoteMatch:
        """Find the target note nearest to a frequency."""
        pass

    @property
    @abstractmethod
    def target_notes(self) -> Tuple[TargetNote, ...]:
        """Configured target notes in lookup order."""
        pass


class IAudioProvider(ABC):
    """An abstract interface for audio block sources."""

    @abstractmethod
    def start(self, on_block: Callable[[np.ndarray], None]) -> None:
        """Start delivering blocks of mono samples to the callback."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop delivering blocks."""
        pass

    @abstractmethod
    def blocks(self) -> Iterator[np.ndarray]:
        """Iterate over blocks synchronously."""
        pass

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """True while blocks are being delivered; False once the stream ends."""
        pass

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        """The sample rate of the audio stream."""
        pass

    @property
    @abstractmethod
    def channels(self) -> int:
        """The number of channels in the source audio."""
        pass


class ITuningService(ABC):
    """Interface for the service turning audio into tuner readings."""

    @abstractmethod
    def start(self, callback: Callable[[TuningReading], None]) -> None:
        """Start producing readings."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop producing readings."""
        pass

    @abstractmethod
    def is_running(self) -> bool:
        """Check if the service is running."""
        pass
