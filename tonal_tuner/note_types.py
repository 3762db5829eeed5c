"""Type definitions for the Tonal Tuner project."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DetectionState(Enum):
    """Outcome of analysing a single sample block."""

    DETECTED = "detected"
    REJECTED = "rejected"


class TuningState(Enum):
    """What a tuner display should show for a reading."""

    NO_SIGNAL = "no_signal"
    WEAK_SIGNAL = "weak_signal"
    PLAYING = "playing"
    IN_TUNE = "in_tune"
    SHARP = "sharp"
    FLAT = "flat"
    WRONG_NOTE = "wrong_note"


@dataclass(frozen=True)
class TargetNote:
    """A named reference pitch the tuner snaps to."""

    name: str  # e.g. 'E2'
    frequency: float  # Reference frequency in Hz


@dataclass(frozen=True)
class FrequencyBand:
    """Frequency interval around one target note's reference pitch."""

    note_name: str
    center: float
    lower: float
    upper: float

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, frequency: float) -> bool:
        """Check whether a frequency lies inside the band, bounds included."""
        return self.lower <= frequency <= self.upper


@dataclass(frozen=True)
class SpectralPeak:
    """A local maximum of the magnitude spectrum."""

    frequency: float  # Bin frequency in Hz
    magnitude: float


@dataclass(frozen=True)
class DetectionResult:
    """Result of running the detector on one block.

    A block either yields a frequency with a positive confidence, or no
    frequency at all with zero confidence.
    """

    frequency: Optional[float] = None
    confidence: float = 0.0

    def __post_init__(self):
        if (self.frequency is None) != (self.confidence == 0.0):
            raise ValueError(
                "confidence must be zero exactly when frequency is absent "
                f"(frequency={self.frequency}, confidence={self.confidence})"
            )
        if self.confidence < 0:
            raise ValueError(f"confidence must be non-negative: {self.confidence}")

    @classmethod
    def rejected(cls) -> DetectionResult:
        return cls(frequency=None, confidence=0.0)

    @property
    def state(self) -> DetectionState:
        if self.frequency is None:
            return DetectionState.REJECTED
        return DetectionState.DETECTED

    @property
    def detected(self) -> bool:
        return self.frequency is not None


@dataclass(frozen=True)
class NoteMatch:
    """Nearest target note for a frequency and the offset from it."""

    note_name: Optional[str]
    frequency: Optional[float]  # Reference frequency of the matched note
    difference: float = math.inf  # Absolute difference in Hz
    cents: int = 0  # Signed deviation, positive when sharp

    @classmethod
    def empty(cls) -> NoteMatch:
        return cls(note_name=None, frequency=None, difference=math.inf, cents=0)


@dataclass(frozen=True)
class TuningReading:
    """Everything a display needs to render one tuner update."""

    result: DetectionResult
    match: Optional[NoteMatch]
    state: TuningState
    message: str
    selected_note: Optional[str] = None

    @property
    def in_tune(self) -> bool:
        return self.state is TuningState.IN_TUNE

    def __str__(self):
        if self.result.frequency is None:
            return self.message
        return f"{self.result.frequency:.1f} Hz - {self.message}"
