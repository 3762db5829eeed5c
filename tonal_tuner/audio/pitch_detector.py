"""Spectral pitch detection for guitar tuning."""

from __future__ import annotations

from typing import ClassVar, Dict, List, Mapping, Optional, Tuple, TypeAlias, Union

import numpy as np

from ..core.errors import ConfigurationError
from ..core.events import DetectionEvents, DetectionEventType
from ..core.interfaces import IPitchDetector
from ..logger import get_logger
from ..note_types import DetectionResult, FrequencyBand, NoteMatch, TargetNote
from ..note_utils import STANDARD_GUITAR_TUNING, get_tuning_status, parse_note_name
from . import bands as band_scoring
from . import peaks as peak_extraction
from .fft import SpectrumAnalyzer, is_power_of_two
from .resolution import calculate_cents, find_closest_note, resolve_detection
from .window import apply_window, hann_window

logger = get_logger(__name__)

TargetTable: TypeAlias = Union[Mapping[str, float], List[TargetNote], Tuple[TargetNote, ...]]


class PitchDetector(IPitchDetector):
    """Detects which target note a block of audio is playing.

    Each block passes through a power gate, a Hann window, a radix-2 FFT,
    peak extraction and band scoring. The winning band's reference pitch is
    reported, so results always snap to a configured target note.

    Apart from the window, FFT tables and frequency bands built here, the
    detector keeps no state between calls.
    """

    # Type aliases
    Frequency: TypeAlias = float
    Confidence: TypeAlias = float

    # Detection settings
    DEFAULT_SAMPLE_RATE: ClassVar[int] = 44100  # Hz
    DEFAULT_BLOCK_SIZE: ClassVar[int] = 32768  # Samples per analysis block
    DEFAULT_POWER_THRESHOLD: ClassVar[float] = 1e-5  # Mean square below this is silence
    MIN_FREQUENCY: ClassVar[Frequency] = 60.0  # Hz - low enough to catch E2
    MAX_FREQUENCY: ClassVar[Frequency] = 4000.0  # Hz

    def __init__(
        self,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        block_size: int = DEFAULT_BLOCK_SIZE,
        target_notes: Optional[TargetTable] = None,
        power_threshold: float = DEFAULT_POWER_THRESHOLD,
        min_frequency: float = MIN_FREQUENCY,
        max_frequency: float = MAX_FREQUENCY,
        wide_band_width: float = band_scoring.DEFAULT_WIDE_BAND_WIDTH,
        band_width: float = band_scoring.DEFAULT_BAND_WIDTH,
        wide_band_max_octave: int = band_scoring.DEFAULT_WIDE_BAND_MAX_OCTAVE,
        peak_threshold: float = peak_extraction.DEFAULT_PEAK_THRESHOLD,
        low_peak_threshold: float = peak_extraction.DEFAULT_LOW_PEAK_THRESHOLD,
        low_peak_range: Tuple[float, float] = peak_extraction.DEFAULT_LOW_PEAK_RANGE,
        events: Optional[DetectionEvents] = None,
    ) -> None:
        """Initialize the PitchDetector.

        Args:
            sample_rate: Audio sample rate in Hz
            block_size: Samples per analysis block, a power of two
            target_notes: Note name to reference Hz, in lookup order
                (defaults to standard guitar tuning)
            power_threshold: Minimum mean squared amplitude to analyse a block
            min_frequency: Lower end of the peak search range in Hz
            max_frequency: Upper end of the peak search range in Hz
            wide_band_width: Band half-width fraction for low octaves
            band_width: Band half-width fraction for the other notes
            wide_band_max_octave: Highest octave that uses the wide band
            peak_threshold: Peak magnitude relative to the spectrum maximum
            low_peak_threshold: Relaxed relative magnitude inside low_peak_range
            low_peak_range: Open frequency interval using the relaxed threshold
            events: Optional instrumentation hooks

        Raises:
            ConfigurationError: If any setting is invalid
        """
        if sample_rate <= 0:
            raise ConfigurationError(f"Sample rate must be positive, got {sample_rate}")
        if not is_power_of_two(block_size):
            raise ConfigurationError(
                f"Block size must be a power of two, got {block_size}"
            )
        if power_threshold < 0:
            raise ConfigurationError(
                f"Power threshold must be non-negative, got {power_threshold}"
            )
        if min_frequency < 0 or max_frequency <= min_frequency:
            raise ConfigurationError(
                f"Invalid frequency range: {min_frequency}-{max_frequency} Hz"
            )
        if peak_threshold < 0 or low_peak_threshold < 0:
            raise ConfigurationError("Peak thresholds must be non-negative")
        if not isinstance(low_peak_range, (list, tuple)) or not all(
            isinstance(bound, (int, float)) for bound in low_peak_range
        ):
            raise ConfigurationError(
                f"Low peak range must be a pair of frequencies, got {low_peak_range!r}"
            )
        low_peak_range = tuple(low_peak_range)
        if len(low_peak_range) != 2 or low_peak_range[0] > low_peak_range[1]:
            raise ConfigurationError(f"Invalid low peak range: {low_peak_range}")

        self._sample_rate = sample_rate
        self._block_size = block_size
        self._power_threshold = power_threshold
        self._min_frequency = min_frequency
        self._max_frequency = max_frequency
        self._peak_threshold = peak_threshold
        self._low_peak_threshold = low_peak_threshold
        self._low_peak_range = low_peak_range
        self._events = events

        self._target_notes = self._build_target_notes(
            STANDARD_GUITAR_TUNING if target_notes is None else target_notes
        )
        self._bands = band_scoring.build_frequency_bands(
            self._target_notes, wide_band_width, band_width, wide_band_max_octave
        )

        self._window = hann_window(block_size)
        self._analyzer = SpectrumAnalyzer(block_size)

        logger.info(
            f"Pitch detector initialized: sample_rate={sample_rate}, block_size={block_size}, "
            f"notes={[note.name for note in self._target_notes]}"
        )

    @staticmethod
    def _build_target_notes(table: TargetTable) -> Tuple[TargetNote, ...]:
        if isinstance(table, Mapping):
            notes = [TargetNote(name, float(freq)) for name, freq in table.items()]
        else:
            notes = [
                note if isinstance(note, TargetNote) else TargetNote(note[0], float(note[1]))
                for note in table
            ]

        if not notes:
            raise ConfigurationError("Target note table must not be empty")

        seen = set()
        for note in notes:
            try:
                parse_note_name(note.name)
            except ValueError as e:
                raise ConfigurationError(str(e)) from e
            if note.frequency <= 0:
                raise ConfigurationError(
                    f"Reference frequency of {note.name} must be positive, got {note.frequency}"
                )
            if note.name in seen:
                raise ConfigurationError(f"Duplicate target note: {note.name}")
            seen.add(note.name)

        return tuple(notes)

    def detect(self, samples: np.ndarray) -> DetectionResult:
        """Detect the dominant target note in a block of samples.

        Args:
            samples: Mono samples in roughly [-1, 1]; blocks of another length
                are truncated or zero-padded after the power check

        Returns:
            DetectionResult with the winning note's reference frequency, or an
            empty result when the block is too quiet or no band has energy
        """
        data = np.asarray(samples, dtype=np.float64).ravel()

        signal_power = float(np.mean(data * data)) if data.size else 0.0
        logger.debug(f"Signal power: {signal_power:.3e}")

        if signal_power < self._power_threshold or not data.size:
            logger.debug("Signal too weak")
            if self._wants(DetectionEventType.BLOCK_REJECTED):
                self._events.emit_block_rejected(signal_power)
            return DetectionResult.rejected()

        data = self._fit_to_block(data)
        spectrum = self._analyzer.magnitude(apply_window(data, self._window))

        peaks = peak_extraction.find_peaks(
            spectrum,
            self.frequency_resolution,
            min_frequency=self._min_frequency,
            max_frequency=self._max_frequency,
            threshold=self._peak_threshold,
            low_threshold=self._low_peak_threshold,
            low_range=self._low_peak_range,
        )
        scores = band_scoring.score_bands(peaks, self._bands)
        result = resolve_detection(scores, self._bands)

        if self._wants(DetectionEventType.PEAKS_FOUND):
            self._events.emit_peaks_found(peaks)
        if self._wants(DetectionEventType.BANDS_SCORED):
            self._events.emit_bands_scored(scores)
        if self._wants(DetectionEventType.PITCH_DETECTED):
            self._events.emit_pitch_detected(result)

        if result.detected:
            logger.debug(
                f"Frequency detection: power={signal_power:.3e} freq={result.frequency:.2f}Hz "
                f"confidence={result.confidence:.4f} "
                f"note={self.find_closest_note(result.frequency).note_name}"
            )
        return result

    def _wants(self, event_type: DetectionEventType) -> bool:
        return self._events is not None and self._events.wants(event_type)

    def _fit_to_block(self, data: np.ndarray) -> np.ndarray:
        if len(data) == self._block_size:
            return data
        logger.debug(f"Resizing block of {len(data)} samples to {self._block_size}")
        if len(data) > self._block_size:
            return data[: self._block_size]
        return np.concatenate((data, np.zeros(self._block_size - len(data))))

    def find_closest_note(self, frequency: Optional[float]) -> NoteMatch:
        """Find the target note nearest to a frequency.

        Args:
            frequency: Frequency in Hz

        Returns:
            NoteMatch for the nearest configured note
        """
        return find_closest_note(frequency, self._target_notes)

    @staticmethod
    def calculate_cents(actual_freq: Optional[float], target_freq: Optional[float]) -> int:
        """Signed offset in cents, 0 unless both frequencies are positive."""
        return calculate_cents(actual_freq, target_freq)

    @staticmethod
    def get_tuning_status(current_freq: Optional[float], target_freq: Optional[float]) -> str:
        """Plain-word tuning status ('Perfect!', 'Too high', 'Too low')."""
        return get_tuning_status(current_freq, target_freq)

    # Read-only properties
    @property
    def sample_rate(self) -> int:
        """Audio sample rate in Hz."""
        return self._sample_rate

    @property
    def block_size(self) -> int:
        """Number of samples analysed per block."""
        return self._block_size

    @property
    def frequency_resolution(self) -> float:
        """Spacing between spectrum bins in Hz."""
        return self._sample_rate / self._block_size

    @property
    def power_threshold(self) -> float:
        return self._power_threshold

    @property
    def target_notes(self) -> Tuple[TargetNote, ...]:
        """Target notes in lookup order."""
        return self._target_notes

    @property
    def frequency_bands(self) -> Dict[str, FrequencyBand]:
        """Band per target note; a copy, so callers cannot alter the table."""
        return dict(self._bands)

    @property
    def window(self) -> np.ndarray:
        """The read-only Hann window applied to each block."""
        return self._window

    @property
    def events(self) -> Optional[DetectionEvents]:
        return self._events

    def has_note(self, note_name: str) -> bool:
        return note_name in self._bands
