"""Tuning service that turns audio blocks into tuner readings."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from ..core.interfaces import IAudioProvider, IPitchDetector, ITuningService
from ..logger import get_logger
from ..note_types import DetectionResult, TuningReading, TuningState

logger = get_logger(__name__)


class TuningService(ITuningService):
    """Connects an audio source, a pitch detector and a display callback.

    This class acts as a facade for the audio provider and pitch detector,
    deciding for each block what a tuner should tell the player.
    """

    DEFAULT_MIN_DISPLAY_CONFIDENCE = 0.1
    DEFAULT_IN_TUNE_CENTS = 5.0

    def __init__(
        self,
        detector: IPitchDetector,
        audio_provider: Optional[IAudioProvider] = None,
        selected_note: Optional[str] = None,
        min_display_confidence: float = DEFAULT_MIN_DISPLAY_CONFIDENCE,
        in_tune_cents: float = DEFAULT_IN_TUNE_CENTS,
    ) -> None:
        """Initialize the tuning service.

        Args:
            detector: Pitch detector analysing each block
            audio_provider: Source of blocks for start(); not needed for evaluate()
            selected_note: Target string the player is tuning, or None for any
            min_display_confidence: Confidence a detection needs before a note is shown
            in_tune_cents: Offset in cents below which a string counts as in tune
        """
        if min_display_confidence < 0:
            raise ValueError("min_display_confidence must be non-negative")
        if in_tune_cents <= 0:
            raise ValueError("in_tune_cents must be positive")

        self._detector = detector
        self._audio_provider = audio_provider
        self._min_display_confidence = min_display_confidence
        self._in_tune_cents = in_tune_cents
        self._selected_note: Optional[str] = None
        self._callback: Optional[Callable[[TuningReading], None]] = None
        self._running = False
        self._last_reading: Optional[TuningReading] = None

        self.select_note(selected_note)

    def select_note(self, note_name: Optional[str]) -> None:
        """Choose the string to tune, or None to accept any target note.

        Raises:
            ValueError: If the note is not one of the detector's target notes
        """
        if note_name is not None:
            names = [note.name for note in self._detector.target_notes]
            if note_name not in names:
                raise ValueError(
                    f"Unknown target note '{note_name}', expected one of {names}"
                )
        self._selected_note = note_name
        logger.debug(f"Selected note: {note_name}")

    @property
    def detector(self) -> IPitchDetector:
        return self._detector

    @property
    def selected_note(self) -> Optional[str]:
        return self._selected_note

    @property
    def last_reading(self) -> Optional[TuningReading]:
        return self._last_reading

    def evaluate(self, block: np.ndarray) -> TuningReading:
        """Analyse one block and describe the result for display.

        Args:
            block: Mono samples

        Returns:
            TuningReading for this block
        """
        result = self._detector.detect(block)
        reading = self.describe(result)
        self._last_reading = reading
        return reading

    def describe(self, result: DetectionResult) -> TuningReading:
        """Build the reading for an existing detection result."""
        selected = self._selected_note

        if result.frequency is None:
            return TuningReading(
                result, None, TuningState.NO_SIGNAL, "No note detected", selected
            )

        if result.confidence <= self._min_display_confidence:
            return TuningReading(
                result, None, TuningState.WEAK_SIGNAL, "Weak signal", selected
            )

        match = self._detector.find_closest_note(result.frequency)
        note = match.note_name

        if selected is None:
            return TuningReading(
                result, match, TuningState.PLAYING, f"Playing {note}", selected
            )

        if note != selected:
            return TuningReading(
                result,
                match,
                TuningState.WRONG_NOTE,
                f"Playing {note} (target: {selected})",
                selected,
            )

        if abs(match.cents) < self._in_tune_cents:
            return TuningReading(result, match, TuningState.IN_TUNE, "In Tune!", selected)

        direction = "too high" if match.cents > 0 else "too low"
        state = TuningState.SHARP if match.cents > 0 else TuningState.FLAT
        return TuningReading(
            result,
            match,
            state,
            f"{abs(match.cents):.1f} cents {direction}",
            selected,
        )

    def start(self, callback: Callable[[TuningReading], None]) -> None:
        """Start streaming readings from the audio provider.

        Args:
            callback: Function to call with each reading

        Raises:
            RuntimeError: If the service has no audio provider
        """
        if self.is_running():
            logger.warning("Tuning service already running")
            return
        if self._audio_provider is None:
            raise RuntimeError("Tuning service has no audio provider")

        self._callback = callback
        self._running = True
        self._audio_provider.start(self._process_block)
        logger.info("Tuning started")

    def _process_block(self, block: np.ndarray) -> None:
        reading = self.evaluate(block)
        if self._callback:
            self._callback(reading)

    def stop(self) -> None:
        """Stop streaming readings."""
        if self._audio_provider is None:
            return

        was_running = self._running
        self._audio_provider.stop()
        self._running = False
        if was_running:
            logger.info("Tuning stopped")

    def is_running(self) -> bool:
        """Check if the tuning service is running.

        A stream that ends on its own, such as a file played without looping,
        leaves the service stopped.

        Returns:
            True if the service is running, False otherwise
        """
        if self._running and not self._audio_provider.is_running:
            self._running = False
        return self._running
