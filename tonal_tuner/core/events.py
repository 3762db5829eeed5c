"""Event system for Tonal Tuner components."""

from typing import Any, Callable, Dict, List
from enum import Enum, auto

from ..logger import get_logger

logger = get_logger(__name__)


class DetectionEventType(Enum):
    """Event types emitted while a block is analysed."""

    BLOCK_REJECTED = auto()
    PEAKS_FOUND = auto()
    BANDS_SCORED = auto()
    PITCH_DETECTED = auto()


class EventEmitter:
    """Event emitter for Tonal Tuner components."""

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners: Dict[Any, List[Callable]] = {}

    def on(self, event_type: Any, callback: Callable) -> None:
        """Register a callback for an event type.

        Args:
            event_type: Event type to listen for
            callback: Function to call when the event occurs
        """
        if event_type not in self._listeners:
            self._listeners[event_type] = []

        if callback not in self._listeners[event_type]:
            self._listeners[event_type].append(callback)
            logger.debug(f"Added listener for event {event_type}")

    def off(self, event_type: Any, callback: Callable) -> None:
        """Remove a previously registered callback, if present."""
        listeners = self._listeners.get(event_type, [])
        if callback in listeners:
            listeners.remove(callback)

    def has_listeners(self, event_type: Any) -> bool:
        return bool(self._listeners.get(event_type))

    def emit(self, event_type: Any, *args, **kwargs) -> None:
        """Emit an event.

        Args:
            event_type: Event type to emit
            *args: Positional arguments to pass to listeners
            **kwargs: Keyword arguments to pass to listeners
        """
        if event_type not in self._listeners:
            return

        for callback in list(self._listeners[event_type]):
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in event listener for {event_type}: {e}")

    def clear(self) -> None:
        """Remove all event listeners."""
        self._listeners = {}
        logger.debug("Cleared all event listeners")


class DetectionEvents:
    """Instrumentation hooks for the pitch detection pipeline.

    Listeners receive intermediate values of each analysed block. They are
    purely observational; the detector's result never depends on them.
    """

    def __init__(self):
        """Initialize the detection events."""
        self._emitter = EventEmitter()

    def on_block_rejected(self, callback: Callable[[float], None]) -> None:
        """Called with the block's mean power when it fails the power gate."""
        self._emitter.on(DetectionEventType.BLOCK_REJECTED, callback)

    def on_peaks_found(self, callback: Callable) -> None:
        """Called with the list of accepted spectral peaks."""
        self._emitter.on(DetectionEventType.PEAKS_FOUND, callback)

    def on_bands_scored(self, callback: Callable) -> None:
        """Called with the mapping of note name to band score."""
        self._emitter.on(DetectionEventType.BANDS_SCORED, callback)

    def on_pitch_detected(self, callback: Callable) -> None:
        """Called with the final DetectionResult of every gated block."""
        self._emitter.on(DetectionEventType.PITCH_DETECTED, callback)

    def wants(self, event_type: DetectionEventType) -> bool:
        return self._emitter.has_listeners(event_type)

    def emit_block_rejected(self, power: float) -> None:
        self._emitter.emit(DetectionEventType.BLOCK_REJECTED, power)

    def emit_peaks_found(self, peaks) -> None:
        self._emitter.emit(DetectionEventType.PEAKS_FOUND, peaks)

    def emit_bands_scored(self, scores) -> None:
        self._emitter.emit(DetectionEventType.BANDS_SCORED, dict(scores))

    def emit_pitch_detected(self, result) -> None:
        self._emitter.emit(DetectionEventType.PITCH_DETECTED, result)

    def clear(self) -> None:
        """Remove all event listeners."""
        self._emitter.clear()
