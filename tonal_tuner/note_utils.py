"""Utility functions for working with musical notes and frequencies."""

import re
from typing import Dict, Optional, Tuple

from .logger import get_logger

# Get logger for this module
logger = get_logger(__name__)

# Compile regex to extract note name and octave
# This pattern matches:
# - Note name (A-G, case insensitive)
# - Optional accidental (# or b)
# - Optional octave number (0-9+)
NOTE_PATTERN = re.compile(r"^([A-Ga-g][#b]?)(-?[0-9]+)?$")

# Standard guitar tuning, lowest string first
STANDARD_GUITAR_TUNING: Dict[str, float] = {
    "E2": 82.41,
    "A2": 110.00,
    "D3": 146.83,
    "G3": 196.00,
    "B3": 246.94,
    "E4": 329.63,
}

# Below this difference in Hz a string counts as perfectly tuned
PERFECT_TOLERANCE_HZ = 0.5


def parse_note_name(note_name: str) -> Tuple[str, Optional[int]]:
    """Split a note name into its pitch class and octave marker.

    Args:
        note_name: Note in scientific pitch notation (e.g., 'E2', 'F#3', 'Bb')

    Returns:
        Tuple of (pitch class, octave), where octave is None when absent

    Raises:
        ValueError: If the name is not a valid note

    Examples:
        >>> parse_note_name('F#3')
        ('F#', 3)
        >>> parse_note_name('Bb')
        ('Bb', None)
    """
    match = NOTE_PATTERN.match(str(note_name).strip())
    if not match:
        raise ValueError(f"Invalid note name: '{note_name}'")

    pitch_class = match.group(1)[0].upper() + match.group(1)[1:]
    octave = int(match.group(2)) if match.group(2) is not None else None
    return pitch_class, octave


def get_octave(note_name: str) -> Optional[int]:
    """Return the octave marker of a note name, or None if it has none."""
    return parse_note_name(note_name)[1]


def get_tuning_status(current_freq: Optional[float], target_freq: Optional[float]) -> str:
    """Describe how a frequency compares with its target in plain words.

    Args:
        current_freq: Frequency being played in Hz
        target_freq: Reference frequency in Hz

    Returns:
        'Perfect!' within half a hertz, 'Too high' or 'Too low' otherwise,
        and an empty string when there is no target
    """
    if not target_freq:
        return ""
    if current_freq is None:
        return ""

    diff = current_freq - target_freq
    if abs(diff) < PERFECT_TOLERANCE_HZ:
        return "Perfect!"
    return "Too high" if diff > 0 else "Too low"
