"""Resolve band scores and frequencies to target notes."""

from __future__ import annotations

import math
from typing import Mapping, Optional, Sequence

from ..logger import get_logger
from ..note_types import DetectionResult, FrequencyBand, NoteMatch, TargetNote

logger = get_logger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return int(math.floor(value + 0.5))


def calculate_cents(actual_freq: Optional[float], target_freq: Optional[float]) -> int:
    """Signed pitch offset of ``actual_freq`` from ``target_freq`` in cents.

    Computes ``1200 * log2(actual / target)`` rounded half up, so +2.5 becomes
    3 and -2.5 becomes -2. Returns 0 unless both frequencies are strictly
    positive.
    """
    if not actual_freq or not target_freq or actual_freq <= 0 or target_freq <= 0:
        return 0
    return round_half_up(1200 * math.log2(actual_freq / target_freq))


def select_dominant_note(scores: Mapping[str, float]) -> Optional[str]:
    """Name of the note with the strictly highest positive score.

    Ties go to the note that comes first in ``scores``. Returns None when no
    score is above zero.
    """
    max_energy = 0.0
    dominant_note: Optional[str] = None
    for note, energy in scores.items():
        if energy > max_energy:
            max_energy = energy
            dominant_note = note
    return dominant_note


def resolve_detection(
    scores: Mapping[str, float], bands: Mapping[str, FrequencyBand]
) -> DetectionResult:
    """Turn band scores into a detection snapped to the winning band's center."""
    dominant_note = select_dominant_note(scores)
    if dominant_note is None:
        logger.debug("No dominant frequency found")
        return DetectionResult.rejected()

    confidence = float(scores[dominant_note])
    logger.debug(f"Dominant note: {dominant_note} energy: {confidence:.4f}")
    return DetectionResult(
        frequency=bands[dominant_note].center, confidence=confidence
    )


def find_closest_note(
    frequency: Optional[float], target_notes: Sequence[TargetNote]
) -> NoteMatch:
    """Find the target note nearest to a frequency.

    Args:
        frequency: Frequency in Hz; None or 0 yields an empty match
        target_notes: Candidate notes; ties go to the earliest one

    Returns:
        NoteMatch with the note, its reference frequency, the absolute
        difference in Hz and the signed cents offset
    """
    if not frequency:
        return NoteMatch.empty()

    closest: Optional[TargetNote] = None
    min_diff = math.inf
    for note in target_notes:
        diff = abs(note.frequency - frequency)
        if diff < min_diff:
            min_diff = diff
            closest = note

    if closest is None:
        return NoteMatch.empty()

    return NoteMatch(
        note_name=closest.name,
        frequency=closest.frequency,
        difference=min_diff,
        cents=calculate_cents(frequency, closest.frequency),
    )
