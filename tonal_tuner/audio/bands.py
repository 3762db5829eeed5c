"""Frequency bands around target notes and peak energy scoring."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

from ..core.errors import ConfigurationError
from ..logger import get_logger
from ..note_types import FrequencyBand, SpectralPeak, TargetNote
from ..note_utils import get_octave

logger = get_logger(__name__)

DEFAULT_WIDE_BAND_WIDTH = 0.02
DEFAULT_BAND_WIDTH = 0.01
# Notes at or below this octave get the wide band
DEFAULT_WIDE_BAND_MAX_OCTAVE = 2


def band_width_for(
    note_name: str,
    wide_band_width: float = DEFAULT_WIDE_BAND_WIDTH,
    band_width: float = DEFAULT_BAND_WIDTH,
    wide_band_max_octave: int = DEFAULT_WIDE_BAND_MAX_OCTAVE,
) -> float:
    """Relative half-width of the band for a note, chosen by its octave marker.

    Low notes get the wider fraction because a fixed bin spacing is a larger
    share of their frequency. Names without an octave use the narrow width.
    """
    octave = get_octave(note_name)
    if octave is not None and octave <= wide_band_max_octave:
        return wide_band_width
    return band_width


def build_frequency_bands(
    target_notes: Iterable[TargetNote],
    wide_band_width: float = DEFAULT_WIDE_BAND_WIDTH,
    band_width: float = DEFAULT_BAND_WIDTH,
    wide_band_max_octave: int = DEFAULT_WIDE_BAND_MAX_OCTAVE,
) -> Dict[str, FrequencyBand]:
    """Create one band per target note, keeping the notes' order.

    Raises:
        ConfigurationError: If a width fraction is outside [0, 1)
    """
    for fraction in (wide_band_width, band_width):
        if not 0.0 <= fraction < 1.0:
            raise ConfigurationError(f"Band width must be in [0, 1), got {fraction}")

    bands: Dict[str, FrequencyBand] = {}
    for note in target_notes:
        width = band_width_for(
            note.name, wide_band_width, band_width, wide_band_max_octave
        )
        bands[note.name] = FrequencyBand(
            note_name=note.name,
            center=note.frequency,
            lower=note.frequency * (1 - width),
            upper=note.frequency * (1 + width),
        )
    return bands


def band_weight(band: FrequencyBand, frequency: float) -> float:
    """Proximity weight of a frequency inside a band.

    1.0 at the center, falling linearly with distance relative to the full
    band width.
    """
    if band.width <= 0:
        return 1.0 if frequency == band.center else 0.0
    distance = abs(frequency - band.center)
    return 1.0 - distance / band.width


def score_bands(
    peaks: Iterable[SpectralPeak], bands: Mapping[str, FrequencyBand]
) -> Dict[str, float]:
    """Accumulate weighted peak magnitude into every band containing the peak.

    Args:
        peaks: Spectral peaks of one block
        bands: Bands keyed by note name

    Returns:
        Score per note name, in the bands' order; zero for bands without peaks
    """
    scores: Dict[str, float] = {name: 0.0 for name in bands}
    for peak in peaks:
        for name, band in bands.items():
            if band.contains(peak.frequency):
                scores[name] += peak.magnitude * band_weight(band, peak.frequency)

    logger.debug(f"Band energies: {scores}")
    return scores
