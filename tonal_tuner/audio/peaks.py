"""Peak extraction from a magnitude spectrum."""

from __future__ import annotations

import math
from typing import List, Tuple

import numpy as np

from ..logger import get_logger
from ..note_types import SpectralPeak

logger = get_logger(__name__)

DEFAULT_PEAK_THRESHOLD = 0.1
# Low fundamentals near A2 are often weaker than their partials
DEFAULT_LOW_PEAK_THRESHOLD = 0.05
DEFAULT_LOW_PEAK_RANGE: Tuple[float, float] = (100.0, 120.0)


def search_range(
    min_frequency: float, max_frequency: float, delta_freq: float, num_bins: int
) -> Tuple[int, int]:
    """Bin index bounds for a frequency range.

    Returns:
        ``(min_index, max_index)``; candidates are the bins strictly between them
    """
    min_index = int(math.floor(min_frequency / delta_freq))
    max_index = min(int(math.floor(max_frequency / delta_freq)), num_bins)
    return min_index, max_index


def find_peaks(
    spectrum: np.ndarray,
    delta_freq: float,
    min_frequency: float = 60.0,
    max_frequency: float = 4000.0,
    threshold: float = DEFAULT_PEAK_THRESHOLD,
    low_threshold: float = DEFAULT_LOW_PEAK_THRESHOLD,
    low_range: Tuple[float, float] = DEFAULT_LOW_PEAK_RANGE,
) -> List[SpectralPeak]:
    """Find significant local maxima of a magnitude spectrum.

    A bin is a peak when its magnitude is strictly greater than both
    neighbours. It is kept when the magnitude exceeds ``threshold`` times the
    largest magnitude anywhere in the spectrum, or ``low_threshold`` times it
    for frequencies inside the open interval ``low_range``.

    Args:
        spectrum: Magnitude per bin
        delta_freq: Bin spacing in Hz
        min_frequency: Lower end of the search range in Hz
        max_frequency: Upper end of the search range in Hz
        threshold: Relative magnitude a peak must exceed
        low_threshold: Relaxed relative magnitude used inside ``low_range``
        low_range: Open frequency interval where ``low_threshold`` applies

    Returns:
        List of peaks in ascending frequency order, possibly empty
    """
    spectrum = np.asarray(spectrum, dtype=np.float64)
    if spectrum.size < 3:
        return []

    min_index, max_index = search_range(
        min_frequency, max_frequency, delta_freq, len(spectrum)
    )
    # Edge bins of the range are never candidates
    start = max(min_index + 1, 1)
    stop = min(max_index - 1, len(spectrum) - 1)
    if stop <= start:
        return []

    center = spectrum[start:stop]
    is_peak = (center > spectrum[start - 1 : stop - 1]) & (
        center > spectrum[start + 1 : stop + 1]
    )

    global_max = float(np.max(spectrum))
    frequencies = np.arange(start, stop, dtype=np.float64) * delta_freq
    low, high = low_range
    relative = np.where(
        (frequencies > low) & (frequencies < high), low_threshold, threshold
    )
    accepted = is_peak & (center > relative * global_max)

    peaks = [
        SpectralPeak(frequency=float(frequencies[i]), magnitude=float(center[i]))
        for i in np.flatnonzero(accepted)
    ]
    logger.debug(f"Found {len(peaks)} peaks (global max {global_max:.4f})")
    return peaks
