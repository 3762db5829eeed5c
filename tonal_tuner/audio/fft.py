"""Radix-2 fast Fourier transform and magnitude spectrum.

The transform is an iterative Cooley-Tukey FFT working in place on parallel
real and imaginary arrays. Each butterfly stage is evaluated for all groups at
once with numpy, which keeps the algorithm intact while avoiding a Python loop
per butterfly.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from ..core.errors import ConfigurationError
from ..logger import get_logger

logger = get_logger(__name__)


def is_power_of_two(n: int) -> bool:
    """Check whether n is a positive power of two."""
    return n > 0 and (n & (n - 1)) == 0


def _require_power_of_two(n: int) -> None:
    if not is_power_of_two(n):
        raise ConfigurationError(f"FFT length must be a power of two, got {n}")


def reverse_bits(x: int, bits: int) -> int:
    """Reverse the lowest ``bits`` bits of ``x``."""
    y = 0
    for _ in range(bits):
        y = (y << 1) | (x & 1)
        x >>= 1
    return y


def bit_reversal_permutation(n: int) -> np.ndarray:
    """Index array that reorders a length-n sequence into bit-reversed order.

    Args:
        n: Sequence length, a power of two

    Returns:
        Integer array ``p`` where ``p[i]`` is ``i`` with its log2(n) bits reversed
    """
    _require_power_of_two(n)
    bits = n.bit_length() - 1

    indices = np.arange(n, dtype=np.int64)
    reversed_indices = np.zeros(n, dtype=np.int64)
    for _ in range(bits):
        reversed_indices = (reversed_indices << 1) | (indices & 1)
        indices = indices >> 1
    return reversed_indices


def _stage_twiddles(n: int, size: int) -> Tuple[np.ndarray, np.ndarray]:
    """Cosine and sine factors for the butterflies of one stage."""
    half = size // 2
    k = np.arange(half, dtype=np.float64) * (n // size)
    angle = 2.0 * np.pi * k / n
    return np.cos(angle), np.sin(angle)


def _butterflies(
    real: np.ndarray, imag: np.ndarray, size: int, cos: np.ndarray, sin: np.ndarray
) -> None:
    half = size // 2
    # Row views: one row per group of `size` consecutive elements
    re = real.reshape(-1, size)
    im = imag.reshape(-1, size)

    upper_re = re[:, half:]
    upper_im = im[:, half:]
    tpre = upper_re * cos + upper_im * sin
    tpim = -upper_re * sin + upper_im * cos

    re[:, half:] = re[:, :half] - tpre
    im[:, half:] = im[:, :half] - tpim
    re[:, :half] += tpre
    im[:, :half] += tpim


def fft(
    real: np.ndarray,
    imag: np.ndarray,
    permutation: Optional[np.ndarray] = None,
    twiddles: Optional[List[Tuple[np.ndarray, np.ndarray]]] = None,
) -> None:
    """Compute the forward DFT of ``real + 1j*imag`` in place.

    Both arrays must be contiguous, writable float64 arrays of the same
    power-of-two length.

    Args:
        real: Real parts, overwritten with the real parts of the result
        imag: Imaginary parts, overwritten with the imaginary parts of the result
        permutation: Precomputed bit-reversal permutation for this length
        twiddles: Precomputed (cos, sin) pairs, one per stage

    Raises:
        ConfigurationError: If the length is not a power of two
        ValueError: If the arrays are unsuitable for in-place processing
    """
    n = len(real)
    if len(imag) != n:
        raise ValueError(f"real and imag lengths differ: {n} != {len(imag)}")
    _require_power_of_two(n)
    if not (real.flags.c_contiguous and imag.flags.c_contiguous):
        raise ValueError("FFT input arrays must be C-contiguous")
    if n <= 1:
        return

    if permutation is None:
        permutation = bit_reversal_permutation(n)
    real[:] = real[permutation]
    imag[:] = imag[permutation]

    size = 2
    stage = 0
    while size <= n:
        if twiddles is None:
            cos, sin = _stage_twiddles(n, size)
        else:
            cos, sin = twiddles[stage]
        _butterflies(real, imag, size, cos, sin)
        size *= 2
        stage += 1


def magnitude_spectrum(samples: np.ndarray) -> np.ndarray:
    """Magnitudes of the first N/2 FFT bins of a real signal.

    Args:
        samples: Real-valued signal whose length is a power of two

    Returns:
        float64 array of length N/2
    """
    real = np.array(samples, dtype=np.float64)
    imag = np.zeros_like(real)
    fft(real, imag)
    half = len(real) // 2
    return np.hypot(real[:half], imag[:half])


class SpectrumAnalyzer:
    """Magnitude spectrum for blocks of one fixed size.

    The bit-reversal permutation and the twiddle factors of every stage are
    computed once at construction and reused for each block.
    """

    def __init__(self, block_size: int) -> None:
        _require_power_of_two(block_size)
        self._block_size = block_size
        self._permutation = bit_reversal_permutation(block_size)
        self._permutation.setflags(write=False)

        self._twiddles: List[Tuple[np.ndarray, np.ndarray]] = []
        size = 2
        while size <= block_size:
            cos, sin = _stage_twiddles(block_size, size)
            cos.setflags(write=False)
            sin.setflags(write=False)
            self._twiddles.append((cos, sin))
            size *= 2

        logger.debug(
            f"Spectrum analyzer ready: block_size={block_size}, stages={len(self._twiddles)}"
        )

    @property
    def block_size(self) -> int:
        return self._block_size

    def magnitude(self, samples: np.ndarray) -> np.ndarray:
        """Return the magnitude of the first block_size/2 bins of a block."""
        if len(samples) != self._block_size:
            raise ValueError(
                f"Expected {self._block_size} samples, got {len(samples)}"
            )
        real = np.array(samples, dtype=np.float64)
        imag = np.zeros_like(real)
        fft(real, imag, self._permutation, self._twiddles)
        half = self._block_size // 2
        return np.hypot(real[:half], imag[:half])
