"""Window functions applied to sample blocks before the spectral transform."""

import numpy as np

from ..core.errors import ConfigurationError


def hann_window(size: int) -> np.ndarray:
    """Create a raised-cosine (Hann) window.

    Computes ``w[i] = 0.5 * (1 - cos(2*pi*i / (N - 1)))`` for ``i`` in ``[0, N)``.
    The result is marked read-only so one window can be shared across calls.

    Args:
        size: Number of samples in the window

    Returns:
        Read-only float64 array of length ``size``

    Raises:
        ConfigurationError: If size is not positive
    """
    if size < 1:
        raise ConfigurationError(f"Window size must be positive, got {size}")

    if size == 1:
        window = np.ones(1)
    else:
        i = np.arange(size, dtype=np.float64)
        window = 0.5 * (1.0 - np.cos(2.0 * np.pi * i / (size - 1)))

    window.setflags(write=False)
    return window


def apply_window(block: np.ndarray, window: np.ndarray) -> np.ndarray:
    """Multiply a block by a window element-wise, returning a new array."""
    if len(block) != len(window):
        raise ValueError(
            f"Block length {len(block)} does not match window length {len(window)}"
        )
    return np.asarray(block, dtype=np.float64) * window
