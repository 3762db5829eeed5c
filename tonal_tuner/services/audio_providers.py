"""Audio block sources feeding the pitch detector."""

from __future__ import annotations

import threading
import time
from typing import Callable, Iterator, Optional

import numpy as np
import soundfile as sf

from ..core.errors import ConfigurationError
from ..core.interfaces import IAudioProvider
from ..logger import get_logger

logger = get_logger(__name__)


def sine_wave(
    frequency: float,
    sample_rate: int,
    length: int,
    amplitude: float = 0.5,
    phase: float = 0.0,
) -> np.ndarray:
    """Generate a sine tone.

    Args:
        frequency: Tone frequency in Hz
        sample_rate: Sample rate in Hz
        length: Number of samples
        amplitude: Peak amplitude
        phase: Starting phase in radians

    Returns:
        float32 array of ``length`` samples
    """
    t = np.arange(length, dtype=np.float64) / sample_rate
    return (amplitude * np.sin(2 * np.pi * frequency * t + phase)).astype(np.float32)


def to_mono(data: np.ndarray) -> np.ndarray:
    """Average the channels of a (frames, channels) array into one channel."""
    if data.ndim == 1:
        return data
    if data.shape[1] == 1:
        return data[:, 0]
    return data.mean(axis=1, dtype=np.float32)


class _ThreadedProvider(IAudioProvider):
    """Runs ``blocks()`` on a background thread and forwards each block."""

    def __init__(self, block_size: int, realtime: bool = False) -> None:
        if block_size <= 0:
            raise ConfigurationError(f"Block size must be positive, got {block_size}")
        self._block_size = block_size
        self._realtime = realtime
        self._on_block: Optional[Callable[[np.ndarray], None]] = None
        self._is_running = False
        self._thread: Optional[threading.Thread] = None

    @property
    def block_size(self) -> int:
        return self._block_size

    @property
    def is_running(self) -> bool:
        """Returns True if the provider is currently streaming data."""
        return self._is_running

    def start(self, on_block: Callable[[np.ndarray], None]) -> None:
        if self._is_running:
            return

        self._on_block = on_block
        self._is_running = True
        self._thread = threading.Thread(target=self._stream_data, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._is_running = False
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until the stream finishes on its own or the timeout expires."""
        if self._thread:
            self._thread.join(timeout)

    def _stream_data(self) -> None:
        try:
            for block in self.blocks():
                if not self._is_running:
                    break
                if self._on_block:
                    self._on_block(block)
                if self._realtime:
                    # Simulate real-time playback speed
                    time.sleep(self._block_size / self.sample_rate)
        except Exception as e:
            logger.error(f"Error streaming audio: {e}", exc_info=True)
        finally:
            self._is_running = False  # Ensure flag is reset on exit


class WavFileAudioProvider(_ThreadedProvider):
    """Provides audio blocks by reading from a sound file."""

    def __init__(
        self,
        file_path: str,
        block_size: int,
        loop: bool = False,
        gain: float = 1.0,
        realtime: bool = False,
    ) -> None:
        super().__init__(block_size, realtime)
        self._file_path = str(file_path)
        self._loop = loop
        self._gain = gain

        with sf.SoundFile(self._file_path) as f:
            self._sample_rate = f.samplerate
            self._channels = f.channels
            self._frames = f.frames

        logger.info(
            f"Opened {self._file_path}: {self._frames} frames, "
            f"{self._channels} channel(s) at {self._sample_rate} Hz"
        )

    def blocks(self) -> Iterator[np.ndarray]:
        """Yield mono float32 blocks; the last partial block is zero-filled."""
        with sf.SoundFile(self._file_path) as f:
            while True:
                data = f.read(self._block_size, dtype="float32", always_2d=True)
                if len(data) == 0:
                    if self._loop and self._frames > 0:
                        f.seek(0)
                        continue
                    break

                block = to_mono(data)
                if len(block) < self._block_size:
                    block = np.concatenate(
                        (block, np.zeros(self._block_size - len(block), dtype=np.float32))
                    )

                # Apply gain if specified
                if self._gain != 1.0:
                    block = block * np.float32(self._gain)

                yield block

    @property
    def file_path(self) -> str:
        return self._file_path

    @property
    def num_blocks(self) -> int:
        """Number of blocks one pass over the file yields."""
        return -(-self._frames // self._block_size)

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def channels(self) -> int:
        return self._channels


class ToneAudioProvider(_ThreadedProvider):
    """Provides blocks of a synthetic sine tone, phase-continuous across blocks."""

    def __init__(
        self,
        frequency: float,
        sample_rate: int = 44100,
        block_size: int = 32768,
        amplitude: float = 0.5,
        num_blocks: int = 1,
        realtime: bool = False,
    ) -> None:
        super().__init__(block_size, realtime)
        if sample_rate <= 0:
            raise ConfigurationError(f"Sample rate must be positive, got {sample_rate}")
        self._frequency = frequency
        self._sample_rate = sample_rate
        self._amplitude = amplitude
        self._num_blocks = num_blocks

    def blocks(self) -> Iterator[np.ndarray]:
        phase_step = 2 * np.pi * self._frequency * self._block_size / self._sample_rate
        for i in range(self._num_blocks):
            yield sine_wave(
                self._frequency,
                self._sample_rate,
                self._block_size,
                self._amplitude,
                phase=(i * phase_step) % (2 * np.pi),
            )

    @property
    def frequency(self) -> float:
        return self._frequency

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def channels(self) -> int:
        return 1
