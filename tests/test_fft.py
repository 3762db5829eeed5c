import unittest

import numpy as np

from tonal_tuner.audio.fft import (
    SpectrumAnalyzer,
    bit_reversal_permutation,
    fft,
    is_power_of_two,
    magnitude_spectrum,
    reverse_bits,
)
from tonal_tuner.core.errors import ConfigurationError


class TestBitReversal(unittest.TestCase):
    def test_reverse_bits(self):
        self.assertEqual(reverse_bits(1, 3), 4)
        self.assertEqual(reverse_bits(6, 3), 3)
        self.assertEqual(reverse_bits(0, 15), 0)

    def test_permutation_of_eight(self):
        np.testing.assert_array_equal(
            bit_reversal_permutation(8), [0, 4, 2, 6, 1, 5, 3, 7]
        )

    def test_permutation_matches_reverse_bits(self):
        perm = bit_reversal_permutation(64)
        self.assertEqual(list(perm), [reverse_bits(i, 6) for i in range(64)])

    def test_power_of_two(self):
        self.assertTrue(is_power_of_two(1))
        self.assertTrue(is_power_of_two(32768))
        self.assertFalse(is_power_of_two(0))
        self.assertFalse(is_power_of_two(1000))


class TestFFT(unittest.TestCase):
    def test_matches_numpy(self):
        rng = np.random.default_rng(1234)
        data = rng.standard_normal(256) + 1j * rng.standard_normal(256)
        real = np.ascontiguousarray(data.real)
        imag = np.ascontiguousarray(data.imag)

        fft(real, imag)

        expected = np.fft.fft(data)
        np.testing.assert_allclose(real, expected.real, atol=1e-9)
        np.testing.assert_allclose(imag, expected.imag, atol=1e-9)

    def test_zeros_give_zero_spectrum(self):
        spectrum = magnitude_spectrum(np.zeros(32768))
        self.assertEqual(len(spectrum), 16384)
        self.assertFalse(np.any(spectrum))

    def test_magnitude_keeps_first_half(self):
        rng = np.random.default_rng(7)
        data = rng.uniform(-1, 1, 1024)
        expected = np.abs(np.fft.fft(data))[:512]
        np.testing.assert_allclose(magnitude_spectrum(data), expected, atol=1e-9)

    def test_sine_peaks_at_its_bin(self):
        n = 1024
        k = 37
        data = np.sin(2 * np.pi * k * np.arange(n) / n)
        spectrum = magnitude_spectrum(data)
        self.assertEqual(int(np.argmax(spectrum)), k)
        self.assertAlmostEqual(spectrum[k], n / 2, places=6)

    def test_rejects_non_power_of_two(self):
        with self.assertRaises(ConfigurationError):
            magnitude_spectrum(np.zeros(1000))

    def test_rejects_non_contiguous(self):
        real = np.zeros(16)[::2]
        imag = np.zeros(8)
        with self.assertRaises(ValueError):
            fft(real, imag)


class TestSpectrumAnalyzer(unittest.TestCase):
    def test_matches_one_shot_helper(self):
        rng = np.random.default_rng(42)
        data = rng.uniform(-1, 1, 4096)
        analyzer = SpectrumAnalyzer(4096)
        np.testing.assert_allclose(
            analyzer.magnitude(data), magnitude_spectrum(data), atol=1e-9
        )

    def test_input_not_modified(self):
        data = np.linspace(-1, 1, 64)
        original = data.copy()
        SpectrumAnalyzer(64).magnitude(data)
        np.testing.assert_array_equal(data, original)

    def test_wrong_length(self):
        with self.assertRaises(ValueError):
            SpectrumAnalyzer(64).magnitude(np.zeros(32))

    def test_invalid_block_size(self):
        with self.assertRaises(ConfigurationError):
            SpectrumAnalyzer(3000)


if __name__ == "__main__":
    unittest.main()
