import unittest

import pytest

from tonal_tuner.audio.bands import (
    band_weight,
    band_width_for,
    build_frequency_bands,
    score_bands,
)
from tonal_tuner.core.errors import ConfigurationError
from tonal_tuner.note_types import SpectralPeak, TargetNote
from tonal_tuner.note_utils import STANDARD_GUITAR_TUNING


def guitar_notes():
    return [TargetNote(name, freq) for name, freq in STANDARD_GUITAR_TUNING.items()]


class TestFrequencyBands(unittest.TestCase):
    def setUp(self):
        self.bands = build_frequency_bands(guitar_notes())

    def test_one_band_per_note_in_order(self):
        self.assertEqual(list(self.bands), ["E2", "A2", "D3", "G3", "B3", "E4"])

    def test_low_octave_bands_are_wider(self):
        e2 = self.bands["E2"]
        self.assertAlmostEqual(e2.lower, 82.41 * 0.98)
        self.assertAlmostEqual(e2.upper, 82.41 * 1.02)
        self.assertEqual(e2.center, 82.41)

        d3 = self.bands["D3"]
        self.assertAlmostEqual(d3.lower, 146.83 * 0.99)
        self.assertAlmostEqual(d3.upper, 146.83 * 1.01)

    def test_width_depends_on_octave_marker_only(self):
        self.assertEqual(band_width_for("A2"), 0.02)
        self.assertEqual(band_width_for("C1"), 0.02)
        self.assertEqual(band_width_for("A3"), 0.01)
        self.assertEqual(band_width_for("Bb"), 0.01)

        # Same frequency, different octave marker
        bands = build_frequency_bands([TargetNote("E2", 200.0), TargetNote("E3", 200.0)])
        self.assertAlmostEqual(bands["E2"].width, 8.0)
        self.assertAlmostEqual(bands["E3"].width, 4.0)

    def test_invalid_width(self):
        with self.assertRaises(ConfigurationError):
            build_frequency_bands(guitar_notes(), band_width=1.5)


class TestBandScoring(unittest.TestCase):
    def setUp(self):
        self.bands = build_frequency_bands(guitar_notes())

    def test_weight_is_one_at_center(self):
        band = self.bands["A2"]
        self.assertEqual(band_weight(band, band.center), 1.0)

    def test_weight_decays_towards_edges(self):
        band = self.bands["A2"]
        inner = band_weight(band, band.center + 0.5)
        outer = band_weight(band, band.center + 1.5)
        self.assertGreater(1.0, inner)
        self.assertGreater(inner, outer)
        # Distance is measured against the full band width
        self.assertAlmostEqual(band_weight(band, band.upper), 0.5)
        self.assertAlmostEqual(band_weight(band, band.lower), 0.5)

    def test_center_peak_scores_full_magnitude(self):
        scores = score_bands([SpectralPeak(110.0, 2.0)], self.bands)
        self.assertAlmostEqual(scores["A2"], 2.0)
        self.assertEqual(scores["E2"], 0.0)

    def test_every_note_present_without_peaks(self):
        scores = score_bands([], self.bands)
        self.assertEqual(scores, {name: 0.0 for name in STANDARD_GUITAR_TUNING})

    def test_peak_outside_all_bands(self):
        scores = score_bands([SpectralPeak(500.0, 10.0)], self.bands)
        self.assertTrue(all(score == 0.0 for score in scores.values()))

    def test_scores_accumulate(self):
        peaks = [SpectralPeak(110.0, 1.0), SpectralPeak(110.0 + 1.1, 1.0)]
        scores = score_bands(peaks, self.bands)
        self.assertAlmostEqual(scores["A2"], 1.0 + (1 - 1.1 / 4.4))


def test_overlapping_bands_share_a_peak():
    bands = build_frequency_bands([TargetNote("A2", 110.0), TargetNote("A#2", 111.0)])
    scores = score_bands([SpectralPeak(110.5, 1.0)], bands)
    assert scores["A2"] == pytest.approx(1 - 0.5 / 4.4)
    assert scores["A#2"] == pytest.approx(1 - 0.5 / 4.44)


if __name__ == "__main__":
    unittest.main()
