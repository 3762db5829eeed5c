import unittest

from tonal_tuner.note_utils import (
    STANDARD_GUITAR_TUNING,
    get_octave,
    get_tuning_status,
    parse_note_name,
)


class TestNoteNames(unittest.TestCase):
    def test_parse_with_octave(self):
        self.assertEqual(parse_note_name("E2"), ("E", 2))
        self.assertEqual(parse_note_name("F#3"), ("F#", 3))
        self.assertEqual(parse_note_name("bb4"), ("Bb", 4))

    def test_parse_without_octave(self):
        self.assertEqual(parse_note_name("A"), ("A", None))
        self.assertIsNone(get_octave("C#"))

    def test_negative_octave(self):
        self.assertEqual(get_octave("C-1"), -1)

    def test_invalid_names(self):
        for name in ["", "H2", "E#b", "A-", "2E"]:
            with self.assertRaises(ValueError):
                parse_note_name(name)

    def test_standard_tuning_order(self):
        self.assertEqual(list(STANDARD_GUITAR_TUNING), ["E2", "A2", "D3", "G3", "B3", "E4"])
        frequencies = list(STANDARD_GUITAR_TUNING.values())
        self.assertEqual(frequencies, sorted(frequencies))


class TestTuningStatus(unittest.TestCase):
    def test_perfect_within_half_hertz(self):
        self.assertEqual(get_tuning_status(110.3, 110.0), "Perfect!")
        self.assertEqual(get_tuning_status(109.6, 110.0), "Perfect!")

    def test_high_and_low(self):
        self.assertEqual(get_tuning_status(111.0, 110.0), "Too high")
        self.assertEqual(get_tuning_status(109.0, 110.0), "Too low")

    def test_missing_values(self):
        self.assertEqual(get_tuning_status(110.0, None), "")
        self.assertEqual(get_tuning_status(110.0, 0), "")
        self.assertEqual(get_tuning_status(None, 110.0), "")


if __name__ == "__main__":
    unittest.main()
