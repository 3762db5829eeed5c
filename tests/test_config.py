import json
import tempfile
import unittest
from pathlib import Path

from tonal_tuner.core.config import ConfigManager


class TestConfigManager(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.config_dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_defaults_written_on_first_use(self):
        manager = ConfigManager(str(self.config_dir))
        self.assertTrue((self.config_dir / "pitch_detector.json").exists())
        self.assertTrue((self.config_dir / "tuning.json").exists())

        config = manager.get_config("pitch_detector")
        self.assertEqual(config["block_size"], 32768)
        self.assertEqual(config["target_notes"]["E2"], 82.41)

    def test_get_config_returns_copy(self):
        manager = ConfigManager(str(self.config_dir))
        config = manager.get_config("pitch_detector")
        config["target_notes"]["E2"] = 1.0
        self.assertEqual(manager.get_config("pitch_detector")["target_notes"]["E2"], 82.41)

    def test_update_persists(self):
        manager = ConfigManager(str(self.config_dir))
        self.assertTrue(manager.update_config("tuning", {"in_tune_cents": 3.0}))

        reloaded = ConfigManager(str(self.config_dir))
        self.assertEqual(reloaded.get_config("tuning")["in_tune_cents"], 3.0)
        self.assertEqual(reloaded.get_config("tuning")["min_display_confidence"], 0.1)

    def test_unknown_config(self):
        manager = ConfigManager(str(self.config_dir))
        self.assertFalse(manager.update_config("missing", {}))
        self.assertFalse(manager.reset_config("missing"))
        self.assertEqual(manager.get_config("missing"), {})

    def test_partial_file_filled_with_defaults(self):
        (self.config_dir / "pitch_detector.json").write_text(json.dumps({"block_size": 8192}))
        config = ConfigManager(str(self.config_dir)).get_config("pitch_detector")
        self.assertEqual(config["block_size"], 8192)
        self.assertEqual(config["power_threshold"], 1e-5)

    def test_corrupt_file_falls_back_to_defaults(self):
        (self.config_dir / "tuning.json").write_text("{not json")
        config = ConfigManager(str(self.config_dir)).get_config("tuning")
        self.assertEqual(config["in_tune_cents"], 5.0)

    def test_reset(self):
        manager = ConfigManager(str(self.config_dir))
        manager.update_config("pitch_detector", {"block_size": 4096})
        self.assertTrue(manager.reset_config("pitch_detector"))
        self.assertEqual(manager.get_config("pitch_detector")["block_size"], 32768)


if __name__ == "__main__":
    unittest.main()
