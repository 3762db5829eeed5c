"""Test that all modules can be imported correctly."""

import importlib

import pytest

MODULES = [
    "tonal_tuner",
    "tonal_tuner.logger",
    "tonal_tuner.logging_config",
    "tonal_tuner.note_types",
    "tonal_tuner.note_utils",
    "tonal_tuner.core",
    "tonal_tuner.core.config",
    "tonal_tuner.core.errors",
    "tonal_tuner.core.events",
    "tonal_tuner.core.factory",
    "tonal_tuner.core.interfaces",
    "tonal_tuner.audio",
    "tonal_tuner.audio.window",
    "tonal_tuner.audio.fft",
    "tonal_tuner.audio.peaks",
    "tonal_tuner.audio.bands",
    "tonal_tuner.audio.resolution",
    "tonal_tuner.audio.pitch_detector",
    "tonal_tuner.services",
    "tonal_tuner.services.audio_providers",
    "tonal_tuner.services.tuning_service",
    "tonal_tuner.cli",
    "tonal_tuner.cli.main",
]


@pytest.mark.parametrize("module_name", MODULES)
def test_import(module_name):
    assert importlib.import_module(module_name) is not None


def test_public_api():
    import tonal_tuner

    detector = tonal_tuner.PitchDetector()
    assert [note.name for note in detector.target_notes] == list(
        tonal_tuner.STANDARD_GUITAR_TUNING
    )
