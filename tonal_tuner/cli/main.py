"""Main entry point for the Tonal Tuner CLI."""

import sys
import argparse
import json
from typing import List, Optional

from ..core.config import ConfigManager
from ..core.errors import ConfigurationError
from ..core.factory import ComponentFactory
from ..logger import get_logger
from ..logging_config import setup_logging
from ..note_types import TuningReading

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(description="Tonal Tuner - Guitar Tuner")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--config-dir",
        type=str,
        default=None,
        help="Directory holding configuration files (default: ~/.config/tonal_tuner)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Analyse a recording block by block
    analyze_parser = subparsers.add_parser(
        "analyze", help="Detect the played string in a sound file"
    )
    analyze_parser.add_argument("file", help="Path to a WAV/FLAC/OGG file")
    analyze_parser.add_argument(
        "--note", type=str, default=None, help="Target note being tuned (e.g. E2)"
    )
    analyze_parser.add_argument(
        "--block-size", type=int, default=None, help="Samples per analysis block"
    )
    analyze_parser.add_argument(
        "--gain", type=float, default=1.0, help="Gain applied to the samples"
    )

    # Self-test with a synthetic tone
    tone_parser = subparsers.add_parser(
        "tone", help="Run the detector on a synthetic sine tone"
    )
    tone_parser.add_argument("frequency", type=float, help="Tone frequency in Hz")
    tone_parser.add_argument(
        "--amplitude", type=float, default=0.5, help="Peak amplitude (default: 0.5)"
    )
    tone_parser.add_argument(
        "--sample-rate", type=int, default=44100, help="Sample rate in Hz (default: 44100)"
    )
    tone_parser.add_argument(
        "--note", type=str, default=None, help="Target note being tuned (e.g. E2)"
    )

    subparsers.add_parser("notes", help="List target notes and their frequency bands")

    config_parser = subparsers.add_parser("config", help="Show or reset configuration")
    config_parser.add_argument("action", choices=["show", "reset"])

    return parser


def format_reading(index: int, reading: TuningReading) -> str:
    """Render a reading as one line of terminal output."""
    match = reading.match
    if match is None or match.note_name is None:
        return f"[{index:4d}] {reading}"
    return (
        f"[{index:4d}] {reading} "
        f"(note: {match.note_name}, cents: {match.cents:+d}, "
        f"confidence: {reading.result.confidence:.2f})"
    )


def run_analyze(factory: ComponentFactory, args: argparse.Namespace) -> int:
    provider_params = {"file_path": args.file, "gain": args.gain}
    if args.block_size:
        provider_params["block_size"] = args.block_size
    provider = factory.create_audio_provider("wav", **provider_params)
    service = factory.create_tuning_service(
        audio_provider=provider, selected_note=args.note
    )

    detected = 0
    for index, block in enumerate(provider.blocks()):
        reading = service.evaluate(block)
        if reading.result.detected:
            detected += 1
        print(format_reading(index, reading))

    print(f"\n{detected}/{provider.num_blocks} blocks with a detected note")
    return 0


def run_tone(factory: ComponentFactory, args: argparse.Namespace) -> int:
    provider = factory.create_audio_provider(
        "tone",
        frequency=args.frequency,
        sample_rate=args.sample_rate,
        amplitude=args.amplitude,
    )
    service = factory.create_tuning_service(
        audio_provider=provider, selected_note=args.note
    )

    for index, block in enumerate(provider.blocks()):
        print(format_reading(index, service.evaluate(block)))

    match = service.detector.find_closest_note(args.frequency)
    if match.note_name is not None:
        print(
            f"Input {args.frequency:.2f} Hz is nearest to {match.note_name} "
            f"({match.frequency:.2f} Hz), {match.cents:+d} cents"
        )
    return 0


def run_notes(factory: ComponentFactory) -> int:
    detector = factory.create_pitch_detector()
    print(f"{'Note':<6}{'Center':>10}{'Lower':>10}{'Upper':>10}")
    for band in detector.frequency_bands.values():
        print(f"{band.note_name:<6}{band.center:>10.2f}{band.lower:>10.2f}{band.upper:>10.2f}")
    return 0


def run_config(config_manager: ConfigManager, action: str) -> int:
    if action == "reset":
        for name in config_manager.default_configs:
            config_manager.reset_config(name)
        print(f"Configuration reset in {config_manager.config_dir}")
        return 0

    print(json.dumps(config_manager.configs, indent=2))
    return 0


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Command line arguments, or None to use sys.argv

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    parsed_args = parser.parse_args(args)

    setup_logging("DEBUG" if parsed_args.debug else "WARNING")

    if parsed_args.command is None:
        parser.print_help()
        return 1

    try:
        config_manager = ConfigManager(parsed_args.config_dir)
        factory = ComponentFactory(config_manager)

        if parsed_args.command == "analyze":
            return run_analyze(factory, parsed_args)
        elif parsed_args.command == "tone":
            return run_tone(factory, parsed_args)
        elif parsed_args.command == "notes":
            return run_notes(factory)
        elif parsed_args.command == "config":
            return run_config(config_manager, parsed_args.action)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except (OSError, RuntimeError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
