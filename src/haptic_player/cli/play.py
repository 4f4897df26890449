"""Play haptic presets from the command line.

Examples:
    haptic-player --list
    haptic-player triple_tick tick_replay
    haptic-player --backend midi --config config.yaml tick_impact_success
"""

import argparse
import sys
from pathlib import Path

import yaml

from haptic_player.config import PlayerConfig, load_config
from haptic_player.feedback import (
    EffectBackend,
    HapticPlayer,
    MidiBackend,
    MockBackend,
)
from haptic_player.presets import get_presets

DEFAULT_CONFIG = Path("config.yaml")

# Seconds to wait for one preset to finish playing
WAIT_TIMEOUT = 30.0


def build_backend(config: PlayerConfig) -> EffectBackend:
    """Create the backend named in the config."""
    if config.backend == "midi":
        return MidiBackend(
            port_name=config.midi.port_name,
            virtual=config.midi.virtual,
            channel=config.midi.channel,
            notes=config.midi.notes,
        )
    return MockBackend(verbose=config.verbose)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="haptic-player",
        description="Play timed haptic feedback presets",
    )
    parser.add_argument("presets", nargs="*", help="Preset names to play, in order")
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument("--backend", choices=("mock", "midi"), help="Override the configured backend")
    parser.add_argument("--presets-file", type=Path, default=None, help="YAML presets file")
    parser.add_argument("--after", type=float, default=None, help="Initial delay in milliseconds")
    parser.add_argument("--list", action="store_true", help="List available presets and exit")
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> PlayerConfig:
    """Load config from --config (or ./config.yaml if present) and apply overrides."""
    config_path = args.config
    if config_path is None and DEFAULT_CONFIG.exists():
        config_path = DEFAULT_CONFIG

    config = load_config(config_path) if config_path else PlayerConfig.with_defaults()

    if args.backend:
        config.backend = args.backend
    if args.presets_file:
        config.presets_file = str(args.presets_file)
    if args.after is not None:
        if args.after < 0:
            raise ValueError(f"--after must not be negative: {args.after}")
        config.initial_delay_ms = args.after
    return config


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = resolve_config(args)
        presets_file = Path(config.presets_file) if config.presets_file else None
        presets = get_presets(presets_file)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"[ERROR] {e}")
        return 1

    if args.list or not args.presets:
        print("[PRESET] Available presets:")
        for name, preset in presets.items():
            print(f"  {name:<22} {preset.description}")
            print(f"  {'':<22} {preset.describe()}")
        return 0

    unknown = [name for name in args.presets if name not in presets]
    if unknown:
        print(f"[ERROR] Unknown preset(s): {', '.join(unknown)}")
        return 1

    backend = build_backend(config)
    player = HapticPlayer(backend)

    try:
        for name in args.presets:
            print(f"[PRESET] Playing {name}")
            player.play_preset(presets[name], after=config.initial_delay)
            if not player.wait(timeout=WAIT_TIMEOUT):
                print(f"[ERROR] Timed out waiting for {name}")
                return 1
    except KeyboardInterrupt:
        print("\n[SHUTDOWN] Interrupted")
    except Exception as e:
        print(f"[ERROR] {e}")
        return 1
    finally:
        player.close()
        if isinstance(backend, MidiBackend):
            backend.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
