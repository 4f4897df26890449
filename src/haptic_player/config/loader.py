"""Configuration file loading and saving."""

from pathlib import Path
from typing import Any
import yaml

from ..feedback.types import EffectKind
from .schema import MidiConfig, PlayerConfig


def load_config(config_path: Path) -> PlayerConfig:
    """Load configuration from YAML file."""
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: expected a mapping, got {type(data).__name__}")

    # Parse MIDI config
    midi_data = data.get("midi") or {}
    notes = {
        EffectKind(name): int(note)
        for name, note in (midi_data.get("notes") or {}).items()
    }
    midi = MidiConfig(
        port_name=midi_data.get("port_name"),
        virtual=midi_data.get("virtual", False),
        channel=midi_data.get("channel", 0),
        notes=notes,
    )

    return PlayerConfig(
        backend=data.get("backend", "mock"),
        midi=midi,
        initial_delay_ms=float(data.get("initial_delay_ms") or 0.0),
        presets_file=data.get("presets_file"),
        verbose=data.get("verbose", True),
    )


def save_config(config: PlayerConfig, config_path: Path) -> None:
    """Save configuration to YAML file."""
    data: dict[str, Any] = {
        "backend": config.backend,
        "initial_delay_ms": config.initial_delay_ms,
        "verbose": config.verbose,
        "midi": {
            "port_name": config.midi.port_name,
            "virtual": config.midi.virtual,
            "channel": config.midi.channel,
            "notes": {kind.value: note for kind, note in config.midi.notes.items()},
        },
    }

    if config.presets_file:
        data["presets_file"] = config.presets_file

    with open(config_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
