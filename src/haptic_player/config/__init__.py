"""Configuration schema and loading."""

from .schema import PlayerConfig, MidiConfig
from .loader import load_config, save_config

__all__ = [
    "PlayerConfig",
    "MidiConfig",
    "load_config",
    "save_config",
]
