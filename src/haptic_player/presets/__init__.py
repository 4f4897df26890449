"""Named effect chains: built-in presets and the YAML preset loader."""

from .preset import Preset, Step, get_builtin_presets
from .loader import load_presets, get_presets, parse_preset, parse_step, save_presets

__all__ = [
    "Preset",
    "Step",
    "get_builtin_presets",
    "load_presets",
    "get_presets",
    "parse_preset",
    "parse_step",
    "save_presets",
]
