"""
CLI entry points for haptic-player.

- play: list and play named feedback presets
"""

from .play import main as play_main

__all__ = [
    "play_main",
]
