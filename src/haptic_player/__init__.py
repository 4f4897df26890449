"""
haptic-player: chainable scheduling of timed haptic feedback effects.

    from haptic_player import HapticPlayer, MockBackend, ImpactStyle, milliseconds

    player = HapticPlayer(MockBackend(verbose=True))
    (player.chain()
        .impact_occurred(ImpactStyle.LIGHT).then(milliseconds(500))
        .selection_changed()
        .play())
"""

from .feedback import (
    EffectKind,
    ImpactStyle,
    NotificationType,
    milliseconds,
    seconds,
    parse_duration,
    MonotonicClock,
    ThreadDispatcher,
    VirtualClock,
    VirtualDispatcher,
    EffectBackend,
    MockBackend,
    MidiBackend,
    EffectChain,
    HapticPlayer,
)
from .presets import Preset, Step, get_presets

__version__ = "0.1.0"

__all__ = [
    "EffectKind",
    "ImpactStyle",
    "NotificationType",
    "milliseconds",
    "seconds",
    "parse_duration",
    "MonotonicClock",
    "ThreadDispatcher",
    "VirtualClock",
    "VirtualDispatcher",
    "EffectBackend",
    "MockBackend",
    "MidiBackend",
    "EffectChain",
    "HapticPlayer",
    "Preset",
    "Step",
    "get_presets",
]
