"""
Feedback chain system.

Build timed sequences of haptic effects with a fluent API:

    chain = player.chain()
    chain.selection_changed().then(milliseconds(200)).replay(3)
"""

from .types import (
    EffectKind,
    ImpactStyle,
    NotificationType,
    milliseconds,
    seconds,
    parse_duration,
)
from .timing import (
    Clock,
    Dispatcher,
    MonotonicClock,
    ThreadDispatcher,
    VirtualClock,
    VirtualDispatcher,
)
from .backend import EffectBackend, MockBackend, MidiBackend, TriggerRecord
from .chain import EffectChain
from .player import HapticPlayer

__all__ = [
    # Types
    "EffectKind",
    "ImpactStyle",
    "NotificationType",
    "milliseconds",
    "seconds",
    "parse_duration",
    # Timing
    "Clock",
    "Dispatcher",
    "MonotonicClock",
    "ThreadDispatcher",
    "VirtualClock",
    "VirtualDispatcher",
    # Backends
    "EffectBackend",
    "MockBackend",
    "MidiBackend",
    "TriggerRecord",
    # Chain
    "EffectChain",
    "HapticPlayer",
]
